"""
OAuth driver coordinating the authorization code flow.

This module provides the main interface for obtaining a token. It runs
the code request and the token exchange in order, tracks which stage the
flow reached, and reports the first failure together with that stage.
"""

import logging
from enum import Enum
from typing import Iterable, Optional, Type

from .code_requester import Code, CodeRequester
from .config import OutputMode, ProviderConfig
from .exceptions import AuthError
from .http_exchange import HttpExchange
from .interaction import LineReader, Presenter
from .token_exchange import ExchangeScheme, T, TokenExchanger

logger = logging.getLogger(__name__)


class AuthStage(Enum):
    """Stages of one authentication flow."""

    START = "start"
    CODE_REQUESTED = "code_requested"
    TOKEN_EXCHANGED = "token_exchanged"
    DONE = "done"
    FAILED = "failed"


class OAuthDriver:
    """
    High-level driver for the authorization code flow.

    A driver runs one flow at a time. Failures are never retried: the
    error is annotated with the stage it happened in and re-raised, and
    the operator has to start over.

    Example:
        driver = OAuthDriver.create(console, console)
        token = driver.authenticate(
            config,
            ExchangeScheme.BASIC_AUTH,
            CenterDeviceToken,
            extra_params=[("response_type", "code")],
        )
    """

    def __init__(self, code_requester: CodeRequester, token_exchanger: TokenExchanger):
        """
        Initialize OAuth driver.

        Args:
            code_requester: Runs the interactive code request
            token_exchanger: Exchanges the code for a token
        """
        self.code_requester = code_requester
        self.token_exchanger = token_exchanger
        self.stage = AuthStage.START

    @classmethod
    def create(
        cls,
        presenter: Presenter,
        line_reader: LineReader,
        http: Optional[HttpExchange] = None,
    ) -> "OAuthDriver":
        """
        Build a driver from operator capabilities.

        Args:
            presenter: Output and browser capability
            line_reader: Operator input capability
            http: HTTP exchange (a fresh one if not provided)

        Returns:
            OAuthDriver instance
        """
        return cls(
            CodeRequester(presenter, line_reader),
            TokenExchanger(http or HttpExchange(), presenter),
        )

    def get_code(
        self, config: ProviderConfig, extra_params: Iterable[tuple[str, str]] = ()
    ) -> Code:
        """
        Step 1: obtain an authorization code from the operator.

        Raises:
            AuthError: If the code request fails (stage START)
        """
        try:
            code = self.code_requester.request_code(config, extra_params)
        except AuthError as e:
            self._fail(e)
            raise

        self.stage = AuthStage.CODE_REQUESTED
        return code

    def exchange_token(
        self,
        code: Code,
        scheme: ExchangeScheme,
        token_type: Type[T],
        output_mode: OutputMode = OutputMode.QUIET,
    ) -> T:
        """
        Step 2: exchange the authorization code for a token.

        Raises:
            AuthError: If the exchange fails (stage CODE_REQUESTED)
        """
        logger.debug("Exchanging authentication code for token")
        try:
            token = self.token_exchanger.exchange(code, scheme, token_type, output_mode)
        except AuthError as e:
            self._fail(e)
            raise

        self.stage = AuthStage.TOKEN_EXCHANGED
        return token

    def authenticate(
        self,
        config: ProviderConfig,
        scheme: ExchangeScheme,
        token_type: Type[T],
        extra_params: Iterable[tuple[str, str]] = (),
        output_mode: OutputMode = OutputMode.QUIET,
    ) -> T:
        """
        Run the complete authorization code flow.

        This orchestrates:
        1. Building and presenting the authorization URL
        2. Waiting for the operator to enter the code
        3. Exchanging the code for a token

        Args:
            config: Provider configuration
            scheme: Token exchange scheme of the provider
            token_type: Pydantic model the token response is parsed into
            extra_params: Provider specific authorization parameters
            output_mode: VERBOSE echoes the raw token response

        Returns:
            Parsed token

        Raises:
            AuthError: First failure of the flow, with ``stage`` set
        """
        if self.stage is not AuthStage.START:
            logger.debug(f"Restarting driver from stage {self.stage.value}")
            self.stage = AuthStage.START

        code = self.get_code(config, extra_params)
        token = self.exchange_token(code, scheme, token_type, output_mode)
        self.stage = AuthStage.DONE
        logger.info("Authentication complete")
        return token

    def _fail(self, error: AuthError) -> None:
        error.stage = self.stage
        logger.error(f"Authentication failed at stage {self.stage.value}: {error}")
        self.stage = AuthStage.FAILED

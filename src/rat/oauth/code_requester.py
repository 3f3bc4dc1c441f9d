"""
Authorization code request for the OAuth 2.0 authorization code flow.

This module covers the first, interactive half of the flow:
- Build the provider's authorization URL
- Open it in a browser or show it to the operator
- Wait for the operator to paste the code the provider redirected to

The result is a Code carrying everything the token exchange needs, so the
provider configuration does not have to outlive the interactive pause.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable
from urllib.parse import urlencode, urlsplit

from .config import ProviderConfig
from .exceptions import (
    AuthorizationError,
    CodeAlreadyUsedError,
    ConfigurationError,
    EncodingError,
)
from .interaction import LineReader, Presenter

logger = logging.getLogger(__name__)

RESERVED_PARAMS = ("client_id", "redirect_uri")

BROWSER_INSTRUCTIONS = (
    "Please authenticate in the web browser window, wait for the redirect, "
    "enter the code into the terminal, and then press return ..."
)
URL_INSTRUCTIONS = (
    "Please authenticate at the following URL, wait for the redirect, "
    "enter the code into the terminal, and then press return ..."
)
CODE_PROMPT = "Authentication code: "


@dataclass
class Code:
    """
    Authorization code together with what is needed to exchange it.

    Providers invalidate a code after its first use, so a Code may be
    consumed by exactly one token exchange.

    Attributes:
        code: Authorization code entered by the operator
        client_id: Client ID the code was issued to
        client_secret: Client secret for the token request
        token_endpoint: Endpoint the code is exchanged at
        redirect_uri: Redirect URI used when requesting the code
    """

    code: str
    client_id: str
    client_secret: str = field(repr=False)
    token_endpoint: str
    redirect_uri: str
    _used: bool = field(default=False, init=False, repr=False, compare=False)

    @property
    def used(self) -> bool:
        """Whether this code was already handed to a token exchange."""
        return self._used

    def consume(self) -> "Code":
        """
        Mark the code as used.

        Returns:
            The code itself

        Raises:
            CodeAlreadyUsedError: If the code was consumed before
        """
        if self._used:
            raise CodeAlreadyUsedError(
                "Authorization code was already exchanged. "
                "Run the authentication again to obtain a new code."
            )
        self._used = True
        return self


def append_query(endpoint: str, query: str) -> str:
    """Append an encoded query string to an endpoint that may already have one."""
    if endpoint.endswith(("?", "&")):
        return f"{endpoint}{query}"
    if urlsplit(endpoint).query:
        return f"{endpoint}&{query}"
    return f"{endpoint}?{query}"


def build_authorization_url(
    config: ProviderConfig, extra_params: Iterable[tuple[str, str]] = ()
) -> str:
    """
    Build the authorization URL for a provider.

    Query parameters are client_id, redirect_uri and then extra_params in
    the given order, all URL-encoded.

    Args:
        config: Provider configuration
        extra_params: Provider specific parameters (scope, response_type, ...)

    Returns:
        Complete authorization URL

    Raises:
        ConfigurationError: If extra_params repeats a key or a reserved parameter
        EncodingError: If a parameter cannot be URL-encoded
    """
    params: list[tuple[str, str]] = [
        ("client_id", config.client_id),
        ("redirect_uri", config.redirect_uri),
    ]

    seen = set(RESERVED_PARAMS)
    for key, value in extra_params:
        if key in seen:
            raise ConfigurationError(
                f"Authorization parameter '{key}' given more than once"
            )
        seen.add(key)
        params.append((key, value))

    try:
        query = urlencode(params)
    except (TypeError, ValueError) as e:
        raise EncodingError(f"URL serialization failed: {e}") from e

    return append_query(config.auth_endpoint, query)


class CodeRequester:
    """
    Obtains an authorization code from the operator.

    Example:
        requester = CodeRequester(console, console)
        code = requester.request_code(config, [("response_type", "code")])
    """

    def __init__(self, presenter: Presenter, line_reader: LineReader):
        """
        Initialize code requester.

        Args:
            presenter: Shows instructions and opens the browser
            line_reader: Reads the code the operator enters
        """
        self.presenter = presenter
        self.line_reader = line_reader

    def request_code(
        self, config: ProviderConfig, extra_params: Iterable[tuple[str, str]] = ()
    ) -> Code:
        """
        Run the interactive part of the flow and return the entered code.

        Blocks until the operator enters a line; there is no timeout.

        Args:
            config: Provider configuration
            extra_params: Provider specific authorization parameters

        Returns:
            Code ready for the token exchange

        Raises:
            ConfigurationError: If extra_params are invalid
            EncodingError: If the authorization URL cannot be built
            PresenterError: If the browser cannot be launched
            AuthorizationError: If no code was entered
        """
        logger.info("Requesting authentication code")
        auth_url = build_authorization_url(config, extra_params)

        if config.open_browser:
            self.presenter.show(BROWSER_INSTRUCTIONS)
            self.presenter.open(auth_url)
        else:
            self.presenter.show(URL_INSTRUCTIONS)
            self.presenter.show(f"\n\t{auth_url}\n")

        self.presenter.prompt(CODE_PROMPT)
        entered = self.line_reader.read_line().strip()
        if not entered:
            raise AuthorizationError("No authentication code entered")

        logger.debug("Authentication code received")
        return Code(
            code=entered,
            client_id=config.client_id,
            client_secret=config.client_secret,
            token_endpoint=config.token_endpoint,
            redirect_uri=config.redirect_uri,
        )

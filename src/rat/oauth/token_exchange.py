"""
Token exchange for the OAuth 2.0 authorization code flow.

This module turns an authorization Code into an access token. Providers
disagree on how the client authenticates at the token endpoint, so two
schemes are supported:

- BASIC_AUTH: POST with an ``Authorization: Basic`` header and a form body
  (CenterDevice, Pocket)
- URL_PARAM: GET with client ID, client secret and code in the query
  string (Slack)

The response is parsed into a caller supplied pydantic model.
"""

import logging
from base64 import b64encode
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Type, TypeVar
from urllib.parse import urlencode

from pydantic import BaseModel, ValidationError

from .code_requester import Code, append_query
from .config import OutputMode
from .exceptions import DeserializationError, EncodingError, HttpError
from .http_exchange import HttpExchange
from .interaction import Presenter

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class ExchangeScheme(Enum):
    """How the client authenticates at the token endpoint."""

    BASIC_AUTH = "basic_auth"
    URL_PARAM = "url_param"


class GrantType(Enum):
    """OAuth 2.0 grant types understood by the token endpoint."""

    AUTHORIZATION_CODE = "authorization_code"


@dataclass
class ExchangeRequest:
    """
    HTTP request for a token exchange.

    Attributes:
        method: HTTP method
        url: Request URL including any query string
        headers: Request headers
        body: Raw request body, None for GET requests
    """

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None


def basic_auth_header(client_id: str, client_secret: str) -> str:
    """Return the value of an HTTP Basic Authorization header."""
    credentials = f"{client_id}:{client_secret}"
    return f"Basic {b64encode(credentials.encode()).decode()}"


def build_basic_auth_request(
    code: Code, grant_type: GrantType = GrantType.AUTHORIZATION_CODE
) -> ExchangeRequest:
    """
    Build the token request for the Basic-Auth scheme.

    The body is sent exactly as
    ``grant_type=<grant>&redirect_uri=<redirect_uri>&code=<code>``;
    providers relying on this scheme expect the values verbatim.
    """
    body = (
        f"grant_type={grant_type.value}"
        f"&redirect_uri={code.redirect_uri}"
        f"&code={code.code}"
    )
    return ExchangeRequest(
        method="POST",
        url=code.token_endpoint,
        headers={
            "Authorization": basic_auth_header(code.client_id, code.client_secret),
            "Content-Type": "application/x-www-form-urlencoded",
        },
        body=body.encode(),
    )


def build_url_param_request(code: Code) -> ExchangeRequest:
    """
    Build the token request for the URL parameter scheme.

    The client secret travels in the query string because that is what the
    provider's API accepts.
    """
    params = [
        ("client_id", code.client_id),
        ("client_secret", code.client_secret),
        ("code", code.code),
    ]
    try:
        query = urlencode(params)
    except (TypeError, ValueError) as e:
        raise EncodingError(f"URL serialization failed: {e}") from e

    return ExchangeRequest(method="GET", url=append_query(code.token_endpoint, query))


def build_exchange_request(code: Code, scheme: ExchangeScheme) -> ExchangeRequest:
    """Build the token request for the given scheme."""
    if scheme is ExchangeScheme.BASIC_AUTH:
        return build_basic_auth_request(code, GrantType.AUTHORIZATION_CODE)
    if scheme is ExchangeScheme.URL_PARAM:
        return build_url_param_request(code)
    raise ValueError(f"Unsupported exchange scheme: {scheme!r}")


class TokenExchanger:
    """
    Exchanges authorization codes for tokens.

    Example:
        exchanger = TokenExchanger(HttpExchange(), console)
        token = exchanger.exchange(
            code, ExchangeScheme.BASIC_AUTH, CenterDeviceToken, OutputMode.QUIET
        )
    """

    def __init__(self, http: HttpExchange, presenter: Presenter):
        """
        Initialize token exchanger.

        Args:
            http: HTTP exchange performing the token request
            presenter: Receives the raw response in verbose mode
        """
        self.http = http
        self.presenter = presenter

    def exchange(
        self,
        code: Code,
        scheme: ExchangeScheme,
        token_type: Type[T],
        output_mode: OutputMode = OutputMode.QUIET,
    ) -> T:
        """
        Exchange an authorization code for a token.

        The code is consumed before the request is sent, so a failed
        exchange cannot be retried with the same code.

        Args:
            code: Authorization code from the code request step
            scheme: How the client authenticates at the token endpoint
            token_type: Pydantic model the response is parsed into
            output_mode: VERBOSE echoes the raw response, error bodies included

        Returns:
            Parsed token

        Raises:
            CodeAlreadyUsedError: If the code was exchanged before
            EncodingError: If the request parameters cannot be encoded
            HttpError: On transport failure or non-2xx response
            DeserializationError: If the response does not match token_type
        """
        code.consume()
        logger.info(f"Requesting authentication token ({scheme.value})")

        request = build_exchange_request(code, scheme)
        try:
            body = self.http.send(
                request.method, request.url, request.headers, request.body
            )
        except HttpError as e:
            # Error documents (e.g. {"error": "invalid_grant"}) are echoed too
            if output_mode is OutputMode.VERBOSE and e.body:
                self._show_response(e.body)
            raise

        if output_mode is OutputMode.VERBOSE:
            self._show_response(body)

        try:
            token = token_type.model_validate_json(body)
        except ValidationError as e:
            logger.error(f"Invalid response from token endpoint: {e}")
            raise DeserializationError(
                f"JSON parsing failed for {token_type.__name__}: {e}"
            ) from e

        logger.info("Successfully obtained token")
        return token

    def _show_response(self, body: bytes) -> None:
        self.presenter.show("Received response:")
        self.presenter.show(body.decode("utf-8", errors="replace"))

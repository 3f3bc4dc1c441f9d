"""
OAuth 2.0 authorization code flow for command-line use.

This module walks an operator through the authorization code grant
without a local callback server:
- The authorization URL is opened in a browser or printed
- The operator pastes the code the provider redirected to
- The code is exchanged for a token, parsed into a pydantic model

Public API:
    ProviderConfig: Provider endpoints and client credentials
    OutputMode: Whether raw token responses are echoed
    Code: Authorization code ready for exchange
    CodeRequester: Interactive code request
    ExchangeScheme: Token endpoint client authentication scheme
    TokenExchanger: Code to token exchange
    HttpExchange: Single-shot HTTP request
    OAuthDriver: High-level flow driver
    Presenter, LineReader: Operator interaction capabilities

Exceptions:
    AuthError: Base exception
    ConfigurationError: Configuration error
    PresenterError: Browser launch failed
    EncodingError: URL encoding failed
    AuthorizationError: No code entered
    CodeAlreadyUsedError: Code exchanged twice
    HttpError: HTTP transport failure or non-2xx response
    DeserializationError: Unexpected token response
"""

from .code_requester import Code, CodeRequester, build_authorization_url
from .config import OutputMode, ProviderConfig
from .coordinator import AuthStage, OAuthDriver
from .exceptions import (
    AuthError,
    AuthorizationError,
    CodeAlreadyUsedError,
    ConfigurationError,
    DeserializationError,
    EncodingError,
    HttpError,
    PresenterError,
)
from .http_exchange import HttpExchange
from .interaction import LineReader, Presenter
from .token_exchange import ExchangeScheme, GrantType, TokenExchanger

__all__ = [
    # Configuration
    "ProviderConfig",
    "OutputMode",
    # Code request
    "Code",
    "CodeRequester",
    "build_authorization_url",
    # Token exchange
    "ExchangeScheme",
    "GrantType",
    "TokenExchanger",
    "HttpExchange",
    # Driver
    "AuthStage",
    "OAuthDriver",
    # Interaction
    "Presenter",
    "LineReader",
    # Exceptions
    "AuthError",
    "ConfigurationError",
    "PresenterError",
    "EncodingError",
    "AuthorizationError",
    "CodeAlreadyUsedError",
    "HttpError",
    "DeserializationError",
]

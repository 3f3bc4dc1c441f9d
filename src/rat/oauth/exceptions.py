"""
OAuth exception classes for the rat authentication driver.

This module defines the exception hierarchy for every failure the
authorization code flow can surface. All errors derive from AuthError so
callers can report any failed flow with a single except clause.
"""

from typing import Optional


class AuthError(Exception):
    """
    Base exception for all OAuth errors.

    Attributes:
        stage: Flow stage the driver was in when the error occurred
               (set by OAuthDriver, None when raised outside a driver)
    """

    def __init__(self, message: str, stage: Optional[object] = None):
        super().__init__(message)
        self.stage = stage


class ConfigurationError(AuthError):
    """OAuth configuration error (missing or invalid configuration)."""

    pass


class PresenterError(AuthError):
    """Failed to present the authorization URL (browser launch failed)."""

    pass


class EncodingError(AuthError):
    """Failed to URL-encode request parameters."""

    pass


class AuthorizationError(AuthError):
    """The operator did not supply an authorization code."""

    pass


class CodeAlreadyUsedError(AuthError):
    """Authorization code was already handed to a token exchange."""

    pass


class HttpError(AuthError):
    """
    HTTP exchange failed.

    Raised for transport failures (connection refused, TLS errors,
    timeouts) and for responses with a non-2xx status code.

    Attributes:
        status_code: HTTP status code (None for transport failures)
        body: Raw response body (None for transport failures)
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[bytes] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class DeserializationError(AuthError):
    """Token response is not valid JSON or does not match the token type."""

    pass

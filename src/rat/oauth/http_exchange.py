"""
Single-shot HTTP exchange used by the token exchange step.

Each call performs exactly one request and buffers the full response body.
There is no session reuse, no connection pooling and no retry: a failed
exchange ends the authentication attempt.
"""

import logging
from typing import Optional

import requests

from .exceptions import HttpError

logger = logging.getLogger(__name__)


class HttpExchange:
    """
    Thin synchronous wrapper around one HTTP request/response.

    Responses with a status code outside 2xx are rejected with HttpError
    before the body is handed to any parser. The raw body is attached to
    the error so callers can still inspect a provider's error document.
    """

    def __init__(self, timeout: int = 30):
        """
        Initialize the exchange.

        Args:
            timeout: Seconds to wait for the provider (connect and read)
        """
        self.timeout = timeout

    def send(
        self,
        method: str,
        url: str,
        headers: Optional[dict[str, str]] = None,
        body: Optional[bytes] = None,
    ) -> bytes:
        """
        Perform one HTTP request.

        Args:
            method: HTTP method ("GET" or "POST")
            url: Fully built request URL, including any query string
            headers: Request headers
            body: Raw request body (None for requests without a body)

        Returns:
            Raw response body

        Raises:
            HttpError: On transport failure or a non-2xx response
        """
        # The URL may carry client secrets; log the host part only
        logger.debug(f"{method} {url.split('?', 1)[0]}")

        try:
            response = requests.request(
                method,
                url,
                headers=headers or {},
                data=body,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"HTTP request failed: {e}")
            raise HttpError(f"Failed to finish HTTP request: {e}") from e

        content = response.content
        if not 200 <= response.status_code < 300:
            logger.error(f"HTTP request returned status {response.status_code}")
            raise HttpError(
                f"Provider returned HTTP status {response.status_code}",
                status_code=response.status_code,
                body=content,
            )

        return content

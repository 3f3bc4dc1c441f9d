"""
OAuth provider configuration for the rat authentication driver.

A ProviderConfig carries everything the authorization code flow needs to
talk to one provider: client credentials, the authorization and token
endpoints, the redirect URI registered with the provider, and whether the
authorization page should be opened in a browser.
"""

from dataclasses import dataclass, field
from enum import Enum

from .exceptions import ConfigurationError


class OutputMode(Enum):
    """Whether raw provider responses are echoed to the operator."""

    VERBOSE = "verbose"
    QUIET = "quiet"


@dataclass(frozen=True)
class ProviderConfig:
    """
    Configuration for one OAuth 2.0 provider.

    Instances are immutable; the driver never modifies them.

    Attributes:
        client_id: Client ID issued by the provider
        client_secret: Client secret issued by the provider
        auth_endpoint: Authorization endpoint the operator visits
        token_endpoint: Endpoint the authorization code is exchanged at
        redirect_uri: Redirect URI registered with the provider
        open_browser: Open the authorization URL in the default browser
                      instead of printing it
    """

    client_id: str
    client_secret: str = field(repr=False)
    auth_endpoint: str
    token_endpoint: str
    redirect_uri: str
    open_browser: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.client_id:
            raise ConfigurationError("client_id cannot be empty")

        if not self.client_secret:
            raise ConfigurationError("client_secret cannot be empty")

        for name in ("auth_endpoint", "token_endpoint", "redirect_uri"):
            if not getattr(self, name):
                raise ConfigurationError(f"{name} cannot be empty")

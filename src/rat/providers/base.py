"""Base class for OAuth providers.

A provider binds the generic authorization code flow to one service: its
endpoints, the redirect URI registered for rat, the extra authorization
parameters it expects, how the client authenticates at its token endpoint
and the shape of the token it returns.
"""

from abc import ABC, abstractmethod
from typing import ClassVar, Type

from pydantic import BaseModel

from ..oauth import ExchangeScheme, ProviderConfig


class Provider(ABC):
    """Base class for OAuth providers.

    Subclasses set the class attributes and describe the received token.

    Example:
        >>> provider = CenterDeviceProvider()
        >>> config = provider.provider_config("id", "secret", open_browser=True)
    """

    name: ClassVar[str]
    title: ClassVar[str]
    auth_endpoint: ClassVar[str]
    token_endpoint: ClassVar[str]
    redirect_uri: ClassVar[str]
    scheme: ClassVar[ExchangeScheme]
    token_type: ClassVar[Type[BaseModel]]
    extra_params: ClassVar[tuple[tuple[str, str], ...]] = ()

    def provider_config(
        self, client_id: str, client_secret: str, open_browser: bool = False
    ) -> ProviderConfig:
        """Build the flow configuration for this provider.

        Raises:
            ConfigurationError: If the credentials are empty
        """
        return ProviderConfig(
            client_id=client_id,
            client_secret=client_secret,
            auth_endpoint=self.auth_endpoint,
            token_endpoint=self.token_endpoint,
            redirect_uri=self.redirect_uri,
            open_browser=open_browser,
        )

    @abstractmethod
    def summary(self, token: BaseModel) -> str:
        """One line telling the operator what was received."""
        pass

    @abstractmethod
    def config_lines(self, token: BaseModel) -> list[str]:
        """Configuration lines to add to the provider's section."""
        pass

"""
OAuth providers supported by rat.

Public API:
    Provider: Base class binding the flow to one service
    PROVIDERS: Provider instances by name
    get_provider: Look up a provider by name
"""

from ..oauth import ConfigurationError
from .base import Provider
from .centerdevice import CenterDeviceProvider, CenterDeviceToken
from .pocket import PocketProvider, PocketToken
from .slack import SlackProvider, SlackToken

PROVIDERS: dict[str, Provider] = {
    provider.name: provider
    for provider in (CenterDeviceProvider(), PocketProvider(), SlackProvider())
}


def get_provider(name: str) -> Provider:
    """
    Look up a provider by name.

    Raises:
        ConfigurationError: If no provider has that name
    """
    try:
        return PROVIDERS[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown provider '{name}'. Known providers: {', '.join(sorted(PROVIDERS))}"
        ) from None


__all__ = [
    "Provider",
    "PROVIDERS",
    "get_provider",
    "CenterDeviceProvider",
    "CenterDeviceToken",
    "PocketProvider",
    "PocketToken",
    "SlackProvider",
    "SlackToken",
]

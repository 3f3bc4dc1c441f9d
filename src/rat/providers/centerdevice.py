"""CenterDevice OAuth provider."""

from pydantic import BaseModel

from ..oauth import ExchangeScheme
from .base import Provider


class CenterDeviceToken(BaseModel):
    """Token returned by the CenterDevice token endpoint."""

    token_type: str
    expires_in: int
    refresh_token: str
    access_token: str


class CenterDeviceProvider(Provider):
    """CenterDevice document management."""

    name = "centerdevice"
    title = "CenterDevice"
    auth_endpoint = "https://auth.centerdevice.de/authorize"
    token_endpoint = "https://auth.centerdevice.de/token"
    redirect_uri = "https://lukaspustina.github.io/rat/redirects/centerdevice.html"
    scheme = ExchangeScheme.BASIC_AUTH
    token_type = CenterDeviceToken
    extra_params = (("response_type", "code"),)

    def summary(self, token: CenterDeviceToken) -> str:
        return (
            "Received access and refresh token "
            f"(expires in {token.expires_in} seconds)."
        )

    def config_lines(self, token: CenterDeviceToken) -> list[str]:
        return [
            f"refresh_token: '{token.refresh_token}'",
            f"access_token: '{token.access_token}'",
        ]

"""Pocket OAuth provider."""

from pydantic import BaseModel

from ..oauth import ExchangeScheme
from .base import Provider


class PocketToken(BaseModel):
    """Token returned by the Pocket authorize endpoint."""

    access_token: str
    username: str


class PocketProvider(Provider):
    """Pocket read-it-later list."""

    name = "pocket"
    title = "Pocket"
    auth_endpoint = "https://getpocket.com/auth/authorize"
    token_endpoint = "https://getpocket.com/v3/oauth/authorize"
    redirect_uri = "https://lukaspustina.github.io/rat/redirects/pocket.html"
    scheme = ExchangeScheme.BASIC_AUTH
    token_type = PocketToken
    extra_params = (("response_type", "code"),)

    def summary(self, token: PocketToken) -> str:
        return f"Received access token for user '{token.username}'."

    def config_lines(self, token: PocketToken) -> list[str]:
        return [f"access_token: '{token.access_token}'"]

"""Slack OAuth provider.

Slack's token endpoint authenticates the client through query parameters
and answers errors with HTTP 200 and ``{"ok": false, "error": ...}``. Such
a response lacks ``access_token`` and therefore fails token parsing.
"""

from pydantic import BaseModel

from ..oauth import ExchangeScheme
from .base import Provider


class SlackToken(BaseModel):
    """Token returned by Slack's oauth.access method."""

    ok: bool
    access_token: str
    scope: str
    user_id: str
    team_name: str
    team_id: str


class SlackProvider(Provider):
    """Slack messaging."""

    name = "slack"
    title = "Slack"
    auth_endpoint = "https://slack.com/oauth/authorize"
    token_endpoint = "https://slack.com/api/oauth.access"
    redirect_uri = "https://lukaspustina.github.io/rat/redirects/slack.html"
    scheme = ExchangeScheme.URL_PARAM
    token_type = SlackToken
    extra_params = (("scope", "channels:read chat:write:user"),)

    def summary(self, token: SlackToken) -> str:
        return (
            f"Received access token for user id '{token.user_id}', "
            f"team '{token.team_name}'."
        )

    def config_lines(self, token: SlackToken) -> list[str]:
        return [f"access_token: '{token.access_token}'"]

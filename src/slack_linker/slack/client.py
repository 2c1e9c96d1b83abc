"""Per-connection async Slack client factory.

Every workspace connection carries its own user token, so unlike a bot-token
singleton a fresh AsyncWebClient is built for each resolution and discarded
afterwards.
"""

from slack_sdk.web.async_client import AsyncWebClient


class MissingTokenError(ValueError):
    """Raised when a Slack client is requested without an access token."""


def create_slack_client(access_token: str) -> AsyncWebClient:
    """Return an AsyncWebClient authorised with the connection's access token.

    Raises MissingTokenError for an empty token so that no request is ever
    sent unauthenticated.
    """
    if not access_token:
        raise MissingTokenError("Slack access token is required")
    return AsyncWebClient(token=access_token)

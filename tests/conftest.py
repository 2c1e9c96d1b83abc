"""Shared test fixtures."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient
from slack_sdk.errors import SlackApiError

from slack_linker.app import app
from slack_linker.config import get_settings
from slack_linker.models.connection import User, WorkspaceConnection

CHANNEL = "C0AFQJHAVS6"
TS = "1609459200.000100"
COMPACT_TS = "1609459200000100"
PERMALINK = f"https://acme.slack.com/archives/{CHANNEL}/p{COMPACT_TS}"


@pytest.fixture(scope="session")
def client() -> TestClient:
    """Create a TestClient for the FastAPI app."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Settings are lru-cached; start every test from the environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def make_slack_api_error(error_code: str) -> SlackApiError:
    """Build a SlackApiError with a mock response carrying the given error code."""
    resp = MagicMock()
    resp.get = MagicMock(
        side_effect=lambda key, default="": error_code if key == "error" else default,
    )
    resp.__getitem__ = MagicMock(
        side_effect=lambda key: error_code if key == "error" else None,
    )
    return SlackApiError(message=f"slack error: {error_code}", response=resp)


def make_connection(**overrides) -> WorkspaceConnection:
    """Create a WorkspaceConnection with sensible defaults."""
    defaults = {
        "workspace_id": "T1234567890",
        "workspace_name": "acme",
        "team_name": "Acme Inc",
        "access_token": "xoxp-test",
        "user_id": "user-1",
    }
    defaults.update(overrides)
    return WorkspaceConnection(**defaults)


def make_user(user_id: str = "user-1") -> User:
    return User(id=user_id, email=f"{user_id}@example.com")


@pytest.fixture()
def slack_client() -> AsyncMock:
    """An AsyncWebClient stand-in whose API methods return empty ok responses."""
    client = AsyncMock()
    client.conversations_history.return_value = {"ok": True, "messages": []}
    client.conversations_replies.return_value = {"ok": True, "messages": []}
    client.conversations_info.return_value = {"ok": True, "channel": {"name": "general"}}
    client.users_info.return_value = {
        "ok": True,
        "user": {"name": "jdoe", "profile": {"display_name": "Jane", "real_name": "Jane Doe"}},
    }
    client.usergroups_list.return_value = {"ok": True, "usergroups": []}
    return client

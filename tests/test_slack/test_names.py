"""Tests for channel, user and group name resolution with graceful degradation."""

from unittest.mock import AsyncMock

import aiohttp

from conftest import CHANNEL, make_slack_api_error
from slack_linker.slack.names import UNKNOWN_USER, NameResolver


def _user(name: str | None = None, display: str | None = None, real: str | None = None) -> dict:
    return {
        "ok": True,
        "user": {"name": name, "profile": {"display_name": display, "real_name": real}},
    }


# -- channel_name --


async def test_channel_name(slack_client: AsyncMock):
    resolver = NameResolver(slack_client)

    assert await resolver.channel_name(CHANNEL) == "general"
    slack_client.conversations_info.assert_awaited_once_with(channel=CHANNEL)


async def test_channel_name_error_falls_back_to_id(slack_client: AsyncMock):
    slack_client.conversations_info.side_effect = make_slack_api_error("channel_not_found")

    assert await NameResolver(slack_client).channel_name(CHANNEL) == CHANNEL


async def test_channel_name_ok_false_falls_back_to_id(slack_client: AsyncMock):
    slack_client.conversations_info.return_value = {"ok": False, "error": "missing_scope"}

    assert await NameResolver(slack_client).channel_name(CHANNEL) == CHANNEL


# -- author_name / user_name --


async def test_author_prefers_display_name(slack_client: AsyncMock):
    slack_client.users_info.return_value = _user("jdoe", "Jane", "Jane Doe")

    assert await NameResolver(slack_client).author_name("U1") == "Jane"


async def test_author_falls_back_to_real_name(slack_client: AsyncMock):
    slack_client.users_info.return_value = _user("jdoe", "", "Jane Doe")

    assert await NameResolver(slack_client).author_name("U1") == "Jane Doe"


async def test_author_falls_back_to_account_name(slack_client: AsyncMock):
    slack_client.users_info.return_value = _user("jdoe")

    assert await NameResolver(slack_client).author_name("U1") == "jdoe"


async def test_author_falls_back_to_user_id(slack_client: AsyncMock):
    slack_client.users_info.return_value = _user()

    assert await NameResolver(slack_client).author_name("U1") == "U1"


async def test_author_lookup_failure_is_unknown_user(slack_client: AsyncMock):
    slack_client.users_info.side_effect = aiohttp.ClientConnectionError("reset")

    assert await NameResolver(slack_client).author_name("U1") == UNKNOWN_USER


async def test_missing_author_is_unknown_user_without_lookup(slack_client: AsyncMock):
    assert await NameResolver(slack_client).author_name(None) == UNKNOWN_USER
    slack_client.users_info.assert_not_called()


async def test_user_name_failure_keeps_id(slack_client: AsyncMock):
    slack_client.users_info.side_effect = make_slack_api_error("user_not_found")

    assert await NameResolver(slack_client).user_name("U1") == "U1"


async def test_user_lookup_is_memoised(slack_client: AsyncMock):
    resolver = NameResolver(slack_client)

    await resolver.user_name("U1")
    await resolver.author_name("U1")
    await resolver.user_name("U2")

    assert slack_client.users_info.await_count == 2


async def test_channel_failure_does_not_block_user_lookup(slack_client: AsyncMock):
    slack_client.conversations_info.side_effect = make_slack_api_error("channel_not_found")
    resolver = NameResolver(slack_client)

    assert await resolver.channel_name(CHANNEL) == CHANNEL
    assert await resolver.author_name("U1") == "Jane"


# -- group_name --


async def test_group_name_from_listing(slack_client: AsyncMock):
    slack_client.usergroups_list.return_value = {
        "ok": True,
        "usergroups": [
            {"id": "S1", "handle": "oncall", "name": "On-call"},
            {"id": "S2", "name": "Design"},
        ],
    }
    resolver = NameResolver(slack_client)

    assert await resolver.group_name("S1") == "oncall"
    assert await resolver.group_name("S2") == "Design"
    assert await resolver.group_name("S3") == "S3"
    assert slack_client.usergroups_list.await_count == 1


async def test_group_listing_failure_keeps_id(slack_client: AsyncMock):
    slack_client.usergroups_list.side_effect = make_slack_api_error("missing_scope")

    assert await NameResolver(slack_client).group_name("S1") == "S1"

"""Human-readable channel, user and user-group names for a resolution.

Lookups degrade instead of failing: an unreachable channel is labelled by its
id, an unknown author becomes "Unknown User". Results are memoised on the
resolver instance, which lives for a single resolution only.
"""

import logging

from slack_sdk.web.async_client import AsyncWebClient

from slack_linker.slack.fetcher import call_slack

logger = logging.getLogger(__name__)

UNKNOWN_USER = "Unknown User"


class NameResolver:
    """Request-scoped name lookups against one Slack workspace."""

    def __init__(self, client: AsyncWebClient):
        self._client = client
        self._channels: dict[str, str] = {}
        self._users: dict[str, str | None] = {}
        self._groups: dict[str, str] = {}
        self._groups_loaded = False

    async def channel_name(self, channel_id: str) -> str:
        """Return the channel's name, or the raw channel_id if the lookup fails."""
        if channel_id not in self._channels:
            response = await call_slack(
                "channel_info", self._client.conversations_info, channel=channel_id
            )
            channel = (response or {}).get("channel") or {}
            self._channels[channel_id] = channel.get("name") or channel_id
        return self._channels[channel_id]

    async def _lookup_user(self, user_id: str) -> str | None:
        if user_id not in self._users:
            response = await call_slack("user_info", self._client.users_info, user=user_id)
            user = (response or {}).get("user")
            if user:
                profile = user.get("profile") or {}
                self._users[user_id] = (
                    profile.get("display_name")
                    or profile.get("real_name")
                    or user.get("name")
                    or user_id
                )
            else:
                self._users[user_id] = None
        return self._users[user_id]

    async def user_name(self, user_id: str) -> str:
        """Display name for a mentioned user; the raw id when it can't be resolved."""
        return await self._lookup_user(user_id) or user_id

    async def author_name(self, user_id: str | None) -> str:
        """Display name for a message author; "Unknown User" when absent or unresolvable."""
        if not user_id:
            return UNKNOWN_USER
        return await self._lookup_user(user_id) or UNKNOWN_USER

    async def group_name(self, group_id: str) -> str:
        """Return a user group's handle, or the raw group_id if it can't be found.

        usergroups.list is fetched once per resolver; every group id in the
        message is then answered from that listing.
        """
        if not self._groups_loaded:
            self._groups_loaded = True
            response = await call_slack("group_list", self._client.usergroups_list)
            for group in (response or {}).get("usergroups") or []:
                if group.get("id"):
                    self._groups[group["id"]] = group.get("handle") or group.get("name") or group["id"]
        return self._groups.get(group_id, group_id)

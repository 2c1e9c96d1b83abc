"""Rewriting of Slack mrkdwn mention tokens into readable names."""

import re

from slack_linker.slack.names import NameResolver

# <@U123> or <@U123|label>
USER_MENTION_PATTERN = re.compile(r"<@([A-Z0-9]+)(?:\|[^>]*)?>")
# <!subteam^S123> or <!subteam^S123|@handle>
GROUP_MENTION_PATTERN = re.compile(r"<!subteam\^([A-Z0-9]+)(?:\|[^>]*)?>")
# <#C123> or <#C123|general>
CHANNEL_MENTION_PATTERN = re.compile(r"<#([A-Z0-9]+)(?:\|([^>]*))?>")


def _distinct(ids: list[str]) -> list[str]:
    return list(dict.fromkeys(ids))


def normalize_newlines(text: str) -> str:
    """Turn literal backslash-n sequences into real newlines and strip the result."""
    return text.replace("\\n", "\n").strip()


async def rewrite_mentions(text: str, resolver: NameResolver) -> str:
    """Replace user, user-group and channel tokens with @name / #name.

    Each distinct id is resolved once, in order of first appearance. Users
    that can't be resolved keep their id (``@U123``). Text without tokens is
    returned with only newline normalization applied.
    """
    if not text:
        return ""

    users = {
        user_id: await resolver.user_name(user_id)
        for user_id in _distinct(USER_MENTION_PATTERN.findall(text))
    }
    text = USER_MENTION_PATTERN.sub(lambda m: f"@{users[m.group(1)]}", text)

    groups = {
        group_id: await resolver.group_name(group_id)
        for group_id in _distinct(GROUP_MENTION_PATTERN.findall(text))
    }
    text = GROUP_MENTION_PATTERN.sub(lambda m: f"@{groups[m.group(1)]}", text)

    unlabelled = [cid for cid, label in CHANNEL_MENTION_PATTERN.findall(text) if not label]
    channels = {
        channel_id: await resolver.channel_name(channel_id)
        for channel_id in _distinct(unlabelled)
    }
    text = CHANNEL_MENTION_PATTERN.sub(
        lambda m: f"#{m.group(2) or channels[m.group(1)]}", text
    )

    return normalize_newlines(text)

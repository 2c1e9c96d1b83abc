"""Tiered retrieval of a single Slack message.

A permalink does not say whether the target is a top-level post or a thread
reply, so retrieval tries up to three strategies and stops at the first hit:

- thread: conversations.replies on the linked thread_ts (only when present)
- history: conversations.history pinned to the message ts
- thread scan: list recent history, then walk every parent with replies

Every Slack failure (ok: false, client or transport error) is logged and
treated as "nothing found" for that tier. Nothing here raises for remote
errors; the caller gets a RawMessage or None.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable

import aiohttp
from slack_sdk.errors import SlackApiError, SlackClientError
from slack_sdk.web.async_client import AsyncWebClient

from slack_linker.config import get_settings
from slack_linker.models.message import RawMessage

logger = logging.getLogger(__name__)

REMOTE_ERRORS = (SlackClientError, aiohttp.ClientError, asyncio.TimeoutError)


def _error_code(exc: Exception) -> str:
    """Return the Slack error code for API errors, else the exception type."""
    if isinstance(exc, SlackApiError) and exc.response is not None:
        return exc.response.get("error", "") or "unknown_error"
    return type(exc).__name__


async def call_slack(
    tier: str, method: Callable[..., Awaitable], **kwargs
) -> dict | None:
    """Invoke a Slack Web API method, returning its payload or None on failure.

    Used by every read in this package so that a failed call is logged once
    and never propagates.
    """
    try:
        response = await method(**kwargs)
    except REMOTE_ERRORS as exc:
        logger.warning(
            "Slack call failed in %s: %s", tier, _error_code(exc), exc_info=True
        )
        return None

    if not response.get("ok", False):
        logger.warning("Slack call returned ok=false in %s: %s", tier, response.get("error"))
        return None
    return response


def _to_raw(message: dict) -> RawMessage | None:
    if not message.get("ts"):
        return None
    return RawMessage.model_validate(
        {**message, "text": message.get("text") or "", "reply_count": message.get("reply_count") or 0}
    )


def _find_ts(messages: list[dict], ts: str) -> RawMessage | None:
    for message in messages:
        if message.get("ts") == ts:
            return _to_raw(message)
    return None


async def fetch_thread_reply(
    client: AsyncWebClient, channel_id: str, thread_ts: str, ts: str, tier: str = "thread"
) -> RawMessage | None:
    """Fetch a thread's replies and return the one whose ts matches."""
    settings = get_settings()
    response = await call_slack(
        tier,
        client.conversations_replies,
        channel=channel_id,
        ts=thread_ts,
        limit=settings.thread_replies_limit,
        inclusive=True,
    )
    if response is None:
        return None
    return _find_ts(response.get("messages") or [], ts)


async def fetch_history_message(
    client: AsyncWebClient, channel_id: str, ts: str
) -> RawMessage | None:
    """Fetch channel history pinned to a single ts (latest == oldest, inclusive)."""
    response = await call_slack(
        "history",
        client.conversations_history,
        channel=channel_id,
        latest=ts,
        oldest=ts,
        inclusive=True,
        limit=1,
    )
    if response is None:
        return None

    messages = response.get("messages") or []
    if not messages:
        return None
    return _to_raw(messages[0])


async def scan_threads(client: AsyncWebClient, channel_id: str, ts: str) -> RawMessage | None:
    """Walk recent threaded messages one at a time looking for a reply with ts.

    Parents are visited in the order Slack lists them and fetched sequentially;
    the first thread containing the ts wins.
    """
    settings = get_settings()
    response = await call_slack(
        "thread_scan",
        client.conversations_history,
        channel=channel_id,
        limit=settings.history_scan_limit,
    )
    if response is None:
        return None

    parents = [m for m in response.get("messages") or [] if (m.get("reply_count") or 0) > 0]
    logger.info("Scanning %d threads in %s for %s", len(parents), channel_id, ts)

    for parent in parents:
        parent_ts = parent.get("ts")
        if not parent_ts:
            continue
        message = await fetch_thread_reply(
            client, channel_id, parent_ts, ts, tier="thread_scan"
        )
        if message is not None:
            logger.info("Found %s in thread %s", ts, parent_ts)
            return message
    return None


async def fetch_message(
    client: AsyncWebClient,
    channel_id: str,
    ts: str,
    thread_ts: str | None = None,
) -> RawMessage | None:
    """Retrieve a message by channel and canonical ts, trying each tier in turn.

    Args:
        client: Slack client authorised for the selected workspace.
        channel_id: Channel the permalink points into.
        ts: Canonical "seconds.micro" message timestamp.
        thread_ts: Parent thread ts from the permalink's query string, if any.

    Returns:
        The raw message, or None when every tier came up empty.
    """
    if thread_ts:
        message = await fetch_thread_reply(client, channel_id, thread_ts, ts)
        if message is not None:
            return message

    message = await fetch_history_message(client, channel_id, ts)
    if message is not None:
        return message

    logger.info("Message %s not in channel history, scanning threads", ts)
    message = await scan_threads(client, channel_id, ts)
    if message is None:
        logger.warning("No message found in %s for ts %s", channel_id, ts)
    return message

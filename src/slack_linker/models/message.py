"""Message link request, parsed link, and message models."""

from pydantic import BaseModel, ConfigDict, Field


class MessageLinkRequest(BaseModel):
    """Incoming resolution request: a pasted Slack link and the requesting user."""

    model_config = ConfigDict(frozen=True)

    url: str
    user_id: str


class ParsedLink(BaseModel):
    """Fields extracted from a Slack message permalink."""

    model_config = ConfigDict(frozen=True)

    workspace_slug: str  # Subdomain, e.g. "acme" in acme.slack.com
    channel_id: str
    timestamp: str  # Compact form from the URL path, e.g. "1609459200000100"
    thread_timestamp: str | None = None  # Canonical form from ?thread_ts=


class RawMessage(BaseModel):
    """A message as returned by conversations.history / conversations.replies.

    Only the fields this service reads are modelled; the rest are ignored.
    ``user`` is absent for some system and bot messages.
    """

    model_config = ConfigDict(extra="ignore")

    text: str = ""
    user: str | None = None
    ts: str
    thread_ts: str | None = None
    reply_count: int = 0


class ResolvedMessage(BaseModel):
    """Normalized result handed back to the caller."""

    text: str  # "<Author> (#<channel>)\n<body>" with mentions rewritten
    user: str | None = None
    timestamp: str
    channel: str
    url: str
    workspace: str = Field(description="Name of the workspace connection that was used")

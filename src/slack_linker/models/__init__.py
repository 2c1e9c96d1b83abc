"""Data models for Slack message-link resolution."""

from slack_linker.models.connection import User, WorkspaceConnection
from slack_linker.models.message import (
    MessageLinkRequest,
    ParsedLink,
    RawMessage,
    ResolvedMessage,
)
from slack_linker.models.result import (
    FailureReason,
    ResolutionFailure,
    ResolutionResult,
)

__all__ = [
    "MessageLinkRequest",
    "ParsedLink",
    "RawMessage",
    "ResolvedMessage",
    "User",
    "WorkspaceConnection",
    "FailureReason",
    "ResolutionFailure",
    "ResolutionResult",
]

"""Selection of the workspace connection that matches a pasted link.

A user may have authorised several Slack workspaces. The link's subdomain is
compared against each connection, case-insensitively, in strict priority
order: workspace id, then workspace name, then team name. Within a tier the
earliest connection in the list wins; an id match anywhere in the list beats
a name match earlier in it. With no match the first connection is used.
"""

from enum import Enum

from pydantic import BaseModel

from slack_linker.models.connection import WorkspaceConnection
from slack_linker.models.message import ParsedLink


class SelectionReason(str, Enum):
    """Why a particular connection was chosen."""

    EXACT_ID = "exact_id"
    NAME_MATCH = "name_match"
    TEAM_MATCH = "team_match"
    FALLBACK = "fallback"
    NO_CONNECTION = "no_connection"


class ConnectionSelection(BaseModel):
    """Diagnostic summary of a connection choice, for logging."""

    url_workspace: str | None
    selected_workspace_id: str | None
    selected_workspace_name: str | None
    total_connections: int
    reason: SelectionReason


_PRIORITY = (
    (SelectionReason.EXACT_ID, "workspace_id"),
    (SelectionReason.NAME_MATCH, "workspace_name"),
    (SelectionReason.TEAM_MATCH, "team_name"),
)


def _match_reason(slug: str, connection: WorkspaceConnection) -> SelectionReason | None:
    for reason, field in _PRIORITY:
        if getattr(connection, field).lower() == slug:
            return reason
    return None


def select_connection(
    parsed: ParsedLink | None, connections: list[WorkspaceConnection]
) -> WorkspaceConnection | None:
    """Pick the connection to use for a link.

    Returns None only when ``connections`` is empty. When the link could not
    be parsed, the first connection is returned for a best-effort attempt.
    """
    if not connections:
        return None
    if parsed is None:
        return connections[0]

    slug = parsed.workspace_slug.lower()
    for _, field in _PRIORITY:
        for connection in connections:
            if getattr(connection, field).lower() == slug:
                return connection
    return connections[0]


def describe_selection(
    parsed: ParsedLink | None,
    connections: list[WorkspaceConnection],
    selected: WorkspaceConnection | None,
) -> ConnectionSelection:
    """Explain which priority tier produced ``selected``."""
    url_workspace = parsed.workspace_slug if parsed else None
    if selected is None:
        reason = SelectionReason.NO_CONNECTION
    elif url_workspace is None:
        reason = SelectionReason.FALLBACK
    else:
        reason = _match_reason(url_workspace.lower(), selected) or SelectionReason.FALLBACK

    return ConnectionSelection(
        url_workspace=url_workspace,
        selected_workspace_id=selected.workspace_id if selected else None,
        selected_workspace_name=selected.workspace_name if selected else None,
        total_connections=len(connections),
        reason=reason,
    )

"""Workspace connection and user records owned by the persistence layer."""

from pydantic import BaseModel, ConfigDict


class WorkspaceConnection(BaseModel):
    """An authorization binding one user to one Slack workspace."""

    model_config = ConfigDict(frozen=True)

    workspace_id: str  # Slack team id, e.g. "T1234567890"
    workspace_name: str
    team_name: str
    access_token: str
    user_id: str


class User(BaseModel):
    """Minimal user record; only existence matters to message resolution."""

    model_config = ConfigDict(frozen=True)

    id: str
    email: str | None = None

"""User and workspace-connection lookups consumed by message resolution.

The real store belongs to the host application; it only has to satisfy
ConnectionRepository. InMemoryConnectionRepository backs local runs and tests.
"""

from typing import Protocol

from slack_linker.models.connection import User, WorkspaceConnection


class RepositoryError(Exception):
    """The underlying store failed (connection lost, query error, ...)."""


class UserNotFoundError(RepositoryError):
    """No user record exists for the given id."""


class ConnectionRepository(Protocol):
    async def find_user(self, user_id: str) -> User:
        """Return the user or raise UserNotFoundError / RepositoryError."""
        ...

    async def find_connections_by_user(self, user_id: str) -> list[WorkspaceConnection]:
        """Return the user's connections in stored order; raise RepositoryError on failure."""
        ...


class InMemoryConnectionRepository:
    """Dict-backed repository. Connection order is insertion order."""

    def __init__(
        self,
        users: list[User] | None = None,
        connections: list[WorkspaceConnection] | None = None,
    ):
        self._users = {user.id: user for user in users or []}
        self._connections = list(connections or [])

    def add_user(self, user: User) -> None:
        self._users[user.id] = user

    def add_connection(self, connection: WorkspaceConnection) -> None:
        self._connections.append(connection)

    async def find_user(self, user_id: str) -> User:
        try:
            return self._users[user_id]
        except KeyError:
            raise UserNotFoundError(f"User {user_id} not found") from None

    async def find_connections_by_user(self, user_id: str) -> list[WorkspaceConnection]:
        return [c for c in self._connections if c.user_id == user_id]

"""Message resolution: from a pasted Slack link to a normalized message.

The flow is linear: validate -> find user -> load connections -> select
connection -> fetch -> format. Each step either hands its result to the next
or ends the resolution with a typed failure. Slack lookups inside the fetch
and format steps degrade on their own; only this module turns problems into
caller-visible failures.
"""

import logging
from collections.abc import Callable

from slack_sdk.web.async_client import AsyncWebClient

from slack_linker.connections import (
    SelectionReason,
    describe_selection,
    select_connection,
)
from slack_linker.models.connection import WorkspaceConnection
from slack_linker.models.message import MessageLinkRequest, ParsedLink, ResolvedMessage
from slack_linker.models.result import FailureReason, ResolutionResult
from slack_linker.repository import (
    ConnectionRepository,
    RepositoryError,
    UserNotFoundError,
)
from slack_linker.slack.client import MissingTokenError, create_slack_client
from slack_linker.slack.fetcher import fetch_message
from slack_linker.slack.links import convert_timestamp, parse_message_link
from slack_linker.slack.mentions import rewrite_mentions
from slack_linker.slack.names import NameResolver

logger = logging.getLogger(__name__)

NO_CONNECTION_DETAIL = "No Slack workspace is connected. Connect one in settings."
MESSAGE_NOT_FOUND_DETAIL = (
    "Message not found. You may not have access to it, or it may have been deleted."
)


def _is_present(value) -> bool:
    return isinstance(value, str) and bool(value.strip())


def validate_request(url, user_id) -> tuple[ParsedLink | None, list[str]]:
    """Check the raw inputs and parse the link.

    Returns the parsed link (None when invalid) and a list of error messages;
    an empty list means the request is valid.
    """
    errors: list[str] = []
    if not _is_present(user_id):
        errors.append("Valid user ID is required")

    parsed = parse_message_link(url) if _is_present(url) else None
    if parsed is None:
        errors.append("Valid Slack URL is required")
    return parsed, errors


def format_message_text(author: str, channel_name: str, body: str) -> str:
    """Prefix a message body with its author and channel."""
    return f"{author} (#{channel_name})\n{body}"


class MessageResolutionService:
    """Resolves Slack message links for a user across their connected workspaces."""

    def __init__(
        self,
        repository: ConnectionRepository,
        client_factory: Callable[[str], AsyncWebClient] | None = None,
    ):
        self._repository = repository
        self._client_factory = client_factory or create_slack_client

    async def resolve(self, url: str, user_id: str) -> ResolutionResult:
        """Resolve ``url`` on behalf of ``user_id``.

        Never raises: every outcome is a ResolutionResult carrying either the
        message or a failure with reason and suggested HTTP status.
        """
        try:
            return await self._resolve(url, user_id)
        except Exception:
            logger.error("Slack message resolution failed for %s", url, exc_info=True)
            return ResolutionResult.fail(
                FailureReason.UNEXPECTED_FAILURE, "Failed to retrieve the Slack message"
            )

    async def _resolve(self, url: str, user_id: str) -> ResolutionResult:
        parsed, errors = validate_request(url, user_id)
        if errors:
            return ResolutionResult.fail(FailureReason.VALIDATION_FAILED, ", ".join(errors))
        request = MessageLinkRequest(url=url, user_id=user_id)

        try:
            await self._repository.find_user(request.user_id)
        except UserNotFoundError:
            return ResolutionResult.fail(FailureReason.USER_NOT_FOUND, "User not found")
        except RepositoryError:
            logger.error("User lookup failed for %s", request.user_id, exc_info=True)
            return ResolutionResult.fail(
                FailureReason.REPOSITORY_FAILURE, "Failed to validate user"
            )

        try:
            connections = await self._repository.find_connections_by_user(request.user_id)
        except RepositoryError:
            logger.error("Connection lookup failed for %s", request.user_id, exc_info=True)
            return ResolutionResult.fail(
                FailureReason.REPOSITORY_FAILURE, "Failed to fetch Slack connections"
            )

        connection = select_connection(parsed, connections)
        if connection is None:
            return ResolutionResult.fail(FailureReason.NO_CONNECTION, NO_CONNECTION_DETAIL)
        self._log_selection(parsed, connections, connection)

        message = await self._fetch_and_format(request, parsed, connection)
        if message is None:
            return ResolutionResult.fail(
                FailureReason.MESSAGE_NOT_FOUND, MESSAGE_NOT_FOUND_DETAIL
            )
        return ResolutionResult.success(message)

    async def _fetch_and_format(
        self,
        request: MessageLinkRequest,
        parsed: ParsedLink,
        connection: WorkspaceConnection,
    ) -> ResolvedMessage | None:
        try:
            client = self._client_factory(connection.access_token)
        except MissingTokenError:
            logger.warning(
                "Connection %s has no access token", connection.workspace_id
            )
            return None

        ts = convert_timestamp(parsed.timestamp)
        raw = await fetch_message(client, parsed.channel_id, ts, parsed.thread_timestamp)
        if raw is None:
            return None

        resolver = NameResolver(client)
        body = await rewrite_mentions(raw.text, resolver)
        channel_name = await resolver.channel_name(parsed.channel_id)
        author = await resolver.author_name(raw.user)

        return ResolvedMessage(
            text=format_message_text(author, channel_name, body),
            user=raw.user,
            timestamp=raw.ts,
            channel=parsed.channel_id,
            url=request.url,
            workspace=connection.workspace_name,
        )

    def _log_selection(
        self,
        parsed: ParsedLink,
        connections: list[WorkspaceConnection],
        selected: WorkspaceConnection,
    ) -> None:
        selection = describe_selection(parsed, connections, selected)
        if selection.reason == SelectionReason.FALLBACK:
            logger.warning(
                "No workspace matched %s, using first of %d connections (%s)",
                selection.url_workspace,
                selection.total_connections,
                ", ".join(
                    f"{c.workspace_id}/{c.workspace_name}/{c.team_name}" for c in connections
                ),
            )
        logger.debug(
            "Selected Slack connection %s (%s) for %s: %s",
            selection.selected_workspace_id,
            selection.selected_workspace_name,
            selection.url_workspace,
            selection.reason.value,
        )

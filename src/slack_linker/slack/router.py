"""HTTP endpoint resolving a pasted Slack message link."""

import json

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from slack_linker.models.result import FailureReason, ResolutionFailure
from slack_linker.repository import ConnectionRepository
from slack_linker.service import MessageResolutionService

router = APIRouter(prefix="", tags=["slack"])


def get_repository(request: Request) -> ConnectionRepository:
    """Return the connection repository installed on the application."""
    return request.app.state.repository


def get_resolution_service(
    repository: ConnectionRepository = Depends(get_repository),
) -> MessageResolutionService:
    return MessageResolutionService(repository)


def _failure_response(failure: ResolutionFailure) -> JSONResponse:
    return JSONResponse(
        {"error": failure.detail, "reason": failure.reason.value},
        status_code=failure.status_code,
    )


@router.post("/slack/message")
async def resolve_slack_message(
    request: Request,
    service: MessageResolutionService = Depends(get_resolution_service),
) -> JSONResponse:
    """Resolve {"url", "user_id"} to the message's text, author and channel.

    Malformed JSON or non-UTF-8 bodies are rejected as validation failures (400).
    """
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        payload = None
    if not isinstance(payload, dict):
        return _failure_response(
            ResolutionFailure.of(FailureReason.VALIDATION_FAILED, "JSON object body is required")
        )

    result = await service.resolve(payload.get("url"), payload.get("user_id"))
    if result.failure is not None:
        return _failure_response(result.failure)
    return JSONResponse(result.message.model_dump())

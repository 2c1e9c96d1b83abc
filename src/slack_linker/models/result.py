"""Resolution outcome types: typed failures and the success/failure result."""

from enum import Enum

from pydantic import BaseModel

from slack_linker.models.message import ResolvedMessage


class FailureReason(str, Enum):
    """Machine-readable reason a resolution did not produce a message."""

    VALIDATION_FAILED = "validation_failed"
    USER_NOT_FOUND = "user_not_found"
    NO_CONNECTION = "no_connection"
    MESSAGE_NOT_FOUND = "message_not_found"
    REPOSITORY_FAILURE = "repository_failure"
    UNEXPECTED_FAILURE = "unexpected_failure"


STATUS_CODES: dict[FailureReason, int] = {
    FailureReason.VALIDATION_FAILED: 400,
    FailureReason.USER_NOT_FOUND: 401,
    FailureReason.NO_CONNECTION: 400,  # Client-side setup problem: the user must connect a workspace first
    FailureReason.MESSAGE_NOT_FOUND: 404,
    FailureReason.REPOSITORY_FAILURE: 500,
    FailureReason.UNEXPECTED_FAILURE: 500,
}


class ResolutionFailure(BaseModel):
    """A caller-visible failure with a suggested HTTP status."""

    reason: FailureReason
    detail: str
    status_code: int

    @classmethod
    def of(cls, reason: FailureReason, detail: str) -> "ResolutionFailure":
        return cls(reason=reason, detail=detail, status_code=STATUS_CODES[reason])


class ResolutionResult(BaseModel):
    """Either a resolved message or a failure, never both."""

    message: ResolvedMessage | None = None
    failure: ResolutionFailure | None = None

    @property
    def ok(self) -> bool:
        return self.message is not None

    @classmethod
    def success(cls, message: ResolvedMessage) -> "ResolutionResult":
        return cls(message=message)

    @classmethod
    def fail(cls, reason: FailureReason, detail: str) -> "ResolutionResult":
        return cls(failure=ResolutionFailure.of(reason, detail))

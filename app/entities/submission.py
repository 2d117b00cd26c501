from dataclasses import dataclass
from enum import Enum

from app.entities.message import ChatMessage


class FailureKind(str, Enum):
    NETWORK = "network"
    SERVICE = "service"
    CREDENTIALS = "credentials"
    MALFORMED_RESPONSE = "malformed_response"
    INVALID_REQUEST = "invalid_request"
    TIMEOUT = "timeout"
    UNKNOWN = "unknown"


class SubmissionStatus(str, Enum):
    OK = "ok"
    FAILED = "failed"
    IGNORED = "ignored"


class SubmissionFailure(Exception):
    """Any failure between building the request and receiving a parsed reply."""

    def __init__(self, kind: FailureKind, detail: str = "") -> None:
        self.kind = kind
        self.detail = detail
        super().__init__(f"{kind.value}: {detail}" if detail else kind.value)


@dataclass(frozen=True)
class SubmissionResult:
    status: SubmissionStatus
    user_message: ChatMessage | None = None
    bot_message: ChatMessage | None = None
    failure_kind: FailureKind | None = None

    @classmethod
    def ignored(cls) -> "SubmissionResult":
        return cls(status=SubmissionStatus.IGNORED)

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "user_message": self.user_message.to_dict() if self.user_message else None,
            "bot_message": self.bot_message.to_dict() if self.bot_message else None,
            "failure_kind": self.failure_kind.value if self.failure_kind else None,
        }

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional


class HTTPMethod(Enum):
    """HTTP methods with wire-format string values."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


@dataclass(frozen=True)
class TransportResponse:
    """Completed HTTP exchange as seen by the dispatcher."""
    status: int
    body: bytes = b""
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class DispatchState(Enum):
    """States of one operation inside the request dispatcher."""
    BUILDING = "building"
    SIGNING = "signing"
    SENDING = "sending"
    CLASSIFYING = "classifying"
    RETRYING = "retrying"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class AttemptDecision(Enum):
    RETRY = "retry"
    STOP = "stop"


@dataclass(frozen=True)
class AttemptRecord:
    """One network round-trip within an operation."""
    ordinal: int
    timestamp: str
    signature: Optional[str]
    status_code: Optional[int]
    decision: AttemptDecision
    error: Optional[Exception] = None
    delay: float = 0.0

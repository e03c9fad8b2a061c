"""
Outcome of a municipality operation.

Handlers return an `OperationResult` instead of raising, and the router
maps it to an HTTP status at the boundary only.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ResultStatus(str, Enum):
    FOUND = "found"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass(frozen=True)
class OperationResult:
    status: ResultStatus
    data: Any = None
    reason: Optional[str] = None

    @classmethod
    def found(cls, data: Any = None) -> "OperationResult":
        return cls(ResultStatus.FOUND, data=data)

    @classmethod
    def empty(cls) -> "OperationResult":
        return cls(ResultStatus.EMPTY)

    @classmethod
    def failed(cls, reason: str) -> "OperationResult":
        return cls(ResultStatus.FAILED, reason=reason)

    @property
    def is_found(self) -> bool:
        return self.status is ResultStatus.FOUND

    @property
    def is_empty(self) -> bool:
        return self.status is ResultStatus.EMPTY

    @property
    def is_failed(self) -> bool:
        return self.status is ResultStatus.FAILED

"""
Service results and the error taxonomy shared by every service.

Services return a Result instead of raising for expected failures; the HTTP
layer picks a status code from the error kind.
"""
import enum
from dataclasses import dataclass
from typing import Any, Optional


class ErrorKind(enum.Enum):
    NOT_FOUND = 'not_found'
    NOTHING_MATCHED = 'nothing_matched'
    DUPLICATE_VISIT = 'duplicate_visit'
    MISSING_INPUT = 'missing_input'
    INVALID_RANGE = 'invalid_range'
    INVALID_DATE = 'invalid_date'
    VALIDATION_FAILED = 'validation_failed'
    USER_EXISTS = 'user_exists'
    INVALID_CREDENTIALS = 'invalid_credentials'
    STORAGE_FAILURE = 'storage_failure'


@dataclass(frozen=True)
class ServiceError:
    kind: ErrorKind
    message: str


@dataclass(frozen=True)
class Result:
    value: Any = None
    error: Optional[ServiceError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Any = None) -> "Result":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "Result":
        return cls(error=ServiceError(kind, message))

    def map(self, fn) -> "Result":
        """Apply ``fn`` to the value of a successful result."""
        if not self.ok:
            return self
        return Result.success(fn(self.value))

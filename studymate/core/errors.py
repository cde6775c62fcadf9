"""Error taxonomy shared by repositories and the service layer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    DUPLICATE_ID = "duplicate_id"
    INVALID_REFERENCE = "invalid_reference"
    IO_ERROR = "io_error"
    DECODE_ERROR = "decode_error"


class StudyMateError(Exception):
    """Base class for StudyMate failures. Subclasses pin the error kind."""

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DuplicateIdError(StudyMateError):
    kind = ErrorKind.DUPLICATE_ID

    def __init__(self, entity_type: str, entity_id: int):
        super().__init__(f"Failed to create {entity_type}: ID {entity_id} already exists.")
        self.entity_type = entity_type
        self.entity_id = entity_id


class InvalidReferenceError(StudyMateError):
    kind = ErrorKind.INVALID_REFERENCE

    def __init__(self, target_type: str, target_id: int):
        super().__init__(f"Operation failed: {target_type} ID {target_id} does not exist.")
        self.target_type = target_type
        self.target_id = target_id


class RepositoryIOError(StudyMateError):
    """Raised when a backend cannot read or write its storage."""

    kind = ErrorKind.IO_ERROR


class DecodeError(StudyMateError):
    """Raised when stored bytes were read but do not form a valid snapshot."""

    kind = ErrorKind.DECODE_ERROR


@dataclass(frozen=True)
class Outcome:
    """Result of a service operation: either ok, or a failure with its kind."""

    ok: bool
    error: Optional[ErrorKind] = None
    message: str = ""

    @classmethod
    def success(cls) -> "Outcome":
        return cls(ok=True)

    @classmethod
    def failure(cls, exc: StudyMateError) -> "Outcome":
        return cls(ok=False, error=exc.kind, message=exc.message)

    def __bool__(self) -> bool:
        return self.ok

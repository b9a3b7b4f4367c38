from __future__ import annotations


class StudentCrudError(Exception):
    """Base class for errors raised by the student store and its layers."""


class ValidationError(StudentCrudError, ValueError):
    """A required text field was blank after trimming."""

    def __init__(self, field: str, message: str = "") -> None:
        self.field = field
        super().__init__(message or f"{field} is required")


class NotFoundError(StudentCrudError, LookupError):
    """No student row exists for the requested id."""

    def __init__(self, student_id: int) -> None:
        self.student_id = int(student_id)
        super().__init__(f"Student {self.student_id} not found")


class StorageError(StudentCrudError):
    """The underlying database failed (unavailable file, locked db, ...)."""


class ControllerDisposedError(StudentCrudError, RuntimeError):
    """A write intent was issued after the controller was disposed."""

"""
Storage-level exceptions.

These never leave the repository layer: repository write operations catch them
and hand the caller a `Failure` built from `to_error()`.
"""

from countries_api.core.result import Error, ErrorKind


class RepositoryError(Exception):
    """
    Base exception for storage faults.

    - message: human-friendly message (safe to show to clients)
    - kind: the `ErrorKind` the fault translates to (Unexpected unless a subclass says otherwise)
    - constraint: optional DB constraint name or identifier (for logs only)
    """

    kind: ErrorKind = ErrorKind.UNEXPECTED

    def __init__(self, message: str, *, constraint: str | None = None):
        super().__init__(message)
        self.message = message
        self.constraint = constraint

    def __str__(self) -> str:
        if self.constraint:
            return f"{self.message} (constraint: {self.constraint})"
        return self.message

    def to_error(self) -> Error:
        # constraint names stay in the logs, never in the Error message
        return Error(self.kind, self.message)


class DuplicateError(RepositoryError):
    """A unique constraint rejected the write."""

    kind = ErrorKind.CONFLICT


__all__ = [
    "RepositoryError",
    "DuplicateError",
]

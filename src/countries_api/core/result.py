"""
Result / Error kernel.

Every fallible operation in the domain, repository and service layers returns
one of the two variants defined here instead of raising:

    - Success(value): the operation worked; `value` may be None for
      operations that produce nothing (delete).
    - Failure(error): the operation failed with a typed `Error`.

The variants are separate frozen dataclasses so a Success can never carry an
Error and a Failure can never carry a usable value. Callers check
`result.is_success` (or plain truthiness) and short-circuit on Failure by
returning it unchanged:

    result = Country.create(name, code)
    if not result:
        return result
    country = result.value
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generic, NoReturn, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")


class ErrorKind(str, Enum):
    NOT_FOUND = "NotFound"
    VALIDATION = "ValidationError"
    CONFLICT = "Conflict"
    UNEXPECTED = "Unexpected"


@dataclass(frozen=True, slots=True)
class Error:
    """A (kind, message) pair. `kind` drives the HTTP status at the transport edge."""

    kind: ErrorKind
    message: str

    @property
    def code(self) -> str:
        return self.kind.value

    @classmethod
    def not_found(cls, message: str) -> Error:
        return cls(ErrorKind.NOT_FOUND, message)

    @classmethod
    def validation(cls, message: str) -> Error:
        return cls(ErrorKind.VALIDATION, message)

    @classmethod
    def conflict(cls, message: str) -> Error:
        return cls(ErrorKind.CONFLICT, message)

    @classmethod
    def unexpected(cls, message: str) -> Error:
        return cls(ErrorKind.UNEXPECTED, message)


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    value: T = None  # type: ignore[assignment]

    @property
    def is_success(self) -> bool:
        return True

    @property
    def error(self) -> None:
        return None

    def __bool__(self) -> bool:
        return True

    def is_ok(self) -> bool:
        return True

    def value_or_default(self, default: T | None = None) -> T:
        return self.value

    def unwrap(self) -> T:
        return self.value

    def map(self, fn: Callable[[T], U]) -> Success[U]:
        return Success(fn(self.value))


@dataclass(frozen=True, slots=True)
class Failure:
    error: Error

    def __post_init__(self) -> None:
        if not isinstance(self.error, Error):
            raise TypeError("Failure requires an Error instance")

    @property
    def is_success(self) -> bool:
        return False

    @property
    def value(self) -> None:
        # A failure never exposes a usable value.
        return None

    def __bool__(self) -> bool:
        return False

    def is_ok(self) -> bool:
        return False

    def value_or_default(self, default: T | None = None) -> T | None:
        return default

    def unwrap(self) -> NoReturn:
        raise ValueError(f"Called unwrap() on a failed result: {self.error.code}: {self.error.message}")

    def map(self, fn: Callable[[object], U]) -> Failure:
        # Propagated unchanged.
        return self


Result = Union[Success[T], Failure]

__all__ = ["ErrorKind", "Error", "Success", "Failure", "Result"]

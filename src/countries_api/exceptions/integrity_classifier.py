import logging
from enum import Enum
from typing import Type

from sqlalchemy.exc import IntegrityError

from .base import RepositoryError

logger = logging.getLogger(__name__)

# =================================================================================================================
# Constraint-specific exceptions (internal classification only)
# =================================================================================================================


class ConstraintViolationError(RepositoryError):
    pass


class UniqueConstraintError(ConstraintViolationError):
    pass


class NotNullConstraintError(ConstraintViolationError):
    pass


class ForeignKeyConstraintError(ConstraintViolationError):
    pass


class CheckConstraintError(ConstraintViolationError):
    pass


class UnknownIntegrityError(ConstraintViolationError):
    pass


# https://www.postgresql.org/docs/current/errcodes-appendix.html
class PostgresErrorCodes(str, Enum):
    UNIQUE_VIOLATION = "23505"
    NOT_NULL_VIOLATION = "23502"
    FOREIGN_KEY_VIOLATION = "23503"
    CHECK_VIOLATION = "23514"


PGCODE_EXCEPTION_MAP = {
    PostgresErrorCodes.UNIQUE_VIOLATION.value: UniqueConstraintError,
    PostgresErrorCodes.NOT_NULL_VIOLATION.value: NotNullConstraintError,
    PostgresErrorCodes.FOREIGN_KEY_VIOLATION.value: ForeignKeyConstraintError,
    PostgresErrorCodes.CHECK_VIOLATION.value: CheckConstraintError,
}

# Lower-cased message fragments used when the driver exposes no SQLSTATE (SQLite)
MESSAGE_KEYWORDS: list[tuple[Type[ConstraintViolationError], tuple[str, ...]]] = [
    (UniqueConstraintError, ("unique constraint", "unique failed", "unique violation", "duplicate")),
    (NotNullConstraintError, ("not null constraint", "null value in column")),
    (ForeignKeyConstraintError, ("foreign key constraint", "foreign key", "is not present in table")),
    (CheckConstraintError, ("check constraint", "check failed")),
]


def _pgcode(orig) -> str | None:
    # psycopg exposes `pgcode`, asyncpg exposes `sqlstate`
    return getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)


def _classify_from_postgres_diag(orig) -> tuple[Type[ConstraintViolationError] | None, str | None]:
    pgcode = _pgcode(orig)
    if not pgcode:
        return None, None

    diag = getattr(orig, "diag", None)
    constraint_name = getattr(diag, "constraint_name", None) if diag else None
    constraint_name = constraint_name or getattr(orig, "constraint_name", None)

    exception_class = PGCODE_EXCEPTION_MAP.get(pgcode)
    if exception_class:
        logger.debug(
            "classifier.postgres_diag",
            extra={"pgcode": pgcode, "constraint_name": constraint_name},
        )
        return exception_class, constraint_name

    logger.warning(
        "classifier.unknown_pgcode",
        extra={"pgcode": pgcode, "constraint_name": constraint_name},
    )
    return UnknownIntegrityError, constraint_name


def _classify_from_generic_message(msg: str) -> Type[ConstraintViolationError]:
    normalized = (msg or "").lower()
    for exception_class, keywords in MESSAGE_KEYWORDS:
        if any(keyword in normalized for keyword in keywords):
            return exception_class

    logger.warning("classifier.unknown_message", extra={"message_snippet": normalized[:200]})
    return UnknownIntegrityError


def classify_integrity_error(exc: IntegrityError) -> tuple[Type[ConstraintViolationError], str | None]:
    """
    Heuristically classify a SQLAlchemy IntegrityError.

    Returns:
        A tuple of (ExceptionClass, constraint_name if available)
    """
    orig = exc.orig

    exception_class, constraint_name = _classify_from_postgres_diag(orig)
    if exception_class is not None:
        return exception_class, constraint_name

    return _classify_from_generic_message(str(orig) if orig is not None else str(exc)), None

import logging
from contextlib import asynccontextmanager

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .base import DuplicateError, RepositoryError
from .integrity_classifier import (
    classify_integrity_error,
    UniqueConstraintError,
    NotNullConstraintError,
    ForeignKeyConstraintError,
)

logger = logging.getLogger(__name__)


def map_integrity_error(exc: IntegrityError, model_name: str | None = None) -> RepositoryError:
    """Translate a SQLAlchemy IntegrityError into a sanitized app-level exception."""
    exc_cls, constraint_name = classify_integrity_error(exc)
    model_part = model_name or "Record"

    if exc_cls is UniqueConstraintError:
        # duplicates are a client-level scenario, INFO is enough
        logger.info("mapper.duplicate_detected", extra={"model": model_part, "constraint": constraint_name})
        return DuplicateError(f"{model_part} already exists.", constraint=constraint_name)

    if exc_cls is NotNullConstraintError:
        logger.info("mapper.not_null_violation", extra={"model": model_part, "constraint": constraint_name})
        return RepositoryError(f"Missing required field for {model_part}.", constraint=constraint_name)

    if exc_cls is ForeignKeyConstraintError:
        logger.info("mapper.foreign_key_violation", extra={"model": model_part, "constraint": constraint_name})
        return RepositoryError(f"{model_part} references a missing entity.", constraint=constraint_name)

    # Raw DB text only at DEBUG
    raw = str(exc.orig) if exc.orig is not None else str(exc)
    logger.warning("mapper.unknown_integrity_error", extra={"model": model_part, "constraint": constraint_name})
    logger.debug("mapper.unknown_integrity_raw", extra={"model": model_part, "raw": raw})
    return RepositoryError(f"{model_part} database integrity error.", constraint=constraint_name)


async def _safe_rollback(db: AsyncSession, model_name: str | None) -> None:
    try:
        await db.rollback()
    except Exception:
        logger.exception("mapper.rollback_failed", extra={"model": model_name})


@asynccontextmanager
async def db_error_handler(db: AsyncSession, model_name: str | None = None):
    """
    Usage:
        async with db_error_handler(self.db, self.model.__name__):
            ... DB ops that may raise ...
    Rolls back on error and raises a `RepositoryError` (or subclass).
    """
    try:
        yield
    except IntegrityError as exc:
        await _safe_rollback(db, model_name)
        raise map_integrity_error(exc, model_name) from exc
    except RepositoryError:
        await _safe_rollback(db, model_name)
        raise
    except Exception as exc:
        await _safe_rollback(db, model_name)
        logger.exception("mapper.unexpected_db_error", extra={"model": model_name})
        raise RepositoryError(f"Failed to operate on {model_name or 'database'}.") from exc

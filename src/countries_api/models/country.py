from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import String, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from countries_api.core.result import Error, Failure, Result, Success
from countries_api.database.base import Base

# Avoid circular import issues when using type hints for related models
if TYPE_CHECKING:
    from .city import City

NAME_MAX_LENGTH = 100
CODE_MAX_LENGTH = 10

# Only the factory in this module holds the token, so `Country(...)` cannot be
# called with unvalidated data from anywhere else.
_FACTORY_TOKEN = object()


def _validate(name: str | None, code: str | None) -> Error | None:
    if name is None or not name.strip():
        return Error.validation("Country name is required.")
    # Lengths are checked on the raw input, before trimming.
    if len(name) > NAME_MAX_LENGTH:
        return Error.validation(f"Country name must not exceed {NAME_MAX_LENGTH} characters.")
    if code is not None and code.strip() and len(code) > CODE_MAX_LENGTH:
        return Error.validation(f"Country code must not exceed {CODE_MAX_LENGTH} characters.")
    return None


def _normalize_code(code: str | None) -> str | None:
    if code is None or not code.strip():
        return None
    return code.strip().upper()


class Country(Base):
    """
    A country and the cities it owns.

    Instances are only obtainable through `Country.create()` (new rows) or by
    loading them from the database; both paths yield a valid entity. Mutation
    goes through `update()`, which applies the same rules and leaves the entity
    untouched when they fail.
    """
    __tablename__ = "countries"

    # Generated in Python so the id is known before the row is flushed
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)

    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)

    # Optional, stored trimmed and upper-cased
    code: Mapped[str | None] = mapped_column(String(CODE_MAX_LENGTH), nullable=True)

    # Creation sequence; used for stable page ordering
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )

    # --- Relationships ---

    # One-to-Many: deleting a country deletes its cities.
    # selectin loading keeps async code from ever triggering a lazy load.
    cities: Mapped[list["City"]] = relationship(
        "City",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="City.created_at",
    )

    def __init__(self, *, name: str, code: str | None, _token: object = None) -> None:
        if _token is not _FACTORY_TOKEN:
            raise TypeError("Country instances must be created with Country.create()")
        self.id = uuid.uuid4()
        self.name = name
        self.code = code
        self.created_at = datetime.now(timezone.utc)
        self.cities = []

    @classmethod
    def create(cls, name: str | None, code: str | None = None) -> Result[Country]:
        error = _validate(name, code)
        if error is not None:
            return Failure(error)
        return Success(cls(name=name.strip(), code=_normalize_code(code), _token=_FACTORY_TOKEN))

    def update(self, name: str | None, code: str | None = None) -> Result[None]:
        """Apply new values in place. `id` and `cities` are never touched."""
        error = _validate(name, code)
        if error is not None:
            return Failure(error)
        self.name = name.strip()
        self.code = _normalize_code(code)
        return Success()

    def __repr__(self) -> str:
        return f"<Country(id={self.id!r}, name={self.name!r}, code={self.code!r})>"

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from countries_api.core.result import Error, Failure, Result, Success
from countries_api.database.base import Base

NAME_MAX_LENGTH = 100

# The all-zero UUID plays the role of an "empty" country reference.
EMPTY_ID = uuid.UUID(int=0)

_FACTORY_TOKEN = object()


def _validate(name: str | None, country_id: uuid.UUID | None) -> Error | None:
    if name is None or not name.strip():
        return Error.validation("City name is required.")
    if len(name) > NAME_MAX_LENGTH:
        return Error.validation(f"City name must not exceed {NAME_MAX_LENGTH} characters.")
    if country_id is None or country_id == EMPTY_ID:
        return Error.validation("CountryId is required.")
    return None


class City(Base):
    """
    A city belonging to exactly one country.

    The entity only checks that a country id is present. Whether that country
    exists is the service layer's job.
    """
    __tablename__ = "cities"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)

    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)

    country_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("countries.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )

    def __init__(self, *, name: str, country_id: uuid.UUID, _token: object = None) -> None:
        if _token is not _FACTORY_TOKEN:
            raise TypeError("City instances must be created with City.create()")
        self.id = uuid.uuid4()
        self.name = name
        self.country_id = country_id
        self.created_at = datetime.now(timezone.utc)

    @classmethod
    def create(cls, name: str | None, country_id: uuid.UUID | None) -> Result[City]:
        error = _validate(name, country_id)
        if error is not None:
            return Failure(error)
        return Success(cls(name=name.strip(), country_id=country_id, _token=_FACTORY_TOKEN))

    def update(self, name: str | None, country_id: uuid.UUID | None) -> Result[None]:
        error = _validate(name, country_id)
        if error is not None:
            return Failure(error)
        self.name = name.strip()
        self.country_id = country_id
        return Success()

    def __repr__(self) -> str:
        return f"<City(id={self.id!r}, name={self.name!r}, country_id={self.country_id!r})>"

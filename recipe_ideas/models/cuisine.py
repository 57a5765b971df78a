"""Cuisine reference data."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin, new_id


class Cuisine(Base, TimestampMixin):
    """A cuisine users can express an affinity for.

    Rows are seeded, never created by user requests.
    """

    __tablename__ = "cuisines"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    region: Mapped[str | None] = mapped_column(String(100), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    preferences: Mapped[list["CuisinePreference"]] = relationship(
        "CuisinePreference", back_populates="cuisine"
    )

    def __repr__(self) -> str:
        return f"<Cuisine(id='{self.id}', name='{self.name}')>"

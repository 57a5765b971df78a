"""Canonical ingredient model shared by allergy entries."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin

DEFAULT_INGREDIENT_CATEGORY = "other"


def normalize_ingredient_name(name: str) -> str:
    """Canonical form of an ingredient name: trimmed and lowercased.

    "  Peanuts " and "PEANUTS" both resolve to the same ingredient row.
    """
    return name.strip().lower()


class Ingredient(Base, TimestampMixin):
    """Single source of truth for each unique ingredient name."""

    __tablename__ = "ingredients"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    category: Mapped[str] = mapped_column(
        String(100), default=DEFAULT_INGREDIENT_CATEGORY, nullable=False
    )

    # Relationships
    allergies: Mapped[list["Allergy"]] = relationship(
        "Allergy", back_populates="ingredient"
    )

    def __init__(self, **kwargs):
        if "name" in kwargs:
            kwargs["name"] = normalize_ingredient_name(kwargs["name"])
        super().__init__(**kwargs)

    def __repr__(self) -> str:
        return f"<Ingredient(id={self.id}, name='{self.name}')>"

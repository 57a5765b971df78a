"""Per-user preference models: cooking settings, allergies, cuisine affinities."""

import enum

from sqlalchemy import Boolean, Enum, ForeignKey, Integer, JSON, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin


class AllergySeverity(str, enum.Enum):
    """How strongly a user reacts to an ingredient."""

    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"


class PreferenceLevel(str, enum.Enum):
    """Four-level cuisine affinity scale."""

    LOVE = "love"
    LIKE = "like"
    NEUTRAL = "neutral"
    DISLIKE = "dislike"


class Preference(Base, TimestampMixin):
    """Model for storing a user's cooking preferences.

    Exactly one row per user. The scalar settings are independent of each other.
    """

    __tablename__ = "preferences"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    cooking_time: Mapped[str] = mapped_column(String(20), nullable=False)
    skill_level: Mapped[str] = mapped_column(String(20), nullable=False)
    serving_size: Mapped[int] = mapped_column(Integer, nullable=False)
    meal_prep: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    diet_types: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    excluded_foods: Mapped[list] = mapped_column(JSON, default=list, nullable=False)

    user: Mapped["User"] = relationship("User", back_populates="preference")

    def __repr__(self) -> str:
        return f"<Preference(id={self.id}, user_id='{self.user_id}')>"


class Allergy(Base, TimestampMixin):
    """Links a user to a canonical ingredient they must avoid."""

    __tablename__ = "allergies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    ingredient_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("ingredients.id"), nullable=False
    )
    severity: Mapped[AllergySeverity] = mapped_column(
        Enum(AllergySeverity, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
    )

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="allergies")
    ingredient: Mapped["Ingredient"] = relationship(
        "Ingredient", back_populates="allergies", lazy="joined"
    )

    def __repr__(self) -> str:
        return f"<Allergy(user_id='{self.user_id}', ingredient_id={self.ingredient_id})>"


class CuisinePreference(Base, TimestampMixin):
    """A user's affinity for one existing cuisine."""

    __tablename__ = "cuisine_preferences"
    __table_args__ = (UniqueConstraint("user_id", "cuisine_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    cuisine_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("cuisines.id"), nullable=False
    )
    level: Mapped[PreferenceLevel] = mapped_column(
        Enum(PreferenceLevel, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
    )

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="cuisine_preferences")
    cuisine: Mapped["Cuisine"] = relationship(
        "Cuisine", back_populates="preferences", lazy="joined"
    )

    def __repr__(self) -> str:
        return f"<CuisinePreference(user_id='{self.user_id}', cuisine_id='{self.cuisine_id}', level={self.level.value})>"

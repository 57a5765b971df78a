"""User model and the favorites association table."""

from sqlalchemy import Column, ForeignKey, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin, new_id


# Presence of a row is the whole payload; the composite key keeps one edge per pair
user_favorites = Table(
    "user_favorites",
    Base.metadata,
    Column("user_id", String(32), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("recipe_id", String(32), ForeignKey("recipes.id", ondelete="CASCADE"), primary_key=True),
)


class User(Base, TimestampMixin):
    """An authenticated person.

    The surrogate ``id`` is the only key other tables reference. Email is
    unique but only used to display and to contact the user.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    image: Mapped[str | None] = mapped_column(String(500), nullable=True)

    # Relationships
    preference: Mapped["Preference | None"] = relationship(
        "Preference", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )
    allergies: Mapped[list["Allergy"]] = relationship(
        "Allergy", back_populates="user", cascade="all, delete-orphan"
    )
    cuisine_preferences: Mapped[list["CuisinePreference"]] = relationship(
        "CuisinePreference", back_populates="user", cascade="all, delete-orphan"
    )
    favorite_recipes: Mapped[list["Recipe"]] = relationship(
        "Recipe", secondary=user_favorites, back_populates="favorited_by"
    )

    def __repr__(self) -> str:
        return f"<User(id='{self.id}', email='{self.email}')>"

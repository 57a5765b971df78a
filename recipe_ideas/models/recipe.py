"""Recipe model for storing recipe information."""

from sqlalchemy import Boolean, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin, new_id
from .user import user_favorites


class Recipe(Base, TimestampMixin):
    """Model for storing recipes.

    Read-mostly. The classification flags come from automatic dietary
    analysis; ``needs_dietary_review`` is raised when enough users dispute it.
    """

    __tablename__ = "recipes"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    cooking_time: Mapped[int | None] = mapped_column(Integer, nullable=True)
    servings: Mapped[int | None] = mapped_column(Integer, nullable=True)
    difficulty: Mapped[str | None] = mapped_column(String(20), nullable=True)
    cuisine_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    cuisine_id: Mapped[str | None] = mapped_column(
        String(32), ForeignKey("cuisines.id"), nullable=True
    )
    author_id: Mapped[str | None] = mapped_column(
        String(32), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    # Dietary classification
    is_vegetarian: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_vegan: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_gluten_free: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_nut_free: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_low_fodmap: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_lactose_free: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_pescatarian: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_fermented: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    needs_dietary_review: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )

    # Relationships
    ingredients: Mapped[list["RecipeIngredient"]] = relationship(
        "RecipeIngredient", back_populates="recipe", cascade="all, delete-orphan"
    )
    instructions: Mapped[list["Instruction"]] = relationship(
        "Instruction",
        back_populates="recipe",
        cascade="all, delete-orphan",
        order_by="Instruction.step_number",
    )
    author: Mapped["User | None"] = relationship("User", foreign_keys=[author_id])
    cuisine: Mapped["Cuisine | None"] = relationship("Cuisine")
    favorited_by: Mapped[list["User"]] = relationship(
        "User", secondary=user_favorites, back_populates="favorite_recipes"
    )
    feedback: Mapped[list["DietaryFeedback"]] = relationship(
        "DietaryFeedback", back_populates="recipe"
    )

    def __repr__(self) -> str:
        return f"<Recipe(id='{self.id}', title='{self.title}')>"


class RecipeIngredient(Base):
    """One ingredient line of a recipe."""

    __tablename__ = "recipe_ingredients"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    recipe_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[float | None] = mapped_column(Float, nullable=True)
    unit: Mapped[str | None] = mapped_column(String(50), nullable=True)
    notes: Mapped[str | None] = mapped_column(String(255), nullable=True)

    recipe: Mapped["Recipe"] = relationship("Recipe", back_populates="ingredients")

    def __repr__(self) -> str:
        return f"<RecipeIngredient(recipe_id='{self.recipe_id}', name='{self.name}')>"


class Instruction(Base):
    """One numbered step of a recipe."""

    __tablename__ = "instructions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    recipe_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False
    )
    step_number: Mapped[int] = mapped_column(Integer, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    recipe: Mapped["Recipe"] = relationship("Recipe", back_populates="instructions")

    def __repr__(self) -> str:
        return f"<Instruction(recipe_id='{self.recipe_id}', step={self.step_number})>"

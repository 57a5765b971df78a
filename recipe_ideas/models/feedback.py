"""Dietary feedback model for disputed recipe classifications."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base


class DietaryFeedback(Base):
    """A user's report that a recipe's automatic dietary analysis is wrong.

    Append-only: rows are never updated or deleted. Each flag is independent.
    """

    __tablename__ = "dietary_feedback"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    recipe_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    low_fodmap_incorrect: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    fermented_incorrect: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    pescatarian_incorrect: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    current_analysis: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False
    )

    recipe: Mapped["Recipe"] = relationship("Recipe", back_populates="feedback")

    @property
    def disputes_classification(self) -> bool:
        return (
            self.low_fodmap_incorrect
            or self.fermented_incorrect
            or self.pescatarian_incorrect
        )

    def __repr__(self) -> str:
        return f"<DietaryFeedback(id={self.id}, recipe_id='{self.recipe_id}')>"

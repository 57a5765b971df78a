"""Read access to individual recipes."""

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from .errors import NotFoundError
from .models import Recipe


def get_recipe(db_session: Session, recipe_id: str) -> Recipe:
    """Full recipe with ingredients and steps, as clients snapshot it."""
    recipe = db_session.scalar(
        select(Recipe)
        .where(Recipe.id == recipe_id)
        .options(selectinload(Recipe.ingredients), selectinload(Recipe.instructions))
    )
    if recipe is None:
        raise NotFoundError("Recipe not found")
    return recipe

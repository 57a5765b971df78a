"""Favorites toggle: the many-to-many edge between users and saved recipes."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .errors import BadRequestError, InternalError, NotFoundError
from .models import Recipe, User, user_favorites

logger = logging.getLogger(__name__)

FAVORITE_ACTIONS = ("add", "remove")


def set_favorite(
    db_session: Session, user_id: str, recipe_id: str | None, action: str | None
) -> None:
    """Add or remove a recipe from the user's favorites.

    Both directions are idempotent: adding an existing favorite or removing
    a missing one succeeds without changing anything.
    """
    if not recipe_id or action not in FAVORITE_ACTIONS:
        raise BadRequestError("Invalid request parameters")

    user = db_session.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")

    recipe = db_session.get(Recipe, recipe_id)
    if recipe is None:
        raise NotFoundError("Recipe not found")

    logger.info(f"[set_favorite] {action} user_id={user_id} recipe_id={recipe_id}")
    try:
        if action == "add":
            if recipe not in user.favorite_recipes:
                user.favorite_recipes.append(recipe)
        elif recipe in user.favorite_recipes:
            user.favorite_recipes.remove(recipe)
        db_session.commit()
    except SQLAlchemyError as e:
        db_session.rollback()
        logger.error(f"[set_favorite] FAILED: {type(e).__name__}: {e}")
        raise InternalError("Failed to update favorite recipes") from e


def list_favorites(db_session: Session, user_id: str) -> list[Recipe]:
    """Recipes the user has favorited, most recently created first."""
    return list(
        db_session.scalars(
            select(Recipe)
            .join(user_favorites, user_favorites.c.recipe_id == Recipe.id)
            .where(user_favorites.c.user_id == user_id)
            .order_by(Recipe.created_at.desc(), Recipe.id)
        )
    )


def list_favorite_ids(db_session: Session, user_id: str) -> list[str]:
    """Only the ids, for cheap membership checks on the client.

    An unknown user simply has no favorites.
    """
    return list(
        db_session.scalars(
            select(user_favorites.c.recipe_id).where(user_favorites.c.user_id == user_id)
        )
    )

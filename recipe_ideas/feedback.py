"""Dietary feedback aggregation and review escalation.

Every submission is stored. Once a recipe has collected enough submissions
that dispute at least one classification flag, the recipe is flagged for
manual review. The check runs on every submission, not only when the count
first crosses the threshold.
"""

import logging

from sqlalchemy import func, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .config import get_settings
from .errors import BadRequestError, InternalError, NotFoundError
from .models import DietaryFeedback, Recipe
from .schemas import FeedbackInput

logger = logging.getLogger(__name__)


def count_disputing_feedback(db_session: Session, recipe_id: str) -> int:
    """Number of feedback rows for the recipe with any incorrect-flag set."""
    return db_session.scalar(
        select(func.count(DietaryFeedback.id)).where(
            DietaryFeedback.recipe_id == recipe_id,
            or_(
                DietaryFeedback.low_fodmap_incorrect.is_(True),
                DietaryFeedback.fermented_incorrect.is_(True),
                DietaryFeedback.pescatarian_incorrect.is_(True),
            ),
        )
    )


def flag_recipe_for_review(db_session: Session, recipe_id: str) -> None:
    db_session.execute(
        update(Recipe)
        .where(Recipe.id == recipe_id)
        .values(needs_dietary_review=True)
    )


def submit_feedback(
    db_session: Session, recipe_id: str | None, feedback: FeedbackInput
) -> DietaryFeedback:
    """Store one feedback record and escalate the recipe when warranted.

    Repeat submissions from the same person all count.
    """
    if not recipe_id:
        raise BadRequestError("Invalid request parameters")
    if db_session.get(Recipe, recipe_id) is None:
        raise NotFoundError("Recipe not found")

    threshold = get_settings().feedback_review_threshold
    try:
        entry = DietaryFeedback(
            recipe_id=recipe_id,
            low_fodmap_incorrect=feedback.low_fodmap,
            fermented_incorrect=feedback.fermented,
            pescatarian_incorrect=feedback.pescatarian,
            comment=feedback.comment,
            current_analysis=feedback.current_analysis,
        )
        db_session.add(entry)
        db_session.flush()

        count = count_disputing_feedback(db_session, recipe_id)
        if count >= threshold:
            logger.info(
                f"[submit_feedback] recipe_id={recipe_id} has {count} disputes, flagging for review"
            )
            flag_recipe_for_review(db_session, recipe_id)

        db_session.commit()
    except SQLAlchemyError as e:
        db_session.rollback()
        logger.error(f"[submit_feedback] FAILED: {type(e).__name__}: {e}")
        raise InternalError("Failed to store feedback") from e

    logger.info(
        f"[submit_feedback] SUCCESS: feedback_id={entry.id} disputes={entry.disputes_classification}"
    )
    return entry


def list_recipes_needing_review(db_session: Session) -> list[Recipe]:
    return list(
        db_session.scalars(
            select(Recipe)
            .where(Recipe.needs_dietary_review.is_(True))
            .order_by(Recipe.title)
        )
    )

"""Preference store plus the allergy and cuisine-preference set managers.

Allergies and cuisine preferences are "replace-all" sub-resources: an update
discards the user's previous set and recreates it from the submitted list. Both
run inside one transaction, so a failure leaves the previous set in place and
no reader ever sees the set half-written.

The two managers resolve their references differently, on purpose:

* allergy ingredient names are canonicalized and auto-created when unseen;
* cuisine ids must already exist, an unknown id fails the whole batch.
"""

import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .errors import BadRequestError, CuisineNotFoundError, InternalError
from .models import (
    Allergy,
    Cuisine,
    CuisinePreference,
    DEFAULT_INGREDIENT_CATEGORY,
    Ingredient,
    Preference,
    normalize_ingredient_name,
)
from .schemas import AllergyInput, CuisinePreferenceInput, PreferencesUpdate

logger = logging.getLogger(__name__)

# Defaults used when a Preference row is created by a partial writer
DEFAULT_COOKING_TIME = "30-60"
DEFAULT_SKILL_LEVEL = "intermediate"
DEFAULT_SERVING_SIZE = 2


# =============================================================================
# Helpers
# =============================================================================


def _get_or_create_ingredient(name: str, db_session: Session) -> Ingredient:
    """Find existing ingredient by canonical name, or create new one."""
    normalized = normalize_ingredient_name(name)
    if not normalized:
        raise BadRequestError("Ingredient name is required")
    ingredient = db_session.scalar(
        select(Ingredient).where(Ingredient.name == normalized)
    )
    if not ingredient:
        ingredient = Ingredient(name=normalized, category=DEFAULT_INGREDIENT_CATEGORY)
        db_session.add(ingredient)
        db_session.flush()
    return ingredient


def _get_or_create_preference(user_id: str, db_session: Session) -> Preference:
    pref = db_session.scalar(select(Preference).where(Preference.user_id == user_id))
    if not pref:
        pref = Preference(
            user_id=user_id,
            cooking_time=DEFAULT_COOKING_TIME,
            skill_level=DEFAULT_SKILL_LEVEL,
            serving_size=DEFAULT_SERVING_SIZE,
            meal_prep=False,
            diet_types=[],
            excluded_foods=[],
        )
        db_session.add(pref)
    return pref


# =============================================================================
# Preference Store
# =============================================================================


def get_preferences(db_session: Session, user_id: str) -> Preference | None:
    """Return the user's preference row, or None for a first-time user."""
    return db_session.scalar(select(Preference).where(Preference.user_id == user_id))


def put_preferences(
    db_session: Session, user_id: str, data: PreferencesUpdate
) -> Preference:
    """Create or overwrite all four cooking settings."""
    logger.info(f"[put_preferences] user_id={user_id}")
    try:
        pref = _get_or_create_preference(user_id, db_session)
        pref.cooking_time = data.cooking_time
        pref.skill_level = data.skill_level
        pref.serving_size = data.serving_size
        pref.meal_prep = data.meal_prep
        db_session.commit()
    except SQLAlchemyError as e:
        db_session.rollback()
        logger.error(f"[put_preferences] FAILED: {type(e).__name__}: {e}")
        raise InternalError("Failed to update preferences") from e
    db_session.refresh(pref)
    return pref


def delete_preferences(db_session: Session, user_id: str) -> None:
    """Remove the user's preference row. Missing rows are not an error."""
    try:
        db_session.execute(delete(Preference).where(Preference.user_id == user_id))
        db_session.commit()
    except SQLAlchemyError as e:
        db_session.rollback()
        logger.error(f"[delete_preferences] FAILED: {type(e).__name__}: {e}")
        raise InternalError("Failed to delete preferences") from e


def _clean_values(values: list[str]) -> list[str]:
    """Trim, drop blanks and drop repeats, keeping first-seen order."""
    cleaned = []
    for value in values:
        value = value.strip()
        if value and value not in cleaned:
            cleaned.append(value)
    return cleaned


def get_diet_types(db_session: Session, user_id: str) -> list[str]:
    pref = get_preferences(db_session, user_id)
    return list(pref.diet_types or []) if pref else []


def set_diet_types(db_session: Session, user_id: str, restrictions: list[str]) -> list[str]:
    """Replace the user's diet types, creating a default preference row if needed."""
    pref = update_dietary_profile(db_session, user_id, diet_types=restrictions)
    return list(pref.diet_types)


def update_dietary_profile(
    db_session: Session,
    user_id: str,
    diet_types: list[str] | None = None,
    excluded_foods: list[str] | None = None,
) -> Preference:
    """Set diet types and/or excluded foods. ``None`` leaves a list unchanged.

    Creates a preference row with default cooking settings for a first-time user.
    """
    try:
        pref = _get_or_create_preference(user_id, db_session)
        if diet_types is not None:
            pref.diet_types = _clean_values(diet_types)
        if excluded_foods is not None:
            pref.excluded_foods = _clean_values(excluded_foods)
        db_session.commit()
    except SQLAlchemyError as e:
        db_session.rollback()
        logger.error(f"[update_dietary_profile] FAILED: {type(e).__name__}: {e}")
        raise InternalError("Failed to update dietary preferences") from e

    db_session.refresh(pref)
    logger.info(
        f"[update_dietary_profile] user_id={user_id} diet_types={pref.diet_types} "
        f"excluded_foods={pref.excluded_foods}"
    )
    return pref


# =============================================================================
# Allergy Set Manager
# =============================================================================


def list_allergies(db_session: Session, user_id: str) -> list[Allergy]:
    return list(
        db_session.scalars(
            select(Allergy).where(Allergy.user_id == user_id).order_by(Allergy.id)
        )
    )


def replace_allergies(
    db_session: Session, user_id: str, entries: list[AllergyInput]
) -> list[Allergy]:
    """Replace the user's entire allergy list.

    Ingredient names are trimmed and lowercased; unseen names create a new
    canonical Ingredient with category "other". Returns the new rows joined
    with their ingredient, in input order.
    """
    logger.info(f"[replace_allergies] user_id={user_id} entries={len(entries)}")
    try:
        db_session.execute(delete(Allergy).where(Allergy.user_id == user_id))

        created = []
        for entry in entries:
            ingredient = _get_or_create_ingredient(entry.ingredient, db_session)
            allergy = Allergy(
                user_id=user_id,
                ingredient=ingredient,
                severity=entry.severity,
            )
            db_session.add(allergy)
            created.append(allergy)

        db_session.commit()
    except BadRequestError as e:
        db_session.rollback()
        logger.warning(f"[replace_allergies] FAILED: {e.message}")
        raise
    except SQLAlchemyError as e:
        db_session.rollback()
        logger.error(f"[replace_allergies] FAILED: {type(e).__name__}: {e}")
        raise InternalError("Failed to update allergies") from e

    logger.info(f"[replace_allergies] SUCCESS: {len(created)} allergies")
    return list_allergies(db_session, user_id)


# =============================================================================
# Cuisine Preference Set Manager
# =============================================================================


def list_cuisines(db_session: Session) -> list[Cuisine]:
    return list(db_session.scalars(select(Cuisine).order_by(Cuisine.name)))


def list_cuisine_preferences(db_session: Session, user_id: str) -> list[CuisinePreference]:
    return list(
        db_session.scalars(
            select(CuisinePreference)
            .where(CuisinePreference.user_id == user_id)
            .order_by(CuisinePreference.id)
        )
    )


def replace_cuisine_preferences(
    db_session: Session, user_id: str, entries: list[CuisinePreferenceInput]
) -> list[CuisinePreference]:
    """Replace the user's entire cuisine preference set.

    Unlike allergies, cuisines are never created here: every ``cuisine_id``
    must reference an existing Cuisine. A repeated id keeps its last level.

    Raises:
        CuisineNotFoundError: If any id is unknown. Nothing is changed.
    """
    logger.info(f"[replace_cuisine_preferences] user_id={user_id} entries={len(entries)}")

    levels = {}
    for entry in entries:
        levels[entry.cuisine_id] = entry.level

    try:
        db_session.execute(
            delete(CuisinePreference).where(CuisinePreference.user_id == user_id)
        )

        for cuisine_id, level in levels.items():
            if db_session.get(Cuisine, cuisine_id) is None:
                raise CuisineNotFoundError(cuisine_id)
            db_session.add(
                CuisinePreference(user_id=user_id, cuisine_id=cuisine_id, level=level)
            )

        db_session.commit()
    except CuisineNotFoundError as e:
        db_session.rollback()
        logger.warning(f"[replace_cuisine_preferences] FAILED: {e.message}")
        raise
    except SQLAlchemyError as e:
        db_session.rollback()
        logger.error(f"[replace_cuisine_preferences] FAILED: {type(e).__name__}: {e}")
        raise InternalError("Failed to update cuisine preferences") from e

    return list_cuisine_preferences(db_session, user_id)

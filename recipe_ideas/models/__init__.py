"""Database models for the recipe ideas service."""

from .base import Base, TimestampMixin, new_id
from .user import User, user_favorites
from .cuisine import Cuisine
from .ingredient import Ingredient, DEFAULT_INGREDIENT_CATEGORY, normalize_ingredient_name
from .recipe import Recipe, RecipeIngredient, Instruction
from .preferences import (
    Preference,
    Allergy,
    AllergySeverity,
    CuisinePreference,
    PreferenceLevel,
)
from .feedback import DietaryFeedback
from .recently_viewed import RecentlyViewed

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    "new_id",
    "normalize_ingredient_name",
    "DEFAULT_INGREDIENT_CATEGORY",
    # Models
    "User",
    "user_favorites",
    "Cuisine",
    "Ingredient",
    "Recipe",
    "RecipeIngredient",
    "Instruction",
    "Preference",
    "Allergy",
    "AllergySeverity",
    "CuisinePreference",
    "PreferenceLevel",
    "DietaryFeedback",
    "RecentlyViewed",
]

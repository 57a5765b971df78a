"""Request and response shapes for the JSON API.

Python attributes are snake_case; the wire format is camelCase.
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from pydantic.alias_generators import to_camel

from .models import AllergySeverity, PreferenceLevel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# =============================================================================
# Requests
# =============================================================================


class PreferencesUpdate(CamelModel):
    """Full replacement of the cooking preferences; every field is required."""

    cooking_time: str = Field(min_length=1, max_length=20)
    skill_level: Literal["beginner", "intermediate", "advanced"]
    serving_size: int = Field(ge=1, le=100)
    meal_prep: bool


class DietaryProfileUpdate(CamelModel):
    """Diet types and excluded foods. An omitted list is left unchanged."""

    diet_types: list[str] | None = None
    excluded_foods: list[str] | None = None


class DietaryRestrictionsUpdate(CamelModel):
    restrictions: list[str]


class AllergyInput(CamelModel):
    # Trimmed before the length check so blank names are rejected
    ingredient: Annotated[
        str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)
    ]
    severity: AllergySeverity


class AllergiesUpdate(CamelModel):
    allergies: list[AllergyInput]


class CuisinePreferenceInput(CamelModel):
    cuisine_id: str = Field(min_length=1)
    level: PreferenceLevel


class CuisinePreferencesUpdate(CamelModel):
    preferences: list[CuisinePreferenceInput]


class FavoriteToggle(CamelModel):
    # Checked by the favorites module so bad values get its error message
    recipe_id: str | None = None
    action: str | None = None


class FeedbackInput(CamelModel):
    low_fodmap: bool = False
    fermented: bool = False
    pescatarian: bool = False
    comment: str | None = None
    current_analysis: dict[str, Any] | None = None


class FeedbackSubmission(CamelModel):
    recipe_id: str | None = None
    feedback: FeedbackInput = Field(default_factory=FeedbackInput)


class RecipeReport(CamelModel):
    recipe_id: str
    recipe_title: str
    name: str
    email: str
    message: str


class RecentlyViewedRecord(CamelModel):
    recipe: dict[str, Any]


# =============================================================================
# Responses
# =============================================================================


class IngredientOut(CamelModel):
    id: int
    name: str
    category: str


class AllergyOut(CamelModel):
    id: int
    ingredient_id: int
    severity: AllergySeverity
    ingredient: IngredientOut


class CuisineOut(CamelModel):
    id: str
    name: str
    region: str | None = None
    description: str | None = None


class CuisinePreferenceOut(CamelModel):
    id: int
    cuisine_id: str
    level: PreferenceLevel
    cuisine: CuisineOut


class PreferenceOut(CamelModel):
    id: int
    user_id: str
    cooking_time: str
    skill_level: str
    serving_size: int
    meal_prep: bool
    diet_types: list[str] = []
    excluded_foods: list[str] = []


class RecipeSummary(CamelModel):
    id: str
    title: str
    description: str | None = None
    image_url: str | None = None
    cooking_time: int | None = None
    difficulty: str | None = None


class SearchSuggestion(CamelModel):
    id: str
    title: str


class RecipeIngredientOut(CamelModel):
    name: str
    amount: float | None = None
    unit: str | None = None
    notes: str | None = None


class InstructionOut(CamelModel):
    step_number: int
    description: str


class RecipeDetail(RecipeSummary):
    servings: int | None = None
    cuisine_type: str | None = None
    is_vegetarian: bool
    is_vegan: bool
    is_gluten_free: bool
    is_nut_free: bool
    is_low_fodmap: bool
    is_lactose_free: bool
    is_pescatarian: bool
    is_fermented: bool
    ingredients: list[RecipeIngredientOut] = []
    instructions: list[InstructionOut] = []


class SuccessResponse(CamelModel):
    success: bool = True


class FeedbackResult(SuccessResponse):
    feedback_id: int

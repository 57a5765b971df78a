"""HTTP endpoints. Each one guards, runs one bounded set of store operations, and returns JSON."""

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from . import blob_service, email_service, favorites, feedback, preferences, recipes, search
from .auth import CurrentUser, get_current_user, logout_user
from .config import get_settings
from .database import get_db
from .errors import BadRequestError
from .recently_viewed import DatabaseLedgerStorage, RecentlyViewedLedger, visitor_token
from .schemas import (
    AllergiesUpdate,
    AllergyOut,
    CuisineOut,
    CuisinePreferenceOut,
    CuisinePreferencesUpdate,
    DietaryProfileUpdate,
    DietaryRestrictionsUpdate,
    FavoriteToggle,
    FeedbackResult,
    FeedbackSubmission,
    PreferenceOut,
    PreferencesUpdate,
    RecentlyViewedRecord,
    RecipeDetail,
    RecipeReport,
    RecipeSummary,
    SearchSuggestion,
    SuccessResponse,
)

router = APIRouter()


# =============================================================================
# Session
# =============================================================================


@router.post("/auth/logout", response_model=SuccessResponse)
def logout(request: Request):
    logout_user(request)
    return SuccessResponse()


# =============================================================================
# Preferences
# =============================================================================


@router.get("/preferences", response_model=PreferenceOut | None)
def read_preferences(
    user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)
):
    return preferences.get_preferences(db, user.id)


@router.put("/preferences", response_model=PreferenceOut)
def update_preferences(
    body: PreferencesUpdate,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return preferences.put_preferences(db, user.id, body)


@router.delete("/preferences", response_model=SuccessResponse)
def remove_preferences(
    user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)
):
    preferences.delete_preferences(db, user.id)
    return SuccessResponse()


@router.put("/user/preferences", response_model=PreferenceOut)
def update_dietary_profile(
    body: DietaryProfileUpdate,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return preferences.update_dietary_profile(
        db, user.id, diet_types=body.diet_types, excluded_foods=body.excluded_foods
    )


@router.get("/dietary-restrictions", response_model=list[str])
def read_dietary_restrictions(
    user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)
):
    return preferences.get_diet_types(db, user.id)


@router.put("/dietary-restrictions", response_model=list[str])
def update_dietary_restrictions(
    body: DietaryRestrictionsUpdate,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return preferences.set_diet_types(db, user.id, body.restrictions)


# =============================================================================
# Allergies & cuisines
# =============================================================================


@router.get("/allergies", response_model=list[AllergyOut])
def read_allergies(
    user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)
):
    return preferences.list_allergies(db, user.id)


@router.put("/allergies", response_model=list[AllergyOut])
def update_allergies(
    body: AllergiesUpdate,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return preferences.replace_allergies(db, user.id, body.allergies)


@router.get("/cuisines", response_model=list[CuisineOut])
def read_cuisines(db: Session = Depends(get_db)):
    return preferences.list_cuisines(db)


@router.get("/cuisine-preferences", response_model=list[CuisinePreferenceOut])
def read_cuisine_preferences(
    user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)
):
    return preferences.list_cuisine_preferences(db, user.id)


@router.put("/cuisine-preferences", response_model=list[CuisinePreferenceOut])
def update_cuisine_preferences(
    body: CuisinePreferencesUpdate,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return preferences.replace_cuisine_preferences(db, user.id, body.preferences)


# =============================================================================
# Favorites
# =============================================================================


@router.get("/recipes/favorites", response_model=list[RecipeSummary])
def read_favorites(
    user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)
):
    return favorites.list_favorites(db, user.id)


@router.post("/recipes/favorites", response_model=SuccessResponse)
def toggle_favorite(
    body: FavoriteToggle,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    favorites.set_favorite(db, user.id, body.recipe_id, body.action)
    return SuccessResponse()


@router.get("/user/preferences/favourites/ids", response_model=list[str])
def read_favorite_ids(
    user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)
):
    return favorites.list_favorite_ids(db, user.id)


# =============================================================================
# Search, feedback, reports
# =============================================================================


@router.get("/search/suggestions", response_model=list[SearchSuggestion])
def read_search_suggestions(
    query: str | None = Query(default=None), db: Session = Depends(get_db)
):
    return search.suggest(db, query)


@router.post("/recipes/feedback", response_model=FeedbackResult)
def submit_dietary_feedback(
    body: FeedbackSubmission,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    entry = feedback.submit_feedback(db, body.recipe_id, body.feedback)
    return FeedbackResult(feedback_id=entry.id)


@router.get("/recipes/review-queue", response_model=list[RecipeSummary])
def read_review_queue(
    user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)
):
    return feedback.list_recipes_needing_review(db)


@router.post("/recipes/report", response_model=SuccessResponse)
def report_recipe(body: RecipeReport):
    email_service.send_recipe_report(
        recipe_id=body.recipe_id,
        recipe_title=body.recipe_title,
        name=body.name,
        email=body.email,
        message=body.message,
    )
    return SuccessResponse()


@router.get("/recipes/{recipe_id}", response_model=RecipeDetail)
def read_recipe(recipe_id: str, db: Session = Depends(get_db)):
    return recipes.get_recipe(db, recipe_id)


# =============================================================================
# Recently viewed (server-side, keyed by a visitor token in the session)
# =============================================================================


def _ledger(request: Request, db: Session) -> RecentlyViewedLedger:
    return RecentlyViewedLedger(
        DatabaseLedgerStorage(db),
        key=visitor_token(request.session),
        max_entries=get_settings().recently_viewed_max,
    )


@router.get("/recently-viewed")
def read_recently_viewed(request: Request, db: Session = Depends(get_db)) -> list[dict]:
    return _ledger(request, db).read()


@router.post("/recently-viewed")
def record_recently_viewed(
    body: RecentlyViewedRecord, request: Request, db: Session = Depends(get_db)
) -> list[dict]:
    return _ledger(request, db).record(body.recipe)


@router.delete("/recently-viewed", response_model=SuccessResponse)
def clear_recently_viewed(request: Request, db: Session = Depends(get_db)):
    _ledger(request, db).clear()
    return SuccessResponse()


# =============================================================================
# Uploads
# =============================================================================


@router.post("/upload/image")
async def upload_image(
    request: Request,
    filename: str | None = Query(default=None),
    user: CurrentUser = Depends(get_current_user),
) -> dict:
    if not filename:
        raise BadRequestError("Missing filename query parameter")

    content = await request.body()
    if not content:
        raise BadRequestError("Missing request body")

    return await run_in_threadpool(
        blob_service.upload_image,
        filename,
        content,
        request.headers.get("content-type"),
    )

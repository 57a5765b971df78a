"""Search suggestions over recipe titles."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from .config import get_settings
from .models import Recipe

logger = logging.getLogger(__name__)


def suggest(db_session: Session, query: str | None, limit: int | None = None) -> list[dict]:
    """Up to ``limit`` recipes whose title contains ``query``, ignoring case.

    Ordered alphabetically by title. A blank query returns nothing without
    touching the database.
    """
    if not query or not query.strip():
        return []

    if limit is None:
        limit = get_settings().max_suggestions

    rows = db_session.execute(
        select(Recipe.id, Recipe.title)
        .where(Recipe.title.icontains(query, autoescape=True))
        .order_by(Recipe.title.asc())
        .limit(limit)
    ).all()
    logger.debug(f"[suggest] query={query!r} matches={len(rows)}")
    return [{"id": row.id, "title": row.title} for row in rows]

"""Recently-viewed ledger.

The ledger holds full recipe snapshots, not references, so entries can be
stale relative to the database. Over HTTP each visitor's ledger lives in the
``recently_viewed`` table, keyed by an opaque token kept in the session
cookie. One client context owns a token, so there is a single writer.
"""

import json
import logging
import secrets
from collections import deque
from collections.abc import MutableMapping
from typing import Any, Iterator

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .errors import InternalError
from .models import RecentlyViewed

logger = logging.getLogger(__name__)

STORAGE_KEY = "recentlyViewedRecipes"
MAX_RECENTLY_VIEWED = 12

# Session key holding the visitor token for the server-side ledger
VISITOR_SESSION_KEY = "recently_viewed_id"


def visitor_token(session: MutableMapping[str, Any]) -> str:
    """Return the session's visitor token, issuing one on first use."""
    token = session.get(VISITOR_SESSION_KEY)
    if not token:
        token = secrets.token_hex(16)
        session[VISITOR_SESSION_KEY] = token
    return token


class DatabaseLedgerStorage(MutableMapping):
    """Mapping of visitor token to ledger JSON, backed by ``recently_viewed``."""

    def __init__(self, db_session: Session):
        self.db_session = db_session

    def __getitem__(self, key: str) -> str:
        row = self.db_session.get(RecentlyViewed, key)
        if row is None:
            raise KeyError(key)
        return row.entries

    def __setitem__(self, key: str, value: str) -> None:
        try:
            row = self.db_session.get(RecentlyViewed, key)
            if row is None:
                row = RecentlyViewed(visitor_id=key)
                self.db_session.add(row)
            row.entries = value
            self.db_session.commit()
        except SQLAlchemyError as e:
            self.db_session.rollback()
            logger.error(f"[recently_viewed] Write FAILED: {type(e).__name__}: {e}")
            raise InternalError("Failed to update recently viewed recipes") from e

    def __delitem__(self, key: str) -> None:
        row = self.db_session.get(RecentlyViewed, key)
        if row is None:
            raise KeyError(key)
        try:
            self.db_session.delete(row)
            self.db_session.commit()
        except SQLAlchemyError as e:
            self.db_session.rollback()
            logger.error(f"[recently_viewed] Delete FAILED: {type(e).__name__}: {e}")
            raise InternalError("Failed to clear recently viewed recipes") from e

    def __iter__(self) -> Iterator[str]:
        return iter(self.db_session.scalars(select(RecentlyViewed.visitor_id)).all())

    def __len__(self) -> int:
        return self.db_session.scalar(select(func.count()).select_from(RecentlyViewed))


class RecentlyViewedLedger:
    """Most-recent-first, size-bounded list of recipe snapshots, unique by id.

    ``storage`` is any mutable mapping holding a JSON string under ``key``;
    ``None`` means storage is unavailable, which reads as empty and ignores
    writes.
    """

    def __init__(
        self,
        storage: MutableMapping[str, Any] | None,
        key: str = STORAGE_KEY,
        max_entries: int = MAX_RECENTLY_VIEWED,
    ):
        self.storage = storage
        self.key = key
        self.max_entries = max_entries

    def read(self) -> list[dict]:
        """Return the stored snapshots. Corrupt or missing data reads as empty."""
        if self.storage is None:
            return []

        raw = self.storage.get(self.key)
        if not raw:
            return []

        try:
            entries = json.loads(raw)
        except (TypeError, ValueError) as e:
            logger.warning(f"[recently_viewed] Ignoring malformed data: {e}")
            return []

        if not isinstance(entries, list):
            logger.warning("[recently_viewed] Ignoring stored value that is not a list")
            return []
        return [entry for entry in entries if isinstance(entry, dict)]

    def record(self, recipe: dict) -> list[dict]:
        """Move ``recipe`` to the front, dropping the oldest entry past the cap."""
        if not recipe or not recipe.get("id"):
            return self.read()
        if self.storage is None:
            logger.warning("[recently_viewed] Storage unavailable, not recording")
            return []

        others = [entry for entry in self.read() if entry.get("id") != recipe["id"]]
        entries = deque(others[: self.max_entries], maxlen=self.max_entries)
        entries.appendleft(recipe)

        result = list(entries)
        self.storage[self.key] = json.dumps(result)
        return result

    def clear(self) -> None:
        if self.storage is not None:
            self.storage.pop(self.key, None)

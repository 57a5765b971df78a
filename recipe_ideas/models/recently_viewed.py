"""Server-side storage for each visitor's recently-viewed ledger."""

from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class RecentlyViewed(Base):
    """One row per visitor, holding the ledger as a JSON array string.

    ``visitor_id`` is an opaque token kept in the session cookie, so the
    cookie stays small no matter how large the recipe snapshots are.
    """

    __tablename__ = "recently_viewed"

    visitor_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    entries: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return f"<RecentlyViewed(visitor_id='{self.visitor_id}')>"

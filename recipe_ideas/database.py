"""Engine and session plumbing for the recipe store.

Routes get a request-scoped session through ``get_db``; the service modules
commit or roll back themselves. ``get_db_session`` is for code outside a request
(health checks, scripts) and commits on exit.
"""

import logging
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import get_settings

logger = logging.getLogger(__name__)


def create_db_engine():
    """Build the engine for ``DATABASE_URL``: pooled Postgres, or a shared SQLite connection."""
    settings = get_settings()

    if settings.database_url.startswith("sqlite"):
        # In-memory SQLite only exists on one connection; share it across threads
        return create_engine(
            settings.database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=False,
        )

    engine = create_engine(
        settings.database_url,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,  # Verify connections before using
        echo=False,  # Set to True for SQL debugging
    )
    return engine


# Shared by every request and by the test suite
engine = create_db_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Request-scoped session. Guarded routes list it after the session guard
    so a rejected request never opens one.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_db_session() -> Generator[Session, None, None]:
    """Session that commits on clean exit and rolls back on any error."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def check_database_health() -> bool:
    """Run ``SELECT 1``; backs the ``database`` field of /health."""
    try:
        with get_db_session() as db:
            db.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return False


def dispose_engine() -> None:
    """Close pooled connections; called from the app lifespan on shutdown."""
    engine.dispose()

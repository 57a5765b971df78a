import os

# Settings are read at import time by the database module
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SESSION_SECRET_KEY"] = "test-secret-key"
os.environ["RESEND_API_KEY"] = ""
os.environ["BLOB_READ_WRITE_TOKEN"] = ""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from recipe_ideas.auth import CurrentUser, get_current_user
from recipe_ideas.database import SessionLocal, engine, get_db
from recipe_ideas.main import app
from recipe_ideas.models import Base, Cuisine, Recipe, User


@pytest.fixture
def db_session():
    Base.metadata.create_all(engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(engine)


@pytest.fixture
def user(db_session):
    user = User(id="user-1", email="cook@example.com", name="Cook")
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def make_recipe(db_session):
    def _make(title: str, **kwargs) -> Recipe:
        recipe = Recipe(title=title, **kwargs)
        db_session.add(recipe)
        db_session.commit()
        return recipe

    return _make


@pytest.fixture
def make_cuisine(db_session):
    def _make(cuisine_id: str, name: str, region: str | None = None) -> Cuisine:
        cuisine = Cuisine(id=cuisine_id, name=name, region=region)
        db_session.add(cuisine)
        db_session.commit()
        return cuisine

    return _make


@pytest.fixture
def client(db_session, user):
    """Client whose requests carry the session of ``user``."""
    app.dependency_overrides[get_current_user] = lambda: CurrentUser(
        id=user.id, email=user.email
    )
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def anon_client(db_session):
    yield TestClient(app)


@pytest.fixture
def spy_db():
    """Replace the database dependency with a mock that records every call."""
    mock_session = MagicMock()

    def _get_db():
        yield mock_session

    app.dependency_overrides[get_db] = _get_db
    try:
        yield mock_session
    finally:
        app.dependency_overrides.clear()

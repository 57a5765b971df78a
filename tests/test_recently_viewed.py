import json

from fastapi.testclient import TestClient
from sqlalchemy import func, select

from recipe_ideas.main import app
from recipe_ideas.models import Instruction, RecentlyViewed, RecipeIngredient
from recipe_ideas.recently_viewed import (
    MAX_RECENTLY_VIEWED,
    STORAGE_KEY,
    VISITOR_SESSION_KEY,
    DatabaseLedgerStorage,
    RecentlyViewedLedger,
    visitor_token,
)


def _recipe(n):
    return {"id": f"r{n}", "title": f"Recipe {n}"}


def test_read_empty_storage():
    assert RecentlyViewedLedger({}).read() == []


def test_unavailable_storage_reads_empty_and_ignores_writes():
    ledger = RecentlyViewedLedger(None)
    assert ledger.record(_recipe(1)) == []
    assert ledger.read() == []


def test_malformed_data_reads_as_empty():
    assert RecentlyViewedLedger({STORAGE_KEY: "{not json"}).read() == []
    assert RecentlyViewedLedger({STORAGE_KEY: json.dumps({"id": "r1"})}).read() == []


def test_record_without_id_is_a_no_op():
    storage = {}
    ledger = RecentlyViewedLedger(storage)
    ledger.record({"title": "No id"})
    assert storage == {}


def test_most_recent_first():
    ledger = RecentlyViewedLedger({})
    ledger.record(_recipe(1))
    ledger.record(_recipe(2))
    assert [r["id"] for r in ledger.read()] == ["r2", "r1"]


def test_never_exceeds_cap():
    ledger = RecentlyViewedLedger({})
    for n in range(1, 20):
        ledger.record(_recipe(n))

    entries = ledger.read()
    assert len(entries) == MAX_RECENTLY_VIEWED == 12
    assert entries[0]["id"] == "r19"
    assert entries[-1]["id"] == "r8"


def test_re_recording_moves_entry_to_front_without_growing():
    ledger = RecentlyViewedLedger({})
    for n in range(1, 13):
        ledger.record(_recipe(n))

    ledger.record(_recipe(5))

    entries = ledger.read()
    assert len(entries) == 12
    assert entries[0]["id"] == "r5"
    assert [r["id"] for r in entries].count("r5") == 1


def test_re_recording_stores_the_new_snapshot():
    ledger = RecentlyViewedLedger({})
    ledger.record({"id": "r1", "title": "Old title"})
    ledger.record({"id": "r1", "title": "New title"})
    assert ledger.read() == [{"id": "r1", "title": "New title"}]


def test_clear():
    storage = {}
    ledger = RecentlyViewedLedger(storage)
    ledger.record(_recipe(1))
    ledger.clear()
    assert ledger.read() == []


def test_recently_viewed_endpoints_round_trip(anon_client):
    assert anon_client.get("/recently-viewed").json() == []

    anon_client.post("/recently-viewed", json={"recipe": _recipe(1)})
    response = anon_client.post("/recently-viewed", json={"recipe": _recipe(2)})
    assert [r["id"] for r in response.json()] == ["r2", "r1"]

    assert [r["id"] for r in anon_client.get("/recently-viewed").json()] == ["r2", "r1"]

    anon_client.delete("/recently-viewed")
    assert anon_client.get("/recently-viewed").json() == []


def test_each_visitor_has_its_own_ledger(db_session):
    first, second = TestClient(app), TestClient(app)
    first.post("/recently-viewed", json={"recipe": _recipe(1)})
    second.post("/recently-viewed", json={"recipe": _recipe(2)})

    assert [r["id"] for r in first.get("/recently-viewed").json()] == ["r1"]
    assert [r["id"] for r in second.get("/recently-viewed").json()] == ["r2"]
    assert db_session.scalar(select(func.count()).select_from(RecentlyViewed)) == 2


def test_full_snapshots_keep_the_session_cookie_small(anon_client, db_session, make_recipe):
    recipe_ids = []
    for n in range(12):
        recipe = make_recipe(
            f"Slow-cooked dish number {n}",
            description="A long description of a comforting dish. " * 5,
            servings=4,
            cuisine_type="Mediterranean",
        )
        for step in range(1, 11):
            db_session.add(
                Instruction(
                    recipe_id=recipe.id,
                    step_number=step,
                    description=f"Step {step}: stir gently and simmer for a few minutes more.",
                )
            )
            db_session.add(
                RecipeIngredient(
                    recipe_id=recipe.id, name=f"Ingredient {step}", amount=100, unit="g"
                )
            )
        db_session.commit()
        recipe_ids.append(recipe.id)

    for recipe_id in recipe_ids:
        snapshot = anon_client.get(f"/recipes/{recipe_id}").json()
        response = anon_client.post("/recently-viewed", json={"recipe": snapshot})
        assert response.status_code == 200
        assert len(response.headers.get("set-cookie", "")) < 4096

    entries = anon_client.get("/recently-viewed").json()
    assert len(entries) == 12
    assert [r["id"] for r in entries] == list(reversed(recipe_ids))
    assert len(entries[0]["instructions"]) == 10


def test_database_storage_behaves_like_a_mapping(db_session):
    storage = DatabaseLedgerStorage(db_session)
    assert storage.get("visitor-a") is None

    storage["visitor-a"] = "[]"
    storage["visitor-a"] = '[{"id": "r1"}]'
    assert storage["visitor-a"] == '[{"id": "r1"}]'
    assert list(storage) == ["visitor-a"]
    assert len(storage) == 1

    assert storage.pop("visitor-a") == '[{"id": "r1"}]'
    assert storage.pop("visitor-a", None) is None
    assert len(storage) == 0


def test_visitor_token_is_issued_once():
    session = {}
    token = visitor_token(session)
    assert token
    assert visitor_token(session) == token
    assert session[VISITOR_SESSION_KEY] == token

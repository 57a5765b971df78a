import pytest

from recipe_ideas import search


@pytest.fixture
def titles(make_recipe):
    for title in ["Rice Bowl", "Fried Rice", "Pasta"]:
        make_recipe(title)


@pytest.mark.parametrize("query", ["", "   ", None])
def test_blank_query_returns_nothing_without_store_access(query):
    class NoStore:
        def execute(self, *args, **kwargs):
            raise AssertionError("store should not be queried")

    assert search.suggest(NoStore(), query) == []


def test_substring_matches_are_alphabetical(db_session, titles):
    result = search.suggest(db_session, "ri")
    assert [s["title"] for s in result] == ["Fried Rice", "Rice Bowl"]
    assert set(result[0]) == {"id", "title"}


def test_match_is_case_insensitive(db_session, titles):
    assert [s["title"] for s in search.suggest(db_session, "PASTA")] == ["Pasta"]


def test_like_wildcards_are_literal(db_session, titles, make_recipe):
    make_recipe("100% Rye")
    assert [s["title"] for s in search.suggest(db_session, "%")] == ["100% Rye"]


def test_at_most_seven_suggestions(db_session, make_recipe):
    for n in range(10):
        make_recipe(f"Curry {n}")

    result = search.suggest(db_session, "curry")
    assert [s["title"] for s in result] == [f"Curry {n}" for n in range(7)]


def test_suggestions_endpoint(anon_client, titles):
    response = anon_client.get("/search/suggestions", params={"query": "ri"})
    assert response.status_code == 200
    assert [s["title"] for s in response.json()] == ["Fried Rice", "Rice Bowl"]

    assert anon_client.get("/search/suggestions").json() == []

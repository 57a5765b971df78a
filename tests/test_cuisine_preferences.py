import pytest

from recipe_ideas import preferences
from recipe_ideas.errors import CuisineNotFoundError
from recipe_ideas.models import CuisinePreference, PreferenceLevel
from recipe_ideas.schemas import CuisinePreferenceInput


@pytest.fixture
def cuisines(make_cuisine):
    return [
        make_cuisine("x1", "Italian", "Europe"),
        make_cuisine("x2", "Japanese", "East Asia"),
    ]


def test_replace_cuisine_preferences(db_session, user, cuisines):
    preferences.replace_cuisine_preferences(
        db_session, user.id, [CuisinePreferenceInput(cuisine_id="x1", level="dislike")]
    )
    result = preferences.replace_cuisine_preferences(
        db_session,
        user.id,
        [
            CuisinePreferenceInput(cuisine_id="x2", level="love"),
            CuisinePreferenceInput(cuisine_id="x1", level="like"),
        ],
    )

    levels = {p.cuisine.name: p.level for p in result}
    assert levels == {"Japanese": PreferenceLevel.LOVE, "Italian": PreferenceLevel.LIKE}


def test_repeated_cuisine_keeps_last_level(db_session, user, cuisines):
    result = preferences.replace_cuisine_preferences(
        db_session,
        user.id,
        [
            CuisinePreferenceInput(cuisine_id="x1", level="love"),
            CuisinePreferenceInput(cuisine_id="x1", level="neutral"),
        ],
    )
    assert [(p.cuisine_id, p.level) for p in result] == [("x1", PreferenceLevel.NEUTRAL)]


def test_unknown_cuisine_fails_and_keeps_previous_set(db_session, user, cuisines):
    preferences.replace_cuisine_preferences(
        db_session, user.id, [CuisinePreferenceInput(cuisine_id="x2", level="like")]
    )

    with pytest.raises(CuisineNotFoundError) as excinfo:
        preferences.replace_cuisine_preferences(
            db_session,
            user.id,
            [
                CuisinePreferenceInput(cuisine_id="x1", level="love"),
                CuisinePreferenceInput(cuisine_id="bad-id", level="like"),
            ],
        )

    assert excinfo.value.cuisine_id == "bad-id"
    remaining = db_session.query(CuisinePreference).filter_by(user_id=user.id).all()
    assert [(p.cuisine_id, p.level) for p in remaining] == [("x2", PreferenceLevel.LIKE)]


def test_unknown_cuisine_endpoint_names_the_bad_id(client, cuisines):
    response = client.put(
        "/cuisine-preferences",
        json={
            "preferences": [
                {"cuisineId": "x1", "level": "love"},
                {"cuisineId": "bad-id", "level": "like"},
            ]
        },
    )

    assert response.status_code == 500
    assert "bad-id" in response.json()["error"]
    assert response.json()["error"] == "Cuisine with ID bad-id not found"
    assert client.get("/cuisine-preferences").json() == []


def test_cuisine_preference_endpoints(client, cuisines):
    response = client.put(
        "/cuisine-preferences",
        json={"preferences": [{"cuisineId": "x2", "level": "love"}]},
    )
    assert response.status_code == 200
    body = response.json()
    assert body[0]["cuisineId"] == "x2"
    assert body[0]["level"] == "love"
    assert body[0]["cuisine"]["name"] == "Japanese"

    assert client.get("/cuisine-preferences").json() == body


def test_invalid_level_is_a_bad_request(client, cuisines):
    response = client.put(
        "/cuisine-preferences",
        json={"preferences": [{"cuisineId": "x1", "level": "adore"}]},
    )
    assert response.status_code == 400


def test_list_cuisines_is_ordered_by_name(anon_client, make_cuisine):
    make_cuisine("c2", "Thai")
    make_cuisine("c1", "Greek")

    names = [c["name"] for c in anon_client.get("/cuisines").json()]
    assert names == ["Greek", "Thai"]

from recipe_ideas import preferences
from recipe_ideas.models import Preference
from recipe_ideas.schemas import PreferencesUpdate

FULL_PREFERENCES = {
    "cookingTime": "30-60",
    "skillLevel": "advanced",
    "servingSize": 4,
    "mealPrep": True,
}


def test_get_preferences_for_new_user_is_none(db_session, user):
    assert preferences.get_preferences(db_session, user.id) is None


def test_read_preferences_returns_null_for_new_user(client):
    response = client.get("/preferences")
    assert response.status_code == 200
    assert response.json() is None


def test_put_preferences_creates_then_overwrites(client, db_session, user):
    response = client.put("/preferences", json=FULL_PREFERENCES)
    assert response.status_code == 200
    body = response.json()
    assert body["cookingTime"] == "30-60"
    assert body["skillLevel"] == "advanced"
    assert body["servingSize"] == 4
    assert body["mealPrep"] is True

    response = client.put(
        "/preferences",
        json={"cookingTime": "0-30", "skillLevel": "beginner", "servingSize": 1, "mealPrep": False},
    )
    assert response.status_code == 200
    assert response.json()["skillLevel"] == "beginner"

    db_session.expire_all()
    rows = db_session.query(Preference).filter(Preference.user_id == user.id).all()
    assert len(rows) == 1
    assert rows[0].serving_size == 1


def test_put_preferences_requires_every_field(client):
    partial = {"cookingTime": "0-30", "skillLevel": "beginner"}
    response = client.put("/preferences", json=partial)
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid request parameters"}


def test_put_preferences_rejects_unknown_skill_level(client):
    response = client.put("/preferences", json={**FULL_PREFERENCES, "skillLevel": "chef"})
    assert response.status_code == 400


def test_delete_preferences_is_idempotent(client, db_session, user):
    preferences.put_preferences(
        db_session, user.id, PreferencesUpdate.model_validate(FULL_PREFERENCES)
    )

    assert client.delete("/preferences").json() == {"success": True}
    assert client.delete("/preferences").json() == {"success": True}
    assert client.get("/preferences").json() is None


def test_dietary_restrictions_round_trip(client):
    assert client.get("/dietary-restrictions").json() == []

    response = client.put(
        "/dietary-restrictions", json={"restrictions": ["vegan", " gluten-free ", "vegan", ""]}
    )
    assert response.status_code == 200
    assert response.json() == ["vegan", "gluten-free"]
    assert client.get("/dietary-restrictions").json() == ["vegan", "gluten-free"]


def test_set_diet_types_keeps_existing_cooking_settings(db_session, user):
    preferences.put_preferences(
        db_session, user.id, PreferencesUpdate.model_validate(FULL_PREFERENCES)
    )
    preferences.set_diet_types(db_session, user.id, ["pescatarian"])

    pref = preferences.get_preferences(db_session, user.id)
    assert pref.diet_types == ["pescatarian"]
    assert pref.skill_level == "advanced"
    assert pref.serving_size == 4


def test_set_diet_types_creates_defaults_for_new_user(db_session, user):
    preferences.set_diet_types(db_session, user.id, ["vegetarian"])

    pref = preferences.get_preferences(db_session, user.id)
    assert pref.cooking_time == preferences.DEFAULT_COOKING_TIME
    assert pref.skill_level == preferences.DEFAULT_SKILL_LEVEL
    assert pref.serving_size == preferences.DEFAULT_SERVING_SIZE
    assert pref.meal_prep is False


def test_dietary_profile_round_trip(client):
    response = client.put(
        "/user/preferences",
        json={"dietTypes": ["vegan"], "excludedFoods": [" mushrooms ", "olives", "olives"]},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["dietTypes"] == ["vegan"]
    assert body["excludedFoods"] == ["mushrooms", "olives"]
    assert body["skillLevel"] == preferences.DEFAULT_SKILL_LEVEL

    assert client.get("/preferences").json()["excludedFoods"] == ["mushrooms", "olives"]


def test_dietary_profile_leaves_omitted_lists_alone(client):
    client.put("/user/preferences", json={"dietTypes": ["vegan"], "excludedFoods": ["nuts"]})

    response = client.put("/user/preferences", json={"excludedFoods": []})
    assert response.json()["dietTypes"] == ["vegan"]
    assert response.json()["excludedFoods"] == []

    client.put("/dietary-restrictions", json={"restrictions": ["keto"]})
    body = client.get("/preferences").json()
    assert body["dietTypes"] == ["keto"]
    assert body["excludedFoods"] == []


def test_update_dietary_profile_keeps_cooking_settings(db_session, user):
    preferences.put_preferences(
        db_session, user.id, PreferencesUpdate.model_validate(FULL_PREFERENCES)
    )
    pref = preferences.update_dietary_profile(db_session, user.id, excluded_foods=["cilantro"])

    assert pref.excluded_foods == ["cilantro"]
    assert pref.diet_types == []
    assert pref.serving_size == 4

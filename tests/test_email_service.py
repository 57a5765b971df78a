import pytest
import requests

from recipe_ideas import email_service


class FakeResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload or {}

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self._payload


REPORT = {
    "recipeId": "r1",
    "recipeTitle": "Pad Thai",
    "name": "Sam",
    "email": "sam@example.com",
    "message": "Photo is of a <b>burger</b>",
}


@pytest.fixture
def resend_key(monkeypatch):
    monkeypatch.setenv("RESEND_API_KEY", "re_test")
    monkeypatch.setenv("ADMIN_EMAIL", "admin@example.com")


def test_report_html_escapes_user_input():
    body = email_service.build_report_html("r1", "Pad Thai", "Sam", "sam@example.com", "<script>")
    assert "&lt;script&gt;" in body
    assert "<script>" not in body
    assert "Pad Thai" in body


def test_send_recipe_report_posts_to_resend(resend_key, monkeypatch):
    sent = {}

    def fake_post(url, json, headers, timeout):
        sent.update(url=url, json=json, headers=headers)
        return FakeResponse(payload={"id": "email-123"})

    monkeypatch.setattr(email_service.requests, "post", fake_post)

    message_id = email_service.send_recipe_report("r1", "Pad Thai", "Sam", "sam@example.com", "Hi")

    assert message_id == "email-123"
    assert sent["url"] == "https://api.resend.com/emails"
    assert sent["json"]["to"] == ["admin@example.com"]
    assert sent["json"]["subject"] == "Recipe Report: Pad Thai"
    assert sent["headers"]["Authorization"] == "Bearer re_test"


def test_send_without_api_key_fails():
    with pytest.raises(email_service.EmailNotConfiguredError):
        email_service.send_recipe_report("r1", "Pad Thai", "Sam", "sam@example.com", "Hi")


def test_report_endpoint(anon_client, resend_key, monkeypatch):
    monkeypatch.setattr(
        email_service.requests, "post", lambda *args, **kwargs: FakeResponse(payload={"id": "x"})
    )

    response = anon_client.post("/recipes/report", json=REPORT)
    assert response.status_code == 200
    assert response.json() == {"success": True}


def test_report_endpoint_delivery_failure(anon_client, resend_key, monkeypatch):
    monkeypatch.setattr(
        email_service.requests, "post", lambda *args, **kwargs: FakeResponse(status_code=502)
    )

    response = anon_client.post("/recipes/report", json=REPORT)
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to send report"}


def test_report_endpoint_without_configuration(anon_client):
    response = anon_client.post("/recipes/report", json=REPORT)
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to send report"}

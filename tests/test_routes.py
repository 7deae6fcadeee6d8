"""End-to-end tests for the REST API through FastAPI's TestClient."""

import json

import pytest

from knowyourself.core.exceptions import LLMError, LLMQuotaError
from knowyourself.core.rate_limiter import RateLimiter, get_rate_limiter

from conftest import register

QUESTION_TWO = "Talk about a meaningful failure or challenge you've faced."


def save(client, headers, question_id, text, question_text=None):
    return client.post(
        "/api/reflections",
        headers=headers,
        json={
            "questionId": question_id,
            "questionText": question_text or f"Question {question_id}",
            "userResponse": text,
        },
    )


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "version" in data

    def test_ready(self, client):
        response = client.get("/health/ready")
        assert response.status_code == 200

    def test_security_headers(self, client):
        response = client.get("/api/questions")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["Cache-Control"] == "no-store"


class TestQuestions:
    def test_list_is_public(self, client):
        response = client.get("/api/questions")

        assert response.status_code == 200
        questions = response.json()
        assert [q["id"] for q in questions] == list(range(1, 11))
        assert {"id", "theme", "icon", "color", "prompt", "guide"} <= set(questions[0])

    def test_get_one(self, client, auth_headers):
        response = client.get("/api/questions/2", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["theme"] == "Challenge / Failure"

    def test_get_missing_is_404(self, client, auth_headers):
        response = client.get("/api/questions/99", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["message"] == "Question not found"

    def test_get_one_requires_auth(self, client):
        assert client.get("/api/questions/1").status_code == 401


class TestAuth:
    def test_register_returns_token_and_profile(self, client):
        data = register(client, username="Sky", email="sky@example.com", firstName="Sky")

        assert data["tokenType"] == "bearer"
        assert data["accessToken"]
        assert data["user"]["username"] == "sky"
        assert data["user"]["firstName"] == "Sky"

    def test_duplicate_username(self, client):
        register(client)
        response = client.post(
            "/api/register",
            json={"username": "river", "password": "another-password"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.parametrize("username,password", [
        ("ab", "long-enough-password"),
        ("has spaces", "long-enough-password"),
        ("valid_name", "short"),
    ])
    def test_register_validation(self, client, username, password):
        response = client.post("/api/register", json={"username": username, "password": password})
        assert response.status_code == 400

    def test_login(self, client):
        register(client)
        response = client.post(
            "/api/login",
            json={"username": "River", "password": "correct-horse-battery"},
        )

        assert response.status_code == 200
        assert response.json()["user"]["username"] == "river"

    def test_login_wrong_password(self, client):
        register(client)
        response = client.post("/api/login", json={"username": "river", "password": "nope-nope-nope"})

        assert response.status_code == 401
        assert response.json()["message"] == "Incorrect username or password"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_current_user(self, client, auth_headers):
        response = client.get("/api/auth/user", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["username"] == "river"

    def test_update_profile(self, client, auth_headers):
        response = client.patch(
            "/api/auth/user",
            headers=auth_headers,
            json={"firstName": "River", "lastName": "  "},
        )

        assert response.status_code == 200
        assert response.json()["firstName"] == "River"
        assert response.json()["lastName"] is None

    @pytest.mark.parametrize("headers", [{}, {"Authorization": "Bearer not-a-token"}])
    def test_protected_routes_reject_bad_tokens(self, client, headers):
        for path in ("/api/reflections", "/api/analysis", "/api/final-learnings", "/api/progress"):
            response = client.get(path, headers=headers)
            assert response.status_code == 401, path
            assert response.json()["error"] == "authentication_error"


class TestReflections:
    def test_save_and_read_back(self, client, auth_headers):
        response = save(client, auth_headers, 2, "I learned to be patient.", QUESTION_TWO)

        assert response.status_code == 200
        saved = response.json()
        assert saved["questionId"] == 2
        assert saved["questionText"] == QUESTION_TWO
        assert saved["userResponse"] == "I learned to be patient."
        assert saved["updatedAt"]

        one = client.get("/api/reflections/2", headers=auth_headers).json()
        assert one["userResponse"] == "I learned to be patient."

        listing = client.get("/api/reflections", headers=auth_headers).json()
        assert [r["questionId"] for r in listing] == [2]

    def test_missing_reflection_is_null(self, client, auth_headers):
        response = client.get("/api/reflections/3", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() is None

    def test_repeated_save_updates_in_place(self, client, auth_headers):
        first = save(client, auth_headers, 1, "draft").json()
        second = save(client, auth_headers, 1, "final").json()

        assert second["id"] == first["id"]
        listing = client.get("/api/reflections", headers=auth_headers).json()
        assert len(listing) == 1
        assert listing[0]["userResponse"] == "final"

    def test_unknown_question_is_404(self, client, auth_headers):
        response = save(client, auth_headers, 11, "text")
        assert response.status_code == 404

    def test_missing_field_is_400(self, client, auth_headers):
        response = client.post(
            "/api/reflections",
            headers=auth_headers,
            json={"questionId": 1},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    def test_reflections_are_private(self, client, auth_headers):
        save(client, auth_headers, 1, "mine")
        other = register(client, username="sky", password="another-password")["accessToken"]

        response = client.get("/api/reflections", headers={"Authorization": f"Bearer {other}"})
        assert response.json() == []


class TestProgress:
    def test_empty(self, client, auth_headers):
        response = client.get("/api/progress", headers=auth_headers)
        assert response.json() == {"completed": 0, "total": 10, "percentage": 0}

    def test_counts_answered(self, client, auth_headers):
        for question_id in (1, 3, 5):
            save(client, auth_headers, question_id, "An honest answer.")
        save(client, auth_headers, 7, "   ")

        response = client.get("/api/progress", headers=auth_headers)
        assert response.json() == {"completed": 3, "total": 10, "percentage": 30}


class TestAnalysis:
    def test_none_yet(self, client, auth_headers):
        response = client.get("/api/analysis", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() is None

    def test_generate_without_reflections(self, client, auth_headers, fake_generator):
        response = client.post("/api/analysis/generate", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "No reflections available for analysis"
        assert fake_generator.calls == []

    def test_generate(self, client, auth_headers, fake_generator):
        save(client, auth_headers, 2, "I learned to be patient.", QUESTION_TWO)

        response = client.post("/api/analysis/generate", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["selfDiscoveries"] == fake_generator.discoveries
        assert data["analysisTimestamp"]
        assert response.headers["X-RateLimit-Limit"] == "5"
        assert response.headers["X-RateLimit-Remaining"] == "4"
        assert fake_generator.calls == [["I learned to be patient."]]

        stored = client.get("/api/analysis", headers=auth_headers).json()
        assert stored["id"] == data["id"]

    def test_regenerate_replaces(self, client, auth_headers, fake_generator):
        save(client, auth_headers, 2, "I learned to be patient.")
        client.post("/api/analysis/generate", headers=auth_headers)

        fake_generator.discoveries = ["**Courage:** You speak up."]
        second = client.post("/api/analysis/generate", headers=auth_headers).json()

        stored = client.get("/api/analysis", headers=auth_headers).json()
        assert stored["id"] == second["id"]
        assert stored["selfDiscoveries"] == ["**Courage:** You speak up."]

    def test_quota_error_surfaces_message(self, client, auth_headers, fake_generator):
        save(client, auth_headers, 2, "I learned to be patient.")
        first = client.post("/api/analysis/generate", headers=auth_headers).json()

        fake_generator.error = LLMQuotaError(details="ResourceExhausted")
        response = client.post("/api/analysis/generate", headers=auth_headers)

        assert response.status_code == 503
        body = response.json()
        assert body["error"] == "llm_quota_exceeded"
        assert body["message"] == (
            "AI analysis is temporarily unavailable due to high demand. "
            "Please try again in a few minutes."
        )
        assert client.get("/api/analysis", headers=auth_headers).json()["id"] == first["id"]

    def test_provider_error(self, client, auth_headers, fake_generator):
        save(client, auth_headers, 2, "I learned to be patient.")
        fake_generator.error = LLMError(details="RuntimeError")

        response = client.post("/api/analysis/generate", headers=auth_headers)

        assert response.status_code == 503
        assert response.json()["error"] == "llm_error"

    def test_unparseable_output_is_500(self, client, auth_headers, fake_generator):
        save(client, auth_headers, 2, "I learned to be patient.")
        fake_generator.error = json.JSONDecodeError("Expecting value", "not json", 0)

        response = client.post("/api/analysis/generate", headers=auth_headers)

        assert response.status_code == 500
        assert response.json()["error"] == "internal_error"
        assert client.get("/api/analysis", headers=auth_headers).json() is None

    def test_rejected_requests_do_not_use_rate_limit(self, client, auth_headers, fake_generator):
        for _ in range(5):
            response = client.post("/api/analysis/generate", headers=auth_headers)
            assert response.status_code == 400

        save(client, auth_headers, 2, "I learned to be patient.")
        response = client.post("/api/analysis/generate", headers=auth_headers)

        assert response.status_code == 200
        assert response.headers["X-RateLimit-Remaining"] == "4"
        assert len(fake_generator.calls) == 1

    def test_rate_limited(self, client, auth_headers):
        from knowyourself.api.main import app

        limiter = RateLimiter(requests_per_minute=1)
        app.dependency_overrides[get_rate_limiter] = lambda: limiter
        save(client, auth_headers, 2, "I learned to be patient.")

        assert client.post("/api/analysis/generate", headers=auth_headers).status_code == 200
        response = client.post("/api/analysis/generate", headers=auth_headers)

        assert response.status_code == 429
        assert response.json()["error"] == "rate_limit_exceeded"
        assert int(response.headers["Retry-After"]) > 0


class TestFinalLearnings:
    def test_none_yet(self, client, auth_headers):
        response = client.get("/api/final-learnings", headers=auth_headers)
        assert response.json() is None

    def test_save_twice_keeps_latest(self, client, auth_headers):
        first = client.post(
            "/api/final-learnings",
            headers=auth_headers,
            json={"selfWrittenLearnings": "I am more patient than I thought."},
        ).json()
        client.post(
            "/api/final-learnings",
            headers=auth_headers,
            json={"selfWrittenLearnings": "I value honesty above comfort."},
        )

        stored = client.get("/api/final-learnings", headers=auth_headers).json()
        assert stored["id"] == first["id"]
        assert stored["selfWrittenLearnings"] == "I value honesty above comfort."
        assert stored["submittedAt"]

    def test_missing_text_is_400(self, client, auth_headers):
        response = client.post("/api/final-learnings", headers=auth_headers, json={})
        assert response.status_code == 400

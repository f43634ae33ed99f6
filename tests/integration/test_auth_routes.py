"""Test /auth routes against a mocked Supabase Auth API."""
import json

import httpx
import pytest

from app.main import app
from app.services.supabase_auth_service import SupabaseAuthService, get_supabase_auth_service

SESSION = {
    "access_token": "access-123",
    "refresh_token": "refresh-456",
    "token_type": "bearer",
    "user": {"id": "user-1", "email": "pat@example.com"},
}


@pytest.fixture
def gotrue(client):
    """Route provider calls to an in-process handler and record them."""
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        body = json.loads(request.content) if request.content else {}

        if request.url.path == "/auth/v1/token":
            if body.get("password") == "correct-horse":
                return httpx.Response(200, json=SESSION)
            return httpx.Response(
                400, json={"error": "invalid_grant", "error_description": "Invalid login credentials"}
            )
        if request.url.path == "/auth/v1/signup":
            if len(body.get("password", "")) < 6:
                return httpx.Response(422, json={"msg": "Password should be at least 6 characters"})
            if body.get("email") == "taken@example.com":
                return httpx.Response(422, json={"msg": "User already registered"})
            return httpx.Response(200, json={"id": "user-1", "email": body["email"]})
        if request.url.path == "/auth/v1/logout":
            return httpx.Response(204)
        return httpx.Response(404)

    service = SupabaseAuthService(
        base_url="http://supabase.test", anon_key="anon", transport=httpx.MockTransport(handler)
    )
    app.dependency_overrides[get_supabase_auth_service] = lambda: service
    return calls


def test_login_returns_session(client, gotrue):
    response = client.post("/auth/login", json={"email": "Pat@Example.com", "password": "correct-horse"})

    assert response.status_code == 200
    assert response.json()["access_token"] == "access-123"

    request = gotrue[0]
    assert request.url.params["grant_type"] == "password"
    assert request.headers["apikey"] == "anon"
    assert json.loads(request.content)["email"] == "pat@example.com"


def test_login_with_wrong_password(client, gotrue):
    response = client.post("/auth/login", json={"email": "pat@example.com", "password": "nope"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Incorrect email or password."


def test_login_rejects_malformed_email(client, gotrue):
    response = client.post("/auth/login", json={"email": "pat", "password": "correct-horse"})

    assert response.status_code == 422
    assert gotrue == []


def test_signup(client, gotrue):
    response = client.post("/auth/signup", json={"email": "new@example.com", "password": "long-enough"})

    assert response.status_code == 200
    assert response.json()["email"] == "new@example.com"


def test_signup_weak_password(client, gotrue):
    response = client.post("/auth/signup", json={"email": "new@example.com", "password": "123"})

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid password. Please choose a stronger password."


def test_signup_other_provider_error_is_generic(client, gotrue):
    response = client.post(
        "/auth/signup", json={"email": "taken@example.com", "password": "long-enough"}
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "An unexpected error occurred. Please try again later."


def test_signout_forwards_bearer_token(client, gotrue, auth_headers):
    response = client.post("/auth/signout", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {"message": "Signed out"}
    assert gotrue[0].url.path == "/auth/v1/logout"
    assert gotrue[0].headers["Authorization"] == auth_headers["Authorization"]


def test_health_check(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_api_responses_carry_security_headers(client, auth_headers):
    response = client.get("/doctors", headers=auth_headers)

    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "SAMEORIGIN"
    assert response.headers["Cache-Control"].startswith("no-store")


@pytest.fixture
def gotrue_down(client):
    """Provider that cannot be reached at all."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    service = SupabaseAuthService(
        base_url="http://supabase.test", anon_key="anon", transport=httpx.MockTransport(handler)
    )
    app.dependency_overrides[get_supabase_auth_service] = lambda: service


def test_login_while_provider_is_unreachable(client, gotrue_down):
    response = client.post("/auth/login", json={"email": "pat@example.com", "password": "x"})

    assert response.status_code == 400
    assert response.json()["detail"] == "An unexpected error occurred. Please try again later."


def test_signup_while_provider_is_unreachable(client, gotrue_down):
    response = client.post("/auth/signup", json={"email": "new@example.com", "password": "long-enough"})

    assert response.status_code == 400
    assert response.json()["detail"] == "An unexpected error occurred. Please try again later."


def test_signout_while_provider_is_unreachable(client, gotrue_down, auth_headers):
    response = client.post("/auth/signout", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {"message": "Signed out"}


def test_provider_error_with_non_object_body(client):
    service = SupabaseAuthService(
        base_url="http://supabase.test",
        anon_key="anon",
        transport=httpx.MockTransport(lambda request: httpx.Response(500, json=["oops"])),
    )
    app.dependency_overrides[get_supabase_auth_service] = lambda: service

    response = client.post("/auth/login", json={"email": "pat@example.com", "password": "x"})

    assert response.status_code == 400

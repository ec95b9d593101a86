"""Authentication endpoint tests."""

from datetime import timedelta

from src.config.settings import settings
from src.shared.utils.security import SecurityUtils

REGISTER_PAYLOAD = {
    "name": "New User",
    "email": "newuser@example.com",
    "password": "password123",
    "password_confirmation": "password123",
}


async def test_health_check(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


async def test_readiness_and_liveness(client):
    assert (await client.get("/ready")).json() == {"status": "ready"}
    assert (await client.get("/live")).json() == {"status": "alive"}


async def test_register_user(client):
    """Registration returns the user without password material or a token."""
    response = await client.post("/v1/auth/register", json=REGISTER_PAYLOAD)

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "User registered successfully"
    assert body["data"]["email"] == "newuser@example.com"
    assert body["data"]["name"] == "New User"
    assert "token" not in body
    assert "password" not in response.text
    assert "password_hash" not in response.text


async def test_register_duplicate_email(client, auth_headers):
    response = await client.post(
        "/v1/auth/register",
        json={**REGISTER_PAYLOAD, "email": auth_headers.email},
    )

    assert response.status_code == 422
    body = response.json()
    assert body["success"] is False
    assert body["errors"]["email"] == ["The email has already been taken."]


async def test_register_password_confirmation_mismatch(client):
    response = await client.post(
        "/v1/auth/register",
        json={**REGISTER_PAYLOAD, "password_confirmation": "something-else"},
    )

    assert response.status_code == 422
    assert response.json()["errors"]["password_confirmation"] == [
        "The password confirmation does not match."
    ]


async def test_register_requires_fields(client):
    response = await client.post("/v1/auth/register", json={"email": "not-an-email"})

    assert response.status_code == 422
    errors = response.json()["errors"]
    assert {"name", "email", "password", "password_confirmation"} <= set(errors)


async def test_login(client, auth_headers):
    response = await client.post(
        "/v1/auth/login",
        json={"email": auth_headers.email, "password": "testpass123"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Login successfully"
    assert body["token_type"] == "bearer"
    assert body["expires_in"] == settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60
    assert body["data"]["id"] == auth_headers.user_id
    payload = SecurityUtils.decode_access_token(body["token"], settings.SECRET_KEY)
    assert payload["user_id"] == auth_headers.user_id


async def test_login_failures_look_the_same(client, auth_headers):
    """Wrong password and unknown email give identical responses."""
    wrong_password = await client.post(
        "/v1/auth/login",
        json={"email": auth_headers.email, "password": "wrongpass"},
    )
    unknown_email = await client.post(
        "/v1/auth/login",
        json={"email": "nobody@example.com", "password": "testpass123"},
    )

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()
    assert wrong_password.json()["message"] == "Email or Password is incorrect"


async def test_google_login(client, google_oauth):
    google_oauth.add("google-token", google_id="g-42", email="grace@example.com", name="Grace")

    response = await client.post("/v1/auth/google", json={"token": "google-token"})

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Login with Google successfully"
    assert body["data"]["email"] == "grace@example.com"
    assert body["token"]


async def test_google_login_links_registered_user(client, auth_headers, google_oauth):
    google_oauth.add("google-token", google_id="g-42", email=auth_headers.email)

    response = await client.post("/v1/auth/google", json={"token": "google-token"})

    assert response.status_code == 200
    assert response.json()["data"]["id"] == auth_headers.user_id


async def test_google_login_invalid_token(client):
    response = await client.post("/v1/auth/google", json={"token": "forged"})

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid Google token"


async def test_get_current_user(client, auth_headers):
    response = await client.get("/v1/auth/me", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["data"]["email"] == auth_headers.email


async def test_get_current_user_requires_token(client):
    response = await client.get("/v1/auth/me")

    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"
    assert response.json() == {
        "success": False,
        "message": "Unauthenticated",
        "code": "AUTHENTICATION_ERROR",
    }


async def test_expired_token_rejected(client, auth_headers):
    token = SecurityUtils.create_access_token(
        data={"user_id": auth_headers.user_id, "email": auth_headers.email},
        secret_key=settings.SECRET_KEY,
        expires_delta=timedelta(seconds=-1),
    )

    response = await client.get("/v1/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


async def test_request_id_header(client):
    response = await client.get("/health", headers={"X-Request-ID": "req-123"})

    assert response.headers["x-request-id"] == "req-123"

"""
Unit tests for password hashing, JWT tokens and the auth endpoints
"""

from datetime import timedelta

from sportsbar.core.auth import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
    verify_token,
)


def test_password_hash_round_trip():
    password_hash = hash_password("s3cret-pass")

    assert password_hash != "s3cret-pass"
    assert verify_password("s3cret-pass", password_hash)
    assert not verify_password("wrong-pass", password_hash)


def test_create_access_token():
    """Test JWT token creation"""
    token = create_access_token(user_id=7, username="manager", expires_delta=timedelta(hours=1))

    assert isinstance(token, str)
    payload = decode_access_token(token)
    assert payload["sub"] == "7"
    assert payload["username"] == "manager"
    assert "exp" in payload
    assert verify_token(token) == 7


def test_verify_invalid_token():
    """Test token verification with invalid token"""
    assert verify_token("invalid.token.string.here") is None


def test_expired_token():
    """Test that expired tokens are rejected"""
    token = create_access_token(user_id=7, username="manager", expires_delta=timedelta(hours=-1))

    assert decode_access_token(token) is None
    assert verify_token(token) is None


# ============================================================================
# Endpoints
# ============================================================================

def test_register_login_and_me(client, admin_headers):
    response = client.get("/api/auth/me", headers=admin_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["username"] == "manager"
    assert body["email"] == "manager@example.com"
    assert "password_hash" not in body


def test_login_with_wrong_password(client, admin_headers):
    response = client.post("/api/auth/login", json={"username": "manager", "password": "not-it"})
    assert response.status_code == 401

    response = client.post("/api/auth/login", json={"username": "nobody", "password": "not-it"})
    assert response.status_code == 401


def test_further_registration_requires_admin(client, admin_headers):
    new_user = {"username": "bartender", "email": "bar@example.com", "password": "another-pass"}

    response = client.post("/api/auth/register", json=new_user)
    assert response.status_code == 401

    response = client.post("/api/auth/register", json=new_user, headers=admin_headers)
    assert response.status_code == 201
    assert response.json()["username"] == "bartender"


def test_duplicate_username_is_conflict(client, admin_headers):
    response = client.post(
        "/api/auth/register",
        json={"username": "manager", "email": "else@example.com", "password": "another-pass"},
        headers=admin_headers,
    )
    assert response.status_code == 409


def test_register_validates_input(client):
    response = client.post(
        "/api/auth/register",
        json={"username": "manager", "email": "not-an-email", "password": "short"},
    )
    assert response.status_code == 422


def test_me_requires_token(client):
    assert client.get("/api/auth/me").status_code == 401
    assert client.get("/api/auth/me", headers={"Authorization": "Bearer garbage"}).status_code == 401


def test_logout(client):
    assert client.post("/api/auth/logout").json() == {"success": True}

"""Tests for credentials and tokens."""

from datetime import timedelta

from storefront.api.auth import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)
from storefront.models.user import AdminUser


def _create_admin(db, email="admin@example.com", password="secret", is_active=True):
    user = AdminUser(
        email=email,
        name="Admin",
        hashed_password=get_password_hash(password),
        is_active=is_active,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def test_password_hashing():
    """Hashes verify only against the original password."""
    hashed = get_password_hash("secret")
    assert hashed != "secret"
    assert verify_password("secret", hashed) is True
    assert verify_password("wrong", hashed) is False
    assert verify_password("secret", "not-a-bcrypt-hash") is False


def test_token_round_trip():
    """Tokens carry the admin id and email."""
    token = create_access_token({"sub": "a@example.com", "id": 7, "email": "a@example.com"})
    identity = decode_access_token(token)
    assert identity.id == 7
    assert identity.email == "a@example.com"


def test_expired_token_rejected():
    """Expired tokens decode to nothing."""
    token = create_access_token({"id": 7, "email": "a@example.com"}, expires_delta=timedelta(seconds=-1))
    assert decode_access_token(token) is None
    assert decode_access_token("garbage") is None


def test_token_without_identity_rejected():
    """Tokens missing id or email are not accepted."""
    token = create_access_token({"sub": "a@example.com"})
    assert decode_access_token(token) is None


def test_login_success(client, db):
    """Valid credentials return a token usable with verify."""
    user = _create_admin(db)

    response = client.post("/api/auth/login", json={"email": "admin@example.com", "password": "secret"})
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["user"] == {"id": user.id, "email": "admin@example.com", "name": "Admin"}

    response = client.get("/api/auth/verify", headers={"Authorization": f"Bearer {body['token']}"})
    assert response.status_code == 200
    assert response.json() == {"success": True, "user": {"id": user.id, "email": "admin@example.com"}}


def test_login_requires_fields(client):
    """Email and password are both required."""
    response = client.post("/api/auth/login", json={"email": "admin@example.com"})
    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Email and password required"}


def test_login_invalid_credentials(client, db):
    """Wrong passwords, unknown emails and inactive admins are refused alike."""
    _create_admin(db)
    _create_admin(db, email="old@example.com", is_active=False)

    for email, password in [
        ("admin@example.com", "wrong"),
        ("nobody@example.com", "secret"),
        ("old@example.com", "secret"),
    ]:
        response = client.post("/api/auth/login", json={"email": email, "password": password})
        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "Invalid credentials"}


def test_verify_requires_token(client):
    """Verify without a token is unauthorized."""
    response = client.get("/api/auth/verify")
    assert response.status_code == 401
    assert response.json()["message"] == "Access token required"


def test_token_with_malformed_id_rejected(client):
    """A signed token whose id is not a number is treated as invalid."""
    token = create_access_token({"sub": "a@example.com", "id": "abc", "email": "a@example.com"})
    assert decode_access_token(token) is None

    response = client.get("/api/auth/verify", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 403
    assert response.json() == {"success": False, "message": "Invalid or expired token"}


def test_login_without_body(client):
    """A login request with no body gets the missing-fields message."""
    response = client.post("/api/auth/login")
    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Email and password required"}

"""Tests for login, logout, current user and the seed endpoint."""

import pytest
from httpx import AsyncClient
from sqlmodel import select

from tenant_notes.core.config import Settings, get_settings
from tenant_notes.core.database import get_session
from tenant_notes.main import app
from tenant_notes.models.tenant import Tenant
from tenant_notes.models.user import User


@pytest.mark.asyncio
async def test_login_success(client: AsyncClient, seeded):
    """Login with valid credentials returns the user snapshot + JWT."""
    resp = await client.post("/v1/auth/login", json={
        "email": "admin@acme.test",
        "password": "password",
    })
    assert resp.status_code == 200
    data = resp.json()
    assert data["token_type"] == "bearer"
    assert "." in data["access_token"]  # JWT has dots
    assert data["user"]["email"] == "admin@acme.test"
    assert data["user"]["name"] == "Acme Admin"
    assert data["user"]["role"] == "admin"
    assert data["user"]["tenant"]["slug"] == "acme"
    assert data["user"]["tenant"]["plan"] == "free"


@pytest.mark.asyncio
async def test_login_sets_session_cookie(client: AsyncClient, seeded):
    resp = await client.post("/v1/auth/login", json={
        "email": "user@globex.test",
        "password": "password",
    })
    assert resp.status_code == 200

    cookie = resp.headers["set-cookie"].lower()
    assert cookie.startswith("auth-token=")
    assert "httponly" in cookie
    assert "samesite=lax" in cookie
    assert "max-age=604800" in cookie
    assert "path=/" in cookie
    # Development settings in tests
    assert "; secure" not in cookie


@pytest.mark.asyncio
async def test_login_wrong_password(client: AsyncClient, seeded):
    resp = await client.post("/v1/auth/login", json={
        "email": "admin@acme.test",
        "password": "passwore",
    })
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid email or password"


@pytest.mark.asyncio
async def test_login_unknown_email_is_indistinguishable(client: AsyncClient, seeded):
    resp = await client.post("/v1/auth/login", json={
        "email": "nobody@nowhere.com",
        "password": "password",
    })
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid email or password"


@pytest.mark.asyncio
async def test_login_malformed_body(client: AsyncClient, seeded):
    resp = await client.post("/v1/auth/login", json={"email": "not-an-email"})
    assert resp.status_code == 400
    fields = {e["field"] for e in resp.json()["errors"]}
    assert fields == {"email", "password"}


@pytest.mark.asyncio
async def test_me_with_cookie(client: AsyncClient, seeded):
    """The cookie set by login authenticates follow-up requests."""
    await client.post("/v1/auth/login", json={
        "email": "user@acme.test",
        "password": "password",
    })

    resp = await client.get("/v1/auth/me")
    assert resp.status_code == 200
    data = resp.json()
    assert data["user"]["email"] == "user@acme.test"
    assert data["user"]["role"] == "member"


@pytest.mark.asyncio
async def test_me_with_bearer_header(client: AsyncClient, seeded):
    resp = await client.post("/v1/auth/login", json={
        "email": "admin@globex.test",
        "password": "password",
    })
    token = resp.json()["access_token"]
    client.cookies.clear()

    resp = await client.get("/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 200
    assert resp.json()["user"]["tenant"]["plan"] == "pro"


@pytest.mark.asyncio
async def test_me_without_token(client: AsyncClient, seeded):
    resp = await client.get("/v1/auth/me")
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_me_with_invalid_token(client: AsyncClient, seeded):
    resp = await client.get(
        "/v1/auth/me",
        headers={"Authorization": "Bearer totally-fake-token"},
    )
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_me_when_user_was_removed(client: AsyncClient, session, seeded):
    resp = await client.post("/v1/auth/login", json={
        "email": "user@acme.test",
        "password": "password",
    })
    token = resp.json()["access_token"]
    client.cookies.clear()

    user = (await session.execute(select(User).where(User.email == "user@acme.test"))).scalar_one()
    await session.delete(user)
    await session.commit()

    resp = await client.get("/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_logout_clears_cookie(client: AsyncClient, seeded):
    await client.post("/v1/auth/login", json={
        "email": "admin@acme.test",
        "password": "password",
    })
    assert (await client.get("/v1/auth/me")).status_code == 200

    resp = await client.post("/v1/auth/logout")
    assert resp.status_code == 204
    assert "auth-token=" in resp.headers["set-cookie"]

    assert (await client.get("/v1/auth/me")).status_code == 401


@pytest.mark.asyncio
async def test_seed_endpoint_is_idempotent(client: AsyncClient):
    first = await client.post("/v1/auth/seed")
    assert first.status_code == 200
    assert first.json()["data"] == {"tenants": 2, "users": 4, "password": "password"}

    second = await client.post("/v1/auth/seed")
    assert second.status_code == 200

    resp = await client.post("/v1/auth/login", json={
        "email": "admin@globex.test",
        "password": "password",
    })
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_seed_endpoint_can_be_disabled(client: AsyncClient):
    disabled = Settings(jwt_secret_key="test-secret-key", enable_seed_endpoint=False)
    app.dependency_overrides[get_settings] = lambda: disabled

    resp = await client.post("/v1/auth/seed")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_login_sets_secure_cookie_outside_development(client: AsyncClient, seeded):
    production = Settings(jwt_secret_key="test-secret-key", environment="production")
    app.dependency_overrides[get_settings] = lambda: production

    resp = await client.post("/v1/auth/login", json={
        "email": "user@globex.test",
        "password": "password",
    })
    assert resp.status_code == 200
    cookie = resp.headers["set-cookie"].lower()
    assert "; secure" in cookie
    assert "httponly" in cookie


@pytest.mark.asyncio
async def test_me_rejects_token_for_another_tenant(client: AsyncClient, session, seeded):
    """A token issued before the user moved tenants no longer authenticates."""
    resp = await client.post("/v1/auth/login", json={
        "email": "user@acme.test",
        "password": "password",
    })
    headers = {"Authorization": f"Bearer {resp.json()['access_token']}"}
    client.cookies.clear()

    globex = (await session.execute(select(Tenant).where(Tenant.slug == "globex"))).scalar_one()
    user = (await session.execute(select(User).where(User.email == "user@acme.test"))).scalar_one()
    user.tenant_id = globex.id
    session.add(user)
    await session.commit()

    resp = await client.get("/v1/auth/me", headers=headers)
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid or expired token"

    resp = await client.get("/v1/notes", headers=headers)
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_login_when_database_unreachable(client: AsyncClient):
    async def _unreachable_session():
        raise ConnectionRefusedError(111, "Connect call failed ('127.0.0.1', 5432)")
        yield

    app.dependency_overrides[get_session] = _unreachable_session

    resp = await client.post("/v1/auth/login", json={
        "email": "admin@acme.test",
        "password": "password",
    })
    assert resp.status_code == 503
    assert resp.json() == {"detail": "Database unavailable"}

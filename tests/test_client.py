"""
Client-side session, guard and API client tests.
"""

from datetime import datetime, timedelta, timezone

import pytest
from httpx import AsyncClient

from app.client import (
    CatalogClient,
    ClientSession,
    GuardDecision,
    guard_admin,
    guard_private,
    is_token_valid,
    parse_token,
)
from app.core.security import create_access_token
from app.schemas.user import UserPublic

ADMIN = UserPublic(id="u-1", name="Admin", email="admin@example.com", role="admin")
USER = UserPublic(id="u-2", name="User", email="user@example.com", role="user")


def _session(user: UserPublic, path=None, **token_kwargs) -> ClientSession:
    session = ClientSession(path)
    session.set(create_access_token(user.id, user.role, **token_kwargs), user)
    return session


def test_session_save_load_clear(tmp_path):
    path = tmp_path / "session.json"
    _session(ADMIN, path)
    loaded = ClientSession(path).load()
    assert loaded.is_authenticated
    assert loaded.is_admin
    assert loaded.user == ADMIN
    loaded.clear()
    assert not path.exists()
    assert not ClientSession(path).load().is_authenticated


def test_session_discards_corrupt_file(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("{not json", encoding="utf-8")
    session = ClientSession(path).load()
    assert not session.is_authenticated
    assert not path.exists()


def test_parse_token_reads_claims_without_secret():
    claims = parse_token(create_access_token("u-1", "admin"))
    assert claims["sub"] == "u-1"
    assert claims["role"] == "admin"
    assert parse_token("garbage") is None
    assert parse_token(None) is None


def test_is_token_valid_tracks_expiry():
    issued = datetime(2026, 1, 1, tzinfo=timezone.utc)
    token = create_access_token("u-1", "user", now=issued)
    assert is_token_valid(token, now=issued + timedelta(days=6))
    assert not is_token_valid(token, now=issued + timedelta(days=7))


def test_guard_private():
    assert guard_private(ClientSession()) is GuardDecision.REDIRECT_LOGIN
    assert guard_private(_session(USER)) is GuardDecision.ALLOW


def test_guard_clears_expired_session(tmp_path):
    path = tmp_path / "session.json"
    session = _session(USER, path, now=datetime.now(timezone.utc) - timedelta(days=8))
    assert guard_private(session) is GuardDecision.REDIRECT_LOGIN
    assert not session.is_authenticated
    assert not path.exists()


def test_guard_admin():
    assert guard_admin(_session(ADMIN)) is GuardDecision.ALLOW
    assert guard_admin(_session(USER)) is GuardDecision.REDIRECT_HOME
    assert guard_admin(ClientSession()) is GuardDecision.REDIRECT_LOGIN


def test_guard_admin_without_user_logs_out():
    session = ClientSession()
    session.token = create_access_token("u-1", "admin")
    assert guard_admin(session) is GuardDecision.REDIRECT_LOGIN
    assert session.token is None


@pytest.mark.asyncio
async def test_client_admin_flow(client: AsyncClient, tmp_path):
    api = CatalogClient(client, ClientSession(tmp_path / "s.json"))
    registered = await api.register("Admin Person", "boss@example.com", "Secret1", role="admin")
    assert registered.success
    assert api.session.is_admin

    created = await api.create_product("Widget", 9.99, "https://x.com/a.png")
    assert created.success
    product_id = created.data["id"]

    updated = await api.update_product(product_id, price=19.99)
    assert updated.success
    assert api.products[0]["price"] == 19.99

    listed = await api.fetch_products()
    assert [p["id"] for p in listed.data] == [product_id]

    deleted = await api.delete_product(product_id)
    assert deleted.success
    assert deleted.message == "Product deleted"
    assert api.products == []


@pytest.mark.asyncio
async def test_client_prechecks_fields(client: AsyncClient):
    api = CatalogClient(client)
    result = await api.create_product("Widget", None, "https://x.com/a.png")
    assert not result.success
    assert result.message == "please fill all fields"


@pytest.mark.asyncio
async def test_client_surfaces_server_messages(client: AsyncClient, regular_user):
    api = CatalogClient(client)
    bad_login = await api.login("user@example.com", "Wrong123")
    assert not bad_login.success
    assert bad_login.message == "Invalid email or password"

    assert (await api.login("user@example.com", "User1234")).success
    forbidden = await api.create_product("Widget", 9.99, "https://x.com/a.png")
    assert not forbidden.success
    assert forbidden.message == "Admin access required"
    assert api.session.is_authenticated


@pytest.mark.asyncio
async def test_client_drops_session_on_401(client: AsyncClient):
    session = ClientSession()
    session.token = "expired.or.forged"
    session.user = ADMIN
    api = CatalogClient(client, session)
    result = await api.delete_product("6f1c1f0e-8a53-4a8e-9d0e-6a1d2b3c4d5e")
    assert not result.success
    assert not api.session.is_authenticated


def test_logout_clears_session(tmp_path):
    path = tmp_path / "s.json"
    api = CatalogClient(http=None, session=_session(USER, path))
    api.logout()
    assert not api.session.is_authenticated
    assert not path.exists()

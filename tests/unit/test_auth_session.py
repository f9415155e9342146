import time
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from rewear.auth import service as auth_service
from rewear.auth.session import AuthSessionManager
from rewear.infra.session_store import MemorySessionStore


def _auth_result(access="at", refresh="rt", user_id="u1", expires_at=None):
    return SimpleNamespace(
        session=SimpleNamespace(access_token=access, refresh_token=refresh, expires_at=expires_at or int(time.time()) + 3600),
        user=SimpleNamespace(id=user_id, email="u1@example.com", user_metadata={"username": "mira", "full_name": "Mira"}),
    )


@pytest.fixture
def sessions():
    return AuthSessionManager(MemorySessionStore(), prefix="sb-rewear-")


def test_sign_in_persists_session(sessions, monkeypatch):
    monkeypatch.setattr("rewear.auth.session.repository.auth_sign_in_password", lambda e, p: _auth_result())
    result = auth_service.login(sessions, " u1@example.com ", "pw")
    assert result.success
    assert result.user["username"] == "mira"
    stored = sessions.current_session("u1")
    assert stored["access_token"] == "at"
    assert stored["refresh_token"] == "rt"


def test_sign_in_without_session_fails(sessions, monkeypatch):
    monkeypatch.setattr(
        "rewear.auth.session.repository.auth_sign_in_password",
        lambda e, p: SimpleNamespace(session=None, user=None),
    )
    result = auth_service.login(sessions, "u1@example.com", "bad")
    assert not result.success
    assert sessions.current_session("u1") is None


def test_signup_waiting_for_email_confirmation(sessions, monkeypatch):
    captured = {}

    def fake_sign_up(**kwargs):
        captured.update(kwargs)
        return SimpleNamespace(session=None, user=SimpleNamespace(id="u2"))

    monkeypatch.setattr("rewear.auth.session.repository.auth_sign_up_account", fake_sign_up)
    result = auth_service.signup(sessions, "new@example.com", "secret1", username="mira", full_name="Mira")
    assert result.success
    assert result.access_token is None
    assert "email" in result.error
    assert captured["options_data"] == {"username": "mira", "full_name": "Mira"}


def test_signup_existing_user(sessions, monkeypatch):
    def boom(**kwargs):
        raise Exception("User already registered")

    monkeypatch.setattr("rewear.auth.session.repository.auth_sign_up_account", boom)
    result = auth_service.signup(sessions, "dup@example.com", "secret1", username="dup")
    assert not result.success
    assert result.error == "Utilisateur existe déjà"


def test_sign_out_clears_every_key_of_the_user(sessions, monkeypatch):
    remote = MagicMock(return_value=SimpleNamespace(status_code=204))
    monkeypatch.setattr("rewear.auth.session.repository.auth_sign_out", remote)
    sessions.store.set("sb-rewear-u1:session", {"access_token": "at"})
    sessions.store.set("sb-rewear-u1:cart-cache", {"x": 1})
    sessions.store.set("sb-rewear-u2:session", {"access_token": "other"})

    cleared = auth_service.logout(sessions, {"id": "u1", "token": "at"})

    remote.assert_called_once_with("at")
    assert cleared == 2
    assert sessions.store.get("sb-rewear-u2:session") is not None


def test_sign_out_still_clears_when_remote_fails(sessions, monkeypatch):
    def boom(token):
        raise RuntimeError("réseau")

    monkeypatch.setattr("rewear.auth.session.repository.auth_sign_out", boom)
    sessions.store.set("sb-rewear-u1:session", {"access_token": "at"})
    assert sessions.sign_out("u1", "at") == 1
    assert sessions.current_session("u1") is None


def test_refresh_exchanges_refresh_token_and_persists(sessions, monkeypatch):
    seen = []

    def fake_refresh(token):
        seen.append(token)
        return _auth_result(access="at2", refresh="rt2")

    monkeypatch.setattr("rewear.auth.session.repository.auth_refresh_session", fake_refresh)
    result = auth_service.refresh(sessions, " rt ")
    assert seen == ["rt"]
    assert result.access_token == "at2"
    assert sessions.current_session("u1")["refresh_token"] == "rt2"


def test_refresh_without_token(sessions):
    assert not auth_service.refresh(sessions, "").success


def test_get_user_from_token_normalizes(monkeypatch):
    monkeypatch.setattr(
        "rewear.auth.service._repo_get_user_from_token",
        lambda token: {"id": "u1", "email": "u1@example.com", "user_metadata": {"username": "mira"}},
    )
    user = auth_service.get_user_from_token("tok")
    assert user == {
        "id": "u1",
        "email": "u1@example.com",
        "username": "mira",
        "full_name": None,
        "metadata": {"username": "mira"},
        "token": "tok",
    }


def test_persisted_session_expires_with_access_token(monkeypatch):
    store = MagicMock()
    sessions = AuthSessionManager(store, prefix="sb-rewear-", default_ttl=900)
    expires_at = int(time.time()) + 600
    monkeypatch.setattr("rewear.auth.session.repository.auth_sign_in_password", lambda e, p: _auth_result(expires_at=expires_at))

    sessions.sign_in("u1@example.com", "pw")

    key, value = store.set.call_args.args
    assert key == "sb-rewear-u1:session"
    assert 590 <= store.set.call_args.kwargs["ttl"] <= 600


def test_session_without_expiry_uses_default_ttl():
    sessions = AuthSessionManager(MemorySessionStore(), default_ttl=900)
    assert sessions.session_ttl({"access_token": "at"}) == 900


def test_already_expired_session_is_not_kept(sessions, monkeypatch):
    sessions.store.set("sb-rewear-u1:session", {"access_token": "old"})
    monkeypatch.setattr(
        "rewear.auth.session.repository.auth_refresh_session",
        lambda token: _auth_result(expires_at=int(time.time()) - 10),
    )
    sessions.refresh("rt")
    assert sessions.current_session("u1") is None

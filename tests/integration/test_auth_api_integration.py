from types import SimpleNamespace
from unittest.mock import MagicMock

from rewear.auth.models import AuthResponse
from rewear.utils.security import COOKIE_NAME, REFRESH_COOKIE_NAME, require_user


def test_login_sets_cookie(client, monkeypatch):
    result = AuthResponse(True, user={"id": "u1", "email": "u1@example.com"}, session={"access_token": "at", "refresh_token": "rt"})
    login = MagicMock(return_value=result)
    monkeypatch.setattr("rewear.auth.views.svc_login", login)

    r = client.post("/api/v1/auth/login", json={"email": "u1@example.com", "password": "pw"})

    assert r.status_code == 200
    assert r.json()["access_token"] == "at"
    cookies = r.headers.get_list("set-cookie")
    assert any(c.startswith("sb_access=at;") for c in cookies)
    assert any(c.startswith("sb_refresh=rt;") and "HttpOnly" in c for c in cookies)
    assert login.call_args.args[1:] == ("u1@example.com", "pw")


def test_login_failure_is_401(client, monkeypatch):
    monkeypatch.setattr("rewear.auth.views.svc_login", lambda *a: AuthResponse(False, error="Identifiants invalides"))
    r = client.post("/api/v1/auth/login", json={"email": "u1@example.com", "password": "bad"})
    assert r.status_code == 401
    assert r.json()["detail"] == "Identifiants invalides"


def test_signup_pending_confirmation(client, monkeypatch):
    monkeypatch.setattr(
        "rewear.auth.views.svc_signup",
        lambda *a, **k: AuthResponse(True, error="Inscription réussie, vérifiez votre email"),
    )
    r = client.post(
        "/api/v1/auth/signup",
        json={"email": "new@example.com", "password": "secret1", "username": "mira"},
    )
    assert r.status_code == 200
    assert r.json() == {"message": "Inscription réussie, vérifiez votre email"}


def test_signup_validates_payload(client):
    r = client.post("/api/v1/auth/signup", json={"email": "pas-un-email", "password": "123"})
    assert r.status_code == 422


def test_me_returns_current_user(client):
    r = client.get("/api/v1/auth/me")
    assert r.status_code == 200
    assert r.json()["id"] == "test-user"
    assert r.json()["username"] == "tester"


def test_logout_clears_persisted_session(app, client, monkeypatch):
    monkeypatch.setattr("rewear.auth.session.repository.auth_sign_out", lambda token: MagicMock(status_code=204))
    app.state.session_store.set("sb-rewear-test-user:session", {"access_token": "fake-token"})

    r = client.post("/api/v1/auth/logout")

    assert r.status_code == 200
    assert r.json()["cleared"] == 1
    assert app.state.session_store.get("sb-rewear-test-user:session") is None


def test_protected_route_without_token(app, client):
    app.dependency_overrides.pop(require_user, None)
    r = client.get("/api/v1/cart")
    assert r.status_code == 401
    assert r.json()["detail"] == "Non authentifié"


def _expired_access_token(app, monkeypatch):
    app.dependency_overrides.pop(require_user, None)

    def expired(token):
        raise RuntimeError("JWT expired")

    monkeypatch.setattr("rewear.auth.service.get_user_from_token", expired)


def _refreshed_session(monkeypatch, seen):
    def fake_refresh(token):
        seen.append(token)
        return SimpleNamespace(
            session=SimpleNamespace(access_token="at2", refresh_token="rt2", expires_at=None),
            user=SimpleNamespace(id="u1", email="u1@example.com", user_metadata={}),
        )

    monkeypatch.setattr("rewear.auth.session.repository.auth_refresh_session", fake_refresh)


def test_refresh_from_cookie_with_expired_access_token(app, client, monkeypatch):
    _expired_access_token(app, monkeypatch)
    seen = []
    _refreshed_session(monkeypatch, seen)
    client.cookies.set(COOKIE_NAME, "expired-at")
    client.cookies.set(REFRESH_COOKIE_NAME, "rt")

    r = client.post("/api/v1/auth/refresh")

    assert r.status_code == 200
    assert seen == ["rt"]
    assert r.json()["access_token"] == "at2"
    cookies = r.headers.get_list("set-cookie")
    assert any(c.startswith("sb_access=at2;") for c in cookies)
    assert any(c.startswith("sb_refresh=rt2;") for c in cookies)
    assert app.state.session_store.get("sb-rewear-u1:session")["refresh_token"] == "rt2"


def test_refresh_from_body(app, client, monkeypatch):
    _expired_access_token(app, monkeypatch)
    seen = []
    _refreshed_session(monkeypatch, seen)

    r = client.post("/api/v1/auth/refresh", json={"refresh_token": "rt-body"})

    assert r.status_code == 200
    assert seen == ["rt-body"]


def test_refresh_without_refresh_token_is_401(app, client, monkeypatch):
    _expired_access_token(app, monkeypatch)
    client.cookies.set(COOKIE_NAME, "expired-at")
    r = client.post("/api/v1/auth/refresh")
    assert r.status_code == 401
    assert r.json()["detail"] == "Aucune session à rafraîchir"

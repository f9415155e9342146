from unittest.mock import MagicMock

from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from rewear.utils.security import COOKIE_NAME, require_user


def _make_app():
    app = FastAPI()

    @app.get("/private")
    def private(user=Depends(require_user)):
        return {"id": user["id"]}

    return app


def test_no_token_is_rejected_without_network_call(monkeypatch):
    lookup = MagicMock()
    monkeypatch.setattr("rewear.auth.service.get_user_from_token", lookup)
    r = TestClient(_make_app()).get("/private")
    assert r.status_code == 401
    assert r.json()["detail"] == "Non authentifié"
    lookup.assert_not_called()


def test_bearer_token_takes_priority_over_cookie(monkeypatch):
    seen = []

    def lookup(token):
        seen.append(token)
        return {"id": "u1", "token": token}

    monkeypatch.setattr("rewear.auth.service.get_user_from_token", lookup)
    client = TestClient(_make_app())
    client.cookies.set(COOKIE_NAME, "cookie-token")
    r = client.get("/private", headers={"Authorization": "Bearer header-token"})
    assert r.status_code == 200
    assert seen == ["header-token"]


def test_cookie_token_is_used_without_header(monkeypatch):
    monkeypatch.setattr("rewear.auth.service.get_user_from_token", lambda token: {"id": "u1"})
    client = TestClient(_make_app())
    client.cookies.set(COOKIE_NAME, "cookie-token")
    assert client.get("/private").json() == {"id": "u1"}


def test_expired_token_is_401(monkeypatch):
    def boom(token):
        raise RuntimeError("jwt expired")

    monkeypatch.setattr("rewear.auth.service.get_user_from_token", boom)
    r = TestClient(_make_app()).get("/private", headers={"Authorization": "Bearer old"})
    assert r.status_code == 401

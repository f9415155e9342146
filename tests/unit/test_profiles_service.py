from unittest.mock import MagicMock

import pytest
from fastapi import HTTPException

from rewear.profiles import service
from rewear.profiles.models import ProfileUpdate


def test_avatar_path_is_scoped_to_user():
    path = service.avatar_path("u1")
    folder, name = path.split("/")
    assert folder == "u1"
    assert name


def test_upload_avatar_updates_profile(monkeypatch, fake_user):
    uploads = []

    def upload(path, content, content_type, user_token=None):
        uploads.append(path)
        return f"https://cdn.example/{path}"

    update = MagicMock(return_value=True)
    monkeypatch.setattr(service.repository, "upload_avatar", upload)
    monkeypatch.setattr(service.repository, "update_profile", update)
    monkeypatch.setattr(service.repository, "get_profile", lambda uid, user_token=None: {"id": uid, "avatar_url": "x"})

    url = service.upload_avatar(fake_user, b"png-bytes", "image/png")

    assert url == f"https://cdn.example/{uploads[0]}"
    assert uploads[0].startswith("test-user/")
    changes = update.call_args.args[1]
    assert changes["avatar_url"] == url
    assert "updated_at" in changes


def test_empty_avatar_is_rejected(fake_user):
    with pytest.raises(HTTPException) as exc:
        service.upload_avatar(fake_user, b"", "image/png")
    assert exc.value.status_code == 400


def test_missing_profile_is_404(monkeypatch, fake_user):
    monkeypatch.setattr(service.repository, "get_profile", lambda *a, **k: None)
    with pytest.raises(HTTPException) as exc:
        service.update_profile(fake_user, ProfileUpdate())
    assert exc.value.status_code == 404

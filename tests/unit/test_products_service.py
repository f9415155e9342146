import re
from unittest.mock import MagicMock

import pytest
from fastapi import HTTPException

from rewear.products import service
from rewear.products.models import Product, ProductCreate, ProductUpdate

OWNED = {"id": "p1", "owner_id": "test-user", "title": "Robe", "price": 100, "deposit": 500}


def test_product_amounts_are_never_negative():
    product = Product.model_validate({"id": 1, "owner_id": 2, "price": None, "deposit": "-5"})
    assert product.id == "1"
    assert product.price == 0
    assert product.deposit == 0
    assert product.title == ""


def test_create_sets_owner(monkeypatch, fake_user):
    insert = MagicMock(side_effect=lambda data, user_token=None: {"id": "p9", **data})
    monkeypatch.setattr(service.repository, "insert_product", insert)
    product = service.create_product(fake_user, ProductCreate(title="Veste", price=40))
    assert product.owner_id == "test-user"
    assert insert.call_args.kwargs["user_token"] == "fake-token"


def test_update_rereads_when_no_row_returned(monkeypatch, fake_user):
    monkeypatch.setattr(service.repository, "get_product", lambda pid: OWNED)
    monkeypatch.setattr(service.repository, "update_product", lambda *a, **k: None)
    product = service.update_product(fake_user, "p1", ProductUpdate(price=120))
    assert product.id == "p1"


def test_update_by_stranger_is_forbidden(monkeypatch, fake_user):
    monkeypatch.setattr(service.repository, "get_product", lambda pid: {**OWNED, "owner_id": "someone"})
    with pytest.raises(HTTPException) as exc:
        service.update_product(fake_user, "p1", ProductUpdate(price=1))
    assert exc.value.status_code == 403


def test_image_path_is_timestamped_and_dashed():
    assert re.fullmatch(r"\d+-robe-de-soiree\.jpg", service.image_path("robe de  soiree.jpg"))

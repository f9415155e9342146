from unittest.mock import MagicMock

import pytest
from fastapi import HTTPException

from rewear.cart import service

ROW = {
    "id": "c1",
    "product_id": "p1",
    "rental_start_date": "2024-06-01",
    "rental_end_date": "2024-06-03",
    "products": {"id": "p1", "owner_id": "o1", "title": "Robe", "price": 100, "deposit": 500},
}


def test_adding_existing_product_updates_dates(monkeypatch, fake_user):
    insert = MagicMock()
    update = MagicMock(return_value=True)
    monkeypatch.setattr(service.repository, "find_cart_row", lambda *a, **k: ROW)
    monkeypatch.setattr(service.repository, "insert_cart_item", insert)
    monkeypatch.setattr(service.repository, "update_cart_dates", update)

    service.add_to_cart(fake_user, "p1", "2024-06-10", "2024-06-12")

    insert.assert_not_called()
    update.assert_called_once_with("test-user", "p1", "2024-06-10", "2024-06-12", user_token="fake-token")


def test_adding_new_product_inserts_once(monkeypatch, fake_user):
    rows = []

    def find(uid, pid, user_token=None):
        return ROW if rows else None

    def insert(data, user_token=None):
        rows.append(data)
        return {"id": "c1"}

    monkeypatch.setattr(service.repository, "find_cart_row", find)
    monkeypatch.setattr(service.repository, "insert_cart_item", insert)

    item = service.add_to_cart(fake_user, "p1")

    assert item.id == "c1"
    assert item.product.title == "Robe"
    assert rows == [{"user_id": "test-user", "product_id": "p1", "rental_start_date": None, "rental_end_date": None}]


def test_invalid_rental_date_is_rejected(fake_user):
    with pytest.raises(HTTPException) as exc:
        service.add_to_cart(fake_user, "p1", "demain", None)
    assert exc.value.status_code == 400


def test_summary_uses_configured_policy_and_fees(monkeypatch, fake_user):
    monkeypatch.setattr(service.repository, "fetch_cart_rows", lambda *a, **k: [ROW])
    monkeypatch.setattr(service, "CART_PRICING_POLICY", "per_day")
    monkeypatch.setattr(service, "DELIVERY_FEE", 0.0)
    monkeypatch.setattr(service, "SERVICE_FEE_RATE", 0.0)

    totals = service.get_cart_summary(fake_user)

    assert totals.policy == "per_day"
    assert totals.subtotal == 200
    assert totals.deposit == 500
    assert totals.total == 700


def test_clear_cart_failure_is_502(monkeypatch, fake_user):
    monkeypatch.setattr(service.repository, "delete_user_cart", lambda *a, **k: False)
    with pytest.raises(HTTPException) as exc:
        service.clear_cart(fake_user)
    assert exc.value.status_code == 502

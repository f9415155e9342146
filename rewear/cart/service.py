"""
Cas d'usage 'cart': lecture, ajout (unique par produit), dates de location, résumé chiffré.
"""
from typing import Any, Dict, List, Optional
import logging

from fastapi import HTTPException

from rewear.config import CART_PRICING_POLICY, DELIVERY_FEE, SERVICE_FEE_RATE
from rewear.utils.records import parse_datetime, parse_row, parse_rows
from . import repository
from .models import CartItem, CartTotals
from .pricing import PricingPolicy, compute_totals

logger = logging.getLogger(__name__)

def _check_date(value: Optional[str], field: str) -> Optional[str]:
    if value in (None, ""):
        return None
    if parse_datetime(value) is None:
        raise HTTPException(status_code=400, detail=f"Date invalide: {field}")
    return value

def get_cart(user: Dict[str, Any]) -> List[CartItem]:
    return parse_rows(CartItem, repository.fetch_cart_rows(user["id"], user_token=user.get("token")))

def add_to_cart(
    user: Dict[str, Any],
    product_id: str,
    rental_start_date: Optional[str] = None,
    rental_end_date: Optional[str] = None,
) -> CartItem:
    """Ajoute un produit au panier. S'il y est déjà, seules ses dates sont mises à jour."""
    start = _check_date(rental_start_date, "rental_start_date")
    end = _check_date(rental_end_date, "rental_end_date")
    token = user.get("token")
    existing = parse_row(CartItem, repository.find_cart_row(user["id"], product_id, user_token=token))
    if existing:
        wanted = (parse_datetime(start), parse_datetime(end))
        if wanted != (existing.rental_start_date, existing.rental_end_date) and (start or end):
            return update_rental_dates(user, product_id, start, end)
        return existing

    row = repository.insert_cart_item(
        {
            "user_id": user["id"],
            "product_id": product_id,
            "rental_start_date": start,
            "rental_end_date": end,
        },
        user_token=token,
    )
    if row is None:
        raise HTTPException(status_code=502, detail="Impossible d'ajouter au panier")
    item = parse_row(CartItem, repository.find_cart_row(user["id"], product_id, user_token=token))
    logger.info("cart.add user_id=%s product_id=%s", user.get("id"), product_id)
    return item or CartItem(
        id=str(row.get("id") or ""),
        product_id=product_id,
        rental_start_date=start,
        rental_end_date=end,
    )

def update_rental_dates(
    user: Dict[str, Any],
    product_id: str,
    rental_start_date: Optional[str],
    rental_end_date: Optional[str],
) -> CartItem:
    start = _check_date(rental_start_date, "rental_start_date")
    end = _check_date(rental_end_date, "rental_end_date")
    token = user.get("token")
    if not repository.update_cart_dates(user["id"], product_id, start, end, user_token=token):
        raise HTTPException(status_code=502, detail="Impossible de mettre à jour les dates")
    item = parse_row(CartItem, repository.find_cart_row(user["id"], product_id, user_token=token))
    if not item:
        raise HTTPException(status_code=404, detail="Article absent du panier")
    return item

def remove_from_cart(user: Dict[str, Any], product_id: str) -> None:
    if not repository.delete_cart_item(user["id"], product_id, user_token=user.get("token")):
        raise HTTPException(status_code=502, detail="Impossible de retirer du panier")

def clear_cart(user: Dict[str, Any]) -> None:
    if not repository.delete_user_cart(user["id"], user_token=user.get("token")):
        raise HTTPException(status_code=502, detail="Impossible de vider le panier")

def summarize(items: List[CartItem], policy: Optional[PricingPolicy] = None) -> CartTotals:
    return compute_totals(
        items,
        policy=policy or PricingPolicy.from_config(CART_PRICING_POLICY),
        delivery_fee=DELIVERY_FEE,
        service_fee_rate=SERVICE_FEE_RATE,
    )

def get_cart_summary(user: Dict[str, Any], policy: Optional[PricingPolicy] = None) -> CartTotals:
    return summarize(get_cart(user), policy)

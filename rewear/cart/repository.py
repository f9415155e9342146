"""
Accès aux données du panier (table 'cart_items', jointure 'products').
"""
from typing import Any, Dict, List, Optional
import logging
import rewear.infra.supabase_client as supabase_client
from rewear.utils.records import first_row

logger = logging.getLogger(__name__)

CART_SELECT = "id, product_id, rental_start_date, rental_end_date, products (*)"

def fetch_cart_rows(user_id: str, user_token: Optional[str] = None) -> List[dict]:
    if not user_id:
        return []
    try:
        res = (
            supabase_client.client_for(user_token)
            .table("cart_items")
            .select(CART_SELECT)
            .eq("user_id", user_id)
            .execute()
        )
        return res.data or []
    except Exception:
        logger.exception("cart.repository.fetch_cart_rows failed user_id=%s", user_id)
        return []

def find_cart_row(user_id: str, product_id: str, user_token: Optional[str] = None) -> Optional[dict]:
    try:
        res = (
            supabase_client.client_for(user_token)
            .table("cart_items")
            .select(CART_SELECT)
            .match({"user_id": user_id, "product_id": product_id})
            .limit(1)
            .execute()
        )
        return first_row(res)
    except Exception:
        logger.exception("cart.repository.find_cart_row failed user_id=%s product_id=%s", user_id, product_id)
        return None

def insert_cart_item(data: Dict[str, Any], user_token: Optional[str] = None) -> Optional[dict]:
    try:
        res = supabase_client.client_for(user_token).table("cart_items").insert(data).execute()
        return first_row(res) or {"status": "ok"}
    except Exception:
        logger.exception("cart.repository.insert_cart_item failed user_id=%s product_id=%s", data.get("user_id"), data.get("product_id"))
        return None

def update_cart_dates(
    user_id: str,
    product_id: str,
    start: Optional[str],
    end: Optional[str],
    user_token: Optional[str] = None,
) -> bool:
    try:
        (
            supabase_client.client_for(user_token)
            .table("cart_items")
            .update({"rental_start_date": start, "rental_end_date": end})
            .match({"user_id": user_id, "product_id": product_id})
            .execute()
        )
        return True
    except Exception:
        logger.exception("cart.repository.update_cart_dates failed user_id=%s product_id=%s", user_id, product_id)
        return False

def delete_cart_item(user_id: str, product_id: str, user_token: Optional[str] = None) -> bool:
    try:
        (
            supabase_client.client_for(user_token)
            .table("cart_items")
            .delete()
            .match({"user_id": user_id, "product_id": product_id})
            .execute()
        )
        return True
    except Exception:
        logger.exception("cart.repository.delete_cart_item failed user_id=%s product_id=%s", user_id, product_id)
        return False

def delete_user_cart(user_id: str, user_token: Optional[str] = None) -> bool:
    try:
        supabase_client.client_for(user_token).table("cart_items").delete().eq("user_id", user_id).execute()
        return True
    except Exception:
        logger.exception("cart.repository.delete_user_cart failed user_id=%s", user_id)
        return False

"""
Accès aux données des favoris (table 'favorites', unique par (user_id, product_id)).
"""
from typing import List, Optional
import logging
import rewear.infra.supabase_client as supabase_client

logger = logging.getLogger(__name__)

def list_favorite_ids(user_id: str, user_token: Optional[str] = None) -> List[str]:
    if not user_id:
        return []
    try:
        res = (
            supabase_client.client_for(user_token)
            .table("favorites")
            .select("product_id")
            .eq("user_id", user_id)
            .execute()
        )
        return [str(r.get("product_id")) for r in (res.data or []) if r.get("product_id")]
    except Exception:
        logger.exception("favorites.repository.list_favorite_ids failed user_id=%s", user_id)
        return []

def is_favorite(user_id: str, product_id: str, user_token: Optional[str] = None) -> bool:
    try:
        res = (
            supabase_client.client_for(user_token)
            .table("favorites")
            .select("id")
            .match({"user_id": user_id, "product_id": product_id})
            .limit(1)
            .execute()
        )
        return bool(res.data)
    except Exception:
        logger.exception("favorites.repository.is_favorite failed user_id=%s product_id=%s", user_id, product_id)
        return False

def insert_favorite(user_id: str, product_id: str, user_token: Optional[str] = None) -> bool:
    try:
        (
            supabase_client.client_for(user_token)
            .table("favorites")
            .insert({"user_id": user_id, "product_id": product_id})
            .execute()
        )
        return True
    except Exception:
        logger.exception("favorites.repository.insert_favorite failed user_id=%s product_id=%s", user_id, product_id)
        return False

def delete_favorite(user_id: str, product_id: str, user_token: Optional[str] = None) -> bool:
    try:
        (
            supabase_client.client_for(user_token)
            .table("favorites")
            .delete()
            .match({"user_id": user_id, "product_id": product_id})
            .execute()
        )
        return True
    except Exception:
        logger.exception("favorites.repository.delete_favorite failed user_id=%s product_id=%s", user_id, product_id)
        return False

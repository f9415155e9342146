"""
Accès aux données pour le catalogue (table 'products', bucket d'images).
Les erreurs sont journalisées et transformées en valeurs neutres ([], None, False).
"""
from typing import Any, Dict, List, Optional
import logging
import rewear.infra.supabase_client as supabase_client
from rewear.config import PRODUCT_IMAGES_BUCKET
from rewear.utils.records import first_row

logger = logging.getLogger(__name__)

def list_products() -> List[dict]:
    """Tous les produits, plus récents d'abord."""
    try:
        res = (
            supabase_client.get_supabase()
            .table("products")
            .select("*")
            .order("created_at", desc=True)
            .execute()
        )
        return res.data or []
    except Exception:
        logger.exception("products.repository.list_products failed")
        return []

def list_products_by_owner(owner_id: str) -> List[dict]:
    if not owner_id:
        return []
    try:
        res = (
            supabase_client.get_supabase()
            .table("products")
            .select("*")
            .eq("owner_id", owner_id)
            .order("created_at", desc=True)
            .execute()
        )
        return res.data or []
    except Exception:
        logger.exception("products.repository.list_products_by_owner failed owner_id=%s", owner_id)
        return []

def fetch_products_by_ids(ids: List[str]) -> List[dict]:
    if not ids:
        return []
    try:
        res = (
            supabase_client.get_supabase()
            .table("products")
            .select("*")
            .in_("id", [str(i) for i in ids])
            .execute()
        )
        return res.data or []
    except Exception:
        logger.exception("products.repository.fetch_products_by_ids failed ids=%s", ids)
        return []

def get_product(product_id: str) -> Optional[dict]:
    if not product_id:
        return None
    try:
        res = (
            supabase_client.get_supabase()
            .table("products")
            .select("*")
            .eq("id", product_id)
            .limit(1)
            .execute()
        )
        return first_row(res)
    except Exception:
        logger.exception("products.repository.get_product failed id=%s", product_id)
        return None

def insert_product(data: Dict[str, Any], user_token: Optional[str] = None) -> Optional[dict]:
    try:
        res = supabase_client.client_for(user_token).table("products").insert(data).execute()
        return first_row(res)
    except Exception:
        logger.exception("products.repository.insert_product failed owner_id=%s", data.get("owner_id"))
        return None

def update_product(product_id: str, data: Dict[str, Any], user_token: Optional[str] = None) -> Optional[dict]:
    try:
        res = (
            supabase_client.client_for(user_token)
            .table("products")
            .update(data)
            .eq("id", product_id)
            .execute()
        )
        return first_row(res)
    except Exception:
        logger.exception("products.repository.update_product failed id=%s", product_id)
        return None

def delete_product(product_id: str, user_token: Optional[str] = None) -> bool:
    try:
        supabase_client.client_for(user_token).table("products").delete().eq("id", product_id).execute()
        return True
    except Exception:
        logger.exception("products.repository.delete_product failed id=%s", product_id)
        return False

def upload_image(path: str, content: bytes, content_type: str, user_token: Optional[str] = None) -> Optional[str]:
    """Téléverse l'image puis retourne son URL publique (None si échec)."""
    try:
        bucket = supabase_client.client_for(user_token).storage.from_(PRODUCT_IMAGES_BUCKET)
        bucket.upload(path, content, {"content-type": content_type or "application/octet-stream"})
        return bucket.get_public_url(path)
    except Exception:
        logger.exception("products.repository.upload_image failed path=%s", path)
        return None

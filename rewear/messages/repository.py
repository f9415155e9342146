"""
Accès à la table 'messages' (client Supabase authentifié par le jeton utilisateur, RLS).
"""
from typing import Any, Dict, List, Optional
import logging
import rewear.infra.supabase_client as supabase_client
from rewear.utils.records import first_row

logger = logging.getLogger(__name__)

PARTICIPANT = "username, full_name, avatar_url"
CONVERSATION_SELECT = (
    f"*, sender:sender_id ({PARTICIPANT}), receiver:receiver_id ({PARTICIPANT}), "
    "product:product_id (title, image_url)"
)
THREAD_SELECT = f"*, sender:sender_id ({PARTICIPANT})"

def _involving(user_id: str) -> str:
    return f"sender_id.eq.{user_id},receiver_id.eq.{user_id}"

def insert_message(data: Dict[str, Any], user_token: Optional[str] = None) -> Optional[dict]:
    try:
        res = supabase_client.client_for(user_token).table("messages").insert(data).execute()
        return first_row(res)
    except Exception:
        logger.exception("messages.repository.insert_message failed sender_id=%s", data.get("sender_id"))
        return None

def fetch_messages_by_product(user_id: str, product_id: str, user_token: Optional[str] = None) -> List[dict]:
    try:
        res = (
            supabase_client.client_for(user_token)
            .table("messages")
            .select(THREAD_SELECT)
            .eq("product_id", product_id)
            .or_(_involving(user_id))
            .order("created_at")
            .execute()
        )
        return res.data or []
    except Exception:
        logger.exception("messages.repository.fetch_messages_by_product failed product_id=%s", product_id)
        return []

def fetch_user_messages(user_id: str, user_token: Optional[str] = None) -> List[dict]:
    """Tous les messages envoyés ou reçus, du plus récent au plus ancien."""
    try:
        res = (
            supabase_client.client_for(user_token)
            .table("messages")
            .select(CONVERSATION_SELECT)
            .or_(_involving(user_id))
            .order("created_at", desc=True)
            .execute()
        )
        return res.data or []
    except Exception:
        logger.exception("messages.repository.fetch_user_messages failed user_id=%s", user_id)
        return []

def mark_read(
    receiver_id: str,
    sender_id: str,
    product_id: Optional[str] = None,
    user_token: Optional[str] = None,
) -> bool:
    try:
        query = (
            supabase_client.client_for(user_token)
            .table("messages")
            .update({"read": True})
            .eq("sender_id", sender_id)
            .eq("receiver_id", receiver_id)
        )
        # Le fil général (sans produit) ne touche pas aux fils par produit
        if product_id:
            query = query.eq("product_id", product_id)
        else:
            query = query.is_("product_id", "null")
        query.execute()
        return True
    except Exception:
        logger.exception("messages.repository.mark_read failed receiver_id=%s sender_id=%s", receiver_id, sender_id)
        return False

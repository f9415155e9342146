"""
Accès aux données pour la feature 'payments' (table 'orders').
Écritures via la clé de service: le statut 'paid' ne doit pas être modifiable par le client.
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
import logging
import rewear.infra.supabase_client as supabase_client
from rewear.utils.records import first_row

logger = logging.getLogger(__name__)

def insert_order(data: Dict[str, Any]) -> Optional[dict]:
    try:
        res = supabase_client.get_service_supabase().table("orders").insert(data).execute()
        return first_row(res)
    except Exception:
        logger.exception("payments.repository.insert_order failed user_id=%s", data.get("user_id"))
        return None

def get_order(db_order_id: str) -> Optional[dict]:
    if not db_order_id:
        return None
    try:
        res = (
            supabase_client.get_service_supabase()
            .table("orders")
            .select("*")
            .eq("id", db_order_id)
            .limit(1)
            .execute()
        )
        return first_row(res)
    except Exception:
        logger.exception("payments.repository.get_order failed id=%s", db_order_id)
        return None

def mark_order_paid(db_order_id: str, gateway_order_id: str, payment_id: str) -> Optional[dict]:
    """Passe l'ordre en 'paid' si (id, razorpay_order_id) correspondent."""
    try:
        res = (
            supabase_client.get_service_supabase()
            .table("orders")
            .update({
                "status": "paid",
                "payment_id": payment_id,
                "updated_at": datetime.now(timezone.utc).isoformat(),
            })
            .eq("id", db_order_id)
            .eq("razorpay_order_id", gateway_order_id)
            .execute()
        )
        return first_row(res)
    except Exception:
        logger.exception("payments.repository.mark_order_paid failed id=%s", db_order_id)
        return None

def list_user_orders(user_id: str) -> List[dict]:
    if not user_id:
        return []
    try:
        res = (
            supabase_client.get_service_supabase()
            .table("orders")
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .execute()
        )
        return res.data or []
    except Exception:
        logger.exception("payments.repository.list_user_orders failed user_id=%s", user_id)
        return []

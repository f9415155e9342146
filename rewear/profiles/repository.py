"""Accès aux profils publics (table 'profiles') et au bucket des avatars."""
from typing import Any, Dict, Optional
import logging
import rewear.infra.supabase_client as supabase_client
from rewear.config import AVATARS_BUCKET
from rewear.utils.records import first_row

logger = logging.getLogger(__name__)

def get_profile(user_id: str, user_token: Optional[str] = None) -> Optional[dict]:
    if not user_id:
        return None
    try:
        res = (
            supabase_client.client_for(user_token)
            .table("profiles")
            .select("*")
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
        return first_row(res)
    except Exception:
        logger.exception("profiles.repository.get_profile failed user_id=%s", user_id)
        return None

def update_profile(user_id: str, changes: Dict[str, Any], user_token: Optional[str] = None) -> bool:
    try:
        supabase_client.client_for(user_token).table("profiles").update(changes).eq("id", user_id).execute()
        return True
    except Exception:
        logger.exception("profiles.repository.update_profile failed user_id=%s", user_id)
        return False

def upload_avatar(path: str, content: bytes, content_type: str, user_token: Optional[str] = None) -> Optional[str]:
    """Upload (upsert) puis URL publique."""
    try:
        bucket = supabase_client.client_for(user_token).storage.from_(AVATARS_BUCKET)
        bucket.upload(path, content, {"content-type": content_type or "application/octet-stream", "upsert": "true"})
        return bucket.get_public_url(path)
    except Exception:
        logger.exception("profiles.repository.upload_avatar failed path=%s", path)
        return None

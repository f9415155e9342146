from datetime import datetime, timezone
from typing import Any, Dict
import logging
import uuid

from fastapi import HTTPException

from rewear.utils.records import parse_row
from . import repository
from .models import Profile, ProfileUpdate

logger = logging.getLogger(__name__)

def get_profile(user: Dict[str, Any]) -> Profile:
    profile = parse_row(Profile, repository.get_profile(user["id"], user_token=user.get("token")))
    if not profile:
        raise HTTPException(status_code=404, detail="Profil introuvable")
    return profile

def update_profile(user: Dict[str, Any], data: ProfileUpdate) -> Profile:
    changes = data.model_dump(exclude_unset=True)
    if changes:
        changes["updated_at"] = datetime.now(timezone.utc).isoformat()
        if not repository.update_profile(user["id"], changes, user_token=user.get("token")):
            raise HTTPException(status_code=502, detail="Impossible de mettre à jour le profil")
    return get_profile(user)

def avatar_path(user_id: str) -> str:
    """<user_id>/<aléatoire>: un dossier par utilisateur."""
    return f"{user_id}/{uuid.uuid4().hex[:12]}"

def upload_avatar(user: Dict[str, Any], content: bytes, content_type: str) -> str:
    if not content:
        raise HTTPException(status_code=400, detail="Fichier vide")
    url = repository.upload_avatar(avatar_path(user["id"]), content, content_type, user_token=user.get("token"))
    if not url:
        raise HTTPException(status_code=502, detail="Échec du téléversement de l'avatar")
    update_profile(user, ProfileUpdate(avatar_url=url))
    logger.info("profiles.avatar user_id=%s", user["id"])
    return url

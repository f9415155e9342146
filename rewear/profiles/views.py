from typing import Any, Dict

from fastapi import APIRouter, Depends, File, UploadFile

from rewear.utils.rate_limit import optional_rate_limit
from rewear.utils.security import require_user
from . import service
from .models import Profile, ProfileUpdate

router = APIRouter(prefix="/api/v1/profile", tags=["Profile API"])

@router.get("", response_model=Profile)
def get_profile(user: Dict[str, Any] = Depends(require_user)):
    return service.get_profile(user)

@router.patch("", response_model=Profile)
def update_profile(body: ProfileUpdate, user: Dict[str, Any] = Depends(require_user)):
    return service.update_profile(user, body)

@router.post("/avatar", dependencies=[Depends(optional_rate_limit(times=5, seconds=60))])
async def upload_avatar(file: UploadFile = File(...), user: Dict[str, Any] = Depends(require_user)):
    content = await file.read()
    return {"avatar_url": service.upload_avatar(user, content, file.content_type or "")}

from fastapi import Request, HTTPException, Depends
from fastapi.responses import Response
from typing import Dict, Any, Optional
from rewear.config import COOKIE_SECURE

COOKIE_NAME = "sb_access"
# Le refresh_token n'est envoyé qu'aux routes d'auth
REFRESH_COOKIE_NAME = "sb_refresh"
REFRESH_COOKIE_PATH = "/api/v1/auth"

def set_session_cookie(response: Response, access_token: str, refresh_token: Optional[str] = None):
    response.set_cookie(
        key=COOKIE_NAME,
        value=access_token,
        httponly=True,
        secure=COOKIE_SECURE,
        samesite="Lax",
        max_age=60 * 60,
        path="/",
    )
    if refresh_token:
        response.set_cookie(
            key=REFRESH_COOKIE_NAME,
            value=refresh_token,
            httponly=True,
            secure=COOKIE_SECURE,
            samesite="Strict",
            max_age=30 * 24 * 60 * 60,
            path=REFRESH_COOKIE_PATH,
        )

def clear_session_cookie(response: Response):
    response.delete_cookie(COOKIE_NAME, path="/")
    response.delete_cookie(REFRESH_COOKIE_NAME, path=REFRESH_COOKIE_PATH)

def extract_token(request: Request) -> str:
    # Hybride: priorité au Bearer, fallback cookie
    token = ""
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        token = auth_header[7:].strip()
    if not token:
        token = request.cookies.get(COOKIE_NAME) or ""
    return token

def get_current_user(request: Request) -> Dict[str, Any]:
    token = extract_token(request)
    # Court-circuit local: aucun appel réseau sans token
    if not token:
        raise HTTPException(status_code=401, detail="Non authentifié")

    try:
        from rewear.auth.service import get_user_from_token as _svc_get_user_from_token
        user = _svc_get_user_from_token(token)
        if not user.get("id"):
            raise HTTPException(status_code=401, detail="Session expirée, veuillez vous connecter")
        return user
    except HTTPException:
        raise
    except Exception:
        raise HTTPException(status_code=401, detail="Session expirée, veuillez vous connecter")

def require_user(user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
    return user

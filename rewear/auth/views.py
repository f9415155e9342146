from fastapi import APIRouter, HTTPException, Depends, Request, Response
from pydantic import BaseModel, EmailStr, Field
from typing import Optional, Dict, Any

from rewear.utils.security import (
    REFRESH_COOKIE_NAME,
    require_user,
    set_session_cookie,
    clear_session_cookie,
)
from rewear.utils.rate_limit import optional_rate_limit
from rewear.utils.dependencies import get_auth_sessions
from rewear.auth.session import AuthSessionManager
from .service import (
    login as svc_login,
    signup as svc_signup,
    refresh as svc_refresh,
    logout as svc_logout,
)

api_router = APIRouter(prefix="/api/v1/auth", tags=["Auth API"])

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class SignupRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    username: str = Field(min_length=1)
    full_name: Optional[str] = None

class RefreshRequest(BaseModel):
    refresh_token: Optional[str] = None

def _session_payload(result) -> Dict[str, Any]:
    return {"access_token": result.access_token, "token_type": "bearer", "user": result.user}

@api_router.post("/login", dependencies=[Depends(optional_rate_limit(times=5, seconds=60))])
def api_login(req: LoginRequest, response: Response, sessions: AuthSessionManager = Depends(get_auth_sessions)):
    """Connexion (API JSON).
    - Délègue au service (svc_login), qui persiste la session dans le store injecté.
    - Pose le cookie de session (sb_access) et retourne {access_token, token_type, user}.
    """
    result = svc_login(sessions, req.email, req.password)
    if not result.success:
        raise HTTPException(status_code=401, detail=result.error or "Identifiants invalides")
    set_session_cookie(response, result.access_token, result.refresh_token)
    return _session_payload(result)

@api_router.post("/signup", dependencies=[Depends(optional_rate_limit(times=3, seconds=60))])
def api_signup(req: SignupRequest, response: Response, sessions: AuthSessionManager = Depends(get_auth_sessions)):
    """Inscription (API JSON).
    - Si Supabase renvoie directement une session: cookie + JSON de session.
    - Sinon: message demandant la confirmation d’email.
    """
    result = svc_signup(sessions, req.email, req.password, username=req.username, full_name=req.full_name)
    if not result.success:
        raise HTTPException(status_code=400, detail=result.error or "Erreur inscription")
    if result.access_token:
        set_session_cookie(response, result.access_token, result.refresh_token)
        return _session_payload(result)
    return {"message": result.error or "Inscription réussie, vérifiez votre email"}

@api_router.get("/me")
def api_me(user: Dict[str, Any] = Depends(require_user)):
    """Retourne l’utilisateur courant après contrôle de session via require_user."""
    return {
        "id": user["id"],
        "email": user.get("email"),
        "username": user.get("username"),
        "full_name": user.get("full_name"),
        "metadata": user.get("metadata") or {},
    }

@api_router.post("/refresh", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
def api_refresh(
    request: Request,
    response: Response,
    body: Optional[RefreshRequest] = None,
    sessions: AuthSessionManager = Depends(get_auth_sessions),
):
    """Renouvelle la session à partir du refresh_token.
    - Source: corps JSON {refresh_token} sinon cookie sb_refresh (posé au login/signup)
    - Le jeton d'accès n'est pas vérifié: il est typiquement expiré à ce stade
    """
    refresh_token = (body.refresh_token if body else None) or request.cookies.get(REFRESH_COOKIE_NAME)
    if not refresh_token:
        raise HTTPException(status_code=401, detail="Aucune session à rafraîchir")
    result = svc_refresh(sessions, refresh_token)
    if not result.success:
        raise HTTPException(status_code=401, detail=result.error or "Session expirée, veuillez vous connecter")
    set_session_cookie(response, result.access_token, result.refresh_token)
    return _session_payload(result)

@api_router.post("/logout")
def api_logout(
    response: Response,
    user: Dict[str, Any] = Depends(require_user),
    sessions: AuthSessionManager = Depends(get_auth_sessions),
):
    """Révoque la session, purge les clés persistées et supprime le cookie (sb_access)."""
    cleared = svc_logout(sessions, user)
    clear_session_cookie(response)
    return {"message": "Déconnexion réussie", "cleared": cleared}

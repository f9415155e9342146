from typing import Optional, Dict, Any
from rewear.auth.models import AuthResponse, handle_exception
from rewear.auth.session import AuthSessionManager
from .repository import get_user_from_access_token as _repo_get_user_from_token

# --- Cas d’usage Auth exposés ---

def login(sessions: AuthSessionManager, email: str, password: str) -> AuthResponse:
    """Connexion:
    - Délègue à supabase.auth.sign_in_with_password via le gestionnaire de session
    - Persiste la session dans le store injecté
    - Message de fallback: identifiants invalides ou email non confirmé
    """
    try:
        email = (email or "").strip()
        return sessions.sign_in(email, password)
    except Exception as e:
        return handle_exception("sign_in", e)

def signup(
    sessions: AuthSessionManager,
    email: str,
    password: str,
    username: Optional[str] = None,
    full_name: Optional[str] = None,
) -> AuthResponse:
    """Inscription:
    - Injecte username et full_name dans user_metadata (le profil est créé côté base)
    - Retourne soit une session (access_token) soit un message invitant à confirmer l’email
    - Capture et transforme les erreurs "utilisateur existe déjà"
    """
    try:
        email = (email or "").strip()
        options_data: Dict[str, Any] = {}
        if username:
            options_data["username"] = username.strip()
        options_data["full_name"] = (full_name or "").strip()
        return sessions.sign_up(email, password, options_data=options_data)
    except Exception as e:
        msg = str(e).lower()
        if any(k in msg for k in ["already", "register", "exists", "database error saving new user", "23505"]):
            return AuthResponse(False, error="Utilisateur existe déjà")
        return handle_exception("sign_up", e)

def refresh(sessions: AuthSessionManager, refresh_token: str) -> AuthResponse:
    try:
        return sessions.refresh((refresh_token or "").strip())
    except Exception as e:
        return handle_exception("refresh_session", e)

def logout(sessions: AuthSessionManager, user: Dict[str, Any]) -> int:
    """Déconnexion: révocation distante best-effort puis purge des clés de session."""
    return sessions.sign_out(user.get("id") or "", user.get("token"))

def get_user_from_token(access_token: str) -> Dict[str, Any]:
    """Normalise user issu de supabase.auth.get_user(access_token):
    - Retourne {id, email, username, full_name, metadata, token}
    """
    raw = _repo_get_user_from_token(access_token)
    metadata = raw.get("user_metadata") or {}
    return {
        "id": raw.get("id"),
        "email": raw.get("email"),
        "username": metadata.get("username"),
        "full_name": metadata.get("full_name"),
        "metadata": metadata,
        "token": access_token,
    }

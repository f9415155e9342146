from typing import Optional, Dict, Any
import httpx
from rewear.config import SUPABASE_URL, SUPABASE_ANON
from rewear.infra.supabase_client import get_supabase

# --- Auth (supabase.auth.*) ---

def auth_sign_in_password(email: str, password: str):
    """Wrapper Supabase Auth: connexion par email/mot de passe (GoTrue)."""
    client = get_supabase()
    return client.auth.sign_in_with_password({"email": email, "password": password})

def auth_sign_up_account(
    email: str,
    password: str,
    options_data: Optional[Dict[str, Any]] = None,
    email_redirect_to: Optional[str] = None
):
    """Wrapper Supabase Auth: inscription d’un compte.
    - options.data: metadata (username, full_name)
    - options.email_redirect_to: URL de confirmation
    """
    client = get_supabase()
    credentials: Dict[str, Any] = {"email": email, "password": password}
    options: Dict[str, Any] = {}
    if options_data:
        options["data"] = options_data
    if email_redirect_to:
        options["email_redirect_to"] = email_redirect_to
    if options:
        credentials["options"] = options
    return client.auth.sign_up(credentials)

def auth_refresh_session(refresh_token: str):
    """Échange un refresh_token contre une nouvelle session."""
    return get_supabase().auth.refresh_session(refresh_token)

def auth_sign_out(access_token: str):
    """Appel direct GoTrue POST /auth/v1/logout (Bearer utilisateur).
    Le client partagé n'est pas touché: seule la session du token est révoquée.
    """
    url = f"{SUPABASE_URL.rstrip('/')}/auth/v1/logout"
    headers = {
        "Authorization": f"Bearer {access_token}",
        "apikey": SUPABASE_ANON,
    }
    return httpx.post(url, headers=headers, timeout=10)

def get_user_from_access_token(access_token: str) -> Dict[str, Any]:
    """Récupère et normalise l’utilisateur depuis supabase.auth.get_user(access_token)."""
    res = get_supabase().auth.get_user(access_token)
    user = getattr(res, "user", None) or {}
    if not isinstance(user, dict):
        user = {
            "id": getattr(user, "id", None),
            "email": getattr(user, "email", None),
            "user_metadata": getattr(user, "user_metadata", None),
        }
    return user or {}

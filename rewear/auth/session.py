"""
Gestionnaire de session d'authentification.

Enveloppe le cycle de vie session/token de Supabase Auth et persiste la session
courante de chaque utilisateur dans un SessionStore injecté, sous les clés
`<prefix><user_id>:...`, jusqu'à l'expiration du jeton d'accès (expires_at).
La déconnexion supprime toutes les clés de ce préfixe.
"""
import logging
import time
from typing import Any, Dict, Optional

from rewear.config import AUTH_STORAGE_PREFIX, SESSION_TTL_SECONDS, SIGNUP_REDIRECT_URL
from rewear.infra.session_store import SessionStore
from . import repository
from .models import AuthResponse, make_auth_response

logger = logging.getLogger(__name__)


class AuthSessionManager:
    def __init__(self, store: SessionStore, prefix: str = AUTH_STORAGE_PREFIX, default_ttl: int = SESSION_TTL_SECONDS):
        self.store = store
        self.prefix = prefix
        self.default_ttl = default_ttl

    def user_prefix(self, user_id: str) -> str:
        return f"{self.prefix}{user_id}:"

    def _session_key(self, user_id: str) -> str:
        return f"{self.user_prefix(user_id)}session"

    def session_ttl(self, session: Dict[str, Any]) -> int:
        """Secondes restantes avant expires_at (epoch); durée par défaut si absent."""
        expires_at = session.get("expires_at")
        if not expires_at:
            return self.default_ttl
        return int(float(expires_at) - time.time())

    def persist(self, result: AuthResponse) -> AuthResponse:
        user_id = (result.user or {}).get("id")
        if result.success and user_id and result.session:
            key = self._session_key(user_id)
            ttl = self.session_ttl(result.session)
            if ttl <= 0:
                logger.warning("auth.persist: session déjà expirée user_id=%s", user_id)
                self.store.delete(key)
            else:
                self.store.set(key, {**result.session, "user": result.user}, ttl=ttl)
        return result

    def current_session(self, user_id: str) -> Optional[Dict[str, Any]]:
        if not user_id:
            return None
        return self.store.get(self._session_key(user_id))

    def sign_in(self, email: str, password: str) -> AuthResponse:
        res = repository.auth_sign_in_password(email, password)
        return self.persist(make_auth_response(res, fallback_error="Identifiants invalides ou email non confirmé"))

    def sign_up(self, email: str, password: str, options_data: Optional[Dict[str, Any]] = None) -> AuthResponse:
        res = repository.auth_sign_up_account(
            email=email,
            password=password,
            options_data=options_data,
            email_redirect_to=SIGNUP_REDIRECT_URL,
        )
        sess = getattr(res, "session", None)
        if sess and getattr(sess, "access_token", None):
            return self.persist(make_auth_response(res))
        # Succès sans session (vérification email)
        return AuthResponse(True, error="Inscription réussie, vérifiez votre email")

    def refresh(self, refresh_token: str) -> AuthResponse:
        """Échange un refresh_token (jeton d'accès éventuellement expiré) et persiste la nouvelle session."""
        if not refresh_token:
            return AuthResponse(False, error="Aucune session à rafraîchir")
        res = repository.auth_refresh_session(refresh_token)
        return self.persist(make_auth_response(res, fallback_error="Session expirée, veuillez vous connecter"))

    def sign_out(self, user_id: str, access_token: Optional[str] = None) -> int:
        """Révoque la session distante (best-effort) puis nettoie le store local."""
        if access_token:
            try:
                resp = repository.auth_sign_out(access_token)
                if resp.status_code >= 400:
                    logger.warning("auth.sign_out: statut distant %s user_id=%s", resp.status_code, user_id)
            except Exception:
                logger.exception("auth.sign_out remote failed user_id=%s", user_id)
        if not user_id:
            return 0
        return self.store.clear_prefix(self.user_prefix(user_id))

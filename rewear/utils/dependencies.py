"""
Dépendances FastAPI vers l'état possédé par l'application.

Le lifespan crée le store de sessions et le chat; si l'application est utilisée
sans lifespan (ex: TestClient hors contexte), ils sont créés à la demande sur app.state.
"""
from fastapi import Request

from rewear.config import SESSION_STORE_URL, CHAT_MAX_TRANSCRIPTS, CHAT_REPLY_DELAY_SECONDS
from rewear.infra.session_store import SessionStore, build_session_store
from rewear.auth.session import AuthSessionManager
from rewear.messages.chat import ChatStore, OwnerChat

def get_session_store(request: Request) -> SessionStore:
    state = request.app.state
    if getattr(state, "session_store", None) is None:
        state.session_store = build_session_store(SESSION_STORE_URL)
    return state.session_store

def get_auth_sessions(request: Request) -> AuthSessionManager:
    return AuthSessionManager(get_session_store(request))

def get_owner_chat(request: Request) -> OwnerChat:
    state = request.app.state
    if getattr(state, "owner_chat", None) is None:
        state.owner_chat = OwnerChat(ChatStore(CHAT_MAX_TRANSCRIPTS), reply_delay=CHAT_REPLY_DELAY_SECONDS)
    return state.owner_chat

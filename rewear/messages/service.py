"""
Cas d'usage de la messagerie acheteur / propriétaire.
"""
from typing import Any, Dict, List, Optional
import logging

from fastapi import HTTPException

from rewear.utils.records import parse_row, parse_rows
from . import repository
from .conversations import message_time, conversation_key, group_conversations
from .models import Conversation, Message

logger = logging.getLogger(__name__)

def send_message(user: Dict[str, Any], receiver_id: str, content: str, product_id: Optional[str] = None) -> Message:
    text = (content or "").strip()
    if not text:
        raise HTTPException(status_code=400, detail="Message vide")
    if str(receiver_id) == str(user["id"]):
        raise HTTPException(status_code=400, detail="Impossible de s'envoyer un message")
    row = repository.insert_message(
        {
            "sender_id": user["id"],
            "receiver_id": receiver_id,
            "product_id": product_id,
            "content": text,
            "read": False,
        },
        user_token=user.get("token"),
    )
    message = parse_row(Message, row)
    if not message:
        raise HTTPException(status_code=502, detail="Échec de l'envoi du message")
    logger.info("messages.send sender_id=%s receiver_id=%s product_id=%s", user["id"], receiver_id, product_id)
    return message

def get_messages_by_product(user: Dict[str, Any], product_id: str) -> List[Message]:
    rows = repository.fetch_messages_by_product(user["id"], product_id, user_token=user.get("token"))
    return parse_rows(Message, rows)

def get_conversations(user: Dict[str, Any]) -> List[Conversation]:
    messages = parse_rows(Message, repository.fetch_user_messages(user["id"], user_token=user.get("token")))
    conversations = group_conversations(messages, str(user["id"]))
    # Affichage: fil le plus récent d'abord
    conversations.sort(key=lambda c: message_time(c.created_at), reverse=True)
    return conversations

def get_thread(user: Dict[str, Any], counterparty_id: str, product_id: Optional[str] = None) -> List[Message]:
    """Messages d'un fil, du plus ancien au plus récent."""
    uid = str(user["id"])
    wanted = f"{counterparty_id}-{product_id}" if product_id else str(counterparty_id)
    messages = parse_rows(Message, repository.fetch_user_messages(uid, user_token=user.get("token")))
    thread = [m for m in messages if conversation_key(m, uid) == wanted]
    thread.sort(key=lambda m: message_time(m.created_at))
    return thread

def mark_as_read(user: Dict[str, Any], sender_id: str, product_id: Optional[str] = None) -> bool:
    return repository.mark_read(str(user["id"]), sender_id, product_id, user_token=user.get("token"))

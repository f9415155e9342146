"""
Regroupement des messages en conversations.

Clé d'un fil: interlocuteur + produit quand le message en référence un,
sinon l'interlocuteur seul (fil général distinct des fils par produit).

Deux passes indépendantes sur la même entrée:
- le dernier message affiché est le plus récent par clé (remplacé seulement si strictement plus récent);
- le compteur de non-lus compte tous les messages reçus avec read=false, quel que soit le message affiché.
"""
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

from .models import Conversation, Message

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)

def message_time(value: Optional[datetime]) -> datetime:
    """Horodatage comparable: sans fuseau => UTC, absent => le plus ancien possible."""
    if value is None:
        return _EPOCH
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value

def counterparty_id(message: Message, current_user_id: str) -> str:
    return message.receiver_id if message.sender_id == current_user_id else message.sender_id

def conversation_key(message: Message, current_user_id: str) -> str:
    other = counterparty_id(message, current_user_id)
    return f"{other}-{message.product_id}" if message.product_id else other

def group_conversations(messages: Iterable[Message], current_user_id: str) -> List[Conversation]:
    messages = list(messages or [])
    latest: Dict[str, Conversation] = {}
    for m in messages:
        key = conversation_key(m, current_user_id)
        current = latest.get(key)
        if current is not None and message_time(m.created_at) <= message_time(current.created_at):
            continue
        mine = m.sender_id == current_user_id
        latest[key] = Conversation(
            key=key,
            other_id=counterparty_id(m, current_user_id),
            other_person=m.receiver if mine else m.sender,
            last_message=m.content,
            created_at=m.created_at,
            product_id=m.product_id,
            product=m.product,
        )

    unread: Dict[str, int] = {}
    for m in messages:
        if m.receiver_id == current_user_id and not m.read:
            key = conversation_key(m, current_user_id)
            unread[key] = unread.get(key, 0) + 1

    for key, conv in latest.items():
        conv.unread = unread.get(key, 0)
    return list(latest.values())

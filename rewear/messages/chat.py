"""
Widget de discussion avec le propriétaire (réponses simulées).

Chaque message utilisateur programme une réponse du propriétaire après un délai fixe
(loop.call_later). Le minuteur n'est jamais annulé: fermer le widget ne l'arrête pas.
"""
import asyncio
import logging
import random
from collections import OrderedDict
from datetime import datetime, timezone
from typing import List, Optional

from .models import ChatMessage

logger = logging.getLogger(__name__)

OWNER_GREETING = "Hello! I'm Mira, the owner of this beautiful dress. How can I help you?"

OWNER_REPLIES = (
    "Yes, this dress is available for the weekend!",
    "The fabric is soft cotton with a silk lining.",
    "I can arrange delivery to your location for an additional ₹250.",
    "The dress fits true to size. If you're usually a medium, this will fit perfectly.",
    "I've had many people rent this with great feedback!",
)

class ChatStore:
    """Transcriptions par utilisateur, en mémoire, possédées par l'application.
    Au-delà de max_transcripts, la transcription la moins récemment utilisée est oubliée.
    """

    def __init__(self, max_transcripts: int = 1000) -> None:
        self._transcripts: "OrderedDict[str, List[ChatMessage]]" = OrderedDict()
        self.max_transcripts = max_transcripts

    def get(self, user_id: str) -> Optional[List[ChatMessage]]:
        transcript = self._transcripts.get(user_id)
        if transcript is not None:
            self._transcripts.move_to_end(user_id)
        return transcript

    def put(self, user_id: str, transcript: List[ChatMessage]) -> None:
        self._transcripts[user_id] = transcript
        self._transcripts.move_to_end(user_id)
        while len(self._transcripts) > self.max_transcripts:
            self._transcripts.popitem(last=False)

    def reset(self, user_id: str) -> None:
        self._transcripts.pop(user_id, None)

    def __len__(self) -> int:
        return len(self._transcripts)

def _now() -> str:
    return datetime.now(timezone.utc).isoformat()

class OwnerChat:
    def __init__(self, store: ChatStore, reply_delay: float = 1.0, rng: Optional[random.Random] = None):
        self.store = store
        self.reply_delay = reply_delay
        self.rng = rng or random.Random()

    def transcript(self, user_id: str) -> List[ChatMessage]:
        messages = self.store.get(user_id)
        if messages is None:
            messages = [ChatMessage(id=1, text=OWNER_GREETING, sender="owner", timestamp=_now())]
            self.store.put(user_id, messages)
        return messages

    def _append(self, user_id: str, text: str, sender: str) -> ChatMessage:
        messages = self.transcript(user_id)
        message = ChatMessage(id=len(messages) + 1, text=text, sender=sender, timestamp=_now())
        messages.append(message)
        return message

    def _owner_reply(self, user_id: str) -> None:
        self._append(user_id, self.rng.choice(OWNER_REPLIES), "owner")

    def send(self, user_id: str, text: str) -> Optional[ChatMessage]:
        """Ajoute le message utilisateur et programme la réponse. Doit être appelé dans une boucle asyncio."""
        if not (text or "").strip():
            return None
        message = self._append(user_id, text, "user")
        loop = asyncio.get_running_loop()
        loop.call_later(self.reply_delay, self._owner_reply, user_id)
        logger.debug("chat.send user_id=%s reply_in=%ss", user_id, self.reply_delay)
        return message

    def close(self, user_id: str) -> None:
        """Ferme le widget: la transcription est oubliée, une réponse déjà programmée ouvre un nouveau fil."""
        self.store.reset(user_id)

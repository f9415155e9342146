from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

class Participant(BaseModel):
    model_config = ConfigDict(extra="ignore")

    username: Optional[str] = None
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None

class ProductRef(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    image_url: Optional[str] = None

class Message(BaseModel):
    """Message entre deux utilisateurs. Immuable sauf le drapeau 'read'."""
    model_config = ConfigDict(extra="ignore")

    id: str
    sender_id: str
    receiver_id: str
    product_id: Optional[str] = None
    content: str = ""
    read: bool = False
    created_at: Optional[datetime] = None
    # Jointures PostgREST (sender:sender_id(...), receiver:receiver_id(...), product:product_id(...))
    sender: Optional[Participant] = None
    receiver: Optional[Participant] = None
    product: Optional[ProductRef] = None

    @field_validator("id", "sender_id", "receiver_id", "product_id", mode="before")
    @classmethod
    def _as_str(cls, v: Any) -> Optional[str]:
        return str(v) if v is not None else v

    @field_validator("read", mode="before")
    @classmethod
    def _read(cls, v: Any) -> bool:
        return bool(v)

class Conversation(BaseModel):
    """Résumé dérivé (non persisté) d'un fil: interlocuteur + produit éventuel."""
    key: str
    other_id: str
    other_person: Optional[Participant] = None
    last_message: str = ""
    created_at: Optional[datetime] = None
    product_id: Optional[str] = None
    product: Optional[ProductRef] = None
    unread: int = 0

class SendMessageRequest(BaseModel):
    receiver_id: str = Field(min_length=1)
    content: str = Field(min_length=1)
    product_id: Optional[str] = None

class MarkReadRequest(BaseModel):
    sender_id: str = Field(min_length=1)
    product_id: Optional[str] = None

class ChatMessage(BaseModel):
    id: int
    text: str
    sender: str  # "user" | "owner"
    timestamp: str

class ChatSendRequest(BaseModel):
    text: str

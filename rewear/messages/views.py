from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from starlette.status import HTTP_204_NO_CONTENT

from rewear.utils.dependencies import get_owner_chat
from rewear.utils.rate_limit import optional_rate_limit
from rewear.utils.security import require_user
from . import service
from .chat import OwnerChat
from .models import ChatMessage, ChatSendRequest, Conversation, MarkReadRequest, Message, SendMessageRequest

router = APIRouter(prefix="/api/v1/messages", tags=["Messages API"])
chat_router = APIRouter(prefix="/api/v1/chat", tags=["Chat"])

@router.post("", response_model=Message, status_code=201, dependencies=[Depends(optional_rate_limit(times=20, seconds=60))])
def send_message(body: SendMessageRequest, user: Dict[str, Any] = Depends(require_user)):
    return service.send_message(user, body.receiver_id, body.content, body.product_id)

@router.get("/conversations", response_model=List[Conversation])
def get_conversations(user: Dict[str, Any] = Depends(require_user)):
    return service.get_conversations(user)

@router.get("/thread/{counterparty_id}", response_model=List[Message])
def get_thread(counterparty_id: str, product_id: Optional[str] = None, user: Dict[str, Any] = Depends(require_user)):
    return service.get_thread(user, counterparty_id, product_id)

@router.get("/product/{product_id}", response_model=List[Message])
def get_messages_by_product(product_id: str, user: Dict[str, Any] = Depends(require_user)):
    return service.get_messages_by_product(user, product_id)

@router.post("/read")
def mark_as_read(body: MarkReadRequest, user: Dict[str, Any] = Depends(require_user)):
    return {"success": service.mark_as_read(user, body.sender_id, body.product_id)}

@chat_router.get("", response_model=List[ChatMessage])
async def get_chat(user: Dict[str, Any] = Depends(require_user), chat: OwnerChat = Depends(get_owner_chat)):
    return chat.transcript(str(user["id"]))

@chat_router.post("", response_model=ChatMessage)
async def send_chat(body: ChatSendRequest, user: Dict[str, Any] = Depends(require_user), chat: OwnerChat = Depends(get_owner_chat)):
    """Message au propriétaire; la réponse arrive après CHAT_REPLY_DELAY_SECONDS (GET pour la lire)."""
    message = chat.send(str(user["id"]), body.text)
    if message is None:
        raise HTTPException(status_code=400, detail="Message vide")
    return message

@chat_router.delete("", status_code=HTTP_204_NO_CONTENT)
async def close_chat(user: Dict[str, Any] = Depends(require_user), chat: OwnerChat = Depends(get_owner_chat)):
    chat.close(str(user["id"]))
    return Response(status_code=HTTP_204_NO_CONTENT)

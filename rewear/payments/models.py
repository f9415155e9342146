from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, field_validator

from rewear.utils.records import non_negative_amount

class OrderStatus(str, Enum):
    CREATED = "created"
    PAID = "paid"

class FlowState(str, Enum):
    IDLE = "idle"
    CREATING_ORDER = "creating_order"
    AWAITING_GATEWAY_RESULT = "awaiting_gateway_result"
    SUCCEEDED = "succeeded"
    CANCELLED = "cancelled"
    FAILED = "failed"

class GatewayOutcome(str, Enum):
    SUCCESS = "success"
    DISMISSED = "dismissed"
    ERROR = "error"

class GatewayResult(BaseModel):
    """Retour du widget de paiement: succès (identifiants signés), fermeture, ou erreur."""
    outcome: GatewayOutcome
    payment_id: Optional[str] = None
    order_id: Optional[str] = None
    signature: Optional[str] = None
    error: Optional[str] = None

class Order(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    user_id: Optional[str] = None
    amount: float = 0.0
    currency: str = "INR"
    razorpay_order_id: Optional[str] = None
    payment_id: Optional[str] = None
    status: str = OrderStatus.CREATED.value
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @field_validator("id", "user_id", mode="before")
    @classmethod
    def _as_str(cls, v: Any) -> Optional[str]:
        return str(v) if v is not None else v

    @field_validator("amount", mode="before")
    @classmethod
    def _amount(cls, v: Any) -> float:
        return non_negative_amount(v)

class CreateOrderRequest(BaseModel):
    currency: Optional[str] = None

# Champs optionnels: les données manquantes sont rejetées en 400 par le service
class VerifyPaymentRequest(BaseModel):
    razorpay_payment_id: Optional[str] = None
    razorpay_order_id: Optional[str] = None
    razorpay_signature: Optional[str] = None
    db_order_id: Optional[str] = None

class CancelPaymentRequest(BaseModel):
    db_order_id: Optional[str] = None

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException

from rewear.utils.security import require_user
from rewear.utils.rate_limit import optional_rate_limit
from rewear.payments import service as payments_service
from rewear.payments.models import CancelPaymentRequest, CreateOrderRequest, Order, VerifyPaymentRequest

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/payments", tags=["Payments API"])

@router.post("/create-order", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
def create_order(body: CreateOrderRequest, user: Dict[str, Any] = Depends(require_user)):
    """
    Crée un ordre Razorpay pour le panier de l'utilisateur authentifié.
    - Montant: total du panier (politique configurée), en unités mineures côté passerelle
    - Réponse: {order_id, amount, currency, db_order_id, options}
    - Erreurs: 400 panier vide, 502 passerelle ou base indisponible
    """
    try:
        return payments_service.create_payment_order(user, body.currency)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Erreur create_order")
        raise HTTPException(status_code=500, detail="Impossible de créer l'ordre de paiement")

@router.post("/verify", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
def verify_payment(body: VerifyPaymentRequest, user: Dict[str, Any] = Depends(require_user)):
    """
    Callback de succès du widget: vérifie la signature HMAC puis marque la commande 'paid'.
    - Erreurs: 400 données manquantes ou signature invalide, 404/403 commande, 409 déjà traitée
    """
    try:
        return payments_service.verify_payment(
            user,
            payment_id=body.razorpay_payment_id,
            order_id=body.razorpay_order_id,
            signature=body.razorpay_signature,
            db_order_id=body.db_order_id,
        )
    except HTTPException:
        raise
    except Exception:
        logger.exception("Erreur verify_payment")
        raise HTTPException(status_code=500, detail="Erreur de vérification du paiement")

@router.post("/cancel")
def cancel_payment(body: CancelPaymentRequest, user: Dict[str, Any] = Depends(require_user)):
    return payments_service.cancel_payment(user, body.db_order_id)

@router.get("/orders", response_model=List[Order])
def list_orders(user: Dict[str, Any] = Depends(require_user)):
    return payments_service.list_orders(user)

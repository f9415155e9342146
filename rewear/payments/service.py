"""
Cas d'usage 'payments': orchestre panier, client Razorpay, repository et machine à états.
"""
from typing import Any, Dict, List, Optional
import logging

from fastapi import HTTPException

from rewear.config import PAYMENT_CURRENCY, PAYMENT_MERCHANT_NAME, RAZORPAY_KEY_ID
from rewear.cart import repository as cart_repository
from rewear.cart import service as cart_service
from rewear.profiles import repository as profiles_repository
from rewear.utils.records import parse_row, parse_rows
from . import razorpay_client
from . import repository
from .flow import InvalidTransition, PaymentFlow
from .models import FlowState, GatewayOutcome, GatewayResult, Order

logger = logging.getLogger(__name__)

def _prefill_name(user: Dict[str, Any]) -> str:
    if user.get("full_name"):
        return user["full_name"]
    profile = profiles_repository.get_profile(user["id"], user_token=user.get("token")) or {}
    return profile.get("full_name") or ""

def create_payment_order(user: Optional[Dict[str, Any]], currency: Optional[str] = None) -> Dict[str, Any]:
    """
    Crée l'ordre de paiement du panier courant.
    - Montant calculé côté serveur (politique de prix configurée), jamais fourni par le client
    - Ordre Razorpay puis ligne 'orders' (status='created')
    Retour: {order_id, amount, currency, db_order_id, options} où options alimente le widget.
    """
    flow = PaymentFlow()
    if not flow.start(user):
        raise HTTPException(status_code=401, detail="Connectez-vous pour payer")
    currency = (currency or PAYMENT_CURRENCY).upper()

    totals = cart_service.get_cart_summary(user)
    if totals.total <= 0:
        flow.order_failed("empty_cart")
        raise HTTPException(status_code=400, detail="Le montant doit être supérieur à 0")

    try:
        gateway_order = razorpay_client.create_order(totals.amount_minor, currency)
    except razorpay_client.RazorpayError as e:
        flow.order_failed(str(e))
        logger.warning("payments.create_order gateway failure user_id=%s: %s", user["id"], e)
        raise HTTPException(status_code=502, detail=str(e))

    row = repository.insert_order({
        "user_id": user["id"],
        "amount": totals.total,
        "currency": currency,
        "razorpay_order_id": gateway_order["id"],
        "status": "created",
    })
    order = parse_row(Order, row)
    if not order:
        flow.order_failed("order_not_recorded")
        raise HTTPException(status_code=502, detail="Impossible d'enregistrer la commande")
    flow.order_created(gateway_order["id"])

    amount_minor = int(gateway_order.get("amount") or totals.amount_minor)
    logger.info("payments.create_order user_id=%s db_order_id=%s amount=%s %s", user["id"], order.id, totals.total, currency)
    return {
        "order_id": gateway_order["id"],
        "amount": amount_minor / 100,
        "currency": gateway_order.get("currency") or currency,
        "db_order_id": order.id,
        "options": {
            "key": RAZORPAY_KEY_ID,
            "amount": amount_minor,
            "currency": gateway_order.get("currency") or currency,
            "order_id": gateway_order["id"],
            "name": PAYMENT_MERCHANT_NAME,
            "description": "Clothing Rental Payment",
            "prefill": {"name": _prefill_name(user), "email": user.get("email") or ""},
        },
    }

def _load_order(user: Dict[str, Any], db_order_id: str) -> Order:
    order = parse_row(Order, repository.get_order(db_order_id))
    if not order:
        raise HTTPException(status_code=404, detail="Commande introuvable")
    if order.user_id and order.user_id != str(user["id"]):
        raise HTTPException(status_code=403, detail="Commande appartenant à un autre utilisateur")
    return order

def _after_payment(user: Dict[str, Any]) -> None:
    """Effet post-paiement: vider le panier. Un échec est journalisé, le paiement reste acquis."""
    if not cart_repository.delete_user_cart(user["id"], user_token=user.get("token")):
        logger.warning("payments.after_payment cart not cleared user_id=%s", user["id"])

def verify_payment(
    user: Dict[str, Any],
    payment_id: Optional[str],
    order_id: Optional[str],
    signature: Optional[str],
    db_order_id: Optional[str],
) -> Dict[str, Any]:
    if not (payment_id and order_id and signature and db_order_id):
        raise HTTPException(status_code=400, detail="Données de vérification du paiement manquantes")
    order = _load_order(user, db_order_id)
    if order.razorpay_order_id and order.razorpay_order_id != order_id:
        raise HTTPException(status_code=400, detail="Ordre de paiement inconnu")

    flow = PaymentFlow.for_order(order)
    valid = razorpay_client.verify_signature(order_id, payment_id, signature)
    result = GatewayResult(
        outcome=GatewayOutcome.SUCCESS if valid else GatewayOutcome.ERROR,
        payment_id=payment_id,
        order_id=order_id,
        signature=signature,
        error=None if valid else "invalid_signature",
    )
    try:
        flow.resolve(result)
    except InvalidTransition:
        raise HTTPException(status_code=409, detail="Paiement déjà traité")
    if flow.state == FlowState.FAILED:
        logger.warning("payments.verify invalid signature user_id=%s db_order_id=%s", user["id"], db_order_id)
        raise HTTPException(status_code=400, detail="Échec de vérification du paiement: signature invalide")

    if not repository.mark_order_paid(db_order_id, order_id, payment_id):
        raise HTTPException(status_code=502, detail="Impossible de mettre à jour la commande")
    logger.info("payments.verify paid user_id=%s db_order_id=%s payment_id=%s", user["id"], db_order_id, payment_id)
    _after_payment(user)
    return {"success": True, "order_id": order.id, "status": "Payment successful"}

def cancel_payment(user: Dict[str, Any], db_order_id: Optional[str]) -> Dict[str, Any]:
    """Fermeture du widget: le flux passe à 'cancelled', la commande n'est pas modifiée."""
    if not db_order_id:
        raise HTTPException(status_code=400, detail="db_order_id manquant")
    order = _load_order(user, db_order_id)
    flow = PaymentFlow.for_order(order)
    try:
        flow.resolve(GatewayResult(outcome=GatewayOutcome.DISMISSED))
    except InvalidTransition:
        raise HTTPException(status_code=409, detail="Paiement déjà traité")
    logger.info("payments.cancel user_id=%s db_order_id=%s", user["id"], db_order_id)
    return {"status": flow.state.value, "db_order_id": order.id, "order_status": order.status}

def list_orders(user: Dict[str, Any]) -> List[Order]:
    return parse_rows(Order, repository.list_user_orders(user["id"]))

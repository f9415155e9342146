"""
Adaptateur Razorpay: création d'ordre (API REST, httpx) et vérification de signature.
"""
from typing import Any, Dict, Optional
import hashlib
import hmac
import logging
import time

import httpx

from rewear.config import RAZORPAY_API_URL, RAZORPAY_KEY_ID, RAZORPAY_KEY_SECRET

logger = logging.getLogger(__name__)

class RazorpayError(Exception):
    pass

def make_receipt() -> str:
    return f"order_{int(time.time() * 1000)}"

def create_order(
    amount_minor: int,
    currency: str,
    receipt: Optional[str] = None,
    client: Optional[httpx.Client] = None,
) -> Dict[str, Any]:
    """
    POST /orders (auth basique key_id:key_secret).
    - amount_minor: montant en plus petite unité (paise)
    Retour: dict ordre Razorpay (id, amount, currency, receipt, status...)
    """
    if not RAZORPAY_KEY_ID or not RAZORPAY_KEY_SECRET:
        raise RazorpayError("Identifiants Razorpay non configurés")
    payload = {"amount": int(amount_minor), "currency": currency, "receipt": receipt or make_receipt()}
    http = client or httpx.Client(timeout=10)
    try:
        resp = http.post(f"{RAZORPAY_API_URL}/orders", json=payload, auth=(RAZORPAY_KEY_ID, RAZORPAY_KEY_SECRET))
        data = resp.json() if resp.content else {}
    except (httpx.HTTPError, ValueError) as e:
        raise RazorpayError(f"Passerelle injoignable: {e}") from e
    finally:
        if client is None:
            http.close()
    if resp.status_code >= 400 or not data.get("id"):
        err = (data.get("error") or {}).get("description") if isinstance(data.get("error"), dict) else None
        logger.warning("razorpay.create_order refused status=%s", resp.status_code)
        raise RazorpayError(err or "Échec de création de l'ordre Razorpay")
    return data

def compute_signature(order_id: str, payment_id: str, secret: Optional[str] = None) -> str:
    """HMAC-SHA256 hexadécimal de '<order_id>|<payment_id>'."""
    key = (secret if secret is not None else RAZORPAY_KEY_SECRET).encode("utf-8")
    message = f"{order_id}|{payment_id}".encode("utf-8")
    return hmac.new(key, message, hashlib.sha256).hexdigest()

def verify_signature(order_id: str, payment_id: str, signature: str, secret: Optional[str] = None) -> bool:
    if not (order_id and payment_id and signature):
        return False
    expected = compute_signature(order_id, payment_id, secret)
    return hmac.compare_digest(expected, signature)

"""
Module 'payments' (feature-first): point d'entrée public.
Réunit client Razorpay, repository 'orders', machine à états et services.
"""

from .razorpay_client import RazorpayError, create_order, compute_signature, verify_signature, make_receipt
from .flow import PaymentFlow, InvalidTransition
from .repository import insert_order, get_order, mark_order_paid, list_user_orders
from .service import create_payment_order, verify_payment, cancel_payment, list_orders

__all__ = [
    # razorpay
    "RazorpayError",
    "create_order",
    "compute_signature",
    "verify_signature",
    "make_receipt",
    # flow
    "PaymentFlow",
    "InvalidTransition",
    # repository
    "insert_order",
    "get_order",
    "mark_order_paid",
    "list_user_orders",
    # services
    "create_payment_order",
    "verify_payment",
    "cancel_payment",
    "list_orders",
]

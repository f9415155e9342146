"""
Calculs panier purs (pas de DB, pas de passerelle).

- Durée de location: ceil(|fin - début| / 1 jour), minimum 1; 1 si une date manque.
- Deux politiques de prix alternatives, jamais combinées:
  PER_DAY (prix/jour × jours) et FLAT (prix seul).
- La caution est additionnée à part: elle ne fait pas partie du chiffre de location.
"""
from datetime import timedelta
from enum import Enum
from typing import Any, Iterable, Optional
import logging

from rewear.utils.records import parse_datetime
from .models import CartItem, CartLine, CartTotals

logger = logging.getLogger(__name__)

DAY = timedelta(days=1)

class PricingPolicy(str, Enum):
    PER_DAY = "per_day"
    FLAT = "flat"

    @classmethod
    def from_config(cls, value: Optional[str]) -> "PricingPolicy":
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            logger.warning("CART_PRICING_POLICY inconnue (%r), utilisation de per_day", value)
            return cls.PER_DAY

def rental_days(start: Any, end: Any) -> int:
    start_dt = parse_datetime(start)
    end_dt = parse_datetime(end)
    if start_dt is None or end_dt is None:
        return 1
    delta = abs(end_dt - start_dt)
    # Arrondi au jour supérieur
    days = delta // DAY + (1 if delta % DAY else 0)
    return max(int(days), 1)

def line_total(item: CartItem, policy: PricingPolicy) -> CartLine:
    product = item.product
    price = product.price if product else 0.0
    deposit = product.deposit if product else 0.0
    days = rental_days(item.rental_start_date, item.rental_end_date)
    total = price * days if policy == PricingPolicy.PER_DAY else price
    return CartLine(
        cart_item_id=item.id,
        product_id=item.product_id,
        title=(product.title if product else "") or "Article",
        price=price,
        deposit=deposit,
        days=days,
        line_total=round(total, 2),
    )

def compute_totals(
    items: Iterable[CartItem],
    policy: PricingPolicy = PricingPolicy.PER_DAY,
    delivery_fee: float = 0.0,
    service_fee_rate: float = 0.0,
) -> CartTotals:
    """Sous-total, caution, frais optionnels et total général.
    Un panier vide vaut 0 partout: les frais ne s'appliquent qu'à un panier non vide.
    """
    lines = [line_total(item, policy) for item in items or []]
    subtotal = sum(line.line_total for line in lines)
    deposit = sum(line.deposit for line in lines)
    if lines:
        delivery = max(float(delivery_fee or 0), 0.0)
        service = max(subtotal * float(service_fee_rate or 0), 0.0)
    else:
        delivery = service = 0.0
    return CartTotals(
        policy=policy.value,
        lines=lines,
        subtotal=round(subtotal, 2),
        deposit=round(deposit, 2),
        delivery_fee=round(delivery, 2),
        service_fee=round(service, 2),
        total=round(subtotal + deposit + delivery + service, 2),
    )

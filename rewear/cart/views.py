from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Response
from starlette.status import HTTP_204_NO_CONTENT

from rewear.utils.security import require_user
from . import service
from .models import AddToCartRequest, CartItem, CartTotals, RentalDatesUpdate

router = APIRouter(prefix="/api/v1/cart", tags=["Cart API"])

@router.get("", response_model=List[CartItem])
def get_cart(user: Dict[str, Any] = Depends(require_user)):
    return service.get_cart(user)

@router.get("/summary", response_model=CartTotals)
def get_cart_summary(user: Dict[str, Any] = Depends(require_user)):
    """Résumé chiffré du panier (politique de prix configurée, caution, frais)."""
    return service.get_cart_summary(user)

@router.post("", response_model=CartItem)
def add_to_cart(body: AddToCartRequest, user: Dict[str, Any] = Depends(require_user)):
    return service.add_to_cart(user, body.product_id, body.rental_start_date, body.rental_end_date)

@router.patch("/{product_id}", response_model=CartItem)
def update_dates(product_id: str, body: RentalDatesUpdate, user: Dict[str, Any] = Depends(require_user)):
    return service.update_rental_dates(user, product_id, body.rental_start_date, body.rental_end_date)

@router.delete("/{product_id}", status_code=HTTP_204_NO_CONTENT)
def remove_from_cart(product_id: str, user: Dict[str, Any] = Depends(require_user)):
    service.remove_from_cart(user, product_id)
    return Response(status_code=HTTP_204_NO_CONTENT)

@router.delete("", status_code=HTTP_204_NO_CONTENT)
def clear_cart(user: Dict[str, Any] = Depends(require_user)):
    service.clear_cart(user)
    return Response(status_code=HTTP_204_NO_CONTENT)

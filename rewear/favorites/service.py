from typing import Any, Dict, List
import logging

from fastapi import HTTPException

from rewear.products import repository as products_repo
from rewear.products.models import Product
from rewear.utils.records import parse_rows
from . import repository

logger = logging.getLogger(__name__)

def list_favorite_ids(user: Dict[str, Any]) -> List[str]:
    return repository.list_favorite_ids(user["id"], user_token=user.get("token"))

def list_favorite_products(user: Dict[str, Any]) -> List[Product]:
    ids = list_favorite_ids(user)
    return parse_rows(Product, products_repo.fetch_products_by_ids(ids))

def add_favorite(user: Dict[str, Any], product_id: str) -> bool:
    """Idempotent: un favori existant n'est pas dupliqué."""
    token = user.get("token")
    if repository.is_favorite(user["id"], product_id, user_token=token):
        return True
    if not repository.insert_favorite(user["id"], product_id, user_token=token):
        raise HTTPException(status_code=502, detail="Impossible d'ajouter aux favoris")
    return True

def remove_favorite(user: Dict[str, Any], product_id: str) -> bool:
    if not repository.delete_favorite(user["id"], product_id, user_token=user.get("token")):
        raise HTTPException(status_code=502, detail="Impossible de retirer des favoris")
    return False

def toggle_favorite(user: Dict[str, Any], product_id: str) -> bool:
    """Bascule l'état favori et retourne le nouvel état."""
    if not product_id:
        raise HTTPException(status_code=400, detail="product_id manquant")
    if repository.is_favorite(user["id"], product_id, user_token=user.get("token")):
        state = remove_favorite(user, product_id)
    else:
        state = add_favorite(user, product_id)
    logger.info("favorites.toggle user_id=%s product_id=%s favorite=%s", user.get("id"), product_id, state)
    return state

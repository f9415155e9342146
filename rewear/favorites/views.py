from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from rewear.utils.security import require_user
from rewear.products.models import Product
from . import service

router = APIRouter(prefix="/api/v1/favorites", tags=["Favorites API"])

@router.get("")
def list_favorites(user: Dict[str, Any] = Depends(require_user)) -> Dict[str, List[str]]:
    """Identifiants des produits favoris de l'utilisateur."""
    return {"product_ids": service.list_favorite_ids(user)}

@router.get("/products", response_model=List[Product])
def list_favorite_products(user: Dict[str, Any] = Depends(require_user)):
    return service.list_favorite_products(user)

@router.put("/{product_id}")
def add_favorite(product_id: str, user: Dict[str, Any] = Depends(require_user)):
    return {"product_id": product_id, "favorite": service.add_favorite(user, product_id)}

@router.delete("/{product_id}")
def remove_favorite(product_id: str, user: Dict[str, Any] = Depends(require_user)):
    return {"product_id": product_id, "favorite": service.remove_favorite(user, product_id)}

@router.post("/{product_id}/toggle")
def toggle_favorite(product_id: str, user: Dict[str, Any] = Depends(require_user)):
    return {"product_id": product_id, "favorite": service.toggle_favorite(user, product_id)}

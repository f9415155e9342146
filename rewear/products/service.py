"""
Cas d'usage du catalogue: lecture publique, écriture réservée au propriétaire.
"""
from datetime import datetime, timezone
from typing import Any, Dict, List
import logging
import re
import time

from fastapi import HTTPException

from rewear.utils.records import parse_row, parse_rows
from . import repository
from .models import Product, ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)

def list_products() -> List[Product]:
    return parse_rows(Product, repository.list_products())

def list_products_by_owner(owner_id: str) -> List[Product]:
    return parse_rows(Product, repository.list_products_by_owner(owner_id))

def get_product(product_id: str) -> Product:
    product = parse_row(Product, repository.get_product(product_id))
    if not product:
        raise HTTPException(status_code=404, detail="Produit introuvable")
    return product

def _require_owner(user: Dict[str, Any], product_id: str) -> Product:
    product = get_product(product_id)
    if product.owner_id != str(user.get("id")):
        raise HTTPException(status_code=403, detail="Seul le propriétaire peut modifier ce produit")
    return product

def create_product(user: Dict[str, Any], data: ProductCreate) -> Product:
    payload = {**data.model_dump(), "owner_id": user["id"]}
    row = repository.insert_product(payload, user_token=user.get("token"))
    product = parse_row(Product, row)
    if not product:
        raise HTTPException(status_code=502, detail="Impossible de publier le produit")
    logger.info("products.create id=%s owner_id=%s", product.id, product.owner_id)
    return product

def update_product(user: Dict[str, Any], product_id: str, data: ProductUpdate) -> Product:
    current = _require_owner(user, product_id)
    changes = data.model_dump(exclude_unset=True)
    if not changes:
        return current
    changes["updated_at"] = datetime.now(timezone.utc).isoformat()
    row = repository.update_product(product_id, changes, user_token=user.get("token"))
    if row is None:
        # Certaines policies ne renvoient pas la ligne: relecture
        row = repository.get_product(product_id)
    product = parse_row(Product, row)
    if not product:
        raise HTTPException(status_code=502, detail="Impossible de mettre à jour le produit")
    return product

def delete_product(user: Dict[str, Any], product_id: str) -> None:
    _require_owner(user, product_id)
    if not repository.delete_product(product_id, user_token=user.get("token")):
        raise HTTPException(status_code=502, detail="Impossible de supprimer le produit")
    logger.info("products.delete id=%s owner_id=%s", product_id, user.get("id"))

def image_path(filename: str) -> str:
    """Nom unique horodaté, espaces remplacés par des tirets."""
    safe = re.sub(r"\s+", "-", (filename or "image").strip())
    return f"{int(time.time() * 1000)}-{safe}"

def upload_product_image(user: Dict[str, Any], filename: str, content: bytes, content_type: str) -> str:
    if not content:
        raise HTTPException(status_code=400, detail="Fichier vide")
    url = repository.upload_image(image_path(filename), content, content_type, user_token=user.get("token"))
    if not url:
        raise HTTPException(status_code=502, detail="Échec du téléversement de l'image")
    return url

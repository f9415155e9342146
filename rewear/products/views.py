from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, File, UploadFile, Response
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from rewear.utils.security import require_user
from rewear.utils.rate_limit import optional_rate_limit
from . import service
from .models import Product, ProductCreate, ProductUpdate

router = APIRouter(prefix="/api/v1/products", tags=["Products API"])

@router.get("", response_model=List[Product])
def list_products(owner_id: Optional[str] = None):
    """Catalogue public, filtrable par propriétaire (?owner_id=...)."""
    if owner_id:
        return service.list_products_by_owner(owner_id)
    return service.list_products()

@router.get("/mine", response_model=List[Product])
def list_my_products(user: Dict[str, Any] = Depends(require_user)):
    return service.list_products_by_owner(user["id"])

@router.get("/{product_id}", response_model=Product)
def get_product(product_id: str):
    return service.get_product(product_id)

@router.post("", response_model=Product, status_code=HTTP_201_CREATED,
             dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
def create_product(body: ProductCreate, user: Dict[str, Any] = Depends(require_user)):
    return service.create_product(user, body)

@router.patch("/{product_id}", response_model=Product)
def update_product(product_id: str, body: ProductUpdate, user: Dict[str, Any] = Depends(require_user)):
    return service.update_product(user, product_id, body)

@router.delete("/{product_id}", status_code=HTTP_204_NO_CONTENT)
def delete_product(product_id: str, user: Dict[str, Any] = Depends(require_user)):
    service.delete_product(user, product_id)
    return Response(status_code=HTTP_204_NO_CONTENT)

@router.post("/images", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
async def upload_image(file: UploadFile = File(...), user: Dict[str, Any] = Depends(require_user)):
    """Téléverse une image produit et retourne {image_url}."""
    content = await file.read()
    url = service.upload_product_image(user, file.filename or "image", content, file.content_type or "")
    return {"image_url": url}

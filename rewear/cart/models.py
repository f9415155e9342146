from datetime import datetime
from typing import Any, List, Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from rewear.products.models import Product
from rewear.utils.records import parse_datetime

class CartItem(BaseModel):
    """Ligne de panier: un produit par utilisateur, dates de location optionnelles."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    product_id: str
    rental_start_date: Optional[datetime] = None
    rental_end_date: Optional[datetime] = None
    # Jointure PostgREST "products (*)"
    product: Optional[Product] = Field(default=None, validation_alias=AliasChoices("product", "products"))

    @field_validator("id", "product_id", mode="before")
    @classmethod
    def _as_str(cls, v: Any) -> str:
        return str(v) if v is not None else v

    @field_validator("rental_start_date", "rental_end_date", mode="before")
    @classmethod
    def _rental_date(cls, v: Any) -> Optional[datetime]:
        # Date absente ou illisible: la location compte pour un jour
        return parse_datetime(v)

class AddToCartRequest(BaseModel):
    product_id: str = Field(min_length=1)
    rental_start_date: Optional[str] = None
    rental_end_date: Optional[str] = None

class RentalDatesUpdate(BaseModel):
    rental_start_date: Optional[str] = None
    rental_end_date: Optional[str] = None

class CartLine(BaseModel):
    cart_item_id: str
    product_id: str
    title: str
    price: float
    deposit: float
    days: int
    line_total: float

class CartTotals(BaseModel):
    policy: str
    lines: List[CartLine] = []
    subtotal: float = 0.0
    deposit: float = 0.0
    delivery_fee: float = 0.0
    service_fee: float = 0.0
    total: float = 0.0

    @property
    def amount_minor(self) -> int:
        """Total en plus petite unité monétaire (paise/centimes)."""
        return int(round(self.total * 100))

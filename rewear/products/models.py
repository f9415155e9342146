from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from rewear.utils.records import non_negative_amount

class Product(BaseModel):
    """Article mis en location. price est un prix par jour, deposit une caution remboursable."""
    model_config = ConfigDict(extra="ignore")

    id: str
    owner_id: str
    title: str = ""
    description: Optional[str] = None
    image_url: Optional[str] = None
    price: float = 0.0
    deposit: float = 0.0
    size: Optional[str] = None
    condition: Optional[str] = None
    age: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @field_validator("id", "owner_id", mode="before")
    @classmethod
    def _as_str(cls, v: Any) -> str:
        return str(v) if v is not None else v

    @field_validator("price", "deposit", mode="before")
    @classmethod
    def _amount(cls, v: Any) -> float:
        return non_negative_amount(v)

    @field_validator("title", mode="before")
    @classmethod
    def _title(cls, v: Any) -> str:
        return v or ""

class ProductCreate(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    image_url: Optional[str] = None
    price: float = Field(ge=0)
    deposit: float = Field(default=0, ge=0)
    size: Optional[str] = None
    condition: Optional[str] = None
    age: Optional[str] = None

class ProductUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    image_url: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    deposit: Optional[float] = Field(default=None, ge=0)
    size: Optional[str] = None
    condition: Optional[str] = None
    age: Optional[str] = None

# cart_service/domain/schemas.py
from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """JSON keys are camelCase on the wire and in Redis; attributes stay snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CartItem(CamelModel):
    """One line of a cart, unique per product_id."""

    product_id: str
    name: str
    price: float = Field(..., allow_inf_nan=False)
    quantity: int = Field(..., ge=1)
    image_url: str | None = None


class Cart(CamelModel):
    """Document stored under cart:{user_id}."""

    user_id: str
    items: List[CartItem] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class AddItemIn(CamelModel):
    """Body of POST /api/cart/items."""

    product_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    price: float = Field(..., ge=0, allow_inf_nan=False, description="Unit price, 0 is allowed")
    quantity: int = Field(..., ge=1, description="Amount to add (>= 1)")
    image_url: str | None = None


class UpdateItemIn(CamelModel):
    """Body of PUT /api/cart/items/{productId}. quantity == 0 removes the line."""

    quantity: int = Field(..., ge=0)


class CartOut(CamelModel):
    """Cart view returned by every endpoint."""

    user_id: str
    items: List[CartItem]
    total: float
    item_count: int
    created_at: datetime
    updated_at: datetime


class AuthUser(BaseModel):
    """Identity taken from a verified bearer token."""

    user_id: str
    username: str | None = None
    email: str | None = None

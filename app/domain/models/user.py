from pydantic import BaseModel, Field
from typing import List


class CartLine(BaseModel):
    product_id: str
    quantity: int = Field(default=1, ge=1)

    model_config = {"frozen": True}


class Shopper(BaseModel):
    """Read-only view of a user document: only what recommendations need."""
    user_id: str
    wishlist: List[str] = []
    cart: List[CartLine] = []

    model_config = {"frozen": True}

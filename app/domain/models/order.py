from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


class OrderItem(BaseModel):
    product_id: str
    price: float = Field(ge=0)       # unit price at purchase time
    quantity: int = Field(ge=1)

    model_config = {"frozen": True}


class Order(BaseModel):
    order_id: str
    user_id: str
    order_items: List[OrderItem] = []
    is_paid: bool = False
    created_at: Optional[datetime] = None

    model_config = {"frozen": True}

    def product_ids(self) -> List[str]:
        return [item.product_id for item in self.order_items]

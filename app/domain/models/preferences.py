from pydantic import BaseModel
from typing import List, Optional

from app.domain.models.product import Category


class PriceRange(BaseModel):
    avg: float = 0
    max: Optional[float] = None   # None when the user has no purchased line items

    model_config = {"frozen": True}


class PreferenceSnapshot(BaseModel):
    categories: List[Category] = []   # most-weighted first
    brands: List[str] = []            # most-weighted first
    price_range: PriceRange = PriceRange()
    total_purchases: int = 0

    model_config = {"frozen": True}

    @property
    def has_category_signal(self) -> bool:
        return bool(self.categories)

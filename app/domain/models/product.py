from enum import Enum
from pydantic import BaseModel, Field
from typing import Literal, Optional, List
from datetime import datetime


class Category(str, Enum):
    ELECTRONICS = "Electronics"
    CLOTHING_FASHION = "Clothing & Fashion"
    HOME_GARDEN = "Home & Garden"
    SPORTS_OUTDOORS = "Sports & Outdoors"
    BOOKS_MEDIA = "Books & Media"
    HEALTH_BEAUTY = "Health & Beauty"
    TOYS_GAMES = "Toys & Games"
    AUTOMOTIVE = "Automotive"
    FOOD_BEVERAGES = "Food & Beverages"
    OFFICE_SUPPLIES = "Office Supplies"


ProductStatus = Literal["active", "inactive", "out_of_stock", "discontinued"]
RecommendationType = Literal["collaborative", "content-based"]


class Product(BaseModel):
    product_id: str
    name: str
    category: Category
    brand: str
    price: float = Field(ge=0)
    tags: List[str] = []
    average_rating: float = Field(default=0, ge=0, le=5)
    sales: int = Field(default=0, ge=0)
    views: int = Field(default=0, ge=0)
    status: ProductStatus = "active"
    created_at: Optional[datetime] = None
    subcategory: Optional[str] = None
    short_description: Optional[str] = None
    original_price: Optional[float] = Field(default=None, ge=0)
    image_url: Optional[str] = None

    model_config = {"frozen": True}  # immutable snapshot

    @property
    def is_active(self) -> bool:
        return self.status == "active"


class RecommendedProduct(Product):
    recommendation_score: float
    recommendation_type: RecommendationType

    @classmethod
    def from_product(cls, product: Product, score: float, kind: RecommendationType) -> "RecommendedProduct":
        return cls(**product.model_dump(), recommendation_score=score, recommendation_type=kind)

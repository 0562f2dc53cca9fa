from pydantic import BaseModel
from typing import List

from app.domain.models.preferences import PriceRange
from app.domain.models.product import Category, Product, RecommendedProduct


class UserPreferencesOut(BaseModel):
    categories: List[Category]
    brands: List[str]
    price_range: PriceRange


class PersonalizedResult(BaseModel):
    recommendations: List[RecommendedProduct]
    user_preferences: UserPreferencesOut
    model_config = {"frozen": True}


class ProductRecommendations(BaseModel):
    similar: List[Product]
    frequently_bought_together: List[Product]
    trending_in_category: List[Product]
    model_config = {"frozen": True}


class TrendingResult(BaseModel):
    products: List[Product]
    count: int
    model_config = {"frozen": True}


class SeasonalResult(BaseModel):
    season: str
    recommendations: List[Product]
    count: int
    model_config = {"frozen": True}


class SearchResult(BaseModel):
    search_query: str
    recommendations: List[Product]
    count: int
    model_config = {"frozen": True}

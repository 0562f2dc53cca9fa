# app/api/v1/routers/recommendations.py
from typing import Annotated, Optional
from fastapi import APIRouter, Depends, HTTPException, Query

from app.api.deps import current_user_id, order_repo, product_repo, redis_dep, user_repo
from app.core.config import get_settings
from app.domain.models.product import Category
from app.domain.models.recommendation import (
    PersonalizedResult,
    ProductRecommendations,
    SearchResult,
    SeasonalResult,
    TrendingResult,
)
from app.domain.repositories.order_repo import OrderRepo
from app.domain.repositories.product_repo import ProductRepo
from app.domain.repositories.user_repo import UserRepo
from app.domain.services.personalized_svc import get_personalized_recommendations
from app.domain.services.search_svc import get_search_recommendations
from app.domain.services.seasonal_svc import get_seasonal_recommendations, get_trending_products
from app.domain.services.similarity_svc import get_product_recommendations

import logging
logger = logging.getLogger(__name__)

settings = get_settings()

router = APIRouter(prefix="/recommendations", tags=["recommendations"])

Products = Annotated[ProductRepo, Depends(product_repo)]
Orders = Annotated[OrderRepo, Depends(order_repo)]
Users = Annotated[UserRepo, Depends(user_repo)]
UserId = Annotated[str, Depends(current_user_id)]


@router.get("/personalized", response_model=PersonalizedResult)
async def personalized(
    user_id: UserId,
    products: Products,
    orders: Orders,
    users: Users,
    limit: int = Query(settings.personalized_default_limit, ge=1, le=settings.max_limit),
):
    """
    Collaborative + content-based recommendations for the calling user,
    along with the preference profile they were derived from.
    """
    logger.info("Request: personalized user_id=%s limit=%s", user_id, limit)
    shopper = await users.get_by_user_id(user_id)
    if shopper is None:
        raise HTTPException(status_code=404, detail="User not found.")
    res = await get_personalized_recommendations(orders, products, shopper=shopper, limit=limit)
    logger.info("Response: personalized user_id=%s count=%s", user_id, len(res.recommendations))
    return res


@router.get("/product/{product_id}", response_model=ProductRecommendations)
async def product_recommendations(
    product_id: str,
    products: Products,
    orders: Orders,
    limit: int = Query(settings.product_default_limit, ge=1, le=settings.max_limit),
):
    logger.info("Request: product_recommendations product_id=%s limit=%s", product_id, limit)
    product = await products.get_by_product_id(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found.")
    return await get_product_recommendations(orders, products, product=product, limit=limit)


@router.get("/trending", response_model=TrendingResult)
async def trending(
    products: Products,
    limit: int = Query(settings.trending_default_limit, ge=1, le=settings.max_limit),
    category: Optional[Category] = Query(None, description="Restrict to one category"),
    redis = Depends(redis_dep),
):
    logger.info("Request: trending limit=%s category=%s", limit, category)
    return await get_trending_products(products, redis, limit=limit, category=category)


@router.get("/seasonal", response_model=SeasonalResult)
async def seasonal(
    products: Products,
    limit: int = Query(settings.seasonal_default_limit, ge=1, le=settings.max_limit),
    month: Optional[int] = Query(None, ge=1, le=12, description="Override the current month"),
    redis = Depends(redis_dep),
):
    logger.info("Request: seasonal limit=%s month=%s", limit, month)
    return await get_seasonal_recommendations(products, redis, limit=limit, month=month)


@router.get("/search", response_model=SearchResult)
async def search(
    products: Products,
    q: Optional[str] = Query(None, description="Free-text query"),
    limit: int = Query(settings.search_default_limit, ge=1, le=settings.max_limit),
):
    if not q or not q.strip():
        raise HTTPException(status_code=400, detail="Search query is required.")
    logger.info("Request: search q=%r limit=%s", q, limit)
    return await get_search_recommendations(products, query=q, limit=limit)

# app/domain/services/seasonal_svc.py
import logging
import time
from datetime import datetime, timezone
from typing import Optional

from app.core.config import get_settings
from app.domain.models.product import Category
from app.domain.models.recommendation import SeasonalResult, TrendingResult
from app.domain.repositories.product_repo import ProductRepo
from app.domain.services.constants import SEASONS, Season
from app.utils.cache import cache_get, cache_key, cache_set

logger = logging.getLogger(__name__)


def season_for_month(month: int) -> Season:
    for season in SEASONS:
        if month in season.months:
            return season
    raise ValueError(f"month must be in 1..12, got {month}")


async def get_seasonal_recommendations(
    product_repo: ProductRepo,
    redis,
    *,
    limit: int,
    month: Optional[int] = None,
) -> SeasonalResult:
    """
    Active products carrying one of the season's tags or belonging to one of its
    categories, best rated first then best selling. `month` defaults to today (UTC).
    """
    t0 = time.perf_counter()
    settings = get_settings()
    if month is None:
        month = datetime.now(timezone.utc).month
    season = season_for_month(month)
    logger.info("seasonal start season=%s month=%s limit=%s", season.name, month, limit)

    key = cache_key("seasonal", {"season": season.name, "limit": limit})
    cached = await cache_get(redis, key)
    if cached is not None:
        logger.info("seasonal cache_hit key=%s", key)
        return SeasonalResult.model_validate(cached)
    logger.info("seasonal cache_miss key=%s", key)

    db_t0 = time.perf_counter()
    products = await product_repo.find_by_tags_or_categories(season.tags, season.categories, limit)
    logger.info("seasonal db_ok items=%s db_time=%.3fs", len(products), time.perf_counter() - db_t0)

    result = SeasonalResult(season=season.name, recommendations=products, count=len(products))
    await cache_set(redis, key, result.model_dump(mode="json"), ex=settings.seasonal_cache_ttl)

    logger.info("seasonal done items=%s total_time=%.3fs", len(products), time.perf_counter() - t0)
    return result


async def get_trending_products(
    product_repo: ProductRepo,
    redis,
    *,
    limit: int,
    category: Optional[Category] = None,
) -> TrendingResult:
    """Active products by sales, views, rating, then recency; optionally one category."""
    t0 = time.perf_counter()
    settings = get_settings()
    logger.info("trending start limit=%s category=%s", limit, category.value if category else None)

    key = cache_key("trending", {"limit": limit, "category": category.value if category else None})
    cached = await cache_get(redis, key)
    if cached is not None:
        logger.info("trending cache_hit key=%s", key)
        return TrendingResult.model_validate(cached)
    logger.info("trending cache_miss key=%s", key)

    db_t0 = time.perf_counter()
    products = await product_repo.trending(limit, category)
    logger.info("trending db_ok items=%s db_time=%.3fs", len(products), time.perf_counter() - db_t0)

    result = TrendingResult(products=products, count=len(products))
    await cache_set(redis, key, result.model_dump(mode="json"), ex=settings.trending_cache_ttl)

    logger.info("trending done items=%s total_time=%.3fs", len(products), time.perf_counter() - t0)
    return result

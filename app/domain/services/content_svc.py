# app/domain/services/content_svc.py
import logging
import time
from typing import List, Sequence

from app.domain.models.preferences import PreferenceSnapshot
from app.domain.models.product import Product, RecommendedProduct
from app.domain.repositories.product_repo import ProductRepo
from app.domain.services.constants import (
    BRAND_BONUS,
    CATEGORY_BONUS,
    KIND_CONTENT,
    PRICE_BONUS_MAX,
    SALES_BONUS_CAP,
    SALES_BONUS_DIVISOR,
    TOP_PREFERENCES,
)

logger = logging.getLogger(__name__)


def _rank_bonus(value, preferred: Sequence, weight: int) -> float:
    if value in preferred:
        return (TOP_PREFERENCES - list(preferred).index(value)) * weight
    return 0.0


def price_bonus(price: float, avg_price: float) -> float:
    if avg_price <= 0:
        return 0.0
    return max(0.0, PRICE_BONUS_MAX - abs(price - avg_price) / avg_price)


def quality_bonus(product: Product) -> float:
    return product.average_rating + min(product.sales / SALES_BONUS_DIVISOR, SALES_BONUS_CAP)


def score_product(product: Product, snapshot: PreferenceSnapshot) -> float:
    top_categories = snapshot.categories[:TOP_PREFERENCES]
    top_brands = snapshot.brands[:TOP_PREFERENCES]
    return (
        _rank_bonus(product.category, top_categories, CATEGORY_BONUS)
        + _rank_bonus(product.brand, top_brands, BRAND_BONUS)
        + price_bonus(product.price, snapshot.price_range.avg)
        + quality_bonus(product)
    )


def rank_content_candidates(
    candidates: Sequence[Product],
    snapshot: PreferenceSnapshot,
    limit: int,
) -> List[RecommendedProduct]:
    """Score every candidate against the snapshot; highest first, ties keep candidate order."""
    scored = [
        RecommendedProduct.from_product(p, score_product(p, snapshot), KIND_CONTENT)
        for p in candidates
    ]
    scored.sort(key=lambda r: r.recommendation_score, reverse=True)
    return scored[:limit]


async def get_content_recommendations(
    product_repo: ProductRepo,
    *,
    snapshot: PreferenceSnapshot,
    limit: int,
) -> List[RecommendedProduct]:
    """
    Content-based filtering over the active catalog.
    Without any category signal (cold start) the globally top-rated, best-selling
    active products are returned with a zero score.
    """
    t0 = time.perf_counter()
    logger.info("content start limit=%s categories=%s", limit, [c.value for c in snapshot.categories[:TOP_PREFERENCES]])

    if not snapshot.has_category_signal:
        popular = await product_repo.top_rated(limit)
        logger.info("content cold_start items=%s total_time=%.3fs", len(popular), time.perf_counter() - t0)
        return [RecommendedProduct.from_product(p, 0.0, KIND_CONTENT) for p in popular]

    db_t0 = time.perf_counter()
    candidates = await product_repo.find_by_categories_or_brands(
        snapshot.categories[:TOP_PREFERENCES],
        snapshot.brands[:TOP_PREFERENCES],
    )
    logger.info("content db_ok candidates=%s db_time=%.3fs", len(candidates), time.perf_counter() - db_t0)

    items = rank_content_candidates(candidates, snapshot, limit)
    logger.info("content done items=%s total_time=%.3fs", len(items), time.perf_counter() - t0)
    return items

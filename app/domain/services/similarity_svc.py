# app/domain/services/similarity_svc.py
import logging
import time
from typing import Dict, List, NamedTuple, Sequence

from app.core.logging import json_preview
from app.domain.models.order import Order
from app.domain.models.product import Product
from app.domain.models.recommendation import ProductRecommendations
from app.domain.repositories.order_repo import OrderRepo
from app.domain.repositories.product_repo import ProductRepo

logger = logging.getLogger(__name__)


class CoPurchase(NamedTuple):
    product_id: str
    frequency: int


def count_co_purchases(orders: Sequence[Order], product_id: str, limit: int) -> List[CoPurchase]:
    """
    Line items sharing a paid order with `product_id`, counted per product.
    Highest frequency first; ties keep first-encounter order.
    """
    frequency: Dict[str, int] = {}
    for order in orders:
        if not order.is_paid or product_id not in order.product_ids():
            continue
        for item in order.order_items:
            if item.product_id != product_id:
                frequency[item.product_id] = frequency.get(item.product_id, 0) + 1

    ranked = sorted(frequency.items(), key=lambda kv: kv[1], reverse=True)
    return [CoPurchase(pid, count) for pid, count in ranked[:limit]]


def half_limit(limit: int) -> int:
    return max(1, limit // 2)


async def get_frequently_bought_together(
    order_repo: OrderRepo,
    product_repo: ProductRepo,
    *,
    product_id: str,
    limit: int,
) -> List[Product]:
    db_t0 = time.perf_counter()
    orders = await order_repo.find_paid_orders_with_product(product_id)
    co = count_co_purchases(orders, product_id, limit)
    logger.debug("bought_together product_id=%s co=%s", product_id, json_preview([c._asdict() for c in co]))

    products = await product_repo.get_many_by_product_ids([c.product_id for c in co])
    by_id = {p.product_id: p for p in products if p.is_active}
    logger.info(
        "bought_together db_ok orders=%s candidates=%s active=%s db_time=%.3fs",
        len(orders), len(co), len(by_id), time.perf_counter() - db_t0,
    )
    return [by_id[c.product_id] for c in co if c.product_id in by_id]


async def get_product_recommendations(
    order_repo: OrderRepo,
    product_repo: ProductRepo,
    *,
    product: Product,
    limit: int,
) -> ProductRecommendations:
    """
    Three independent lists around one product:
    similar (same category/brand/tag), frequently bought together, trending in its category.
    The last two are capped at half the limit.
    """
    t0 = time.perf_counter()
    logger.info("product_reco start product_id=%s limit=%s", product.product_id, limit)

    similar = await product_repo.find_similar(product, limit)
    together = await get_frequently_bought_together(
        order_repo, product_repo, product_id=product.product_id, limit=half_limit(limit)
    )
    trending = await product_repo.trending_in_category(product.category, half_limit(limit))

    logger.info(
        "product_reco done product_id=%s similar=%s together=%s trending=%s total_time=%.3fs",
        product.product_id, len(similar), len(together), len(trending), time.perf_counter() - t0,
    )
    return ProductRecommendations(
        similar=similar,
        frequently_bought_together=together,
        trending_in_category=trending,
    )

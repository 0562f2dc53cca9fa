# app/domain/services/collaborative_svc.py
import logging
import time
from typing import Dict, List, NamedTuple, Sequence, Set

from app.core.logging import json_preview
from app.domain.models.order import Order
from app.domain.models.product import RecommendedProduct
from app.domain.repositories.order_repo import OrderRepo
from app.domain.repositories.product_repo import ProductRepo
from app.domain.services.constants import KIND_COLLABORATIVE, NEIGHBOUR_LIMIT

logger = logging.getLogger(__name__)


class Neighbour(NamedTuple):
    user_id: str
    shared_count: int


class CollaborativeScore(NamedTuple):
    product_id: str
    score: int
    # Only surfaces in the debug scores log; items carry the catalog price
    avg_price: float


def purchased_product_ids(orders: Sequence[Order]) -> Set[str]:
    return {pid for order in orders if order.is_paid for pid in order.product_ids()}


def rank_neighbours(
    orders: Sequence[Order],
    purchased_ids: Set[str],
    exclude_user_id: str,
    limit: int = NEIGHBOUR_LIMIT,
) -> List[Neighbour]:
    """
    Users (other than `exclude_user_id`) ranked by how many distinct products of
    `purchased_ids` they bought in paid orders. Ties keep first-encounter order.
    """
    shared: Dict[str, Set[str]] = {}
    for order in orders:
        if not order.is_paid or order.user_id == exclude_user_id:
            continue
        common = purchased_ids.intersection(order.product_ids())
        if common:
            shared.setdefault(order.user_id, set()).update(common)

    ranked = sorted(shared.items(), key=lambda kv: len(kv[1]), reverse=True)
    return [Neighbour(user_id, len(products)) for user_id, products in ranked[:limit]]


def score_neighbour_purchases(
    orders: Sequence[Order],
    purchased_ids: Set[str],
    limit: int,
) -> List[CollaborativeScore]:
    """
    Products bought in the neighbours' paid orders that the target user has not bought.
    score = number of orders containing the product; avg_price = mean unit price paid.
    """
    order_counts: Dict[str, int] = {}
    price_sums: Dict[str, float] = {}
    price_lines: Dict[str, int] = {}

    for order in orders:
        if not order.is_paid:
            continue
        seen_in_order: Set[str] = set()
        for item in order.order_items:
            pid = item.product_id
            if pid in purchased_ids:
                continue
            price_sums[pid] = price_sums.get(pid, 0.0) + item.price
            price_lines[pid] = price_lines.get(pid, 0) + 1
            if pid not in seen_in_order:
                seen_in_order.add(pid)
                order_counts[pid] = order_counts.get(pid, 0) + 1

    scores = [
        CollaborativeScore(pid, count, price_sums[pid] / price_lines[pid])
        for pid, count in order_counts.items()
    ]
    scores.sort(key=lambda s: s.score, reverse=True)
    return scores[:limit]


async def get_collaborative_recommendations(
    order_repo: OrderRepo,
    product_repo: ProductRepo,
    *,
    user_id: str,
    limit: int,
    user_orders: Sequence[Order],
) -> List[RecommendedProduct]:
    """
    "Users who bought what you bought also bought...".

    1) purchase basis = products in the user's paid orders (empty -> no result)
    2) neighbours = top NEIGHBOUR_LIMIT other users by shared distinct products
    3) score products in the neighbours' paid orders, excluding the user's own purchases
    4) resolve to active products in score order; missing/inactive ones are dropped
    """
    t0 = time.perf_counter()
    purchased = purchased_product_ids(user_orders)
    logger.info("collaborative start user_id=%s limit=%s purchased=%s", user_id, limit, len(purchased))
    if not purchased:
        return []

    db_t0 = time.perf_counter()
    overlapping = await order_repo.find_paid_orders_with_any_product(sorted(purchased), exclude_user_id=user_id)
    neighbours = rank_neighbours(overlapping, purchased, exclude_user_id=user_id)
    logger.debug("collaborative neighbours=%s", json_preview([n._asdict() for n in neighbours]))
    if not neighbours:
        logger.info("collaborative done user_id=%s items=0 (no neighbours)", user_id)
        return []

    neighbour_orders = await order_repo.get_paid_orders_for_users([n.user_id for n in neighbours])
    logger.info(
        "collaborative db_ok neighbours=%s neighbour_orders=%s db_time=%.3fs",
        len(neighbours), len(neighbour_orders), time.perf_counter() - db_t0,
    )

    scores = score_neighbour_purchases(neighbour_orders, purchased, limit)
    logger.debug("collaborative scores=%s", json_preview([s._asdict() for s in scores]))

    products = await product_repo.get_many_by_product_ids([s.product_id for s in scores])
    by_id = {p.product_id: p for p in products if p.is_active}
    items = [
        RecommendedProduct.from_product(by_id[s.product_id], s.score, KIND_COLLABORATIVE)
        for s in scores
        if s.product_id in by_id
    ]
    dropped = len(scores) - len(items)
    if dropped:
        logger.info("collaborative dropped %s missing/inactive products", dropped)

    logger.info("collaborative done user_id=%s items=%s total_time=%.3fs", user_id, len(items), time.perf_counter() - t0)
    return items

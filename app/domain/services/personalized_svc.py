# app/domain/services/personalized_svc.py
import asyncio
import logging
import time

from app.domain.models.preferences import PreferenceSnapshot
from app.domain.models.recommendation import PersonalizedResult, UserPreferencesOut
from app.domain.models.user import Shopper
from app.domain.repositories.order_repo import OrderRepo
from app.domain.repositories.product_repo import ProductRepo
from app.domain.services.collaborative_svc import get_collaborative_recommendations
from app.domain.services.content_svc import get_content_recommendations
from app.domain.services.fusion_svc import fuse_recommendations
from app.domain.services.preferences_svc import get_user_preferences

logger = logging.getLogger(__name__)


async def get_personalized_recommendations(
    order_repo: OrderRepo,
    product_repo: ProductRepo,
    *,
    shopper: Shopper,
    limit: int,
) -> PersonalizedResult:
    """
    End-to-end personalized pipeline for one shopper.

    High-level flow:
      1) Load the shopper's paid orders (shared by both branches).
      2) In parallel:
           - collaborative scorer over neighbour purchases
           - preference extraction -> content scorer
      3) Fuse both lists (collaborative first), rank by score, truncate to `limit`.

    Nothing is cached or written: every call recomputes from the current data.
    """
    t0 = time.perf_counter()
    user_id = shopper.user_id
    logger.info("personalized start user_id=%s limit=%s", user_id, limit)

    orders = await order_repo.get_paid_orders_for_user(user_id)
    logger.info("personalized db_ok paid_orders=%s", len(orders))

    async def _content_branch():
        snapshot = await get_user_preferences(product_repo, shopper=shopper, orders=orders)
        items = await get_content_recommendations(product_repo, snapshot=snapshot, limit=limit)
        return snapshot, items

    collaborative, (snapshot, content) = await asyncio.gather(
        get_collaborative_recommendations(
            order_repo, product_repo, user_id=user_id, limit=limit, user_orders=orders
        ),
        _content_branch(),
    )

    recommendations = fuse_recommendations(collaborative, content, limit)
    logger.info(
        "personalized done user_id=%s collaborative=%s content=%s items=%s total_time=%.3fs",
        user_id, len(collaborative), len(content), len(recommendations), time.perf_counter() - t0,
    )
    return PersonalizedResult(
        recommendations=recommendations,
        user_preferences=_preferences_out(snapshot),
    )


def _preferences_out(snapshot: PreferenceSnapshot) -> UserPreferencesOut:
    return UserPreferencesOut(
        categories=snapshot.categories,
        brands=snapshot.brands,
        price_range=snapshot.price_range,
    )

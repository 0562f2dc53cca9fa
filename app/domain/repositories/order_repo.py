# app/domain/repositories/order_repo.py

from __future__ import annotations
import logging
from typing import Any, Dict, Iterable, List, Optional
from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import ValidationError
from app.domain.models.order import Order, OrderItem

logger = logging.getLogger(__name__)

ORDER_PROJECTION = {
    "_id": 0,
    "order_id": 1,
    "user_id": 1,
    "order_items.product_id": 1,
    "order_items.price": 1,
    "order_items.quantity": 1,
    "is_paid": 1,
    "created_at": 1,
}


def to_order(doc: Dict[str, Any]) -> Optional[Order]:
    """
    Build an Order, validating line items one by one.
    Line items with a missing/malformed product reference are dropped;
    an order without identity or owner is dropped entirely.
    """
    items: List[OrderItem] = []
    for raw in doc.get("order_items") or []:
        try:
            items.append(OrderItem.model_validate(raw))
        except ValidationError:
            logger.warning("skipping malformed order item order_id=%s item=%s", doc.get("order_id"), raw)
    try:
        return Order.model_validate({**doc, "order_items": items})
    except ValidationError as e:
        logger.warning("skipping malformed order order_id=%s errors=%s", doc.get("order_id"), e.error_count())
        return None


def to_orders(docs: Iterable[Dict[str, Any]]) -> List[Order]:
    orders = (to_order(doc) for doc in docs)
    return [o for o in orders if o is not None]


class OrderRepo:
    """
    Read-only access to paid orders in the 'orders' collection.
    Results come back in insertion order (_id ascending) so every grouping built
    on top of them has a stable tie-break.
    """

    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str = "orders"):
        self.col = db[collection_name]

    async def _find_paid(self, query: Dict[str, Any]) -> List[Order]:
        cursor = self.col.find({**query, "is_paid": True}, ORDER_PROJECTION).sort("_id", 1)
        docs = await cursor.to_list(length=None)
        return to_orders(docs)

    async def get_paid_orders_for_user(self, user_id: str) -> List[Order]:
        return await self._find_paid({"user_id": user_id})

    async def get_paid_orders_for_users(self, user_ids: List[str]) -> List[Order]:
        if not user_ids:
            return []
        return await self._find_paid({"user_id": {"$in": list(user_ids)}})

    async def find_paid_orders_with_any_product(
        self,
        product_ids: List[str],
        exclude_user_id: Optional[str] = None,
    ) -> List[Order]:
        """Paid orders of other users containing at least one of `product_ids`."""
        if not product_ids:
            return []
        query: Dict[str, Any] = {"order_items.product_id": {"$in": list(product_ids)}}
        if exclude_user_id is not None:
            query["user_id"] = {"$ne": exclude_user_id}
        return await self._find_paid(query)

    async def find_paid_orders_with_product(self, product_id: str) -> List[Order]:
        return await self._find_paid({"order_items.product_id": product_id})

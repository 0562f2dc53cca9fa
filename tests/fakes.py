"""In-memory stand-ins for the repositories and Redis, plus model builders."""

from datetime import datetime
from typing import Dict, List, Optional, Sequence

from app.domain.models.order import Order, OrderItem
from app.domain.models.product import Category, Product
from app.domain.models.user import Shopper
from app.domain.repositories.product_repo import (
    BY_RATING_THEN_SALES,
    BY_SALES_VIEWS_RECENCY,
    BY_TRENDING,
)

BASE_TIME = datetime(2024, 1, 1)


def make_product(product_id: str, **overrides) -> Product:
    fields = dict(
        product_id=product_id,
        name=f"Product {product_id}",
        category=Category.ELECTRONICS,
        brand="Acme",
        price=100.0,
        tags=[],
        average_rating=4.0,
        sales=50,
        views=100,
        status="active",
        created_at=BASE_TIME,
    )
    fields.update(overrides)
    return Product(**fields)


def make_order(order_id: str, user_id: str, *items, is_paid: bool = True) -> Order:
    """items are (product_id, price, quantity) tuples."""
    return Order(
        order_id=order_id,
        user_id=user_id,
        order_items=[OrderItem(product_id=p, price=price, quantity=q) for p, price, q in items],
        is_paid=is_paid,
    )


def _sort(products: Sequence[Product], spec) -> List[Product]:
    ordered = list(products)
    # Stable sorts applied from the least to the most significant key; list order stands in for _id
    for field, direction in reversed(list(spec)):
        if field == "_id":
            continue
        def key(p, field=field):
            value = getattr(p, field)
            return value if value is not None else datetime.min
        ordered.sort(key=key, reverse=direction < 0)
    return ordered


class FakeProductRepo:
    def __init__(self, products: Sequence[Product]):
        self.products = list(products)
        self.search_calls: List[str] = []

    def _active(self) -> List[Product]:
        return [p for p in self.products if p.is_active]

    async def get_by_product_id(self, product_id: str) -> Optional[Product]:
        return next((p for p in self.products if p.product_id == product_id), None)

    async def get_many_by_product_ids(self, ids, *, active_only: bool = True) -> List[Product]:
        wanted = set(ids)
        pool = self._active() if active_only else self.products
        return [p for p in pool if p.product_id in wanted]

    async def find_by_categories_or_brands(self, categories, brands) -> List[Product]:
        if not categories and not brands:
            return []
        return [p for p in self._active() if p.category in categories or p.brand in brands]

    async def find_similar(self, product: Product, limit: int) -> List[Product]:
        hits = [
            p for p in self._active()
            if p.product_id != product.product_id
            and (p.category == product.category or p.brand == product.brand or set(p.tags) & set(product.tags))
        ]
        return _sort(hits, BY_RATING_THEN_SALES)[:limit]

    async def find_by_tags_or_categories(self, tags, categories, limit: int) -> List[Product]:
        hits = [p for p in self._active() if set(p.tags) & set(tags) or p.category in categories]
        return _sort(hits, BY_RATING_THEN_SALES)[:limit]

    async def top_rated(self, limit: int) -> List[Product]:
        return _sort(self._active(), BY_RATING_THEN_SALES)[:limit]

    async def trending_in_category(self, category, limit: int) -> List[Product]:
        hits = [p for p in self._active() if p.category == category]
        return _sort(hits, BY_SALES_VIEWS_RECENCY)[:limit]

    async def trending(self, limit: int, category=None) -> List[Product]:
        hits = [p for p in self._active() if category is None or p.category == category]
        return _sort(hits, BY_TRENDING)[:limit]

    async def search_text(self, text: str, limit: int) -> List[Product]:
        self.search_calls.append(text)
        words = text.lower().split()
        hits = [p for p in self._active() if any(w in p.name.lower() for w in words)]
        return _sort(hits, [("average_rating", -1)])[:limit]


class FakeOrderRepo:
    def __init__(self, orders: Sequence[Order]):
        self.orders = list(orders)

    def _paid(self) -> List[Order]:
        return [o for o in self.orders if o.is_paid]

    async def get_paid_orders_for_user(self, user_id: str) -> List[Order]:
        return [o for o in self._paid() if o.user_id == user_id]

    async def get_paid_orders_for_users(self, user_ids) -> List[Order]:
        wanted = set(user_ids)
        return [o for o in self._paid() if o.user_id in wanted]

    async def find_paid_orders_with_any_product(self, product_ids, exclude_user_id=None) -> List[Order]:
        wanted = set(product_ids)
        return [
            o for o in self._paid()
            if o.user_id != exclude_user_id and wanted.intersection(o.product_ids())
        ]

    async def find_paid_orders_with_product(self, product_id: str) -> List[Order]:
        return [o for o in self._paid() if product_id in o.product_ids()]


class FakeUserRepo:
    def __init__(self, shoppers: Sequence[Shopper]):
        self.shoppers: Dict[str, Shopper] = {s.user_id: s for s in shoppers}

    async def get_by_user_id(self, user_id: str) -> Optional[Shopper]:
        return self.shoppers.get(user_id)


class FakeRedis:
    def __init__(self):
        self.store: Dict[str, str] = {}
        self.ttls: Dict[str, int] = {}

    async def get(self, key):
        return self.store.get(key)

    async def set(self, key, value, ex=None):
        self.store[key] = value
        self.ttls[key] = ex

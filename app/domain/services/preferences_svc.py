# app/domain/services/preferences_svc.py
import logging
import time
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence

from app.core.logging import json_preview
from app.domain.models.order import Order
from app.domain.models.preferences import PreferenceSnapshot, PriceRange
from app.domain.models.product import Category, Product
from app.domain.models.user import Shopper
from app.domain.repositories.product_repo import ProductRepo
from app.domain.services.constants import CART_WEIGHT, WISHLIST_WEIGHT

logger = logging.getLogger(__name__)


@dataclass
class PreferenceTally:
    """Running weights per category and brand, in first-encounter order."""
    categories: Dict[Category, float] = field(default_factory=dict)
    brands: Dict[str, float] = field(default_factory=dict)
    total_spent: float = 0.0
    item_count: int = 0
    max_price: Optional[float] = None

    def add_signal(self, product: Product, weight: float) -> None:
        self.categories[product.category] = self.categories.get(product.category, 0.0) + weight
        self.brands[product.brand] = self.brands.get(product.brand, 0.0) + weight

    def add_purchase(self, price: float, quantity: int) -> None:
        self.total_spent += price * quantity
        self.item_count += quantity

    def see_price(self, price: float) -> None:
        if self.max_price is None or price > self.max_price:
            self.max_price = price

    def snapshot(self) -> PreferenceSnapshot:
        # sorted() is stable: equal weights keep first-encounter order
        categories = sorted(self.categories, key=lambda c: self.categories[c], reverse=True)
        brands = sorted(self.brands, key=lambda b: self.brands[b], reverse=True)
        avg = self.total_spent / self.item_count if self.item_count > 0 else 0.0
        return PreferenceSnapshot(
            categories=categories,
            brands=brands,
            price_range=PriceRange(avg=avg, max=self.max_price),
            total_purchases=self.item_count,
        )


def extract_preferences(
    orders: Sequence[Order],
    products_by_id: Mapping[str, Product],
    wishlist: Sequence[Product] = (),
    cart: Sequence[Product] = (),
) -> PreferenceSnapshot:
    """
    Build a weighted preference profile from paid purchases, wishlist and cart.

    - each purchased line item adds its quantity to its product's category and brand
      and `price * quantity` to total spend (only when the product still resolves)
    - each wishlist product adds WISHLIST_WEIGHT, each cart line CART_WEIGHT
    - max price covers every paid line item and stays None without purchases
    """
    tally = PreferenceTally()

    for order in orders:
        if not order.is_paid:
            continue
        for item in order.order_items:
            tally.see_price(item.price)
            product = products_by_id.get(item.product_id)
            if product is None:
                continue
            tally.add_signal(product, item.quantity)
            tally.add_purchase(item.price, item.quantity)

    for product in wishlist:
        tally.add_signal(product, WISHLIST_WEIGHT)

    for product in cart:
        tally.add_signal(product, CART_WEIGHT)

    return tally.snapshot()


def _in_order(ids: List[str], products_by_id: Mapping[str, Product]) -> List[Product]:
    return [products_by_id[pid] for pid in ids if pid in products_by_id]


async def get_user_preferences(
    product_repo: ProductRepo,
    *,
    shopper: Shopper,
    orders: Sequence[Order],
) -> PreferenceSnapshot:
    """Resolve every referenced product in one round-trip, then extract preferences."""
    t0 = time.perf_counter()
    purchased_ids = [pid for order in orders for pid in order.product_ids()]
    wishlist_ids = list(shopper.wishlist)
    cart_ids = [line.product_id for line in shopper.cart]

    wanted = list(dict.fromkeys(purchased_ids + wishlist_ids + cart_ids))
    # Inactive products still describe what the user liked
    products = await product_repo.get_many_by_product_ids(wanted, active_only=False)
    products_by_id = {p.product_id: p for p in products}
    logger.info(
        "preferences resolved user_id=%s wanted=%s found=%s",
        shopper.user_id, len(wanted), len(products_by_id),
    )

    snapshot = extract_preferences(
        orders,
        products_by_id,
        wishlist=_in_order(wishlist_ids, products_by_id),
        cart=_in_order(cart_ids, products_by_id),
    )
    logger.debug("preferences snapshot=%s", json_preview(snapshot.model_dump(mode="json")))
    logger.info(
        "preferences done user_id=%s categories=%s brands=%s total_time=%.3fs",
        shopper.user_id, len(snapshot.categories), len(snapshot.brands), time.perf_counter() - t0,
    )
    return snapshot

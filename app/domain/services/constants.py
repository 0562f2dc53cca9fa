# Constants for the recommendation scorers.
from typing import NamedTuple, Tuple

from app.domain.models.product import Category

# Preference signal weights (a purchase weighs its quantity)
WISHLIST_WEIGHT = 0.5
CART_WEIGHT = 0.3

# Collaborative filtering
NEIGHBOUR_LIMIT = 20  # Number of most-overlapping users kept as neighbours

# Content-based scoring
TOP_PREFERENCES = 3        # Top categories / brands taken from the snapshot
CATEGORY_BONUS = 3         # (TOP_PREFERENCES - rank) * CATEGORY_BONUS
BRAND_BONUS = 2            # (TOP_PREFERENCES - rank) * BRAND_BONUS
PRICE_BONUS_MAX = 2        # max(0, PRICE_BONUS_MAX - relative price distance)
SALES_BONUS_DIVISOR = 100  # sales / SALES_BONUS_DIVISOR ...
SALES_BONUS_CAP = 2        # ... capped at SALES_BONUS_CAP points

# Recommendation kinds
KIND_COLLABORATIVE = "collaborative"
KIND_CONTENT = "content-based"


class Season(NamedTuple):
    name: str
    months: Tuple[int, ...]
    tags: Tuple[str, ...]
    categories: Tuple[Category, ...]


SEASONS: Tuple[Season, ...] = (
    Season(
        name="spring",
        months=(3, 4, 5),
        tags=("spring", "outdoor", "garden", "fashion"),
        categories=(Category.HOME_GARDEN, Category.SPORTS_OUTDOORS, Category.CLOTHING_FASHION),
    ),
    Season(
        name="summer",
        months=(6, 7, 8),
        tags=("summer", "outdoor", "sports", "vacation", "swimwear"),
        categories=(Category.SPORTS_OUTDOORS, Category.CLOTHING_FASHION, Category.ELECTRONICS),
    ),
    Season(
        name="fall",
        months=(9, 10, 11),
        tags=("fall", "autumn", "back-to-school", "warm", "cozy"),
        categories=(Category.CLOTHING_FASHION, Category.ELECTRONICS, Category.BOOKS_MEDIA),
    ),
    Season(
        name="winter",
        months=(12, 1, 2),
        tags=("winter", "holiday", "warm", "indoor", "gifts"),
        categories=(Category.ELECTRONICS, Category.TOYS_GAMES, Category.HOME_GARDEN),
    ),
)

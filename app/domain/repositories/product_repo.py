# app/domain/repositories/product_repo.py

from __future__ import annotations
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple
from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import ValidationError
from app.domain.models.product import Category, Product

logger = logging.getLogger(__name__)

# Reviews are embedded in product documents and never needed for scoring
PRODUCT_PROJECTION = {"_id": 0, "reviews": 0}

SortSpec = Sequence[Tuple[str, int]]

# Every sort ends on _id (insertion order) so equal keys come back in a stable order
BY_RATING_THEN_SALES: SortSpec = [("average_rating", -1), ("sales", -1), ("_id", 1)]
BY_SALES_VIEWS_RECENCY: SortSpec = [("sales", -1), ("views", -1), ("created_at", -1), ("_id", 1)]
BY_TRENDING: SortSpec = [("sales", -1), ("views", -1), ("average_rating", -1), ("created_at", -1), ("_id", 1)]
BY_INSERTION: SortSpec = [("_id", 1)]


def to_products(docs: Iterable[Dict[str, Any]]) -> List[Product]:
    """
    Validate raw documents one by one.
    A malformed document (unknown category, negative price, ...) is logged and
    skipped so one bad row never aborts a whole recommendation request.
    """
    products: List[Product] = []
    for doc in docs:
        try:
            products.append(Product.model_validate(doc))
        except ValidationError as e:
            logger.warning(
                "skipping malformed product product_id=%s errors=%s",
                doc.get("product_id"), e.error_count(),
            )
    return products


class ProductRepo:
    """
    Read-only product repository backed by the 'products' collection.
    Every finder except get_by_product_id only returns active products.
    """

    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str = "products"):
        self.col = db[collection_name]

    async def _find(self, query: Dict[str, Any], sort: Optional[SortSpec] = None, limit: int = 0) -> List[Product]:
        cursor = self.col.find(query, PRODUCT_PROJECTION)
        if sort:
            cursor = cursor.sort(list(sort))
        if limit:
            cursor = cursor.limit(limit)
        docs = await cursor.to_list(length=None)
        return to_products(docs)

    async def get_by_product_id(self, product_id: str) -> Optional[Product]:
        doc = await self.col.find_one({"product_id": product_id}, PRODUCT_PROJECTION)
        if not doc:
            return None
        found = to_products([doc])
        return found[0] if found else None

    async def get_many_by_product_ids(self, ids: List[str], *, active_only: bool = True) -> List[Product]:
        """Batch fetch. Order is not guaranteed; callers re-order by their own ranking."""
        if not ids:
            return []
        query: Dict[str, Any] = {"product_id": {"$in": list(ids)}}
        if active_only:
            query["status"] = "active"
        return await self._find(query)

    async def find_by_categories_or_brands(
        self,
        categories: List[Category],
        brands: List[str],
    ) -> List[Product]:
        """Active products in any of `categories` OR made by any of `brands`."""
        clauses: List[Dict[str, Any]] = []
        if categories:
            clauses.append({"category": {"$in": [c.value for c in categories]}})
        if brands:
            clauses.append({"brand": {"$in": list(brands)}})
        if not clauses:
            return []
        return await self._find({"status": "active", "$or": clauses}, BY_INSERTION)

    async def find_similar(self, product: Product, limit: int) -> List[Product]:
        """Active products other than `product` sharing its category, brand or any tag."""
        clauses: List[Dict[str, Any]] = [
            {"category": product.category.value},
            {"brand": product.brand},
        ]
        if product.tags:
            clauses.append({"tags": {"$in": list(product.tags)}})
        query = {
            "product_id": {"$ne": product.product_id},
            "status": "active",
            "$or": clauses,
        }
        return await self._find(query, BY_RATING_THEN_SALES, limit)

    async def find_by_tags_or_categories(
        self,
        tags: Sequence[str],
        categories: Sequence[Category],
        limit: int,
    ) -> List[Product]:
        query = {
            "status": "active",
            "$or": [
                {"tags": {"$in": list(tags)}},
                {"category": {"$in": [c.value for c in categories]}},
            ],
        }
        return await self._find(query, BY_RATING_THEN_SALES, limit)

    async def top_rated(self, limit: int) -> List[Product]:
        return await self._find({"status": "active"}, BY_RATING_THEN_SALES, limit)

    async def trending_in_category(self, category: Category, limit: int) -> List[Product]:
        query = {"status": "active", "category": category.value}
        return await self._find(query, BY_SALES_VIEWS_RECENCY, limit)

    async def trending(self, limit: int, category: Optional[Category] = None) -> List[Product]:
        query: Dict[str, Any] = {"status": "active"}
        if category is not None:
            query["category"] = category.value
        return await self._find(query, BY_TRENDING, limit)

    async def search_text(self, text: str, limit: int) -> List[Product]:
        """Full-text search on the collection's text index, best match first then rating."""
        projection = dict(PRODUCT_PROJECTION, score={"$meta": "textScore"})
        cursor = (
            self.col.find({"$text": {"$search": text}, "status": "active"}, projection)
            .sort([("score", {"$meta": "textScore"}), ("average_rating", -1), ("_id", 1)])
            .limit(limit)
        )
        docs = await cursor.to_list(length=None)
        for doc in docs:
            doc.pop("score", None)
        return to_products(docs)

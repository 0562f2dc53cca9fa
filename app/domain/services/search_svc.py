import logging
import time

from app.domain.models.recommendation import SearchResult
from app.domain.repositories.product_repo import ProductRepo

logger = logging.getLogger(__name__)


async def get_search_recommendations(product_repo: ProductRepo, *, query: str, limit: int) -> SearchResult:
    t0 = time.perf_counter()
    text = query.strip()
    logger.info("search start q=%r limit=%s", text, limit)

    products = await product_repo.search_text(text, limit)

    logger.info("search done items=%s total_time=%.3fs", len(products), time.perf_counter() - t0)
    return SearchResult(search_query=text, recommendations=products, count=len(products))

# app/domain/services/fusion_svc.py
import logging
from typing import Dict, List, Sequence

from app.domain.models.product import RecommendedProduct

logger = logging.getLogger(__name__)


def fuse_recommendations(
    collaborative: Sequence[RecommendedProduct],
    content_based: Sequence[RecommendedProduct],
    limit: int,
) -> List[RecommendedProduct]:
    """
    Merge both scorer outputs into one ranking.

    Collaborative items come first, so when a product appears in both lists the
    collaborative item (and its score) wins. Scores are compared as-is: collaborative
    scores are neighbour order counts, content scores a weighted sum, and no
    normalisation is applied between the two scales.
    """
    unique: Dict[str, RecommendedProduct] = {}
    for item in [*collaborative, *content_based]:
        unique.setdefault(item.product_id, item)

    merged = sorted(unique.values(), key=lambda r: r.recommendation_score, reverse=True)
    logger.debug(
        "fusion collaborative=%s content=%s unique=%s limit=%s",
        len(collaborative), len(content_based), len(unique), limit,
    )
    return merged[:limit]

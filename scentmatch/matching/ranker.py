from __future__ import annotations

import logging
from collections.abc import Sequence

from ..analysis.models import AnalysisRecord
from .config import SimilarityWeights
from .models import CatalogItem, RankedRecommendation
from .similarity import combined_score

logger = logging.getLogger(__name__)


def ranked_pairs(
    record: AnalysisRecord,
    catalog: Sequence[CatalogItem],
    top_n: int,
    weights: SimilarityWeights | None = None,
) -> list[tuple[RankedRecommendation, CatalogItem]]:
    """Score every catalog item and pair the best ``top_n`` stubs with their items.

    Ties keep catalog order because the sort is stable. Justifications are
    left empty; ``retrieval.rank_candidates`` fills them in.
    """
    if not catalog or top_n <= 0:
        return []

    scored = [(combined_score(record, item, weights), item) for item in catalog]
    scored.sort(key=lambda pair: pair[0], reverse=True)

    return [
        (
            RankedRecommendation(
                catalog_item_id=item.id,
                score=round(score, 4),
                rank=position,
            ),
            item,
        )
        for position, (score, item) in enumerate(scored[:top_n], start=1)
    ]


def rank_items(
    record: AnalysisRecord,
    catalog: Sequence[CatalogItem],
    top_n: int,
    weights: SimilarityWeights | None = None,
) -> list[RankedRecommendation]:
    return [stub for stub, _ in ranked_pairs(record, catalog, top_n, weights)]


def validate_recommendations(
    recommendations: Sequence[RankedRecommendation],
) -> list[RankedRecommendation]:
    """Drop recommendations without an id or with an out-of-range score."""
    valid: list[RankedRecommendation] = []
    for rec in recommendations:
        if not rec.catalog_item_id:
            logger.warning("Dropping recommendation without catalog item id: %r", rec)
            continue
        if not 0.0 <= rec.score <= 1.0:
            logger.warning("Dropping recommendation with score out of range: %s", rec.score)
            continue
        valid.append(rec)
    return valid


def _filter_by_dimension(
    recommendations: Sequence[RankedRecommendation],
    catalog: Sequence[CatalogItem],
    attribute: str,
    dimension: str,
    min_score: float,
) -> list[RankedRecommendation]:
    by_id = {item.id: item for item in catalog}
    kept: list[RankedRecommendation] = []
    for rec in recommendations:
        item = by_id.get(rec.catalog_item_id)
        if item is None:
            continue
        value = getattr(item, attribute).get(dimension)
        if value is not None and value >= min_score:
            kept.append(rec)
    return kept


def filter_by_trait(
    recommendations: Sequence[RankedRecommendation],
    catalog: Sequence[CatalogItem],
    trait: str,
    min_score: float,
) -> list[RankedRecommendation]:
    return _filter_by_dimension(recommendations, catalog, "traits", trait, min_score)


def filter_by_category(
    recommendations: Sequence[RankedRecommendation],
    catalog: Sequence[CatalogItem],
    category: str,
    min_score: float,
) -> list[RankedRecommendation]:
    return _filter_by_dimension(recommendations, catalog, "categories", category, min_score)

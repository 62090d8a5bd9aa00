from __future__ import annotations

import logging
import time
from collections.abc import Sequence

from ..analysis.models import AnalysisRecord
from .config import SimilarityWeights
from .explain import generate_justification, match_grade
from .models import CatalogItem, RankedRecommendation
from .ranker import ranked_pairs

logger = logging.getLogger(__name__)


def rank_candidates(
    record: AnalysisRecord,
    catalog: Sequence[CatalogItem],
    top_n: int,
    weights: SimilarityWeights | None = None,
) -> list[RankedRecommendation]:
    """
    Rank catalog items against an analysis record and explain each pick.

    Returns at most ``top_n`` recommendations ordered by combined score, ties
    in catalog order. An empty catalog or a non-positive ``top_n`` gives an
    empty list. The catalog is only read.
    """
    start_time = time.time()

    pairs = ranked_pairs(record, catalog, top_n, weights)
    if not pairs:
        return []

    results = [
        stub.model_copy(update={
            "justification": generate_justification(record, item),
            "grade": match_grade(stub.score),
        })
        for stub, item in pairs
    ]

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    logger.debug(
        "Ranked %d catalog items, returned %d in %.1f ms",
        len(catalog), len(results), elapsed_ms,
    )
    return results

from __future__ import annotations

import logging
import math
from collections.abc import Mapping

import numpy as np
from sklearn.metrics.pairwise import cosine_similarity

from ..analysis.models import AnalysisRecord
from .config import DEFAULT_MATCHING_CONFIG, SimilarityWeights
from .models import CatalogItem

logger = logging.getLogger(__name__)


def _unit_interval(value: float) -> float:
    """Clamp to [0, 1]; NaN, infinities and non-numbers become 0."""
    try:
        value = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(value):
        return 0.0
    return max(0.0, min(1.0, value))


def vector_similarity(v1: Mapping[str, float], v2: Mapping[str, float]) -> float:
    """Cosine similarity over the keys both vectors share.

    No shared keys, a zero-magnitude side or non-numeric entries all give 0.
    """
    keys = sorted(set(v1) & set(v2))
    if not keys:
        return 0.0
    try:
        a = np.array([[float(v1[k]) for k in keys]])
        b = np.array([[float(v2[k]) for k in keys]])
    except (TypeError, ValueError):
        return 0.0
    if not (np.isfinite(a).all() and np.isfinite(b).all()):
        return 0.0
    if not a.any() or not b.any():
        return 0.0
    return _unit_interval(cosine_similarity(a, b)[0, 0])


def combined_score(
    record: AnalysisRecord,
    item: CatalogItem,
    weights: SimilarityWeights | None = None,
) -> float:
    """Weighted sum of trait and category similarity, clamped to [0, 1]."""
    w = weights or DEFAULT_MATCHING_CONFIG.weights
    trait_sim = vector_similarity(record.traits.as_vector(), item.traits)
    category_sim = vector_similarity(record.scent_categories.as_vector(), item.categories)
    return _unit_interval(trait_sim * w.trait + category_sim * w.category)

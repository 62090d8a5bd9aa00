"""
Deterministic natural-language justifications for ranked catalog items.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from ..analysis.models import CATEGORY_NAMES, TRAIT_NAMES, AnalysisRecord
from .models import CatalogItem

logger = logging.getLogger(__name__)

TRAIT_LABELS: dict[str, str] = {
    "sexy": "Sexy",
    "cute": "Cute",
    "charisma": "Charisma",
    "darkness": "Darkness",
    "freshness": "Freshness",
    "elegance": "Elegance",
    "freedom": "Freedom",
    "luxury": "Luxury",
    "purity": "Purity",
    "uniqueness": "Uniqueness",
}

CATEGORY_LABELS: dict[str, str] = {
    "citrus": "Citrus",
    "floral": "Floral",
    "woody": "Woody",
    "musky": "Musk",
    "fruity": "Fruity",
    "spicy": "Spicy",
}

CATEGORY_PHRASES: dict[str, str] = {
    "citrus": "bright and sparkling like freshly peeled zest",
    "floral": "soft and romantic like a bouquet in full bloom",
    "woody": "warm and grounded with a calm, lasting depth",
    "musky": "sensual and enveloping like skin after sunlight",
    "fruity": "sweet and playful with a juicy, vivid energy",
    "spicy": "bold and magnetic with a warm, daring edge",
}

CLOSING_PHRASE = "It is a natural match for your image."
MAX_KEYWORDS = 3
TOP_TRAITS = 3
EXCERPT_LENGTH = 120

# (threshold, label), checked from the top
GRADES: tuple[tuple[float, str], ...] = (
    (0.9, "perfect match"),
    (0.8, "excellent match"),
    (0.7, "strong match"),
    (0.6, "good match"),
    (0.5, "fair match"),
)
LOWEST_GRADE = "weak match"


@dataclass(frozen=True)
class SimilarField:
    key: str
    value: float
    similarity: float


def match_grade(score: float) -> str:
    for threshold, label in GRADES:
        if score >= threshold:
            return label
    return LOWEST_GRADE


def _declared_order(keys, declared: tuple[str, ...]) -> list[str]:
    keys = list(keys)
    return [k for k in declared if k in keys] + [k for k in keys if k not in declared]


def top_similar_fields(
    subject: Mapping[str, float],
    item: Mapping[str, float],
    count: int = TOP_TRAITS,
) -> list[SimilarField]:
    """Shared dimensions ranked by 1 / (1 + |difference|), declaration order on ties."""
    shared = _declared_order((k for k in subject if k in item), TRAIT_NAMES)
    fields = [
        SimilarField(
            key=key,
            value=item[key],
            similarity=1.0 / (1.0 + abs(subject[key] - item[key])),
        )
        for key in shared
    ]
    fields.sort(key=lambda f: f.similarity, reverse=True)
    return fields[:count]


def dominant_category(categories: Mapping[str, float]) -> str | None:
    ordered = _declared_order(categories, CATEGORY_NAMES)
    if not ordered:
        return None
    return max(ordered, key=lambda k: categories[k])


def description_excerpt(description: str, limit: int = EXCERPT_LENGTH) -> str:
    first = description.split(".")[0].strip()
    if not first:
        return ""
    if len(first) > limit:
        return first[:limit].rstrip() + "..."
    return first + "."


def _format_value(value: float) -> str:
    return f"{value:g}"


def fallback_justification(item: CatalogItem) -> str:
    name = getattr(item, "name", None) or "This fragrance"
    return f"'{name}' is a fragrance that suits your image well."


def generate_justification(record: AnalysisRecord, item: CatalogItem) -> str:
    """Compose the justification for one ranked item; never raises."""
    try:
        parts = [f"'{item.name}'"]

        keywords = [k for k in item.keywords if k][:MAX_KEYWORDS]
        if keywords:
            parts.append(f"carries {', '.join(keywords)} qualities and")

        similar = top_similar_fields(record.traits.as_vector(), item.traits)
        if similar:
            traits_text = ", ".join(
                f"{TRAIT_LABELS.get(f.key, f.key)} ({_format_value(f.value)})"
                for f in similar
            )
            parts.append(f"mirrors your image most closely in {traits_text}.")
        else:
            parts.append("mirrors your overall image.")

        category = dominant_category(item.categories)
        if category is not None:
            label = CATEGORY_LABELS.get(category, category)
            phrase = CATEGORY_PHRASES.get(category, "with a distinctive signature")
            parts.append(f"It is led by {label} notes, {phrase}.")

        excerpt = description_excerpt(item.description or "")
        if excerpt:
            parts.append(excerpt)

        parts.append(CLOSING_PHRASE)
        return " ".join(parts)
    except Exception:
        logger.warning("Justification generation failed for %r, using fallback",
                       getattr(item, "id", None), exc_info=True)
        return fallback_justification(item)

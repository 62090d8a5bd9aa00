"""
Usage guidance and display summaries for ranked fragrances.

The guidance rules read only the item's category vector: a category counts as
prominent when its score is strictly above PROMINENT_SCORE. Missing
categories are treated as absent.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from .explain import match_grade
from .models import CatalogItem, MatchSummary, RankedRecommendation, UsageGuide

logger = logging.getLogger(__name__)

PROMINENT_SCORE = 6
SUMMARY_KEYWORDS = 5

SEASON_SPRING_SUMMER = "spring, summer"
SEASON_AUTUMN_WINTER = "autumn, winter"
SEASON_ALL = "all seasons"

TIME_DAY = "morning, afternoon"
TIME_NIGHT = "evening, night"
TIME_ANY = "anytime"

OCCASION_ACTIVE = "lively holidays, active dates, a fresh office look"
OCCASION_BUSINESS = "important business meetings, fine-dining dinners, special evening gatherings"
OCCASION_ROMANTIC = "romantic dates, wedding guest outfits, elegant gala dinners"
OCCASION_DEFAULT = "special gatherings, important occasions, everyday self-expression"


def _prominent(categories: Mapping[str, float], *names: str) -> bool:
    return any((categories.get(name) or 0) > PROMINENT_SCORE for name in names)


def season_recommendation(categories: Mapping[str, float]) -> str:
    if _prominent(categories, "citrus", "fruity"):
        return SEASON_SPRING_SUMMER
    if _prominent(categories, "woody", "spicy"):
        return SEASON_AUTUMN_WINTER
    return SEASON_ALL


def time_recommendation(categories: Mapping[str, float]) -> str:
    if _prominent(categories, "citrus", "fruity"):
        return TIME_DAY
    if _prominent(categories, "woody", "musky"):
        return TIME_NIGHT
    return TIME_ANY


def occasion_recommendation(categories: Mapping[str, float]) -> str:
    # Checked in priority order; the first prominent category wins
    if _prominent(categories, "citrus"):
        return OCCASION_ACTIVE
    if _prominent(categories, "woody"):
        return OCCASION_BUSINESS
    if _prominent(categories, "floral"):
        return OCCASION_ROMANTIC
    return OCCASION_DEFAULT


def usage_guide(item: CatalogItem) -> UsageGuide:
    return UsageGuide(
        season=season_recommendation(item.categories),
        time_of_day=time_recommendation(item.categories),
        occasion=occasion_recommendation(item.categories),
    )


def score_percent(score: float) -> int:
    """Score in [0, 1] as a whole percentage, halves rounded up."""
    return int(max(0.0, min(1.0, score)) * 100 + 0.5)


def summarize_matches(
    recommendations: Sequence[RankedRecommendation],
    catalog: Sequence[CatalogItem],
) -> list[MatchSummary]:
    """
    Join ranked recommendations with their catalog items for display.

    Recommendations whose item is not in the catalog are skipped.
    """
    by_id = {item.id: item for item in catalog}
    summaries: list[MatchSummary] = []
    for rec in recommendations:
        item = by_id.get(rec.catalog_item_id)
        if item is None:
            logger.warning("No catalog item for recommendation %r, skipping", rec.catalog_item_id)
            continue
        summaries.append(
            MatchSummary(
                rank=rec.rank,
                catalog_item_id=item.id,
                name=item.name,
                score_percent=score_percent(rec.score),
                grade=rec.grade or match_grade(rec.score),
                justification=rec.justification,
                keywords=item.keywords[:SUMMARY_KEYWORDS],
                usage=usage_guide(item),
            )
        )
    return summaries

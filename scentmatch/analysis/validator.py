from __future__ import annotations

import copy
import logging
import math
import re
from collections.abc import Mapping
from enum import Enum
from typing import Any

from .defaults import (
    FALLBACK_DOMINANT_COLORS,
    FALLBACK_KEYWORDS,
    FALLBACK_PERSONAL_COLOR,
    FALLBACK_TEXT,
)
from .models import (
    CATEGORY_NAMES,
    DEFAULT_CATEGORY_SCORE,
    DEFAULT_TRAIT_SCORE,
    SCORE_MAX,
    SCORE_MIN,
    TEXT_FIELDS,
    TRAIT_NAMES,
    AnalysisRecord,
    Season,
    Tone,
)

logger = logging.getLogger(__name__)

SMOOTHING_RANGE = range(3, 11)

_HEX_COLOR_RE = re.compile(r"^#(?:[0-9A-Fa-f]{3}|[0-9A-Fa-f]{6})$")
_SNAKE_ALIASES = {
    "toneAndManner": "tone_and_manner",
    "detailedDescription": "detailed_description",
    "scentCategories": "scent_categories",
    "matchingKeywords": "matching_keywords",
    "dominantColors": "dominant_colors",
    "personalColor": "personal_color",
}


def _field(mapping: Mapping[str, Any], key: str, *extra: str) -> Any:
    for name in (key, _SNAKE_ALIASES.get(key, key), *extra):
        if name in mapping:
            return mapping[name]
    return None


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _coerce_score(value: Any) -> int | None:
    """Best-effort conversion of a model-provided score to an integer."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if not isinstance(value, float) or math.isnan(value):
        return None
    # Overflowed floats still carry a direction, so they clamp like any other score
    if math.isinf(value):
        return SCORE_MAX if value > 0 else SCORE_MIN
    return int(round(value))


def _clamp(value: int) -> int:
    return max(SCORE_MIN, min(SCORE_MAX, value))


def _fill_scores(
    source: Any,
    names: tuple[str, ...],
    default: int,
) -> dict[str, int]:
    mapping = source if isinstance(source, Mapping) else {}
    scores: dict[str, int] = {}
    missing: list[str] = []
    for name in names:
        value = _coerce_score(mapping.get(name))
        if value is None:
            missing.append(name)
            scores[name] = default
        else:
            scores[name] = _clamp(value)
    if missing:
        logger.debug("Defaulted missing dimensions: %s", ", ".join(missing))
    return scores


def smooth_duplicate_traits(traits: Mapping[str, int]) -> dict[str, int]:
    """Reassign repeated trait values to the lowest unused integer in [3, 10].

    Traits are visited in declaration order; the first holder of a value keeps
    it. When every integer in the smoothing range is already taken the
    duplicate is left as it is.
    """
    smoothed = dict(traits)
    seen: set[int] = set()
    for name in TRAIT_NAMES:
        value = smoothed[name]
        if value in seen:
            taken = set(smoothed.values())
            replacement = next((c for c in SMOOTHING_RANGE if c not in taken), None)
            if replacement is not None:
                logger.debug("Smoothed duplicate %s=%d to %d", name, value, replacement)
                smoothed[name] = replacement
                value = replacement
        seen.add(value)
    return smoothed


def _text(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _fill_analysis(source: Any) -> dict[str, str]:
    mapping = source if isinstance(source, Mapping) else {}
    return {
        field: _text(_field(mapping, field)) or FALLBACK_TEXT[field]
        for field in TEXT_FIELDS
    }


def _string_list(value: Any) -> list[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        return []
    items = [item.strip() for item in value if isinstance(item, str) and item.strip()]
    return list(dict.fromkeys(items))


def _colors(value: Any) -> list[str]:
    return [c for c in _string_list(value) if _HEX_COLOR_RE.match(c)]


def _fill_personal_color(source: Any) -> dict[str, Any]:
    mapping = source if isinstance(source, Mapping) else {}

    season = str(_plain(mapping.get("season")) or "").strip().lower()
    if season not in Season.__members__:
        season = FALLBACK_PERSONAL_COLOR["season"]
    tone = str(_plain(mapping.get("tone")) or "").strip().lower()
    if tone not in Tone.__members__:
        tone = FALLBACK_PERSONAL_COLOR["tone"]

    return {
        "season": season,
        "tone": tone,
        "palette": _colors(mapping.get("palette")) or list(FALLBACK_PERSONAL_COLOR["palette"]),
        "description": _text(mapping.get("description")) or FALLBACK_PERSONAL_COLOR["description"],
    }


def validate_record(
    candidate: Mapping[str, Any] | AnalysisRecord | None,
    smooth_duplicates: bool = False,
) -> AnalysisRecord:
    """
    Complete, clamp and freeze a candidate record.

    Missing traits default to 5 and missing categories to 6, every score is
    clamped to [1, 10], and empty text, keyword and colour fields receive
    fixed fallback content. Duplicate trait smoothing only runs when
    ``smooth_duplicates`` is set, which the parser does for the extraction
    and default tiers.
    """
    if isinstance(candidate, AnalysisRecord):
        candidate = candidate.model_dump(by_alias=True, mode="json")
    working = copy.deepcopy(dict(candidate)) if isinstance(candidate, Mapping) else {}

    traits = _fill_scores(working.get("traits"), TRAIT_NAMES, DEFAULT_TRAIT_SCORE)
    if smooth_duplicates:
        traits = smooth_duplicate_traits(traits)
    categories = _fill_scores(
        _field(working, "scentCategories", "categories"),
        CATEGORY_NAMES,
        DEFAULT_CATEGORY_SCORE,
    )

    return AnalysisRecord.model_validate({
        "traits": traits,
        "scentCategories": categories,
        "analysis": _fill_analysis(working.get("analysis")),
        "matchingKeywords": _string_list(_field(working, "matchingKeywords")) or list(FALLBACK_KEYWORDS),
        "dominantColors": _colors(_field(working, "dominantColors")) or list(FALLBACK_DOMINANT_COLORS),
        "personalColor": _fill_personal_color(_field(working, "personalColor")),
    })

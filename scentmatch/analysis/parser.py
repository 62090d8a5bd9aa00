"""
Tiered recovery parser for generative-model analysis responses.

Tiers, each tried only when the previous one failed:

1. strict JSON parse of the preprocessed text;
2. structural repair followed by a strict parse;
3. independent field-group extraction, which always produces a candidate;
4. the hardcoded default record, used only when extraction itself errors.

``parse_analysis`` is total: whatever the input, it returns a validated,
frozen AnalysisRecord and never raises.
"""
from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from .defaults import DEFAULT_ANALYSIS
from .extract import extract_fields
from .models import AnalysisRecord, ParseOutcome, RecoveryTier
from .preprocess import preprocess
from .repair import repair_structure
from .validator import validate_record

logger = logging.getLogger(__name__)

# Top-level keys that mark a parsed object as an analysis payload
RECOGNISED_KEYS = frozenset({
    "traits",
    "scentCategories",
    "scent_categories",
    "analysis",
    "matchingKeywords",
    "matching_keywords",
    "dominantColors",
    "dominant_colors",
    "personalColor",
    "personal_color",
})

_SMOOTHED_TIERS = frozenset({RecoveryTier.EXTRACTED, RecoveryTier.DEFAULT})


@dataclass(frozen=True)
class RecoveryResult:
    tier: RecoveryTier
    candidate: dict[str, Any] | None = None

    @property
    def ok(self) -> bool:
        return self.candidate is not None


Strategy = Callable[[str], RecoveryResult]


def _strict_load(text: str) -> dict[str, Any] | None:
    try:
        parsed = json.loads(text)
    except (ValueError, RecursionError) as exc:
        logger.debug("Strict JSON parse failed: %s", exc)
        return None
    if not isinstance(parsed, dict) or not RECOGNISED_KEYS.intersection(parsed):
        logger.debug("Parsed JSON carries no analysis fields")
        return None
    return parsed


def strict_parse(text: str) -> RecoveryResult:
    return RecoveryResult(RecoveryTier.STRICT, _strict_load(text))


def repaired_parse(text: str) -> RecoveryResult:
    return RecoveryResult(RecoveryTier.REPAIRED, _strict_load(repair_structure(text)))


def extracted_parse(text: str) -> RecoveryResult:
    return RecoveryResult(RecoveryTier.EXTRACTED, extract_fields(text))


def first_success(strategies: Iterable[Strategy], text: str) -> RecoveryResult:
    """Run strategies in order and return the first successful result."""
    last = RecoveryResult(RecoveryTier.DEFAULT)
    for strategy in strategies:
        last = strategy(text)
        if last.ok:
            return last
        logger.info("Recovery tier %d failed, trying next tier", last.tier)
    return last


DEFAULT_STRATEGIES: tuple[Strategy, ...] = (strict_parse, repaired_parse, extracted_parse)


def default_record() -> AnalysisRecord:
    return validate_record(DEFAULT_ANALYSIS, smooth_duplicates=True)


def parse_analysis_detailed(raw_text: str | None) -> ParseOutcome:
    """Parse raw model output and report which recovery tier produced it."""
    try:
        text = preprocess(raw_text)
        result = first_success(DEFAULT_STRATEGIES, text)
        if not result.ok:
            raise ValueError("every recovery tier returned no candidate")
        record = validate_record(
            result.candidate,
            smooth_duplicates=result.tier in _SMOOTHED_TIERS,
        )
        return ParseOutcome(record=record, tier=result.tier)
    except Exception:
        logger.warning("Analysis recovery failed, returning default analysis", exc_info=True)
        return ParseOutcome(record=default_record(), tier=RecoveryTier.DEFAULT)


def parse_analysis(raw_text: str | None) -> AnalysisRecord:
    """Recover a schema-complete AnalysisRecord from raw model output."""
    return parse_analysis_detailed(raw_text).record

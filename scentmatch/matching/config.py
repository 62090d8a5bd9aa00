from __future__ import annotations

import math
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from ..env import env_float, env_int

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


def _unit(value: float) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(value):
        return 0.0
    return max(0.0, min(1.0, value))


@dataclass(frozen=True)
class SimilarityWeights:
    """Relative weight of trait and category similarity, each in [0, 1]."""

    trait: float = 1.0
    category: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "trait", _unit(self.trait))
        object.__setattr__(self, "category", _unit(self.category))


@dataclass(frozen=True)
class MatchingConfig:
    weights: SimilarityWeights = field(
        default_factory=lambda: SimilarityWeights(
            trait=env_float("SCENTMATCH_TRAIT_WEIGHT", 1.0),
            category=env_float("SCENTMATCH_CATEGORY_WEIGHT", 0.0),
        )
    )
    top_n: int = field(default_factory=lambda: env_int("SCENTMATCH_TOP_N", 3))
    catalog_path: Path = Path(__file__).resolve().parent.parent / "data" / "catalog.csv"


DEFAULT_MATCHING_CONFIG = MatchingConfig()

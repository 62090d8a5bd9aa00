from __future__ import annotations

from enum import Enum, IntEnum

from pydantic import BaseModel, ConfigDict, Field

TRAIT_NAMES: tuple[str, ...] = (
    "sexy",
    "cute",
    "charisma",
    "darkness",
    "freshness",
    "elegance",
    "freedom",
    "luxury",
    "purity",
    "uniqueness",
)

CATEGORY_NAMES: tuple[str, ...] = (
    "citrus",
    "floral",
    "woody",
    "musky",
    "fruity",
    "spicy",
)

TEXT_FIELDS: tuple[str, ...] = (
    "mood",
    "style",
    "expression",
    "concept",
    "aura",
    "toneAndManner",
    "detailedDescription",
)

SCORE_MIN = 1
SCORE_MAX = 10
DEFAULT_TRAIT_SCORE = 5
DEFAULT_CATEGORY_SCORE = 6


class Season(str, Enum):
    spring = "spring"
    summer = "summer"
    autumn = "autumn"
    winter = "winter"


class Tone(str, Enum):
    bright = "bright"
    light = "light"
    mute = "mute"
    deep = "deep"


class RecoveryTier(IntEnum):
    STRICT = 1
    REPAIRED = 2
    EXTRACTED = 3
    DEFAULT = 4


_FROZEN = ConfigDict(frozen=True, populate_by_name=True)


class TraitScores(BaseModel):
    model_config = _FROZEN

    sexy: int = Field(ge=SCORE_MIN, le=SCORE_MAX)
    cute: int = Field(ge=SCORE_MIN, le=SCORE_MAX)
    charisma: int = Field(ge=SCORE_MIN, le=SCORE_MAX)
    darkness: int = Field(ge=SCORE_MIN, le=SCORE_MAX)
    freshness: int = Field(ge=SCORE_MIN, le=SCORE_MAX)
    elegance: int = Field(ge=SCORE_MIN, le=SCORE_MAX)
    freedom: int = Field(ge=SCORE_MIN, le=SCORE_MAX)
    luxury: int = Field(ge=SCORE_MIN, le=SCORE_MAX)
    purity: int = Field(ge=SCORE_MIN, le=SCORE_MAX)
    uniqueness: int = Field(ge=SCORE_MIN, le=SCORE_MAX)

    def as_vector(self) -> dict[str, int]:
        return {name: getattr(self, name) for name in TRAIT_NAMES}


class CategoryScores(BaseModel):
    model_config = _FROZEN

    citrus: int = Field(ge=SCORE_MIN, le=SCORE_MAX)
    floral: int = Field(ge=SCORE_MIN, le=SCORE_MAX)
    woody: int = Field(ge=SCORE_MIN, le=SCORE_MAX)
    musky: int = Field(ge=SCORE_MIN, le=SCORE_MAX)
    fruity: int = Field(ge=SCORE_MIN, le=SCORE_MAX)
    spicy: int = Field(ge=SCORE_MIN, le=SCORE_MAX)

    def as_vector(self) -> dict[str, int]:
        return {name: getattr(self, name) for name in CATEGORY_NAMES}


class AnalysisText(BaseModel):
    model_config = _FROZEN

    mood: str = Field(..., min_length=1)
    style: str = Field(..., min_length=1)
    expression: str = Field(..., min_length=1)
    concept: str = Field(..., min_length=1)
    aura: str = Field(..., min_length=1)
    tone_and_manner: str = Field(..., min_length=1, alias="toneAndManner")
    detailed_description: str = Field(..., min_length=1, alias="detailedDescription")


class PersonalColor(BaseModel):
    model_config = _FROZEN

    season: Season
    tone: Tone
    palette: tuple[str, ...] = Field(..., min_length=1)
    description: str = Field(..., min_length=1)


class AnalysisRecord(BaseModel):
    """Schema-complete, immutable result of interpreting a model's analysis."""

    model_config = _FROZEN

    traits: TraitScores
    scent_categories: CategoryScores = Field(..., alias="scentCategories")
    analysis: AnalysisText
    matching_keywords: tuple[str, ...] = Field(..., min_length=1, alias="matchingKeywords")
    dominant_colors: tuple[str, ...] = Field(..., min_length=1, alias="dominantColors")
    personal_color: PersonalColor = Field(..., alias="personalColor")


class ParseOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    record: AnalysisRecord
    tier: RecoveryTier

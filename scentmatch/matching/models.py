from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CatalogItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str
    traits: dict[str, float] = Field(default_factory=dict)
    categories: dict[str, float] = Field(default_factory=dict)
    description: str = ""
    keywords: tuple[str, ...] = ()


class RankedRecommendation(BaseModel):
    model_config = ConfigDict(frozen=True)

    catalog_item_id: str
    score: float = Field(ge=0.0, le=1.0)
    rank: int = Field(ge=1)
    justification: str | None = None
    grade: str | None = None


class UsageGuide(BaseModel):
    """When and where a fragrance is best worn, derived from its categories."""

    model_config = ConfigDict(frozen=True)

    season: str
    time_of_day: str
    occasion: str


class MatchSummary(BaseModel):
    """Display-ready view of a ranked recommendation."""

    model_config = ConfigDict(frozen=True)

    rank: int = Field(ge=1)
    catalog_item_id: str
    name: str
    score_percent: int = Field(ge=0, le=100)
    grade: str
    justification: str | None = None
    keywords: tuple[str, ...] = ()
    usage: UsageGuide

from __future__ import annotations

from pydantic import BaseModel, Field


class SubjectContext(BaseModel):
    """Hints about the analysed subject; only ever used as prompt context."""

    name: str = Field(..., min_length=1)
    group: str | None = None
    style: list[str] = Field(default_factory=list)
    personality: list[str] = Field(default_factory=list)
    charms: str | None = None

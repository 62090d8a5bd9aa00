"""
Fallback content used when the generative model leaves fields out.

The text fallbacks fill individual empty fields during validation; the
DEFAULT_ANALYSIS payload is the complete record returned when every recovery
strategy has failed.
"""
from __future__ import annotations

from typing import Any

FALLBACK_TEXT: dict[str, str] = {
    "mood": "A confident, magnetic presence that draws every eye in the room.",
    "style": "Polished and self-assured, with a refined sense of occasion.",
    "expression": "Poised and expressive, saying a great deal with a single look.",
    "concept": "Vivid energy balanced with a classic, luxurious calm.",
    "aura": "A bright aura that naturally puts them at the centre of attention.",
    "toneAndManner": "Relaxed and effortless, carrying an easy cool wherever they go.",
    "detailedDescription": (
        "Bold colours and an assured pose show strong self-confidence, "
        "softened by a gentle smile."
    ),
}

FALLBACK_KEYWORDS: tuple[str, ...] = (
    "vibrant",
    "trendy",
    "distinctive",
    "glamorous",
    "confident",
)

FALLBACK_DOMINANT_COLORS: tuple[str, ...] = ("#FFD700", "#FF4500", "#1E90FF", "#9932CC")

FALLBACK_PERSONAL_COLOR: dict[str, Any] = {
    "season": "spring",
    "tone": "bright",
    "palette": ("#FFD700", "#FFA500", "#FF4500", "#FF6347"),
    "description": "A bright, warm spring type that reads as lively and radiant.",
}

DEFAULT_ANALYSIS: dict[str, Any] = {
    "traits": {
        "sexy": 7,
        "cute": 5,
        "charisma": 8,
        "darkness": 3,
        "freshness": 6,
        "elegance": 9,
        "freedom": 4,
        "luxury": 10,
        "purity": 2,
        "uniqueness": 1,
    },
    "scentCategories": {
        "citrus": 7,
        "floral": 8,
        "woody": 5,
        "musky": 6,
        "fruity": 9,
        "spicy": 4,
    },
    "analysis": dict(FALLBACK_TEXT),
    "matchingKeywords": list(FALLBACK_KEYWORDS),
    "dominantColors": list(FALLBACK_DOMINANT_COLORS),
    "personalColor": dict(FALLBACK_PERSONAL_COLOR),
}

"""
Field-by-field extraction used when the text cannot be parsed as JSON.

Each extractor looks for one field group on its own, scoped to the text that
follows the group's label, and returns None when the group is absent. The
extractors never depend on each other so a broken traits block does not
prevent recovering keywords or colours.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any

from .models import CATEGORY_NAMES, TEXT_FIELDS, TRAIT_NAMES

logger = logging.getLogger(__name__)

_NUMERIC_ENTRY_RE = re.compile(r"""["']?(\w+)["']?\s*:\s*(-?\d+(?:\.\d+)?)""")
_QUOTED_ITEM_RE = re.compile(r'"((?:[^"\\]|\\.)*)"')
_HEX_COLOR_RE = re.compile(r"#[0-9A-Fa-f]{6}\b|#[0-9A-Fa-f]{3}\b")

_CLOSERS = {"{": "}", "[": "]"}


def _label_pattern(label: str, opener: str) -> re.Pattern[str]:
    return re.compile(rf"""["']?\b{label}\b["']?\s*:\s*{re.escape(opener)}""")


def section_after(text: str, label: str, opener: str) -> str | None:
    """Return the body of the object/array that follows ``label``.

    The body runs up to the first matching closer, or to the end of the text
    when the structure was truncated.
    """
    match = _label_pattern(label, opener).search(text)
    if not match:
        return None
    start = match.end()
    end = text.find(_CLOSERS[opener], start)
    return text[start:] if end == -1 else text[start:end]


def _unescape(value: str) -> str:
    try:
        return json.loads(f'"{value}"')
    except ValueError:
        return value.replace('\\"', '"')


def _numeric_entries(body: str, allowed: tuple[str, ...]) -> dict[str, float]:
    found: dict[str, float] = {}
    for key, raw in _NUMERIC_ENTRY_RE.findall(body):
        if key in allowed and key not in found:
            found[key] = float(raw)
    return found


def extract_traits(text: str) -> dict[str, float] | None:
    body = section_after(text, "traits", "{")
    if body is None:
        return None
    traits = _numeric_entries(body, TRAIT_NAMES)
    return traits or None


def extract_categories(text: str) -> dict[str, float] | None:
    body = section_after(text, "scentCategories", "{")
    if body is None:
        body = section_after(text, "categories", "{")
    if body is None:
        return None
    categories = _numeric_entries(body, CATEGORY_NAMES)
    return categories or None


def extract_text_field(text: str, field: str) -> str | None:
    match = re.search(rf'"{field}"\s*:\s*"((?:[^"\\]|\\.)*)"', text)
    if match:
        return _unescape(match.group(1)).strip() or None
    # Value cut off by truncation; keep what is there up to the line end
    match = re.search(rf'"{field}"\s*:\s*"([^"\n]*)$', text, re.MULTILINE)
    if match:
        return _unescape(match.group(1).rstrip("\\}]")).strip() or None
    return None


def extract_analysis_text(text: str) -> dict[str, str] | None:
    fields = {}
    for field in TEXT_FIELDS:
        value = extract_text_field(text, field)
        if value:
            fields[field] = value
    return fields or None


def extract_keywords(text: str) -> list[str] | None:
    body = section_after(text, "matchingKeywords", "[")
    if body is None:
        return None
    keywords = [_unescape(item).strip() for item in _QUOTED_ITEM_RE.findall(body)]
    keywords = [k for k in keywords if k]
    return keywords or None


def extract_dominant_colors(text: str) -> list[str] | None:
    body = section_after(text, "dominantColors", "[")
    if body is None:
        return None
    return _HEX_COLOR_RE.findall(body) or None


def extract_personal_color(text: str) -> dict[str, Any] | None:
    label = _label_pattern("personalColor", "{").search(text)
    if label is None:
        return None
    scope = text[label.end():]
    end = scope.find("}")
    body = scope if end == -1 else scope[:end]

    color: dict[str, Any] = {}
    for field in ("season", "tone", "description"):
        value = extract_text_field(body, field)
        if value:
            color[field] = value
    # The palette array is nested, so it is looked up after the personalColor
    # label rather than inside the flat body
    palette_body = section_after(scope, "palette", "[")
    if palette_body is not None:
        palette = _HEX_COLOR_RE.findall(palette_body)
        if palette:
            color["palette"] = palette
    return color or None


def extract_fields(text: str) -> dict[str, Any]:
    """Assemble a candidate from whichever field groups can be located."""
    extractors = {
        "traits": extract_traits,
        "scentCategories": extract_categories,
        "analysis": extract_analysis_text,
        "matchingKeywords": extract_keywords,
        "dominantColors": extract_dominant_colors,
        "personalColor": extract_personal_color,
    }
    candidate: dict[str, Any] = {}
    for key, extractor in extractors.items():
        value = extractor(text)
        if value is not None:
            candidate[key] = value
    logger.debug("Field extraction recovered groups: %s", sorted(candidate))
    return candidate

from __future__ import annotations

import logging
from typing import Any

from groq import Groq

from ..analysis.models import AnalysisRecord
from ..analysis.parser import parse_analysis
from .config import DEFAULT_LLM_CONFIG, LLMConfig
from .models import SubjectContext

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """\
You are an image and personality analyst for a fragrance matching service. \
Given hints about a person, describe their image and score it.

Return ONLY valid JSON in this exact format:
{
  "traits": {"sexy": 1-10, "cute": 1-10, "charisma": 1-10, "darkness": 1-10,
             "freshness": 1-10, "elegance": 1-10, "freedom": 1-10,
             "luxury": 1-10, "purity": 1-10, "uniqueness": 1-10},
  "scentCategories": {"citrus": 1-10, "floral": 1-10, "woody": 1-10,
                      "musky": 1-10, "fruity": 1-10, "spicy": 1-10},
  "analysis": {"mood": "...", "style": "...", "expression": "...",
               "concept": "...", "aura": "...", "toneAndManner": "...",
               "detailedDescription": "..."},
  "matchingKeywords": ["keyword", "..."],
  "dominantColors": ["#RRGGBB", "..."],
  "personalColor": {"season": "spring|summer|autumn|winter",
                    "tone": "bright|light|mute|deep",
                    "palette": ["#RRGGBB", "..."],
                    "description": "..."}
}

Use whole numbers for every score and avoid giving two traits the same score."""


def build_analysis_prompt(context: SubjectContext) -> str:
    lines = ["## Subject"]
    lines.append(f"- Name: {context.name}")
    if context.group:
        lines.append(f"- Group: {context.group}")
    if context.style:
        lines.append(f"- Style: {', '.join(context.style)}")
    if context.personality:
        lines.append(f"- Personality: {', '.join(context.personality)}")
    if context.charms:
        lines.append(f"- Charms: {context.charms}")
    return "\n".join(lines)


def request_analysis(
    context: SubjectContext,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
    client: Any | None = None,
) -> str:
    """
    Ask Groq for a raw analysis of the subject.

    Returns the raw response text, or "" when the LLM is disabled, has no
    credentials, or the call fails for any reason.
    """
    if not config.enabled or not config.api_key:
        return ""

    try:
        client = client or Groq(api_key=config.api_key, timeout=config.timeout)
        response = client.chat.completions.create(
            model=config.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": build_analysis_prompt(context)},
            ],
            max_tokens=config.max_tokens,
            temperature=config.temperature,
            response_format={"type": "json_object"},
        )
        return response.choices[0].message.content or ""

    except Exception:
        logger.warning("Groq analysis call failed, falling back to default analysis", exc_info=True)
        return ""


def analyze_subject(
    context: SubjectContext,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
    client: Any | None = None,
) -> AnalysisRecord:
    """Request an analysis and recover a validated record from whatever comes back."""
    return parse_analysis(request_analysis(context, config=config, client=client))

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from ..env import env_bool, env_float, env_int, env_str

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class LLMConfig:
    """Groq settings for the image-analysis call, read when the config is built."""

    api_key: str = field(default_factory=lambda: env_str("GROQ_API_KEY", ""))
    model: str = field(
        default_factory=lambda: env_str("SCENTMATCH_LLM_MODEL", "llama-3.3-70b-versatile")
    )
    timeout: float = field(default_factory=lambda: env_float("SCENTMATCH_LLM_TIMEOUT", 30.0))
    max_tokens: int = field(default_factory=lambda: env_int("SCENTMATCH_LLM_MAX_TOKENS", 4096))
    temperature: float = field(
        default_factory=lambda: env_float("SCENTMATCH_LLM_TEMPERATURE", 0.2)
    )
    enabled: bool = field(default_factory=lambda: env_bool("SCENTMATCH_LLM_ENABLED", True))


DEFAULT_LLM_CONFIG = LLMConfig()

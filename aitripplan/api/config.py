# aitripplan/api/config.py
"""Configuration management for the trip suggestion API."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


class ConfigurationError(Exception):
    """Raised when a required setting is missing."""


@dataclass(frozen=True)
class GenerationConfig:
    """Settings for one upstream generation call and the inbound boundary."""

    model: str = "gpt-4.1-mini"
    temperature: float = 0.7
    max_tokens: int = 1800
    timeout_seconds: float = 60.0
    max_prompt_chars: int = 6000
    default_days: int = 3
    max_days: int = 7
    # None means a missing prompt is rejected with a 400
    default_prompt: Optional[str] = None
    base_url: Optional[str] = None


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {value!r}") from None


def get_openai_api_key() -> str:
    """Get OpenAI API key from environment."""
    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        raise ConfigurationError("OPENAI_API_KEY is not configured in environment.")
    return api_key


def has_openai_api_key() -> bool:
    return bool(os.getenv("OPENAI_API_KEY"))


def get_port() -> int:
    """Get port configuration."""
    return _env_int("PORT", 5000)


def get_generation_config() -> GenerationConfig:
    """Build the generation settings from the environment.

    Unset variables fall back to the dataclass defaults. Numeric variables
    that do not parse raise ``ValueError`` naming the variable.
    """
    defaults = GenerationConfig()
    default_prompt = (os.getenv("TRIP_DEFAULT_PROMPT") or "").strip() or None

    return GenerationConfig(
        model=os.getenv("OPENAI_CHAT_MODEL") or defaults.model,
        temperature=_env_float("TRIP_TEMPERATURE", defaults.temperature),
        max_tokens=_env_int("TRIP_MAX_TOKENS", defaults.max_tokens),
        timeout_seconds=_env_float("TRIP_TIMEOUT_SECONDS", defaults.timeout_seconds),
        max_prompt_chars=_env_int("TRIP_MAX_PROMPT_CHARS", defaults.max_prompt_chars),
        default_days=_env_int("TRIP_DEFAULT_DAYS", defaults.default_days),
        max_days=_env_int("TRIP_MAX_DAYS", defaults.max_days),
        default_prompt=default_prompt,
        base_url=os.getenv("OPENAI_BASE_URL") or None,
    )

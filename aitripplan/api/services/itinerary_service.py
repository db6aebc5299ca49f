# aitripplan/api/services/itinerary_service.py
"""Service layer for suggestion generation."""

import logging
from typing import Any, Optional

from aitripplan.api import llm
from aitripplan.api.config import GenerationConfig
from aitripplan.api.decoder import decode
from aitripplan.api.models import DecodeErr, DecodeResult
from aitripplan.api.prompts import build_messages, normalize_mode

logger = logging.getLogger(__name__)


class ItineraryService:
    """Turns an inbound prompt into decoded suggestions."""

    @staticmethod
    def clean_prompt(prompt: Any, config: GenerationConfig) -> Optional[str]:
        """Validate and cap the user's prompt.

        Args:
            prompt: Value of the ``prompt`` field, of any type
            config: Generation settings (fallback prompt, length cap)

        Returns:
            The trimmed prompt, or None if there is nothing usable
        """
        text = prompt.strip() if isinstance(prompt, str) else ""
        if not text:
            text = config.default_prompt or ""
        if not text:
            return None
        return text[: config.max_prompt_chars]

    @staticmethod
    def generate_suggestions(prompt: str, mode: Optional[str], config: GenerationConfig) -> DecodeResult:
        """Ask the model for suggestions and decode its answer.

        Args:
            prompt: Cleaned user prompt
            mode: ``"ideas"`` or ``"full-itinerary"``; anything else means ideas
            config: Generation settings

        Returns:
            DecodeOk with at least one suggestion, or DecodeErr

        Raises:
            ConfigurationError: If the API key is missing
            UpstreamError: If the upstream call fails
        """
        mode = normalize_mode(mode)
        messages = build_messages(prompt, mode, config)

        logger.info("Generating suggestions (mode=%s, prompt_chars=%d)", mode, len(prompt))
        raw_text = llm.fetch_completion_text(messages, config)

        result = decode(raw_text)
        if isinstance(result, DecodeErr):
            logger.error("Failed to decode suggestions: %s (%s)", result.kind.value, result.detail)
        else:
            logger.info("Generated %d suggestions", len(result.suggestions))
        return result

"""LLM helper functions for AITripPlan.

Sends the suggestion prompt to OpenAI Chat Completions and hands back the
raw response body. Parsing that body is the decoder's job, so nothing here
looks inside it.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from openai import APIConnectionError, APIStatusError, OpenAI

from aitripplan.api.config import GenerationConfig, get_openai_api_key

logger = logging.getLogger(__name__)


class UpstreamError(Exception):
    """The chat-completion call failed before a body could be decoded."""

    def __init__(self, message: str, status: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status = status
        self.body = body

    @property
    def unavailable(self) -> bool:
        """True when no HTTP response was received at all."""
        return self.status is None


# ---------------------------------------------------------------------------
# OpenAI client initialisation
# ---------------------------------------------------------------------------

_client: Optional[OpenAI] = None
_client_key: Optional[Tuple[str, Optional[str], float]] = None


def _get_client(config: GenerationConfig) -> OpenAI:
    """Return a cached client, rebuilt if the key or endpoint changed."""
    global _client, _client_key
    api_key = get_openai_api_key()
    key = (api_key, config.base_url, config.timeout_seconds)
    if _client is None or _client_key != key:
        logger.info("Initializing OpenAI client (base_url=%s)", config.base_url or "default")
        _client = OpenAI(
            api_key=api_key,
            base_url=config.base_url,
            timeout=config.timeout_seconds,
            max_retries=0,
        )
        _client_key = key
    return _client


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def fetch_completion_text(messages: List[Dict[str, str]], config: GenerationConfig) -> str:
    """POST the chat messages and return the raw response body text.

    Raises:
        ConfigurationError: If no API key is configured
        UpstreamError: If the endpoint answers non-2xx or cannot be reached
    """
    client = _get_client(config)

    logger.debug(
        "Calling OpenAI ChatCompletion: model=%s temperature=%s max_tokens=%d",
        config.model,
        config.temperature,
        config.max_tokens,
    )

    try:
        response = client.chat.completions.with_raw_response.create(
            model=config.model,
            messages=messages,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
        )
    except APIStatusError as exc:
        body = exc.response.text if exc.response is not None else ""
        logger.error("OpenAI error: %s %s", exc.status_code, body)
        raise UpstreamError("Error from OpenAI API.", status=exc.status_code, body=body) from exc
    except APIConnectionError as exc:
        logger.error("OpenAI unreachable: %s", exc)
        raise UpstreamError("Could not reach OpenAI API.") from exc

    return response.http_response.text

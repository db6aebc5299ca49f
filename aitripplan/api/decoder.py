# aitripplan/api/decoder.py
"""Decode chat-completion responses into normalized suggestions.

The upstream body is untrusted text. :func:`decode` walks it one layer at a
time (envelope, first choice message, content, ``suggestions`` list) and
returns a :class:`DecodeErr` naming the first layer that could not be read.
Problems inside a single suggestion are never errors: each field falls back
to its default and the record is kept.
"""

from __future__ import annotations

import json
import logging
import math
from typing import Any, Dict, List, Optional, Union

from aitripplan.api.models import (
    EXTRA_STRING_FIELDS,
    TIMES_OF_DAY,
    DecodeErr,
    DecodeOk,
    DecodeResult,
    ErrorKind,
    Suggestion,
)

logger = logging.getLogger(__name__)

FENCE = "```"


# ---------------------------------------------------------------------------
# Pre-processing
# ---------------------------------------------------------------------------

def strip_code_fences(text: str) -> str:
    """Remove a Markdown code fence wrapped around the whole text.

    The text must open with a fence line (```` ``` ```` or ```` ```json ````)
    and end with ```` ``` ````, either on its own line or right after the
    body. Otherwise it is only trimmed.
    """
    stripped = text.strip()
    if not (stripped.startswith(FENCE) and stripped.endswith(FENCE)):
        return stripped
    _opening, newline, body = stripped.partition("\n")
    if not newline or not body.endswith(FENCE):
        return stripped
    return body[: -len(FENCE)].strip()


# ---------------------------------------------------------------------------
# Field coercion
# ---------------------------------------------------------------------------

def _as_text(value: Any) -> str:
    """Return *value* as a stripped string, or "" when it is not text-like."""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, bool):
        return ""
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float) and math.isfinite(value):
        return str(value)
    return ""


def _as_time_of_day(value: Any) -> str:
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in TIMES_OF_DAY:
            return lowered
    return "flex"


def _as_day_hint(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return int(value)


def _extras(raw: Dict[str, Any]) -> Dict[str, Union[str, bool]]:
    extras: Dict[str, Union[str, bool]] = {}
    for name in EXTRA_STRING_FIELDS:
        value = raw.get(name)
        if isinstance(value, str) and value.strip():
            extras[name] = value.strip()

    sell_out = raw.get("sellOut")
    if isinstance(sell_out, bool):
        extras["sellOut"] = sell_out
    elif isinstance(sell_out, str) and sell_out.strip():
        extras["sellOut"] = sell_out.strip()
    return extras


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------

def normalize_suggestion(raw: Any, index: int) -> Suggestion:
    """Coerce one model-supplied suggestion into a :class:`Suggestion`.

    ``index`` is 1-based and only used for the fallback id. Anything that is
    not a dict normalizes to an all-default record.
    """
    if not isinstance(raw, dict):
        raw = {}

    return Suggestion(
        id=_as_text(raw.get("id")) or f"ai-suggestion-{index}",
        title=_as_text(raw.get("title")) or "Activity",
        time_of_day=_as_time_of_day(raw.get("timeOfDay")),
        day_hint=_as_day_hint(raw.get("dayHint")),
        description=_as_text(raw.get("description")),
        notes=_as_text(raw.get("notes")),
        extras=_extras(raw),
    )


def normalize_suggestions(raw_list: List[Any]) -> List[Suggestion]:
    return [normalize_suggestion(raw, i) for i, raw in enumerate(raw_list, 1)]


# ---------------------------------------------------------------------------
# Envelope walking
# ---------------------------------------------------------------------------

def _extract_content(envelope: Any) -> Any:
    """Return the first choice's message content, or None if unreachable.

    Structured-output responses carry the document under ``parsed`` instead
    of ``content``; either is accepted.
    """
    if not isinstance(envelope, dict):
        return None
    choices = envelope.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    message = first.get("message")
    if not isinstance(message, dict):
        return None

    content = message.get("content")
    if content is None:
        content = message.get("parsed")
    return content


def decode(raw_text: str) -> DecodeResult:
    """Turn a raw chat-completion body into suggestions or a typed failure.

    Never raises; every input yields exactly one ``DecodeOk`` or ``DecodeErr``.
    """
    try:
        envelope = json.loads(raw_text)
    except (TypeError, ValueError, RecursionError) as exc:
        logger.error("Failed to parse upstream root JSON: %s", exc)
        return DecodeErr(
            ErrorKind.ROOT_PARSE_FAILURE,
            "could not parse upstream body",
            raw=raw_text if isinstance(raw_text, str) else None,
        )

    content = _extract_content(envelope)
    if not isinstance(content, (dict, str)) or (isinstance(content, str) and not content.strip()):
        logger.error("No usable content in upstream response")
        return DecodeErr(
            ErrorKind.UNEXPECTED_FORMAT,
            "content missing or wrong type",
            raw=envelope,
        )

    if isinstance(content, str):
        try:
            parsed = json.loads(strip_code_fences(content))
        except (ValueError, RecursionError) as exc:
            logger.error("Failed to parse model content as JSON: %s", exc)
            return DecodeErr(
                ErrorKind.CONTENT_PARSE_FAILURE,
                "model content was not valid JSON",
                raw=content,
            )
        if not isinstance(parsed, dict):
            logger.error("Model content parsed to %s, expected an object", type(parsed).__name__)
            return DecodeErr(
                ErrorKind.CONTENT_PARSE_FAILURE,
                "model content was not valid JSON",
                raw=content,
            )
    else:
        parsed = content

    raw_suggestions = parsed.get("suggestions")
    if not isinstance(raw_suggestions, list):
        raw_suggestions = []

    if not raw_suggestions:
        logger.warning("Model returned zero suggestions")
        return DecodeErr(
            ErrorKind.NO_SUGGESTIONS,
            "model returned no suggestions",
            raw=parsed,
        )

    suggestions = normalize_suggestions(raw_suggestions)
    logger.debug("Decoded %d suggestions", len(suggestions))
    return DecodeOk(suggestions)


__all__ = [
    "decode",
    "normalize_suggestion",
    "normalize_suggestions",
    "strip_code_fences",
]

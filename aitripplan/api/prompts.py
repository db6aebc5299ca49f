"""Prompt construction for suggestion generation."""

from __future__ import annotations

import re
from typing import Dict, List, Optional

from aitripplan.api.config import GenerationConfig

MODE_IDEAS = "ideas"
MODE_FULL_ITINERARY = "full-itinerary"

SUGGESTIONS_PER_DAY = 3

_TRIP_LENGTH_RE = re.compile(r"Trip length:\s*(\d+)\s*days", re.IGNORECASE)

SYSTEM_PROMPT = (
    "You are an expert travel planner for a simple itinerary builder. "
    "You ALWAYS respond with valid JSON only, no extra text. "
    "Return a single JSON object with a 'suggestions' array. "
    "Each suggestion MUST have: "
    "id (string), title (string), timeOfDay ('morning'|'afternoon'|'evening'|'flex'), "
    "dayHint (number or null), description (string), and notes (string). "
    "Use 'description' as a 3-5 sentence itinerary-style explanation in context of the day. "
    "Use 'notes' as a 1-2 sentence practical tip (ticket timing, reservations, dress code). "
    "Whenever possible also include these fields in each suggestion: "
    "neighborhood (short area name, e.g. 'Alfama'), "
    "travelTime (short estimate like '10-15 min walk from Baixa'), "
    "mapsSearch (a concise Google Maps search query, e.g. 'Se de Lisboa Lisbon'), "
    "approxCost (e.g. 'Free' or 'EUR 15-20 per person'), "
    "bookingLink (official site or ticket page URL), "
    "closedDays (e.g. 'Closed Mondays'), "
    "and sellOut (true or a short warning when tickets tend to sell out). "
    "Keep neighborhood, travelTime and mapsSearch short and map-friendly."
)


def normalize_mode(mode: Optional[str]) -> str:
    return MODE_FULL_ITINERARY if mode == MODE_FULL_ITINERARY else MODE_IDEAS


def infer_trip_days(prompt: str, default: int = 3, max_days: int = 7) -> int:
    """Read ``Trip length: N days`` from the prompt and clamp it.

    Args:
        prompt: User prompt as sent by the front end
        default: Day count used when the prompt states none
        max_days: Upper bound so full itineraries stay a sensible size

    Returns:
        Day count between 1 and ``max_days``
    """
    days = default
    match = _TRIP_LENGTH_RE.search(prompt)
    if match:
        parsed = int(match.group(1))
        if parsed > 0:
            days = parsed
    return min(max(days, 1), max_days)


def _full_itinerary_notes(days: int) -> str:
    total = days * SUGGESTIONS_PER_DAY
    lines = [
        f"The trip should last exactly {days} day(s).",
        f'You MUST return exactly {total} suggestions in the "suggestions" array.',
        f"Distribute suggestions evenly so there are exactly {SUGGESTIONS_PER_DAY} suggestions per day.",
        f"For each day d (1 to {days}) you MUST include exactly:",
        '- 1 suggestion with "timeOfDay": "morning"',
        '- 1 suggestion with "timeOfDay": "afternoon"',
        '- 1 suggestion with "timeOfDay": "evening"',
        f'Set "dayHint" to the correct day number (1-{days}) for each suggestion.',
        "Keep titles short and scannable; keep description and notes concise.",
    ]
    return "Trip structure constraints (full itinerary mode):\n" + "\n".join(lines)


def _ideas_notes(days: int) -> str:
    lines = [
        f"The trip is approximately {days} day(s) long.",
        "You do NOT need to fill every day. Focus on high-quality ideas.",
        'Use "timeOfDay" as "morning", "afternoon", "evening", or "flex" where it makes sense.',
        f'Use "dayHint" between 1 and {days} when the idea fits a specific day, or null when it is flexible.',
    ]
    return "Trip structure notes (loose ideas mode):\n" + "\n".join(lines)


def build_user_prompt(prompt: str, mode: str, days: int) -> str:
    """Append the mode-specific structure notes to the user's prompt."""
    if normalize_mode(mode) == MODE_FULL_ITINERARY:
        notes = _full_itinerary_notes(days)
    else:
        notes = _ideas_notes(days)
    return f"{prompt}\n\n{notes}"


def build_system_prompt() -> str:
    return SYSTEM_PROMPT


def build_messages(prompt: str, mode: str, config: GenerationConfig) -> List[Dict[str, str]]:
    days = infer_trip_days(prompt, config.default_days, config.max_days)
    return [
        {"role": "system", "content": build_system_prompt()},
        {"role": "user", "content": build_user_prompt(prompt, mode, days)},
    ]

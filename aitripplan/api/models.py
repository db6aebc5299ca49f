"""Shared data structures for suggestion decoding.

The decoder, the service layer and the routes all pass these around, so they
live here rather than in ``decoder.py`` to keep the import graph one-way.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

TIMES_OF_DAY = ("morning", "afternoon", "evening", "flex")

# Optional map-friendly fields the model is asked for; relayed when present.
EXTRA_STRING_FIELDS = (
    "neighborhood",
    "travelTime",
    "mapsSearch",
    "approxCost",
    "bookingLink",
    "closedDays",
)


class ErrorKind(str, Enum):
    """Stage at which decoding an upstream response failed."""

    ROOT_PARSE_FAILURE = "RootParseFailure"
    UNEXPECTED_FORMAT = "UnexpectedFormat"
    CONTENT_PARSE_FAILURE = "ContentParseFailure"
    NO_SUGGESTIONS = "NoSuggestions"


@dataclass
class Suggestion:
    """A single normalized activity suggestion."""

    id: str
    title: str = "Activity"
    time_of_day: str = "flex"  # one of TIMES_OF_DAY
    day_hint: Optional[int] = None  # 1-based day within the trip
    description: str = ""
    notes: str = ""
    extras: Dict[str, Union[str, bool]] = field(default_factory=dict)

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "title": self.title,
            "timeOfDay": self.time_of_day,
            "dayHint": self.day_hint,
            "description": self.description,
            "notes": self.notes,
        }
        data.update(self.extras)
        return data


@dataclass(frozen=True)
class DecodeOk:
    suggestions: List[Suggestion]

    def to_dict(self) -> dict:
        return {"suggestions": [s.to_dict() for s in self.suggestions]}


@dataclass(frozen=True)
class DecodeErr:
    kind: ErrorKind
    detail: str
    raw: Any = None

    def to_dict(self) -> dict:
        data = {"error": self.kind.value, "detail": self.detail}
        if self.raw is not None:
            data["raw"] = self.raw
        return data


DecodeResult = Union[DecodeOk, DecodeErr]

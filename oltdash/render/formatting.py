"""Pure helpers turning raw API values into display text and tones."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

from oltdash.render.views import PLACEHOLDER, Tone

# Leading numeric prefix, so readings like "-15.3 dBm" still parse.
_NUMBER_PREFIX_RE = re.compile(r"^\s*[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")

_MAX_VALID_DBM = 50.0
_GOOD_RANGE = (-25.0, -8.0)
_WARNING_FLOOR = -28.0

_NEGATIVE_WORDS = ("offline", "inactive", "down")
_CAUTION_WORDS = ("warning", "degraded", "synchronization", "logging")
_POSITIVE_WORDS = ("online", "active", "in-service", "up")
_NEGATIVE_CODES = ("2",)
_POSITIVE_CODES = ("1",)


class PowerStatus(str, Enum):
    GOOD = "good"
    WARNING = "warning"
    BAD = "bad"
    INVALID = "invalid"


_POWER_TONES = {
    PowerStatus.GOOD: Tone.POSITIVE,
    PowerStatus.WARNING: Tone.CAUTION,
    PowerStatus.BAD: Tone.NEGATIVE,
    PowerStatus.INVALID: Tone.NEUTRAL,
}


@dataclass(frozen=True)
class PowerReading:
    text: str
    status: PowerStatus

    @property
    def tone(self) -> Tone:
        return _POWER_TONES[self.status]


def parse_number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    match = _NUMBER_PREFIX_RE.match(str(value))
    if not match:
        return None
    return float(match.group(0))


def classify_power(value: Any) -> PowerReading:
    """Classify an optical power reading in dBm."""
    num = parse_number(value)
    if num is None or num != num or num > _MAX_VALID_DBM:
        return PowerReading(text=PLACEHOLDER, status=PowerStatus.INVALID)

    text = f"{num:.2f} dBm"
    low, high = _GOOD_RANGE
    if low <= num <= high:
        return PowerReading(text=text, status=PowerStatus.GOOD)
    if num >= _WARNING_FLOOR:
        return PowerReading(text=text, status=PowerStatus.WARNING)
    return PowerReading(text=text, status=PowerStatus.BAD)


def classify_status(value: Any) -> Tone:
    """Map device status words and native numeric codes onto a tone.

    Negative words are checked first because "inactive" contains "active".
    """
    if value is None:
        return Tone.NEUTRAL
    text = str(value).strip().lower()
    if text in _NEGATIVE_CODES:
        return Tone.NEGATIVE
    if text in _POSITIVE_CODES:
        return Tone.POSITIVE
    if any(word in text for word in _NEGATIVE_WORDS):
        return Tone.NEGATIVE
    if any(word in text for word in _CAUTION_WORDS):
        return Tone.CAUTION
    if any(word in text for word in _POSITIVE_WORDS):
        return Tone.POSITIVE
    return Tone.NEUTRAL


def humanize_key(key: Any) -> str:
    words = str(key).replace("_", " ").split(" ")
    return " ".join(word[:1].upper() + word[1:] for word in words)


def format_value(value: Any) -> str:
    if value is None:
        return PLACEHOLDER
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)
    return str(value)


def format_uptime(seconds: Any) -> str:
    num = parse_number(seconds)
    if num is None or num != num or num < 0:
        return PLACEHOLDER
    total = int(num)
    days = total // 86400
    hours = (total % 86400) // 3600
    minutes = (total % 3600) // 60
    return f"{days}d {hours}h {minutes}m"

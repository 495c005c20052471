# mediaprobe/common/probe/value_parsing.py
"""
Parsing helpers for probe values.

Two families live here and they are deliberately not interchangeable:

* ``parse_int_strict`` / ``parse_seconds_strict`` raise ``ValueError`` on bad
  input. Used for stream technicals (sample rate, bitrate, duration).
* ``parse_int_lenient`` / ``parse_date_lenient`` return ``None`` on bad input.
  Used for free-form tags (track, disc, year, release date).
"""
from __future__ import annotations

import math
import re
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

TICKS_PER_MILLISECOND = 10_000
TICKS_PER_SECOND = 1000 * TICKS_PER_MILLISECOND

# ASCII digits only: int() alone also takes "1_000" and non-Latin digits
_INT_RE = re.compile(r"\s*[+-]?[0-9]+\s*")

# Tried in order after datetime.fromisoformat. A bare year is not a date.
DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%Y.%m.%d",
    "%Y:%m:%d",
    "%m/%d/%Y",
    "%d.%m.%Y",
    "%Y-%m",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
)


def parse_int_strict(value: str, field: str = "value") -> int:
    if not isinstance(value, str) or not _INT_RE.fullmatch(value):
        raise ValueError(f"{field}: expected an integer, got {value!r}")
    return int(value)


def parse_seconds_strict(value: str, field: str = "duration") -> float:
    try:
        seconds = float(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{field}: expected seconds as a number, got {value!r}") from e
    if not math.isfinite(seconds):
        raise ValueError(f"{field}: seconds must be finite, got {value!r}")
    return seconds


def seconds_to_ticks(seconds: float) -> int:
    """
    Seconds -> 100ns ticks, rounded half away from zero to whole milliseconds
    first (so 1.0005s and 1.001s land on the same tick count).
    """
    millis = Decimal(repr(seconds)) * 1000
    millis = millis.quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return int(millis) * TICKS_PER_MILLISECOND


def ticks_to_seconds(ticks: int) -> float:
    return ticks / TICKS_PER_SECOND


def parse_int_lenient(value: Optional[str]) -> Optional[int]:
    if not value:
        return None
    if not _INT_RE.fullmatch(value):
        return None
    return int(value)


def parse_date_lenient(value: Optional[str], formats: Iterable[str] = DATE_FORMATS) -> Optional[datetime]:
    if not value:
        return None
    text = value.strip()
    if not text:
        return None
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        pass
    for fmt in formats:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None

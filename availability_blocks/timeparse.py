"""
Clock tokens and time ranges.

Form headers mix "7AM - 10AM", "6:30PM - 9:30PM", "11:30 pm" and 24-hour
"18:30–21:00". Everything is converted to minutes from midnight. Parsers
return None instead of raising: most header cells are not times at all.
"""
from __future__ import annotations

import re
from typing import Iterator, Tuple

from .models import MINUTES_PER_DAY, TimeRange

_CLOCK_RE = re.compile(
    r"^(\d{1,2})(?::(\d{2}))?\s*(?:([AaPp])\.?\s*[Mm]\.?)?$"
)

_RANGE_SEPARATORS = "-–—"
_RANGE_SPLIT_RE = re.compile(r"\s*[" + _RANGE_SEPARATORS + r"]\s*")

# A range somewhere inside a longer line, e.g. "Thursday, October 2 7AM - 10AM"
RANGE_SEARCH_RE = re.compile(
    r"(?<![\d:])\d{1,2}(?::\d{2})?\s*(?:[AaPp]\.?\s*[Mm]\.?)?"
    r"\s*[" + _RANGE_SEPARATORS + r"]\s*"
    r"\d{1,2}(?::\d{2})?\s*(?:[AaPp]\.?\s*[Mm]\.?)?(?![\w:])"
)


def _to_24(hour: int, minute: int, meridiem: str | None) -> int | None:
    if minute > 59:
        return None
    if meridiem:
        if not 1 <= hour <= 12:
            return None
        if meridiem == "A":
            if hour == 12:
                hour = 0
        elif hour != 12:
            hour += 12
    elif hour == 24:
        if minute:
            return None
    elif hour > 23:
        return None
    return hour * 60 + minute


def parse_clock_token(text: str) -> int | None:
    """
    Parse '7AM', '11:30 PM', '18:30' or '7' into minutes from midnight.

    Without AM/PM the token is read as 24-hour time; '24:00' is end of day.
    """
    if not text:
        return None
    m = _CLOCK_RE.match(text.strip())
    if not m:
        return None
    hour = int(m.group(1))
    minute = int(m.group(2)) if m.group(2) else 0
    meridiem = m.group(3).upper() if m.group(3) else None
    return _to_24(hour, minute, meridiem)


def parse_time_range(text: str) -> TimeRange | None:
    """
    Parse '7AM - 10AM' or '18:30–21:00'. Overnight ranges return None.
    """
    if not text:
        return None
    cleaned = " ".join(text.split())
    parts = _RANGE_SPLIT_RE.split(cleaned)
    if len(parts) != 2:
        return None
    start = parse_clock_token(parts[0])
    end = parse_clock_token(parts[1])
    if start is None or end is None or end <= start:
        return None
    return TimeRange(start, end)


def iter_time_ranges(text: str) -> Iterator[Tuple[TimeRange, str]]:
    """
    Yield every time range found inside a longer line, left to right.

    Each item is the range and the line with that range cut out, so the
    remainder can be handed to the date parser. Matches may overlap:
    "October 2 - 7AM - 10AM" yields "2 - 7AM", then "7AM - 10AM".
    """
    text = text or ""
    pos = 0
    while True:
        m = RANGE_SEARCH_RE.search(text, pos)
        if not m:
            return
        parsed = parse_time_range(m.group(0))
        if parsed:
            yield parsed, " ".join((text[: m.start()] + " " + text[m.end():]).split())
        pos = m.start() + 1


def find_time_range(text: str) -> tuple[TimeRange, str] | None:
    """First range inside a longer line, with the rest of the line."""
    for found in iter_time_ranges(text):
        return found
    return None


def format_minutes(minutes: int, twelve_hour: bool = True) -> str:
    """540 -> '9:00 AM' (or '09:00' with twelve_hour=False)."""
    if not 0 <= minutes <= MINUTES_PER_DAY:
        raise ValueError(f"minutes must be 0-{MINUTES_PER_DAY}, got {minutes}")
    hour, minute = divmod(minutes, 60)
    if not twelve_hour:
        return f"{hour:02d}:{minute:02d}"
    suffix = "AM" if hour % 24 < 12 else "PM"
    hour12 = hour % 12 or 12
    return f"{hour12}:{minute:02d} {suffix}"


def format_range(start_min: int, end_min: int, twelve_hour: bool = True) -> str:
    sep = " – " if twelve_hour else "–"
    return f"{format_minutes(start_min, twelve_hour)}{sep}{format_minutes(end_min, twelve_hour)}"

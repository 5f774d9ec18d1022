"""
Parse "Thursday, October 2" style date cells (optionally with a CLASS marker).
"""
from __future__ import annotations

import re
from typing import Dict

from .models import DateCellInfo


# ──────────────────────────────────────────────────────────────────
#  Weekday / month names
# ──────────────────────────────────────────────────────────────────

_DAY_MAP: Dict[str, int] = {
    "mon": 1, "monday": 1,
    "tu": 2, "tue": 2, "tues": 2, "tuesday": 2,
    "wed": 3, "weds": 3, "wednesday": 3,
    "th": 4, "thu": 4, "thur": 4, "thurs": 4, "thursday": 4,
    "fri": 5, "friday": 5,
    "sat": 6, "saturday": 6,
    "sun": 7, "sunday": 7,
}

_MONTH_MAP: Dict[str, int] = {
    "january": 1, "february": 2, "march": 3, "april": 4, "may": 5, "june": 6,
    "july": 7, "august": 8, "september": 9, "october": 10, "november": 11, "december": 12,
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "jun": 6, "jul": 7,
    "aug": 8, "sep": 9, "sept": 9, "oct": 10, "nov": 11, "dec": 12,
}


def _alternation(names) -> str:
    # Longest first so "thursday" wins over "thu"
    return "|".join(sorted(names, key=len, reverse=True))


_WEEKDAY_RE = re.compile(r"\b(" + _alternation(_DAY_MAP) + r")\b\.?", re.I)
_MONTH_DAY_RE = re.compile(
    r"\b(" + _alternation(_MONTH_MAP) + r")\.?\s+(\d{1,2})(?:st|nd|rd|th)?\b", re.I
)
_CLASS_RE = re.compile(r"\bclass\b", re.I)


def normalize_weekday(text: str) -> int | None:
    """
    Normalize a weekday name ('Mon', 'WEDS', ' Thursday ') to 1-7 (Mon-Sun).
    """
    if not text:
        return None
    return _DAY_MAP.get(text.strip().rstrip(".").lower())


def normalize_month(text: str) -> int | None:
    if not text:
        return None
    return _MONTH_MAP.get(text.strip().rstrip(".").lower())


def parse_date_expression(text: str) -> DateCellInfo | None:
    """
    Parse 'Thursday, October 2' / 'Sunday, October 5 CLASS' / 'Weds Oct 1'.

    Weekday, month and day may appear anywhere in the text; all three are
    required. The weekday is taken as written and is not checked against the
    calendar.
    """
    if not text:
        return None
    wd = _WEEKDAY_RE.search(text)
    if not wd:
        return None
    md = _MONTH_DAY_RE.search(text)
    if not md:
        return None
    day = int(md.group(2))
    if not 1 <= day <= 31:
        return None
    return DateCellInfo(
        weekday=_DAY_MAP[wd.group(1).lower()],
        month=_MONTH_MAP[md.group(1).lower()],
        day_of_month=day,
        is_class=bool(_CLASS_RE.search(text)),
    )

"""
Materialise weekly block templates onto the dates of one month.
"""
from __future__ import annotations

import calendar
from datetime import date
from typing import Iterable, List, Sequence

from .dedupe import canonicalize
from .headers import DATED, check_options
from .models import BlockTemplate, DatedBlockCandidate


def expand_month(
    templates: Iterable[BlockTemplate],
    year: int,
    month: int,
    valid_day_range: Sequence[int] | None = None,
) -> List[DatedBlockCandidate]:
    """
    One DatedBlockCandidate per (date in month, template on that weekday).

    Only dates inside ``valid_day_range`` (inclusive) are used. Output is
    sorted by date, then start and end time.
    """
    first_day, last_day = check_options(DATED, year, month, valid_day_range)
    by_weekday: dict[int, List[BlockTemplate]] = {}
    for t in templates:
        by_weekday.setdefault(t.weekday, []).append(t)

    days_in_month = calendar.monthrange(year, month)[1]
    out: List[DatedBlockCandidate] = []
    for day_num in range(first_day, min(last_day, days_in_month) + 1):
        day = date(year, month, day_num)
        for t in by_weekday.get(day.isoweekday(), []):
            out.append(
                DatedBlockCandidate(day.isoformat(), t.start_min, t.end_min, t.is_class, t.label)
            )
    return canonicalize(out)

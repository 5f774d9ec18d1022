"""
Work out which header cells of a form export describe a schedule block.

Two header layouts occur in the wild:

  A) one cell holds both parts on separate lines (either order):
         "Wednesday, October 1\\n8AM - 10AM"
  B) two adjacent cells hold one part each (either order):
         "7AM - 10AM", "Thursday, October 2"

Layout A is resolved for every cell first; only the cells left over are
paired for layout B, and each cell is used in at most one pair. Columns such
as Timestamp / Name / Notes match neither layout and are skipped.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import List, NamedTuple, Optional, Sequence, Tuple, Union

from .dateparse import parse_date_expression
from .models import BlockCandidate, DateCellInfo, DatedBlockCandidate, TimeRange
from .timeparse import iter_time_ranges, parse_time_range

logger = logging.getLogger(__name__)

WEEKLY = "weekly"
DATED = "dated"
MODES = (WEEKLY, DATED)

CLASS_LABEL = "CLASS"
DEFAULT_DAY_RANGE = (1, 31)

Candidate = Union[BlockCandidate, DatedBlockCandidate]


class HeaderMatch(NamedTuple):
    candidate: Candidate
    columns: Tuple[int, ...]
    layout: str


def check_options(
    mode: str,
    year: int | None,
    month: int | None,
    valid_day_range: Sequence[int] | None,
) -> Tuple[int, int]:
    """Validate extraction options and return the inclusive day range."""
    if mode not in MODES:
        raise ValueError(f"Unsupported mode: {mode!r}. Use 'weekly' or 'dated'.")
    if mode == DATED:
        if year is None or month is None:
            raise ValueError("Dated mode requires both year and month.")
        if not 1 <= month <= 12:
            raise ValueError(f"Month must be 1-12, got {month}")
        if not 1 <= year <= 9999:
            raise ValueError(f"Invalid year: {year}")
    if valid_day_range is None:
        return DEFAULT_DAY_RANGE
    if len(valid_day_range) != 2:
        raise ValueError("valid_day_range must be a (start, end) pair.")
    start, end = int(valid_day_range[0]), int(valid_day_range[1])
    if not 1 <= start <= end <= 31:
        raise ValueError(f"Invalid day range {start}-{end}; expected 1 <= start <= end <= 31.")
    return start, end


# ──────────────────────────────────────────────────────────────────
#  Cell helpers
# ──────────────────────────────────────────────────────────────────

def _lines(field: str) -> List[str]:
    return [" ".join(line.split()) for line in field.splitlines() if line.strip()]


def _flatten(field: str) -> str:
    return " ".join(field.split())


def _pair_lines(a: str, b: str) -> Optional[Tuple[DateCellInfo, TimeRange]]:
    """Date then time, or time then date."""
    info = parse_date_expression(a)
    rng = parse_time_range(b)
    if info and rng:
        return info, rng
    rng = parse_time_range(a)
    info = parse_date_expression(b)
    if info and rng:
        return info, rng
    return None


def _combined_cell_pairs(field: str) -> List[Tuple[DateCellInfo, TimeRange]]:
    lines = _lines(field)
    pairs = []
    for a, b in zip(lines, lines[1:]):
        pair = _pair_lines(a, b)
        if pair:
            pairs.append(pair)
    if pairs:
        return pairs
    # "Thursday, October 2 7AM - 10AM" on a single line
    # ("... October 2 - 7AM - 10AM" also matches "2 - 7AM"; take the first
    # range whose leftover still reads as a date)
    for line in lines:
        for rng, rest in iter_time_ranges(line):
            info = parse_date_expression(rest)
            if info:
                pairs.append((info, rng))
                break
    return pairs


def _is_schedule_like(field: str) -> bool:
    if _combined_cell_pairs(field):
        return True
    flat = _flatten(field)
    return bool(parse_time_range(flat) or parse_date_expression(flat))


def _build_candidate(
    info: DateCellInfo,
    rng: TimeRange,
    mode: str,
    year: int | None,
    month: int | None,
    day_range: Tuple[int, int],
) -> Candidate | None:
    label = CLASS_LABEL if info.is_class else None
    if mode == WEEKLY:
        return BlockCandidate(info.weekday, rng.start_min, rng.end_min, info.is_class, label)

    if info.month != month:
        logger.debug("Skipping month %s (target %s)", info.month, month)
        return None
    if not day_range[0] <= info.day_of_month <= day_range[1]:
        logger.debug("Skipping day %s outside %s-%s", info.day_of_month, *day_range)
        return None
    try:
        day = date(year, month, info.day_of_month)
    except ValueError:
        logger.debug("Skipping impossible date %s-%s-%s", year, month, info.day_of_month)
        return None
    return DatedBlockCandidate(day.isoformat(), rng.start_min, rng.end_min, info.is_class, label)


# ──────────────────────────────────────────────────────────────────
#  Public API
# ──────────────────────────────────────────────────────────────────

def match_headers(
    fields: Sequence[str],
    mode: str = WEEKLY,
    year: int | None = None,
    month: int | None = None,
    valid_day_range: Sequence[int] | None = None,
) -> List[HeaderMatch]:
    """
    Recognise schedule columns in a header record.

    Returns one HeaderMatch per kept candidate, with the column indices it
    was read from, ordered by first column.
    """
    day_range = check_options(mode, year, month, valid_day_range)
    matches: List[HeaderMatch] = []
    used = [False] * len(fields)

    # Layout A: self-contained cells
    for idx, field in enumerate(fields):
        pairs = _combined_cell_pairs(field or "")
        if not pairs:
            continue
        used[idx] = True
        for info, rng in pairs:
            cand = _build_candidate(info, rng, mode, year, month, day_range)
            if cand:
                logger.debug("Column %d (combined): %r", idx, cand)
                matches.append(HeaderMatch(cand, (idx,), "A"))

    # Layout B: neighbouring cells, each used at most once
    idx = 0
    while idx < len(fields) - 1:
        if used[idx] or used[idx + 1]:
            idx += 1
            continue
        pair = _pair_lines(_flatten(fields[idx] or ""), _flatten(fields[idx + 1] or ""))
        if not pair:
            idx += 1
            continue
        used[idx] = used[idx + 1] = True
        cand = _build_candidate(pair[0], pair[1], mode, year, month, day_range)
        if cand:
            logger.debug("Columns %d-%d (pair): %r", idx, idx + 1, cand)
            matches.append(HeaderMatch(cand, (idx, idx + 1), "B"))
        idx += 2

    matches.sort(key=lambda m: m.columns[0])
    return matches


def reconcile_headers(
    fields: Sequence[str],
    mode: str = WEEKLY,
    year: int | None = None,
    month: int | None = None,
    valid_day_range: Sequence[int] | None = None,
) -> List[Candidate]:
    """Candidates (not yet deduplicated) for the given header fields."""
    return [m.candidate for m in match_headers(fields, mode, year, month, valid_day_range)]


def find_header_index(records: Sequence[Sequence[str]], look_ahead: int = 10) -> int:
    """
    Index of the header among the first ``look_ahead`` records: the one with
    the most schedule-like cells. Falls back to 0.
    """
    best_idx, best_hits = 0, 0
    for idx, record in enumerate(records[:look_ahead]):
        hits = sum(1 for field in record if _is_schedule_like(field or ""))
        if hits > best_hits:
            best_idx, best_hits = idx, hits
    if best_idx:
        logger.debug("Using record %d as header (%d schedule cells)", best_idx, best_hits)
    return best_idx


def find_header_record(records: Sequence[Sequence[str]], look_ahead: int = 10) -> List[str]:
    if not records:
        return []
    return list(records[find_header_index(records, look_ahead)])

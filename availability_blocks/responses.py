"""
Per-respondent availability from the response rows of a form export.

Each respondent's latest submission wins. A block counts as available when
its column holds a "yes" answer; for a two-cell (layout B) header either
cell of the pair may carry the answer.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Sequence, Tuple, Union

from .csv_records import read_all_records
from .dedupe import canonicalize
from .headers import WEEKLY, find_header_index, match_headers
from .models import Block, MalformedInputError

logger = logging.getLogger(__name__)

YES_VALUES = frozenset({"yes", "y", "true", "1", "x"})

_TIMESTAMP_FORMATS = (
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %H:%M",
    "%Y/%m/%d %I:%M:%S %p",
    "%Y/%m/%d %H:%M:%S",
    "%m/%d/%Y",
)


@dataclass(frozen=True)
class RespondentAvailability:
    name: str
    timestamp: str
    blocks: Tuple[Block, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "timestamp": self.timestamp,
            "blocks": [b.to_dict() for b in self.blocks],
        }


def is_yes(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in YES_VALUES


def parse_timestamp(text: str) -> Optional[datetime]:
    """Parse a Google Forms timestamp; None if unrecognised."""
    text = (text or "").strip()
    if not text:
        return None
    # "2025/10/01 2:03:22 PM GMT-7" -> drop the zone suffix
    text = re.sub(r"\s+(GMT|UTC)[+-]?\d*$", "", text)
    try:
        return datetime.fromisoformat(text).replace(tzinfo=None)
    except ValueError:
        pass
    for fmt in _TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def _find_column(header: Sequence[str], pattern: str, exact: Optional[str] = None) -> Optional[int]:
    cleaned = [" ".join((h or "").split()).lower() for h in header]
    if exact:
        for i, h in enumerate(cleaned):
            if h == exact:
                return i
    for i, h in enumerate(cleaned):
        if re.search(pattern, h):
            return i
    return None


def _latest_rows(rows: Sequence[List[str]], ts_col: int, name_col: int) -> Dict[str, List[str]]:
    latest: Dict[str, Tuple[datetime, List[str]]] = {}
    for row in rows:
        name = row[name_col].strip() if name_col < len(row) else ""
        if not name:
            continue
        ts = parse_timestamp(row[ts_col] if ts_col < len(row) else "") or datetime.min
        prev = latest.get(name)
        # Later rows win ties (and unparsable timestamps)
        if prev is None or ts >= prev[0]:
            latest[name] = (ts, row)
    return {name: row for name, (_, row) in latest.items()}


def collect_availability(
    csv_text: Union[str, bytes],
    mode: str = WEEKLY,
    year: int | None = None,
    month: int | None = None,
    valid_day_range: Sequence[int] | None = None,
    header_look_ahead: int | None = None,
) -> List[RespondentAvailability]:
    """
    Read every response row and return one entry per respondent, sorted by
    name, listing the canonical blocks they marked as available.

    :param header_look_ahead: If set, search this many leading records for
        the header; records above it are ignored.
    :raises MalformedInputError: No records, or no Timestamp / Name column.
    """
    records = read_all_records(csv_text)
    start = find_header_index(records, header_look_ahead) if header_look_ahead else 0
    header, rows = records[start], records[start + 1:]

    ts_col = _find_column(header, r"timestamp")
    name_col = _find_column(header, r"name", exact="name")
    if ts_col is None or name_col is None:
        raise MalformedInputError("Missing Timestamp or Name column in CSV header.")

    matches = match_headers(header, mode, year, month, valid_day_range)
    logger.debug("%d schedule columns, %d response rows", len(matches), len(rows))

    out: List[RespondentAvailability] = []
    for name, row in sorted(_latest_rows(rows, ts_col, name_col).items()):
        chosen = [
            m.candidate
            for m in matches
            if any(is_yes(row[c]) for c in m.columns if c < len(row))
        ]
        out.append(
            RespondentAvailability(
                name=name,
                timestamp=row[ts_col].strip() if ts_col < len(row) else "",
                blocks=tuple(canonicalize(chosen)),
            )
        )
    return out

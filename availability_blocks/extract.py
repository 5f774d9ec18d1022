"""
Entry point: form export CSV text -> ordered, deduplicated schedule blocks.
"""
from __future__ import annotations

import logging
from typing import List, Sequence, Union

from .csv_records import iter_records, read_header_record
from .dedupe import canonicalize
from .headers import WEEKLY, check_options, find_header_record, reconcile_headers
from .models import Block, MalformedInputError

logger = logging.getLogger(__name__)


def extract_from_header_fields(
    fields: Sequence[str],
    mode: str = WEEKLY,
    year: int | None = None,
    month: int | None = None,
    valid_day_range: Sequence[int] | None = None,
) -> List[Block]:
    """Run reconciliation and deduplication on an already split header."""
    candidates = reconcile_headers(fields, mode, year, month, valid_day_range)
    blocks = canonicalize(candidates)
    logger.debug(
        "%d header cells -> %d candidates -> %d blocks", len(fields), len(candidates), len(blocks)
    )
    return blocks


def extract_block_templates(
    csv_text: Union[str, bytes],
    mode: str = WEEKLY,
    year: int | None = None,
    month: int | None = None,
    valid_day_range: Sequence[int] | None = None,
    header_look_ahead: int | None = None,
) -> List[Block]:
    """
    Extract schedule blocks from the header of a Google Forms CSV export.

    :param csv_text: Raw CSV text (or UTF-8 bytes).
    :param mode: 'weekly' for weekday-keyed BlockTemplates (month ignored),
        'dated' for DatedBlockCandidates of the given year/month.
    :param year: Target year (required for 'dated').
    :param month: Target month 1-12 (required for 'dated').
    :param valid_day_range: Inclusive (start, end) day-of-month filter for
        'dated', e.g. (1, 28). Default (1, 31).
    :param header_look_ahead: If set, search this many leading records for
        the header instead of using the first one.
    :returns: Blocks sorted by day/date, start, end. Empty if no schedule
        columns were recognised.
    :raises MalformedInputError: Input is not text or has no records.
    """
    check_options(mode, year, month, valid_day_range)
    if header_look_ahead:
        records = []
        for record in iter_records(csv_text):
            records.append(record)
            if len(records) >= header_look_ahead:
                break
        if not records:
            raise MalformedInputError("CSV input contains no records.")
        fields = find_header_record(records, header_look_ahead)
    else:
        fields = read_header_record(csv_text)
    return extract_from_header_fields(fields, mode, year, month, valid_day_range)

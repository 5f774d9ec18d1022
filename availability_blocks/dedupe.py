"""
Collapse candidates that describe the same block and put them in a stable order.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, Iterable, List

from .headers import Candidate
from .models import Block, BlockCandidate, BlockTemplate

logger = logging.getLogger(__name__)


def block_key(cand: Candidate) -> tuple:
    """(weekday or ISO date, start_min, end_min). is_class is not part of it."""
    return cand.sort_key


def _merge(kept: Candidate, other: Candidate) -> Candidate:
    is_class = kept.is_class or other.is_class
    label = kept.label if kept.label is not None else other.label
    if is_class == kept.is_class and label == kept.label:
        return kept
    logger.debug("Merged %r into %r", other, kept)
    return replace(kept, is_class=is_class, label=label)


def _finalize(cand: Candidate) -> Block:
    if isinstance(cand, BlockCandidate) and not isinstance(cand, BlockTemplate):
        return BlockTemplate(cand.weekday, cand.start_min, cand.end_min, cand.is_class, cand.label)
    return cand


def canonicalize(candidates: Iterable[Candidate]) -> List[Block]:
    """
    Deduplicate by block_key and sort by day (or date), start, end.

    A block is CLASS once any contributing candidate says so; the first
    non-empty label wins.
    """
    merged: Dict[tuple, Candidate] = {}
    for cand in candidates:
        key = block_key(cand)
        if key in merged:
            merged[key] = _merge(merged[key], cand)
        else:
            merged[key] = cand
    return [_finalize(merged[key]) for key in sorted(merged)]

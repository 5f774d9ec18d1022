"""
Value types passed between the parsing stages and handed to the exporter.

All of them are frozen dataclasses. ``to_dict`` produces the JSON wire names
(``startMin``, ``isClass``, ``dateISO`` ...) that the seeding scripts read.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Union

MINUTES_PER_DAY = 1440


class MalformedInputError(ValueError):
    """Input is not text, or holds no CSV record at all."""


def _check_minutes(start_min: int, end_min: int) -> None:
    if not 0 <= start_min <= MINUTES_PER_DAY:
        raise ValueError(f"startMin must be 0-{MINUTES_PER_DAY}, got {start_min}")
    if not 0 <= end_min <= MINUTES_PER_DAY:
        raise ValueError(f"endMin must be 0-{MINUTES_PER_DAY}, got {end_min}")
    if end_min <= start_min:
        raise ValueError(f"endMin must be after startMin ({end_min} <= {start_min})")


def _check_weekday(weekday: int) -> None:
    if not 1 <= weekday <= 7:
        raise ValueError(f"Weekday must be 1-7 (Mon-Sun), got {weekday}")


@dataclass(frozen=True)
class TimeRange:
    start_min: int
    end_min: int

    def __post_init__(self) -> None:
        _check_minutes(self.start_min, self.end_min)


@dataclass(frozen=True)
class DateCellInfo:
    """One parsed "Weekday, Month Day [CLASS]" expression."""

    weekday: int  # 1-7: Monday-Sunday
    month: int
    day_of_month: int
    is_class: bool = False

    def __post_init__(self) -> None:
        _check_weekday(self.weekday)
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month must be 1-12, got {self.month}")
        if not 1 <= self.day_of_month <= 31:
            raise ValueError(f"Day of month must be 1-31, got {self.day_of_month}")


@dataclass(frozen=True)
class BlockCandidate:
    """A recognised (weekday, time range) pairing before deduplication."""

    weekday: int
    start_min: int
    end_min: int
    is_class: bool = False
    label: Optional[str] = None

    def __post_init__(self) -> None:
        _check_weekday(self.weekday)
        _check_minutes(self.start_min, self.end_min)

    @property
    def sort_key(self) -> tuple:
        return (self.weekday, self.start_min, self.end_min)


@dataclass(frozen=True)
class BlockTemplate(BlockCandidate):
    """Canonical weekly block, unique per (weekday, start_min, end_min)."""

    def to_dict(self) -> dict:
        return {
            "weekday": self.weekday,
            "startMin": self.start_min,
            "endMin": self.end_min,
            "isClass": self.is_class,
            "label": self.label,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "BlockTemplate":
        return cls(
            weekday=int(data["weekday"]),
            start_min=int(data["startMin"]),
            end_min=int(data["endMin"]),
            is_class=bool(data.get("isClass", False)),
            label=data.get("label"),
        )


@dataclass(frozen=True)
class DatedBlockCandidate:
    """A block bound to an absolute calendar date (YYYY-MM-DD)."""

    date_iso: str
    start_min: int
    end_min: int
    is_class: bool = False
    label: Optional[str] = None

    def __post_init__(self) -> None:
        # Raises ValueError for anything that is not a real YYYY-MM-DD date
        date.fromisoformat(self.date_iso)
        _check_minutes(self.start_min, self.end_min)

    @property
    def sort_key(self) -> tuple:
        return (self.date_iso, self.start_min, self.end_min)

    @property
    def weekday(self) -> int:
        """ISO weekday of the calendar date (1=Monday)."""
        return date.fromisoformat(self.date_iso).isoweekday()

    def to_dict(self) -> dict:
        return {
            "dateISO": self.date_iso,
            "startMin": self.start_min,
            "endMin": self.end_min,
            "isClass": self.is_class,
            "label": self.label,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DatedBlockCandidate":
        return cls(
            date_iso=str(data["dateISO"]),
            start_min=int(data["startMin"]),
            end_min=int(data["endMin"]),
            is_class=bool(data.get("isClass", False)),
            label=data.get("label"),
        )


Block = Union[BlockTemplate, DatedBlockCandidate]

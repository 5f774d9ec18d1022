"""
Export schedule blocks to JSON, CSV, and ICS.
"""
from __future__ import annotations

import csv
import hashlib
import json
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Sequence

import icalendar
import pytz

from .models import Block, DatedBlockCandidate
from .timeparse import format_range

DEFAULT_TZ = "UTC"

_WEEKDAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


def _to_datetime(date_iso: str, minutes: int) -> datetime:
    """'2025-10-02' + 420 -> 2025-10-02 07:00 (1440 rolls to next midnight)."""
    day = datetime.strptime(date_iso, "%Y-%m-%d")
    return day + timedelta(minutes=minutes)


def _summary(block: Block) -> str:
    prefix = block.label or "Availability"
    return f"{prefix} {format_range(block.start_min, block.end_min)}"


def export_ics(blocks: Sequence[Block], out_path: str | Path, tz_name: str = DEFAULT_TZ) -> None:
    """Export dated blocks to iCalendar (.ics). Weekly templates are rejected."""
    try:
        tz = pytz.timezone(tz_name)
    except pytz.UnknownTimeZoneError as e:
        raise ValueError(f"Unknown timezone: {tz_name}") from e

    cal = icalendar.Calendar()
    cal.add("prodid", "-//Availability Blocks Export//EN")
    cal.add("version", "2.0")
    cal.add("calscale", "GREGORIAN")
    cal.add("x-wr-calname", "Availability Blocks")
    cal.add("x-wr-timezone", tz_name)

    for b in blocks:
        if not isinstance(b, DatedBlockCandidate):
            raise ValueError(
                "ICS export needs dated blocks. Use dated mode, or expand weekly "
                "templates to a month first (--expand --year --month)."
            )
        start = _to_datetime(b.date_iso, b.start_min)
        end = _to_datetime(b.date_iso, b.end_min)

        event = icalendar.Event()
        # Deterministic UID per (date, start, end)
        uid_string = f"{b.date_iso}-{b.start_min}-{b.end_min}"
        uid_hash = hashlib.md5(uid_string.encode("utf-8")).hexdigest()
        event.add("uid", f"{uid_hash}@availability-blocks")

        event.add("summary", _summary(b))
        if b.is_class:
            event.add("categories", ["CLASS"])
        event.add("dtstart", tz.localize(start))
        event.add("dtend", tz.localize(end))
        event.add("dtstamp", datetime.now(timezone.utc))
        cal.add_component(event)

    Path(out_path).write_text(cal.to_ical().decode("utf-8"), encoding="utf-8")


def export_csv(blocks: Sequence[Block], out_path: str | Path) -> None:
    """Export blocks to CSV, with a readable 'range' column (and 'day' for templates)."""
    if not blocks:
        Path(out_path).write_text("", encoding="utf-8")
        return
    rows = []
    for b in blocks:
        row = b.to_dict()
        if "weekday" in row:
            row["day"] = _WEEKDAY_NAMES[b.weekday - 1]
        row["range"] = format_range(b.start_min, b.end_min)
        rows.append(row)
    keys = list(rows[0].keys())
    with open(out_path, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=keys, extrasaction="ignore")
        w.writeheader()
        w.writerows(rows)


def export_json(items: Sequence, out_path: str | Path) -> None:
    """Export blocks (or anything with to_dict) to a JSON array."""
    Path(out_path).write_text(
        json.dumps([i.to_dict() for i in items], indent=2, ensure_ascii=False), encoding="utf-8"
    )


def export(blocks: Sequence[Block], out_path: str | Path, fmt: str, tz_name: str = DEFAULT_TZ) -> None:
    """Export to the given format: ics, csv, or json."""
    fmt = fmt.lower()
    if fmt == "ics":
        export_ics(blocks, out_path, tz_name)
    elif fmt == "csv":
        export_csv(blocks, out_path)
    elif fmt == "json":
        export_json(blocks, out_path)
    else:
        raise ValueError(f"Unsupported format: {fmt}. Use ics, csv, or json.")

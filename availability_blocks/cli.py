"""
Command-line interface: read a form export and write its schedule blocks to file.
"""
from __future__ import annotations

import argparse
import logging
import re
import sys
from pathlib import Path

from . import __version__
from .export import DEFAULT_TZ, export, export_json
from .extract import extract_block_templates, extract_from_header_fields
from .headers import DATED, WEEKLY
from .month import expand_month
from .responses import collect_availability
from .sheet_html import read_sheet_header


def _parse_days(text: str | None) -> tuple[int, int] | None:
    if not text:
        return None
    m = re.match(r"^\s*(\d{1,2})\s*-\s*(\d{1,2})\s*$", text)
    if not m:
        raise ValueError(f"--days must look like 1-28, got {text!r}")
    return int(m.group(1)), int(m.group(2))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="availability-blocks",
        description=(
            "Extract schedule blocks from a Google Forms availability export.\n"
            "- weekly mode: one template per (weekday, start, end).\n"
            "- dated mode: one block per (date, start, end) for --year/--month."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--csv", metavar="CSV_PATH", help="Form responses exported as CSV.")
    source.add_argument(
        "--sheet-html",
        metavar="HTML_PATH",
        help="Google Sheets 'Download -> Web page' export. Only the header row is read.",
    )
    parser.add_argument(
        "-o",
        "--output",
        default="blocks",
        help="Output path (without extension). Default: blocks",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "csv", "ics"],
        default="json",
        help="Export format. Default: json",
    )
    parser.add_argument(
        "--mode",
        choices=[WEEKLY, DATED],
        default=WEEKLY,
        help="weekly: templates keyed by weekday (month ignored). dated: blocks keyed by date. Default: weekly",
    )
    parser.add_argument("--year", type=int, help="Target year, e.g. 2025 (dated mode / --expand).")
    parser.add_argument("--month", type=int, help="Target month 1-12 (dated mode / --expand).")
    parser.add_argument(
        "--days",
        metavar="START-END",
        help="Inclusive day-of-month filter, e.g. 1-28 to drop a trailing partial week. Default: 1-31",
    )
    parser.add_argument(
        "--detect-header",
        action="store_true",
        help="Search the first 10 records for the header instead of assuming the first one.",
    )
    parser.add_argument(
        "--expand",
        action="store_true",
        help="(weekly mode) Place every template on each matching date of --year/--month.",
    )
    parser.add_argument(
        "--responses",
        action="store_true",
        help="(CSV only) Export each respondent's latest availability instead of the block list (JSON).",
    )
    parser.add_argument("--tz", default=DEFAULT_TZ, help=f"Timezone for ICS events. Default: {DEFAULT_TZ}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log parsing details to stderr.")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        day_range = _parse_days(args.days)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.expand and (args.mode != WEEKLY or args.year is None or args.month is None):
        print("Error: --expand needs weekly mode with --year and --month.", file=sys.stderr)
        return 1

    src_path = Path(args.csv or args.sheet_html)
    if not src_path.exists():
        print(f"Error: input file not found: {src_path}", file=sys.stderr)
        return 1

    # Per-respondent availability (needs the response rows, so CSV only)
    if args.responses:
        if not args.csv:
            print("Error: --responses works with --csv input only.", file=sys.stderr)
            return 1
        if args.format != "json" or args.expand:
            print("Error: --responses always writes JSON and cannot be combined with -f csv/ics or --expand.", file=sys.stderr)
            return 1
        try:
            people = collect_availability(
                src_path.read_bytes(),
                mode=args.mode,
                year=args.year,
                month=args.month,
                valid_day_range=day_range,
                header_look_ahead=10 if args.detect_header else None,
            )
        except ValueError as e:
            print(f"Error reading responses: {e}", file=sys.stderr)
            return 1
        out_path = Path(args.output).with_suffix(".json") if Path(args.output).suffix else Path(args.output + ".json")
        export_json(people, out_path)
        print(f"Exported availability for {len(people)} respondent(s) to {out_path}")
        return 0

    try:
        if args.csv:
            blocks = extract_block_templates(
                src_path.read_bytes(),
                mode=args.mode,
                year=args.year,
                month=args.month,
                valid_day_range=day_range,
                header_look_ahead=10 if args.detect_header else None,
            )
        else:
            fields = read_sheet_header(html_path=src_path)
            blocks = extract_from_header_fields(
                fields,
                mode=args.mode,
                year=args.year,
                month=args.month,
                valid_day_range=day_range,
            )
    except ValueError as e:
        print(f"Error extracting blocks: {e}", file=sys.stderr)
        return 1

    if not blocks:
        print(
            "Warning: no schedule columns recognised. Header cells should look like\n"
            '  "Wednesday, October 1\\n8AM - 10AM" (one cell) or\n'
            '  "7AM - 10AM","Thursday, October 2" (two adjacent cells).\n'
            "In dated mode also check --year/--month/--days.",
            file=sys.stderr,
        )

    if args.expand:
        blocks = expand_month(blocks, args.year, args.month, day_range)

    ext = {"ics": ".ics", "csv": ".csv", "json": ".json"}[args.format]
    out_path = Path(args.output).with_suffix(ext) if Path(args.output).suffix else Path(args.output + ext)
    try:
        export(blocks, out_path, args.format, tz_name=args.tz)
    except ValueError as e:
        print(f"Error exporting: {e}", file=sys.stderr)
        return 1
    print(f"Exported {len(blocks)} block(s) to {out_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

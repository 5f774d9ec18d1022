import csv
import json

import pytest

from availability_blocks.export import export, export_csv, export_ics, export_json
from availability_blocks.models import BlockTemplate, DatedBlockCandidate

DATED = [
    DatedBlockCandidate("2025-10-02", 420, 600),
    DatedBlockCandidate("2025-10-05", 780, 990, True, "CLASS"),
]


def test_export_ics(tmp_path):
    out_path = tmp_path / "test.ics"

    export_ics(DATED, out_path, tz_name="America/Vancouver")

    assert out_path.exists()
    content = out_path.read_text(encoding="utf-8")

    # Verify standard ICS elements
    assert "BEGIN:VCALENDAR" in content
    assert content.count("BEGIN:VEVENT") == 2
    assert "END:VCALENDAR" in content

    # Verify timezone is applied
    assert "DTSTART;TZID=America/Vancouver:20251002T070000" in content
    assert "DTEND;TZID=America/Vancouver:20251002T100000" in content
    assert "DTSTART;TZID=America/Vancouver:20251005T130000" in content

    # Verify UID and CLASS marker
    assert "UID:" in content
    assert "@availability-blocks" in content
    assert "CATEGORIES:CLASS" in content


def test_export_ics_deterministic_uid(tmp_path):
    a, b = tmp_path / "a.ics", tmp_path / "b.ics"
    export_ics(DATED, a)
    export_ics(DATED, b)
    uids = lambda p: [l for l in p.read_text(encoding="utf-8").splitlines() if l.startswith("UID:")]
    assert uids(a) == uids(b)


def test_export_ics_rejects_templates(tmp_path):
    with pytest.raises(ValueError):
        export_ics([BlockTemplate(4, 420, 600)], tmp_path / "x.ics")


def test_export_ics_unknown_timezone(tmp_path):
    with pytest.raises(ValueError):
        export_ics(DATED, tmp_path / "x.ics", tz_name="Mars/Olympus_Mons")


def test_export_json(tmp_path):
    out_path = tmp_path / "blocks.json"
    export_json(DATED, out_path)
    data = json.loads(out_path.read_text(encoding="utf-8"))
    assert data[1] == {
        "dateISO": "2025-10-05", "startMin": 780, "endMin": 990, "isClass": True, "label": "CLASS",
    }
    assert [DatedBlockCandidate.from_dict(d) for d in data] == DATED


def test_export_csv_templates(tmp_path):
    out_path = tmp_path / "blocks.csv"
    export_csv([BlockTemplate(4, 420, 600)], out_path)
    with open(out_path, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert rows[0]["weekday"] == "4"
    assert rows[0]["day"] == "Thursday"
    assert rows[0]["range"] == "7:00 AM – 10:00 AM"


def test_export_csv_empty(tmp_path):
    out_path = tmp_path / "blocks.csv"
    export_csv([], out_path)
    assert out_path.read_text(encoding="utf-8") == ""


def test_export_unknown_format(tmp_path):
    with pytest.raises(ValueError):
        export(DATED, tmp_path / "x.txt", "txt")

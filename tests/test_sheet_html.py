"""Tests for sheet_html.py – Google Sheets web page export."""
import pytest

from availability_blocks.extract import extract_from_header_fields
from availability_blocks.models import BlockTemplate
from availability_blocks.sheet_html import read_sheet_header


def _make_sheet_html(header_cells: list[str]) -> str:
    """Minimal Sheets export: column-letter row, then numbered data rows."""
    letters = "".join(f"<th>{chr(65 + i)}</th>" for i in range(len(header_cells) + 1))
    cells = "".join(f'<td class="s0">{c}</td>' for c in header_cells)
    return f"""<html><body><div id="sheets-viewport">
    <table class="waffle" cellspacing="0" cellpadding="0">
    <thead><tr><th class="row-header freezebar-origin-ltr"></th>{letters}</tr></thead>
    <tbody>
    <tr style="height: 20px"><th class="row-headers-background"><div class="row-header-wrapper">1</div></th>{cells}<td class="s1"></td></tr>
    <tr style="height: 20px"><th class="row-headers-background"><div class="row-header-wrapper">2</div></th><td>10/1/2025 9:00:00</td><td>Ana</td></tr>
    </tbody></table></div></body></html>"""


class TestReadSheetHeader:
    def test_br_becomes_newline(self):
        html = _make_sheet_html(["Timestamp", "Name", "Wednesday, October 1<br>8AM - 10AM"])
        assert read_sheet_header(html_content=html) == [
            "Timestamp",
            "Name",
            "Wednesday, October 1\n8AM - 10AM",
        ]

    def test_from_file(self, tmp_path):
        path = tmp_path / "responses.html"
        path.write_text(_make_sheet_html(["7AM - 10AM", "Thursday, October 2"]), encoding="utf-8")
        assert read_sheet_header(html_path=path) == ["7AM - 10AM", "Thursday, October 2"]

    def test_feeds_extraction(self):
        html = _make_sheet_html(["Timestamp", "8AM - 10AM<br>Wednesday, October 1", "7AM - 10AM", "Thursday, October 2"])
        assert extract_from_header_fields(read_sheet_header(html_content=html)) == [
            BlockTemplate(3, 480, 600),
            BlockTemplate(4, 420, 600),
        ]

    def test_plain_table_fallback(self):
        html = "<table><tr><td>Timestamp</td><td>Sunday, October 5 CLASS<br/>1PM - 4:30PM</td></tr></table>"
        assert read_sheet_header(html_content=html) == ["Timestamp", "Sunday, October 5 CLASS\n1PM - 4:30PM"]

    def test_no_table(self):
        with pytest.raises(ValueError):
            read_sheet_header(html_content="<html><body><p>nothing</p></body></html>")

    def test_empty_table(self):
        with pytest.raises(ValueError):
            read_sheet_header(html_content="<table><tr><td> </td></tr></table>")

    def test_no_source(self):
        with pytest.raises(ValueError):
            read_sheet_header()

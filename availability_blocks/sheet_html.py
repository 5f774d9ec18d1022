"""
Read the header row from a Google Sheets "Download -> Web page (.html)" export.

The export is a <table class="waffle"> whose first <thead> row holds the
column letters (A, B, C ...) and whose body rows start with a <th> row number.
Line breaks inside a cell come out as <br>; they are turned back into
newlines so combined "date<br>time" cells parse like their CSV equivalent.
"""
from __future__ import annotations

from pathlib import Path
from typing import List

from bs4 import BeautifulSoup  # type: ignore[import]


def _guess_sheet_table(soup: BeautifulSoup):
    """Prefer the Sheets grid (class waffle), else the table with the most cells."""
    waffle = soup.find("table", class_="waffle")
    if waffle:
        return waffle
    tables = soup.find_all("table")
    if not tables:
        return None
    return max(tables, key=lambda t: len(t.find_all("td")))


def _cell_text(td) -> str:
    for br in td.find_all("br"):
        br.replace_with("\n")
    return td.get_text()


def read_sheet_header(
    html_path: str | Path | None = None,
    html_content: str | None = None,
) -> List[str]:
    """
    Return the first non-empty data row of the sheet as a list of cell strings.

    :param html_path: Path to the exported .html file.
    :param html_content: Raw HTML string (alternative to html_path).
    """
    if html_content is not None:
        html = html_content
    elif html_path is not None:
        html = Path(html_path).read_text(encoding="utf-8", errors="ignore")
    else:
        raise ValueError("Provide either html_path or html_content.")

    soup = BeautifulSoup(html, "html.parser")
    table = _guess_sheet_table(soup)
    if table is None:
        raise ValueError("Could not find a sheet table in the HTML. Please check the file.")

    for tr in table.find_all("tr"):
        # Row numbers and column letters are <th>; data cells are <td>
        cells = [_cell_text(td) for td in tr.find_all("td")]
        if any(c.strip() for c in cells):
            # Trailing empty cells are padding for the sheet's unused columns
            while cells and not cells[-1].strip():
                cells.pop()
            return cells

    raise ValueError("Sheet table has no non-empty rows.")

"""
Split raw CSV text into logical records.

Google Forms exports quote any header that holds a comma or a line break, so a
single header cell such as

    "Tuesday, October 7 CLASS
    6PM - 7:15PM"

spans two physical lines. Reading "the first line" is therefore wrong; this
module scans character by character and only ends a record on a line break
outside quotes.
"""
from __future__ import annotations

from typing import Iterator, List, Union

from .models import MalformedInputError


def _decode(data: Union[str, bytes]) -> str:
    if isinstance(data, bytes):
        try:
            return data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise MalformedInputError(f"CSV input is not valid UTF-8 text: {e}") from e
    if not isinstance(data, str):
        raise MalformedInputError(f"CSV input must be str or bytes, got {type(data).__name__}")
    return data[1:] if data.startswith("\ufeff") else data


def iter_records(data: Union[str, bytes]) -> Iterator[List[str]]:
    """
    Yield every logical record as a list of field strings.

    Quoted fields keep their embedded commas and line breaks; ``""`` inside
    quotes is a literal quote. An unterminated quote swallows the rest of the
    input instead of raising. Blank physical lines are skipped.
    """
    text = _decode(data)
    n = len(text)
    i = 0
    in_quotes = False
    field: List[str] = []
    record: List[str] = []
    # Set once the current record has any content
    dirty = False

    while i < n:
        ch = text[i]

        if ch == '"':
            if in_quotes and i + 1 < n and text[i + 1] == '"':
                field.append('"')
                i += 2
                continue
            in_quotes = not in_quotes
            dirty = True
            i += 1
            continue

        if in_quotes:
            field.append(ch)
            i += 1
            continue

        if ch == ",":
            record.append("".join(field))
            field = []
            dirty = True
            i += 1
            continue

        if ch == "\n" or ch == "\r":
            if dirty:
                record.append("".join(field))
                yield record
            field = []
            record = []
            dirty = False
            # \r\n is one boundary
            if ch == "\r" and i + 1 < n and text[i + 1] == "\n":
                i += 2
            else:
                i += 1
            continue

        field.append(ch)
        dirty = True
        i += 1

    if dirty:
        record.append("".join(field))
        yield record


def read_all_records(data: Union[str, bytes]) -> List[List[str]]:
    records = list(iter_records(data))
    if not records:
        raise MalformedInputError("CSV input contains no records.")
    return records


def read_header_record(data: Union[str, bytes]) -> List[str]:
    """Return the first logical record (the header) of the CSV text."""
    for record in iter_records(data):
        return record
    raise MalformedInputError("CSV input contains no records.")

import pytest

from availability_blocks.models import BlockTemplate, DatedBlockCandidate
from availability_blocks.month import expand_month

TEMPLATES = [
    BlockTemplate(3, 480, 600),
    BlockTemplate(7, 780, 990, True, "CLASS"),
]


def test_expand_october():
    # October 1, 2025 is a Wednesday
    out = expand_month(TEMPLATES, 2025, 10)
    assert [b.date_iso for b in out] == [
        "2025-10-01", "2025-10-05", "2025-10-08", "2025-10-12", "2025-10-15",
        "2025-10-19", "2025-10-22", "2025-10-26", "2025-10-29",
    ]
    assert out[0] == DatedBlockCandidate("2025-10-01", 480, 600)
    assert out[1] == DatedBlockCandidate("2025-10-05", 780, 990, True, "CLASS")


def test_day_range():
    out = expand_month(TEMPLATES, 2025, 10, (1, 28))
    assert len(out) == 8
    assert out[-1].date_iso == "2025-10-26"


def test_short_month():
    out = expand_month([BlockTemplate(5, 600, 660)], 2025, 2, (1, 31))
    # Fridays in February 2025: 7, 14, 21, 28
    assert [b.date_iso for b in out] == ["2025-02-07", "2025-02-14", "2025-02-21", "2025-02-28"]


def test_same_day_sorted_by_time():
    out = expand_month([BlockTemplate(3, 780, 900), BlockTemplate(3, 480, 600)], 2025, 10, (1, 1))
    assert [(b.start_min, b.end_min) for b in out] == [(480, 600), (780, 900)]


def test_bad_month():
    with pytest.raises(ValueError):
        expand_month(TEMPLATES, 2025, 13)

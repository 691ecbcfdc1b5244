import datetime as dt

import pytest

from movie_tracker.services import datetime_tools
from movie_tracker.services.errors import ValidationError

TODAY = dt.date(2025, 6, 13)


def test_current_period_formats():
    assert datetime_tools.today(today=TODAY) == "2025-06-13"
    assert datetime_tools.this_month(today=TODAY) == "2025-06"
    assert datetime_tools.this_year(today=TODAY) == "2025"


def test_today_defaults_to_utc(monkeypatch):
    monkeypatch.setattr(datetime_tools, "utc_today", lambda: TODAY)
    assert datetime_tools.today() == "2025-06-13"
    assert datetime_tools.past_days_range(10) == "2025-06-03/2025-06-13"


def test_past_ranges():
    assert datetime_tools.past_days_range(10, today=TODAY) == "2025-06-03/2025-06-13"
    assert datetime_tools.past_months_range(6, today=TODAY) == "2024-12-13/2025-06-13"
    assert datetime_tools.past_years_range(3, today=TODAY) == "2022-06-13/2025-06-13"


def test_offset_date_units():
    assert datetime_tools.offset_date("2022-05-20", 10, "d") == "2022-05-30"
    assert datetime_tools.offset_date("2022-05-20", 1, "y") == "2023-05-20"
    assert datetime_tools.offset_date("2022-05-20", -2, "m") == "2022-03-20"


def test_month_and_year_offsets_clamp_to_month_end():
    assert datetime_tools.offset_date("2024-01-31", 1, "m") == "2024-02-29"
    assert datetime_tools.offset_date("2024-02-29", 1, "y") == "2025-02-28"
    assert datetime_tools.past_months_range(1, today=dt.date(2025, 3, 31)) == "2025-02-28/2025-03-31"


@pytest.mark.parametrize(
    ("iso_date", "unit"),
    [("x", "z"), ("2022-05-20", "w"), ("not-a-date", "d")],
)
def test_offset_date_rejects_bad_input(iso_date, unit):
    with pytest.raises(ValidationError):
        datetime_tools.offset_date(iso_date, 1, unit)


@pytest.mark.parametrize(
    ("range_fn", "amount"),
    [
        (datetime_tools.past_years_range, 5000),
        (datetime_tools.past_months_range, 10**9),
        (datetime_tools.past_days_range, 10**9),
    ],
)
def test_past_ranges_reject_spans_beyond_supported_dates(range_fn, amount):
    with pytest.raises(ValidationError):
        range_fn(amount, today=TODAY)

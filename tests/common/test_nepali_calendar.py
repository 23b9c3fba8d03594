from datetime import date

import pytest

from src.hr_payroll.hr_payroll.common.nepali_calendar import (
    bs_month_bounds,
    days_in_bs_month,
    is_in_bs_month,
    is_saturday,
    resolve_bs_date,
    to_bs,
    weekday_of,
)
from src.hr_payroll.hr_payroll.core.exceptions import CalendarError


def test_new_year_2080_maps_to_gregorian():
    resolved = resolve_bs_date(2080, 0, 1)
    assert resolved.ad_date == date(2023, 4, 14)
    assert resolved.ad_iso == "2023-04-14"
    assert resolved.bs_date == "2080-01-01"
    assert resolved.weekday == weekday_of(date(2023, 4, 14))


def test_round_trip_every_day_of_a_year():
    for month in range(12):
        for day in range(1, days_in_bs_month(2080, month) + 1):
            ad = resolve_bs_date(2080, month, day).ad_date
            assert to_bs(ad) == (2080, month, day)


def test_month_lengths_are_plausible():
    lengths = [days_in_bs_month(2081, m) for m in range(12)]
    assert all(29 <= n <= 32 for n in lengths)
    assert 365 <= sum(lengths) <= 366


def test_day_past_month_end_raises():
    n = days_in_bs_month(2080, 0)
    with pytest.raises(CalendarError):
        resolve_bs_date(2080, 0, n + 1)


@pytest.mark.parametrize("month", [-1, 12])
def test_month_index_out_of_range_raises(month):
    with pytest.raises(CalendarError):
        resolve_bs_date(2080, month, 1)


def test_weekday_is_sunday_based():
    assert weekday_of(date(2024, 6, 2)) == 0  # Sunday
    assert weekday_of("2024-06-08") == 6
    assert is_saturday(date(2024, 6, 8))


def test_month_bounds_cover_whole_month():
    first, last = bs_month_bounds(2080, 0)
    assert first == date(2023, 4, 14)
    assert (last - first).days + 1 == days_in_bs_month(2080, 0)
    assert is_in_bs_month(last, 2080, 0)
    assert not is_in_bs_month(first.replace(day=13), 2080, 0)
    assert not is_in_bs_month(None, 2080, 0)

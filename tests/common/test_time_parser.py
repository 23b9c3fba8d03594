from datetime import datetime, time

import pytest

from src.hr_payroll.hr_payroll.common.datetime_utils import minutes_between, parse_time, worked_hours


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("9:05", "09:05"),
        ("09:05:59", "09:05"),
        ("5:30 PM", "17:30"),
        ("12:00 am", "00:00"),
        ("11:15:00 AM", "11:15"),
        (0.5, "12:00"),
        (0.375, "09:00"),
        (time(8, 0), "08:00"),
        (datetime(2024, 1, 1, 18, 45, 10), "18:45"),
    ],
)
def test_parse_time_accepts_spreadsheet_forms(raw, expected):
    assert parse_time(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "-", "  ", "abc", "25:00", "10:75", 0, 1, 1.5, -0.2, True, float("nan")])
def test_parse_time_degrades_to_none(raw):
    assert parse_time(raw) is None


def test_fractional_day_rounds_to_nearest_minute():
    # one third of a day is 08:00 even though the float is slightly below it
    assert parse_time(1 / 3) == "08:00"


def test_minutes_between_is_signed():
    assert minutes_between("09:00", "09:12") == 12
    assert minutes_between("09:12", "09:00") == -12
    assert minutes_between(None, "09:00") is None


def test_worked_hours_wraps_past_midnight():
    assert worked_hours("09:00", "17:30") == 8.5
    assert worked_hours("22:00", "06:00") == 8.0
    assert worked_hours("09:00", None) == 0.0

"""Bikram Sambat <-> Gregorian date resolution.

Months are 0-based on this module's surface (0 = Baishakh ... 11 = Chaitra),
matching how periods are selected in the payroll screens. The underlying
`nepali_datetime` library is 1-based.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Tuple, Union

import nepali_datetime

from ..core.exceptions import CalendarError
from .datetime_utils import parse_iso_date

SATURDAY = 6
WEEKDAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


@dataclass(frozen=True)
class ResolvedDate:
    ad_date: date
    ad_iso: str
    bs_date: str
    weekday: int  # 0=Sunday..6=Saturday

    @property
    def is_saturday(self) -> bool:
        return self.weekday == SATURDAY


def _as_date(value: Union[date, str]) -> date:
    if isinstance(value, str):
        return parse_iso_date(value)
    return value


def weekday_of(ad_date: Union[date, str]) -> int:
    """Gregorian weekday with Sunday as 0."""
    return (_as_date(ad_date).weekday() + 1) % 7


def is_saturday(ad_date: Union[date, str]) -> bool:
    return weekday_of(ad_date) == SATURDAY


def _bs_date(year: int, month: int, day: int) -> "nepali_datetime.date":
    if not 0 <= int(month) <= 11:
        raise CalendarError(f"Invalid Nepali month index: {month}")
    try:
        return nepali_datetime.date(int(year), int(month) + 1, int(day))
    except (ValueError, KeyError, IndexError, OverflowError) as e:
        raise CalendarError(f"Invalid Nepali date {year}-{int(month) + 1:02d}-{day}: {e}") from None


def _format_bs(year: int, month: int, day: int) -> str:
    return f"{year:04d}-{month:02d}-{day:02d}"


def resolve_bs_date(year: int, month: int, day: int) -> ResolvedDate:
    """Resolve a (BS year, 0-based BS month, day) triple.

    Raises CalendarError when the day does not exist in that month; callers
    decide whether that rejects a row.
    """

    bs = _bs_date(year, month, day)
    ad = bs.to_datetime_date()
    return ResolvedDate(
        ad_date=ad,
        ad_iso=ad.isoformat(),
        bs_date=_format_bs(bs.year, bs.month, bs.day),
        weekday=weekday_of(ad),
    )


def to_bs(ad_date: Union[date, str]) -> Tuple[int, int, int]:
    """Gregorian date -> (BS year, 0-based BS month, day)."""

    try:
        bs = nepali_datetime.date.from_datetime_date(_as_date(ad_date))
    except (ValueError, KeyError, IndexError, OverflowError) as e:
        raise CalendarError(f"Date {ad_date} is outside the supported Nepali calendar range: {e}") from None
    return bs.year, bs.month - 1, bs.day


def to_bs_string(ad_date: Union[date, str]) -> str:
    year, month, day = to_bs(ad_date)
    return _format_bs(year, month + 1, day)


def days_in_bs_month(year: int, month: int) -> int:
    """Length of a BS month: first day of the following month minus one day."""

    next_year, next_month = (year + 1, 0) if month == 11 else (year, month + 1)
    first_of_next = _bs_date(next_year, next_month, 1).to_datetime_date()
    _, _, last_day = to_bs(first_of_next - timedelta(days=1))
    return last_day


def is_in_bs_month(ad_date: Union[date, str, None], year: int, month: int) -> bool:
    if not ad_date:
        return False
    try:
        bs_year, bs_month, _ = to_bs(ad_date)
    except (CalendarError, ValueError):
        return False
    return bs_year == int(year) and bs_month == int(month)


def bs_month_bounds(year: int, month: int) -> Tuple[date, date]:
    """First and last Gregorian dates covered by a BS month."""

    first = resolve_bs_date(year, month, 1).ad_date
    return first, first + timedelta(days=days_in_bs_month(year, month) - 1)

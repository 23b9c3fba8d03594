from __future__ import annotations

import math
import re
from datetime import date, datetime, time
from typing import Any, Optional

_CLOCK_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")

# Tried in order after the plain H:mm[:ss] shortcut.
_TIME_FORMATS = ("%I:%M:%S %p", "%I:%M %p", "%H:%M:%S", "%H:%M")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value[:10], "%Y-%m-%d").date()


def parse_time(raw: Any) -> Optional[str]:
    """Convert a spreadsheet time cell into "HH:mm", or None.

    Accepted inputs:
    - datetime/time objects
    - fractions of a day strictly between 0 and 1 (spreadsheet time serials)
    - "H:mm" / "H:mm:ss" strings
    - "h:mm[:ss] AM/PM" strings

    Anything else degrades to None (treated downstream as a missing punch).
    """

    if raw is None:
        return None

    if isinstance(raw, datetime):
        return raw.strftime("%H:%M")
    if isinstance(raw, time):
        return raw.strftime("%H:%M")

    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        if math.isnan(raw) or not 0 < raw < 1:
            return None
        total_minutes = (round(raw * 86400) // 60) % (24 * 60)
        return f"{total_minutes // 60:02d}:{total_minutes % 60:02d}"

    text = str(raw).strip()
    if not text or text == "-":
        return None

    match = _CLOCK_RE.match(text)
    if match:
        hours, minutes = int(match.group(1)), int(match.group(2))
        if hours > 23 or minutes > 59:
            return None
        return f"{hours:02d}:{minutes:02d}"

    for fmt in _TIME_FORMATS:
        try:
            return datetime.strptime(text.upper(), fmt).strftime("%H:%M")
        except ValueError:
            continue
    return None


def to_minutes(hhmm: Optional[str]) -> Optional[int]:
    """Minute-of-day for a canonical "HH:mm" string."""

    if not hhmm:
        return None
    parsed = parse_time(hhmm)
    if parsed is None:
        return None
    hours, minutes = parsed.split(":")
    return int(hours) * 60 + int(minutes)


def minutes_between(start: Optional[str], end: Optional[str]) -> Optional[int]:
    """Signed difference end - start in minutes, None when either side is missing."""

    start_min = to_minutes(start)
    end_min = to_minutes(end)
    if start_min is None or end_min is None:
        return None
    return end_min - start_min


def worked_hours(clock_in: Optional[str], clock_out: Optional[str]) -> float:
    """Hours between two punches; a clock-out before clock-in wraps past midnight."""

    diff = minutes_between(clock_in, clock_out)
    if diff is None:
        return 0.0
    if diff < 0:
        diff += 24 * 60
    return diff / 60

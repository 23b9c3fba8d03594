from __future__ import annotations

from enum import Enum
from typing import Optional


class EmploymentStatus(str, Enum):
    """Employment state; only WORKING employees appear in payroll and analytics."""

    WORKING = "Working"
    LONG_LEAVE = "Long Leave"
    RESIGNED = "Resigned"
    DISMISSED = "Dismissed"

    @classmethod
    def from_text(cls, value: Optional[str]) -> "EmploymentStatus":
        text = (value or "").strip().lower()
        for member in cls:
            if member.value.lower() == text:
                return member
        return cls.WORKING


class WageBasis(str, Enum):
    """How wage_amount is interpreted: monthly salary or hourly rate."""

    MONTHLY = "Monthly"
    HOURLY = "Hourly"

    @classmethod
    def from_text(cls, value: Optional[str]) -> "WageBasis":
        text = (value or "").strip().lower()
        if text == cls.HOURLY.value.lower():
            return cls.HOURLY
        return cls.MONTHLY


class AttendanceStatus(str, Enum):
    """Normalized attendance status stored on each record."""

    PRESENT = "Present"
    ABSENT = "Absent"
    CLOCK_IN_MISS = "C/I Miss"
    CLOCK_OUT_MISS = "C/O Miss"
    SATURDAY = "Saturday"
    PUBLIC_HOLIDAY = "Public Holiday"
    EXTRA_OK = "EXTRAOK"

    @classmethod
    def from_text(cls, value: Optional[str]) -> Optional["AttendanceStatus"]:
        """Case-insensitive lookup that also understands legacy sheet values.

        Returns None when the text is not a known status.
        """

        text = (value or "").strip().upper()
        if not text:
            return None
        if text in {"TRUE", "A"}:
            return cls.ABSENT
        if text.startswith("PUBLIC"):
            return cls.PUBLIC_HOLIDAY
        for member in cls:
            if member.value.upper() == text:
                return member
        return None

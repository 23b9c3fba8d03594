from __future__ import annotations

from dataclasses import dataclass
from typing import List

from ..core.enums import AttendanceStatus
from .strategies.absence_rule import AbsenceRule
from .strategies.base import StatusRule
from .strategies.explicit_rule import ExplicitStatusRule
from .strategies.holiday_rule import PublicHolidayRule
from .strategies.hours_rule import PunchPresenceRule, WorkedHoursRule
from .strategies.saturday_rule import SaturdayRule


@dataclass
class StatusRuleFactory:
    """Factory Pattern: build the status rules in precedence order (first match wins)."""

    def build(self) -> List[StatusRule]:
        return [
            AbsenceRule(),
            PublicHolidayRule(),
            SaturdayRule(),
            ExplicitStatusRule("C/I MISS", AttendanceStatus.CLOCK_IN_MISS),
            ExplicitStatusRule("C/O MISS", AttendanceStatus.CLOCK_OUT_MISS),
            ExplicitStatusRule("EXTRAOK", AttendanceStatus.EXTRA_OK),
            WorkedHoursRule(),
            PunchPresenceRule(),
        ]

from __future__ import annotations

from typing import Optional

from ...core.enums import AttendanceStatus
from .base import StatusContext, StatusRule


class WorkedHoursRule(StatusRule):
    """Any recorded hours mean the employee was present."""

    def decide(self, ctx: StatusContext) -> Optional[AttendanceStatus]:
        if ctx.gross_hours > 0:
            return AttendanceStatus.PRESENT
        return None


class PunchPresenceRule(StatusRule):
    """Last resort: infer from which punches exist. Both present still counts as Present."""

    def decide(self, ctx: StatusContext) -> Optional[AttendanceStatus]:
        if not ctx.clock_in_present and not ctx.clock_out_present:
            return AttendanceStatus.ABSENT
        if not ctx.clock_in_present:
            return AttendanceStatus.CLOCK_IN_MISS
        if not ctx.clock_out_present:
            return AttendanceStatus.CLOCK_OUT_MISS
        return AttendanceStatus.PRESENT

from __future__ import annotations

from typing import Optional

from ...core.enums import AttendanceStatus
from .base import StatusContext, StatusRule


class SaturdayRule(StatusRule):
    """Gregorian Saturday overrides punches and any remaining status text."""

    def decide(self, ctx: StatusContext) -> Optional[AttendanceStatus]:
        if ctx.is_saturday:
            return AttendanceStatus.SATURDAY
        return None

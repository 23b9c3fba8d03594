from __future__ import annotations

from typing import Optional

from ...core.enums import AttendanceStatus
from .base import StatusContext, StatusRule


class PublicHolidayRule(StatusRule):
    """Any status text starting with PUBLIC (e.g. "PUBLIC", "PUBLIC HOLIDAY")."""

    def decide(self, ctx: StatusContext) -> Optional[AttendanceStatus]:
        if ctx.raw_status.startswith("PUBLIC"):
            return AttendanceStatus.PUBLIC_HOLIDAY
        return None

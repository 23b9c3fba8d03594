from __future__ import annotations

from typing import Optional

from ...core.enums import AttendanceStatus
from .base import StatusContext, StatusRule

ABSENCE_MARKERS = frozenset({"ABSENT", "TRUE", "A"})


class AbsenceRule(StatusRule):
    """Explicit absence marker in the sheet. Wins over everything, Saturdays included."""

    def decide(self, ctx: StatusContext) -> Optional[AttendanceStatus]:
        if ctx.raw_status in ABSENCE_MARKERS:
            return AttendanceStatus.ABSENT
        return None

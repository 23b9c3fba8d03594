from __future__ import annotations

from typing import Optional

from ...core.enums import AttendanceStatus
from .base import StatusContext, StatusRule


class ExplicitStatusRule(StatusRule):
    """Status text that names one specific status exactly."""

    def __init__(self, marker: str, status: AttendanceStatus):
        self._marker = marker.upper()
        self._status = status

    def decide(self, ctx: StatusContext) -> Optional[AttendanceStatus]:
        if ctx.raw_status == self._marker:
            return self._status
        return None

from __future__ import annotations

from typing import Any, Optional, Sequence

from ..common.validators import as_float
from ..core.enums import AttendanceStatus
from .factory import StatusRuleFactory
from .strategies.base import StatusContext, StatusRule


class StatusNormalizer:
    def __init__(self, rules: Optional[Sequence[StatusRule]] = None):
        self._rules = list(rules) if rules is not None else StatusRuleFactory().build()

    def normalize(
        self,
        raw_status: Any,
        gross_hours: Any,
        is_saturday: bool,
        clock_in_present: bool,
        clock_out_present: bool,
    ) -> AttendanceStatus:
        ctx = StatusContext(
            raw_status=str(raw_status if raw_status is not None else "").strip().upper(),
            gross_hours=as_float(gross_hours),
            is_saturday=bool(is_saturday),
            clock_in_present=bool(clock_in_present),
            clock_out_present=bool(clock_out_present),
        )
        for rule in self._rules:
            status = rule.decide(ctx)
            if status is not None:
                return status
        return AttendanceStatus.PRESENT


_default = StatusNormalizer()


def normalize_status(
    raw_status: Any,
    gross_hours: Any,
    is_saturday: bool,
    clock_in_present: bool,
    clock_out_present: bool,
) -> AttendanceStatus:
    return _default.normalize(raw_status, gross_hours, is_saturday, clock_in_present, clock_out_present)

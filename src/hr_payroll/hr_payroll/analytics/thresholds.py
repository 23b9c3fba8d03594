from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional

from ..core.constants import DEFAULT_LATE_GRACE_MINUTES


@dataclass(frozen=True)
class AnalyticsThresholds:
    """Cut-offs for the rule-based behaviour tags. Overridable from settings."""

    grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES
    consistent_score: float = 95.0
    stable_score: float = 85.0
    high_absence_days: int = 3
    high_ot_hours: float = 15.0
    moderate_ot_hours: float = 5.0
    shift_end_min_days: int = 3
    dedicated_score: float = 95.0
    dedicated_min_ot_hours: float = 2.0
    dedicated_max_missed_punches: int = 1
    solid_score: float = 90.0
    solid_max_missed_punches: int = 2
    weak_score: float = 80.0
    weak_missed_punches: int = 3

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "AnalyticsThresholds":
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            if key not in known:
                continue
            default = getattr(cls, key)
            kwargs[key] = type(default)(value)
        return cls(**kwargs)

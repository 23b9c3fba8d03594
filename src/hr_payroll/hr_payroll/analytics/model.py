from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional


@dataclass(frozen=True)
class PunctualityInsight:
    employee_id: int
    employee_name: str
    scheduled_days: int
    present_days: int
    absent_days: int
    attendance_rate: float
    late_arrivals: int
    early_departures: int
    on_time_days: int
    punctuality_score: float
    late_by_weekday: Dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class WorkforceAnalytics:
    employee_id: int
    employee_name: str
    overtime_ratio: float
    on_time_streak: int
    saturdays_worked: int


@dataclass(frozen=True)
class BehaviorInsight:
    employee_id: int
    employee_name: str
    punctuality_trend: str
    absence_pattern: str
    ot_impact: str
    shift_end_behavior: str
    performance_insight: str
    most_late_weekday: Optional[str] = None


@dataclass(frozen=True)
class DayOfWeekStat:
    day: str
    late_arrivals: int
    absenteeism: int

    @property
    def incidents(self) -> int:
        return self.late_arrivals + self.absenteeism


@dataclass(frozen=True)
class PatternInsight:
    finding: str
    description: str


@dataclass(frozen=True)
class AnalyticsBundle:
    punctuality: List[PunctualityInsight]
    behavior: List[BehaviorInsight]
    workforce: List[WorkforceAnalytics]
    day_of_week: List[DayOfWeekStat]
    pattern_insights: List[PatternInsight]

    def as_dict(self) -> dict:
        return {
            "punctuality": [asdict(p) for p in self.punctuality],
            "behavior": [asdict(b) for b in self.behavior],
            "workforce": [asdict(w) for w in self.workforce],
            "day_of_week": [{**asdict(d), "incidents": d.incidents} for d in self.day_of_week],
            "pattern_insights": [asdict(p) for p in self.pattern_insights],
        }

from __future__ import annotations

from collections import Counter
from typing import Dict, Iterable, List, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..attendance.selectors import records_by_employee, records_in_month
from ..common.datetime_utils import minutes_between
from ..common.nepali_calendar import SATURDAY, WEEKDAY_NAMES, bs_month_bounds, weekday_of
from ..core.enums import AttendanceStatus
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .model import (
    AnalyticsBundle,
    BehaviorInsight,
    DayOfWeekStat,
    PatternInsight,
    PunctualityInsight,
    WorkforceAnalytics,
)
from .thresholds import AnalyticsThresholds

_NON_SCHEDULED = {AttendanceStatus.SATURDAY, AttendanceStatus.PUBLIC_HOLIDAY}
_PRESENT = {AttendanceStatus.PRESENT, AttendanceStatus.EXTRA_OK}
_MISSED_PUNCH = {AttendanceStatus.CLOCK_IN_MISS, AttendanceStatus.CLOCK_OUT_MISS}
_WORKWEEK = range(0, SATURDAY)  # Sunday..Friday


def _pct(part: float, whole: float) -> float:
    return round(part / whole * 100, 2) if whole > 0 else 0.0


class AnalyticsService:
    """Punctuality, behaviour and workforce analytics for one Nepali month.

    Everything is derived from the roster plus that month's attendance; nothing is stored.
    """

    def __init__(
        self,
        attendance: Optional[AttendanceRepository] = None,
        employees: Optional[EmployeeRepository] = None,
        *,
        thresholds: Optional[AnalyticsThresholds] = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._t = thresholds or AnalyticsThresholds()

    # --- per-record checks -------------------------------------------------

    def is_late(self, r: AttendanceRecord) -> bool:
        diff = minutes_between(r.on_duty, r.clock_in)
        return diff is not None and diff > self._t.grace_minutes

    def is_early(self, r: AttendanceRecord) -> bool:
        diff = minutes_between(r.clock_out, r.off_duty)
        return diff is not None and diff > self._t.grace_minutes

    def stayed_late(self, r: AttendanceRecord) -> bool:
        diff = minutes_between(r.off_duty, r.clock_out)
        return diff is not None and diff >= self._t.grace_minutes

    # --- entry points ------------------------------------------------------

    def compute_for_month(self, bs_year: int, bs_month: int) -> AnalyticsBundle:
        if self._attendance is None or self._employees is None:
            raise RuntimeError("AnalyticsService needs repositories to load a month")
        start, end = bs_month_bounds(bs_year, bs_month)
        return self.compute_analytics(
            bs_year,
            bs_month,
            self._employees.list_all(),
            self._attendance.list_between(start_date=start, end_date=end),
        )

    def compute_analytics(
        self,
        bs_year: int,
        bs_month: int,
        employees: Iterable[Employee],
        attendance_records: Iterable[AttendanceRecord],
    ) -> AnalyticsBundle:
        working = [e for e in employees if e.is_working]
        month_records = records_in_month(attendance_records, bs_year, bs_month)
        grouped = records_by_employee(working, month_records)

        punctuality: List[PunctualityInsight] = []
        workforce: List[WorkforceAnalytics] = []
        behavior: List[BehaviorInsight] = []
        for employee in working:
            records = grouped[employee.employee_id]
            p = self._punctuality(employee, records)
            w = self._workforce(employee, records)
            punctuality.append(p)
            workforce.append(w)
            behavior.append(self._behavior(employee, records, p))

        day_of_week = self.day_of_week(month_records)
        return AnalyticsBundle(
            punctuality=punctuality,
            behavior=behavior,
            workforce=workforce,
            day_of_week=day_of_week,
            pattern_insights=self.pattern_insights(month_records, day_of_week),
        )

    # --- per employee ------------------------------------------------------

    def _punctuality(self, employee: Employee, records: Sequence[AttendanceRecord]) -> PunctualityInsight:
        late = [r for r in records if self.is_late(r)]
        early_departures = sum(1 for r in records if self.is_early(r))
        late_by_weekday = Counter(WEEKDAY_NAMES[weekday_of(r.work_date)] for r in late)

        scheduled_days = sum(1 for r in records if r.status not in _NON_SCHEDULED)
        present_days = sum(1 for r in records if r.status in _PRESENT)
        on_time_days = present_days - len(late) - early_departures

        return PunctualityInsight(
            employee_id=employee.employee_id,
            employee_name=employee.name,
            scheduled_days=scheduled_days,
            present_days=present_days,
            absent_days=scheduled_days - present_days,
            attendance_rate=_pct(present_days, scheduled_days),
            late_arrivals=len(late),
            early_departures=early_departures,
            on_time_days=on_time_days,
            punctuality_score=_pct(on_time_days, present_days),
            late_by_weekday=dict(late_by_weekday),
        )

    def on_time_streak(self, records: Sequence[AttendanceRecord]) -> int:
        """Longest run of consecutive on-time Present days (records in date order)."""

        best = current = 0
        for r in sorted(records, key=lambda x: x.work_date):
            if r.status == AttendanceStatus.PRESENT and not self.is_late(r) and not self.is_early(r):
                current += 1
            else:
                best = max(best, current)
                current = 0
        return max(best, current)

    def _workforce(self, employee: Employee, records: Sequence[AttendanceRecord]) -> WorkforceAnalytics:
        regular = sum(r.regular_hours for r in records)
        overtime = sum(r.overtime_hours for r in records)
        saturdays = sum(1 for r in records if weekday_of(r.work_date) == SATURDAY and r.gross_hours > 0)
        return WorkforceAnalytics(
            employee_id=employee.employee_id,
            employee_name=employee.name,
            overtime_ratio=_pct(overtime, regular),
            on_time_streak=self.on_time_streak(records),
            saturdays_worked=saturdays,
        )

    def _behavior(
        self, employee: Employee, records: Sequence[AttendanceRecord], p: PunctualityInsight
    ) -> BehaviorInsight:
        t = self._t
        score = p.punctuality_score
        overtime = sum(r.overtime_hours for r in records)
        missed = sum(1 for r in records if r.status in _MISSED_PUNCH)
        stay_late = sum(1 for r in records if self.stayed_late(r))
        leave_early = p.early_departures

        if score > t.consistent_score:
            trend = "Consistently punctual"
        elif score > t.stable_score:
            trend = "Stable with some delays"
        else:
            trend = "Often late"

        if p.absent_days == 0:
            absence = "None"
        elif p.absent_days > t.high_absence_days:
            absence = "High"
        else:
            absence = "Low"

        if overtime >= t.high_ot_hours:
            ot_impact = "High OT - monitor workload"
        elif overtime >= t.moderate_ot_hours:
            ot_impact = "Moderate OT"
        else:
            ot_impact = "Balanced workload"

        if leave_early > stay_late and leave_early >= t.shift_end_min_days:
            shift_end = "Tends to leave early"
        elif stay_late > leave_early and stay_late >= t.shift_end_min_days:
            shift_end = "Stays late often"
        else:
            shift_end = "Consistent timing"

        if score >= t.dedicated_score and overtime >= t.dedicated_min_ot_hours and missed <= t.dedicated_max_missed_punches:
            performance = "Dedicated with extra effort"
        elif score >= t.solid_score and missed <= t.solid_max_missed_punches:
            performance = "Solid performance"
        elif score < t.weak_score or missed >= t.weak_missed_punches:
            performance = "Needs improvement"
        else:
            performance = "Improving punctuality"

        most_late: Optional[str] = None
        if p.late_by_weekday:
            most_late = max(p.late_by_weekday.items(), key=lambda kv: kv[1])[0]

        return BehaviorInsight(
            employee_id=employee.employee_id,
            employee_name=employee.name,
            punctuality_trend=trend,
            absence_pattern=absence,
            ot_impact=ot_impact,
            shift_end_behavior=shift_end,
            performance_insight=performance,
            most_late_weekday=most_late,
        )

    # --- across employees --------------------------------------------------

    def day_of_week(self, records: Iterable[AttendanceRecord]) -> List[DayOfWeekStat]:
        late: Dict[int, int] = {d: 0 for d in _WORKWEEK}
        absent: Dict[int, int] = {d: 0 for d in _WORKWEEK}
        for r in records:
            day = weekday_of(r.work_date)
            if day not in late:
                continue
            if self.is_late(r):
                late[day] += 1
            if r.status == AttendanceStatus.ABSENT:
                absent[day] += 1
        return [DayOfWeekStat(day=WEEKDAY_NAMES[d], late_arrivals=late[d], absenteeism=absent[d]) for d in _WORKWEEK]

    def pattern_insights(
        self, records: Sequence[AttendanceRecord], day_of_week: Sequence[DayOfWeekStat]
    ) -> List[PatternInsight]:
        records = list(records)
        if not records:
            return []

        insights: List[PatternInsight] = []

        most_late = max(day_of_week, key=lambda d: d.late_arrivals)
        if most_late.late_arrivals > 0:
            insights.append(
                PatternInsight(
                    finding=f"Highest late arrivals: {most_late.day} ({most_late.late_arrivals})",
                    description=f"{most_late.late_arrivals} late arrivals occurred on {most_late.day}s this month.",
                )
            )

        most_absent = max(day_of_week, key=lambda d: d.absenteeism)
        if most_absent.absenteeism > 0:
            insights.append(
                PatternInsight(
                    finding=f"Highest absenteeism: {most_absent.day} ({most_absent.absenteeism})",
                    description=f"{most_absent.absenteeism} absences occurred on {most_absent.day}s this month.",
                )
            )

        most_punctual = min(day_of_week, key=lambda d: d.incidents)
        insights.append(
            PatternInsight(
                finding=f"Most punctual weekday: {most_punctual.day}",
                description=f"{most_punctual.day} had the fewest incidents ({most_punctual.incidents}) this month.",
            )
        )

        saturdays = {r.work_date for r in records if weekday_of(r.work_date) == SATURDAY}
        worked_saturdays = {r.work_date for r in records if weekday_of(r.work_date) == SATURDAY and r.gross_hours > 0}
        utilization = _pct(len(worked_saturdays), len(saturdays))
        insights.append(
            PatternInsight(
                finding=f"Saturday utilization: {utilization:.0f}%",
                description=f"Work occurred on {utilization:.0f}% of Saturdays this month.",
            )
        )

        late_records = [r for r in records if self.is_late(r)]
        by_shift = Counter(r.on_duty for r in late_records)
        if by_shift:
            shift, count = by_shift.most_common(1)[0]
            insights.append(
                PatternInsight(
                    finding=f"Worst shift-start for lateness: {shift}",
                    description=f"The {shift} shift had the highest number of late arrivals ({count}).",
                )
            )

        holiday_ot = sum(r.overtime_hours for r in records if r.status == AttendanceStatus.PUBLIC_HOLIDAY)
        insights.append(
            PatternInsight(
                finding=f"Public Holiday OT total: {holiday_ot:.1f} hours",
                description=f"A total of {holiday_ot:.1f} overtime hours were worked on public holidays.",
            )
        )

        hotspots = Counter(r.work_date.isoformat() for r in late_records).most_common(3)
        if hotspots:
            insights.append(
                PatternInsight(
                    finding="Late hotspots: " + ", ".join(f"{d} ({c})" for d, c in hotspots),
                    description="These dates had the highest number of late arrivals.",
                )
            )

        return insights

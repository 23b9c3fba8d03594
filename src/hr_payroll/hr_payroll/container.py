from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .analytics.service import AnalyticsService
from .analytics.thresholds import AnalyticsThresholds
from .attendance.factory import StatusRuleFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .attendance.status import StatusNormalizer
from .core.constants import DEFAULT_IMPORT_BATCH_SIZE, DEFAULT_LATE_GRACE_MINUTES
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.service import EmployeeService
from .payroll.calculator.factory import PayrollCalculatorFactory
from .payroll.service import PayrollService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    employees_repo: MySQLEmployeeRepository
    attendance_repo: MySQLAttendanceRepository

    employee_service: EmployeeService
    attendance_service: AttendanceService
    payroll_service: PayrollService
    analytics_service: AnalyticsService


def build_container(*, db_config: dict, settings: Optional[Any] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    batch_size = int(getattr(settings, "IMPORT_BATCH_SIZE", DEFAULT_IMPORT_BATCH_SIZE))
    grace_minutes = int(getattr(settings, "LATE_GRACE_MINUTES", DEFAULT_LATE_GRACE_MINUTES))
    overrides: Mapping[str, Any] = dict(getattr(settings, "ANALYTICS_THRESHOLDS", None) or {})
    thresholds = AnalyticsThresholds.from_mapping({"grace_minutes": grace_minutes, **overrides})

    employees_repo = MySQLEmployeeRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)

    employee_service = EmployeeService(employees_repo)
    attendance_service = AttendanceService(
        attendance_repo,
        employee_service,
        batch_size=batch_size,
        normalizer=StatusNormalizer(StatusRuleFactory().build()),
    )
    payroll_service = PayrollService(
        attendance_repo,
        employees_repo,
        calculator_factory=PayrollCalculatorFactory(),
    )
    analytics_service = AnalyticsService(attendance_repo, employees_repo, thresholds=thresholds)

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        employee_service=employee_service,
        attendance_service=attendance_service,
        payroll_service=payroll_service,
        analytics_service=analytics_service,
    )

"""Spreadsheet rows -> attendance records for one Nepali month.

The pipeline runs in two phases so that employee provisioning is deduplicated
and never happens for rows that are rejected anyway:

1. resolve every row's date and collect the distinct unknown employee names;
2. provision those names once each, then build records against the completed
   roster.

The roster passed in is never mutated; newly created employees are returned
in ImportResult.new_employees for the caller to merge.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Protocol, Sequence, Set, Tuple

from ..common.datetime_utils import parse_time
from ..common.nepali_calendar import ResolvedDate, resolve_bs_date
from ..common.validators import as_float, normalize_name
from ..core.constants import BASE_DAY_HOURS, HOURS_DECIMALS
from ..core.exceptions import CalendarError
from ..employees.model import Employee
from .headers import EXTRA_FIELDS, HeaderMap
from .model import AttendanceRecord, ImportedRow, ImportResult
from .status import StatusNormalizer

logger = logging.getLogger(__name__)


class EmployeeProvisioner(Protocol):
    def provision(self, name: str, created_by: str) -> Employee:
        raise NotImplementedError


@dataclass(frozen=True)
class _PendingRow:
    cells: Sequence[Any]
    name: str
    name_key: str
    day: int
    resolved: ResolvedDate


def _display_name(value: Any) -> str:
    if value is None:
        return ""
    return " ".join(str(value).split())


def _day_of_month(value: Any, position: int) -> int:
    """Explicit day column when a finite number, otherwise the row's 1-based position."""

    if value is None or isinstance(value, bool):
        return position
    try:
        number = float(str(value).strip())
    except ValueError:
        return position
    if not math.isfinite(number):
        return position
    return int(number)


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def reconcile_hours(total: float, normal: float, overtime: float) -> Tuple[float, float, float]:
    """Return (gross, regular, overtime) with gross == regular + overtime.

    - total is preferred; when it is zero but normal/OT are known, gross = normal + OT
    - when only gross is known, regular is capped at a base day and the rest is OT
    - when normal/OT disagree with an explicit total, the total wins and OT absorbs the difference
    """

    total, normal, overtime = max(total, 0.0), max(normal, 0.0), max(overtime, 0.0)

    if total <= 0:
        if normal or overtime:
            regular, ot = normal, overtime
        else:
            return 0.0, 0.0, 0.0
    elif normal or overtime:
        if abs((normal + overtime) - total) < 0.005:
            regular, ot = normal, overtime
        else:
            regular = min(normal, total)
            ot = total - regular
    else:
        regular = min(total, BASE_DAY_HOURS)
        ot = total - regular

    regular = round(regular, HOURS_DECIMALS)
    ot = round(ot, HOURS_DECIMALS)
    return round(regular + ot, HOURS_DECIMALS), regular, ot


class AttendanceImportPipeline:
    def __init__(self, provisioner: EmployeeProvisioner, *, normalizer: Optional[StatusNormalizer] = None):
        self._provisioner = provisioner
        self._normalizer = normalizer or StatusNormalizer()

    def run(
        self,
        header_row: Sequence[Any],
        data_rows: Iterable[Sequence[Any]],
        bs_year: int,
        bs_month: int,
        existing_employees: Iterable[Employee],
        imported_by: str,
        *,
        source_sheet: Optional[str] = None,
    ) -> ImportResult:
        header = HeaderMap.from_header_row(header_row)

        roster: Dict[str, Employee] = {normalize_name(e.name): e for e in existing_employees}
        pending, unknown, skipped = self._resolve_rows(header, data_rows, bs_year, bs_month, roster)

        new_employees: List[Employee] = []
        failed: Set[str] = set()
        for key, name in unknown.items():
            try:
                employee = self._provisioner.provision(name, imported_by)
            except Exception:
                logger.exception("Failed to add new employee %r during attendance import", name)
                failed.add(key)
                continue
            roster[key] = employee
            new_employees.append(employee)

        processed: List[ImportedRow] = []
        for item in pending:
            if item.name_key in failed:
                continue
            processed.append(
                self._build_row(header, item, roster[item.name_key], imported_by, source_sheet)
            )

        logger.info(
            "Attendance import %s-%02d by %s: %d rows processed, %d new employees, %d skipped",
            bs_year,
            int(bs_month) + 1,
            imported_by,
            len(processed),
            len(new_employees),
            skipped,
        )
        return ImportResult(
            processed_rows=processed,
            new_employee_names=[e.name for e in new_employees],
            new_employees=new_employees,
            skipped_count=skipped,
        )

    def _resolve_rows(
        self,
        header: HeaderMap,
        data_rows: Iterable[Sequence[Any]],
        bs_year: int,
        bs_month: int,
        roster: Dict[str, Employee],
    ) -> Tuple[List[_PendingRow], Dict[str, str], int]:
        pending: List[_PendingRow] = []
        unknown: Dict[str, str] = {}
        skipped = 0

        for position, cells in enumerate(data_rows, start=1):
            name = _display_name(header.value(cells, "name"))
            if not name:
                continue

            day = _day_of_month(header.value(cells, "day"), position)
            try:
                resolved = resolve_bs_date(bs_year, bs_month, day)
            except CalendarError as e:
                logger.debug("Skipping row %d (%s): %s", position, name, e)
                skipped += 1
                continue

            key = normalize_name(name)
            if key not in roster and key not in unknown:
                unknown[key] = name
            pending.append(_PendingRow(cells=cells, name=name, name_key=key, day=day, resolved=resolved))

        return pending, unknown, skipped

    def _build_row(
        self,
        header: HeaderMap,
        item: _PendingRow,
        employee: Employee,
        imported_by: str,
        source_sheet: Optional[str],
    ) -> ImportedRow:
        cells = item.cells
        gross, regular, overtime = reconcile_hours(
            as_float(header.value(cells, "total_hours")),
            as_float(header.value(cells, "normal_hours")),
            as_float(header.value(cells, "ot_hours")),
        )

        on_duty = parse_time(header.value(cells, "on_duty"))
        off_duty = parse_time(header.value(cells, "off_duty"))
        clock_in = parse_time(header.value(cells, "clock_in"))
        clock_out = parse_time(header.value(cells, "clock_out"))

        status = self._normalizer.normalize(
            header.value(cells, "status"),
            gross,
            item.resolved.is_saturday,
            clock_in is not None,
            clock_out is not None,
        )

        record = AttendanceRecord(
            work_date=item.resolved.ad_date,
            bs_date=item.resolved.bs_date,
            employee_name=employee.name,
            employee_id=employee.employee_id,
            status=status,
            on_duty=on_duty,
            off_duty=off_duty,
            clock_in=clock_in,
            clock_out=clock_out,
            gross_hours=gross,
            regular_hours=regular,
            overtime_hours=overtime,
            remarks=_text(header.value(cells, "remarks")),
            imported_by=imported_by,
            source_sheet=source_sheet,
        )
        extras = {f: as_float(header.value(cells, f)) for f in EXTRA_FIELDS if header.has(f)}
        return ImportedRow(record=record, day_of_month=item.day, weekday=item.resolved.weekday, extras=extras)


def import_attendance(
    header_row: Sequence[Any],
    data_rows: Iterable[Sequence[Any]],
    bs_year: int,
    bs_month: int,
    existing_employees: Iterable[Employee],
    imported_by: str,
    *,
    provisioner: EmployeeProvisioner,
) -> ImportResult:
    return AttendanceImportPipeline(provisioner).run(
        header_row, data_rows, bs_year, bs_month, existing_employees, imported_by
    )

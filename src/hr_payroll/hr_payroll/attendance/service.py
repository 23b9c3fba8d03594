from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, List, Optional, Sequence

from ..common.datetime_utils import parse_time, worked_hours
from ..common.nepali_calendar import bs_month_bounds, is_saturday
from ..core.constants import DEFAULT_IMPORT_BATCH_SIZE
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.service import EmployeeService
from .headers import HeaderMap
from .importer import AttendanceImportPipeline, reconcile_hours
from .model import AttendanceRecord, ImportResult, ImportSummary, RecordEdit
from .reader import SheetData
from .repository import AttendanceRepository
from .status import StatusNormalizer

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]

# Operator-entered statuses that punch edits never override.
_MANUAL_STATUSES = {AttendanceStatus.PUBLIC_HOLIDAY, AttendanceStatus.EXTRA_OK}


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeService,
        *,
        batch_size: int = DEFAULT_IMPORT_BATCH_SIZE,
        normalizer: Optional[StatusNormalizer] = None,
    ):
        if int(batch_size) <= 0:
            raise ValidationError("batch_size must be positive")
        self._attendance = attendance
        self._employees = employees
        self._batch_size = int(batch_size)
        self._normalizer = normalizer or StatusNormalizer()

    def _pipeline(self) -> AttendanceImportPipeline:
        return AttendanceImportPipeline(self._employees, normalizer=self._normalizer)

    def import_rows(
        self,
        header_row: Sequence[Any],
        data_rows: Iterable[Sequence[Any]],
        *,
        bs_year: int,
        bs_month: int,
        imported_by: str,
        source_sheet: Optional[str] = None,
        progress: Optional[ProgressCallback] = None,
    ) -> ImportSummary:
        """Import one sheet covering one Nepali month and persist it in batches."""

        result = self._pipeline().run(
            header_row,
            data_rows,
            bs_year,
            bs_month,
            self._employees.list_roster(),
            imported_by,
            source_sheet=source_sheet,
        )
        written = self.save_records(result.records, progress=progress)
        return ImportSummary(imported=written, new_employees=result.new_employee_names, skipped=result.skipped_count)

    def import_workbook(
        self,
        sheets: Sequence[SheetData],
        *,
        bs_year: int,
        bs_month: int,
        imported_by: str,
        progress: Optional[ProgressCallback] = None,
    ) -> ImportSummary:
        # Header problems abort the whole upload before any employee is created.
        for sheet in sheets:
            HeaderMap.from_header_row(sheet.header)

        results: List[ImportResult] = []
        for sheet in sheets:
            results.append(
                self._pipeline().run(
                    sheet.header,
                    sheet.rows,
                    bs_year,
                    bs_month,
                    self._employees.list_roster(),
                    imported_by,
                    source_sheet=sheet.name,
                )
            )

        records = [rec for res in results for rec in res.records]
        written = self.save_records(records, progress=progress)
        new_names: List[str] = []
        for res in results:
            new_names.extend(n for n in res.new_employee_names if n not in new_names)
        return ImportSummary(
            imported=written,
            new_employees=new_names,
            skipped=sum(res.skipped_count for res in results),
        )

    def save_records(self, records: Sequence[AttendanceRecord], *, progress: Optional[ProgressCallback] = None) -> int:
        """Write records in fixed-size batches, sequentially.

        A failing batch propagates; batches already committed stay written.
        """

        total = len(records)
        written = 0
        for start in range(0, total, self._batch_size):
            chunk = records[start : start + self._batch_size]
            self._attendance.write_batch(chunk)
            written += len(chunk)
            logger.debug("Committed attendance batch %d/%d", written, total)
            if progress:
                progress(written, total)
        return written

    def list_month(self, bs_year: int, bs_month: int) -> List[AttendanceRecord]:
        start, end = bs_month_bounds(bs_year, bs_month)
        records = list(self._attendance.list_between(start_date=start, end_date=end))
        records.sort(key=lambda r: (r.work_date, r.employee_name.lower()))
        return records

    def update_record(self, record_id: int, edit: RecordEdit) -> AttendanceRecord:
        """Apply an operator edit; status and hours are re-derived, not taken at face value."""

        current = self._attendance.get_by_id(record_id)
        if not current:
            raise NotFoundError(f"Attendance record {record_id} not found")

        def pick(new: Optional[str], old: Optional[str]) -> Optional[str]:
            return old if new is None else parse_time(new)

        on_duty = pick(edit.on_duty, current.on_duty)
        off_duty = pick(edit.off_duty, current.off_duty)
        clock_in = pick(edit.clock_in, current.clock_in)
        clock_out = pick(edit.clock_out, current.clock_out)

        punches_changed = (clock_in, clock_out) != (current.clock_in, current.clock_out)
        if punches_changed:
            if clock_in and clock_out:
                gross, regular, overtime = reconcile_hours(worked_hours(clock_in, clock_out), 0.0, 0.0)
            else:
                gross, regular, overtime = 0.0, 0.0, 0.0
        else:
            gross, regular, overtime = current.gross_hours, current.regular_hours, current.overtime_hours

        if edit.status is not None:
            raw_status = edit.status
        elif punches_changed and current.status not in _MANUAL_STATUSES:
            # Statuses derived from the old punches must not survive the edit.
            raw_status = ""
        else:
            raw_status = current.status.value
        status = self._normalizer.normalize(
            raw_status, gross, is_saturday(current.work_date), clock_in is not None, clock_out is not None
        )

        updated = AttendanceRecord(
            record_id=current.record_id,
            work_date=current.work_date,
            bs_date=current.bs_date,
            employee_name=current.employee_name,
            employee_id=current.employee_id,
            status=status,
            on_duty=on_duty,
            off_duty=off_duty,
            clock_in=clock_in,
            clock_out=clock_out,
            gross_hours=gross,
            regular_hours=regular,
            overtime_hours=overtime,
            remarks=current.remarks if edit.remarks is None else (edit.remarks.strip() or None),
            imported_by=current.imported_by,
            source_sheet=current.source_sheet,
        )
        if not self._attendance.update_record(updated):
            raise NotFoundError(f"Attendance record {record_id} not found")
        return updated

    def delete_record(self, record_id: int) -> None:
        if not self._attendance.delete_by_id(record_id):
            raise NotFoundError(f"Attendance record {record_id} not found")

    def delete_month(self, bs_year: int, bs_month: int) -> int:
        start, end = bs_month_bounds(bs_year, bs_month)
        deleted = self._attendance.delete_between(start_date=start, end_date=end)
        logger.info("Deleted %d attendance records for %s-%02d", deleted, bs_year, int(bs_month) + 1)
        return deleted

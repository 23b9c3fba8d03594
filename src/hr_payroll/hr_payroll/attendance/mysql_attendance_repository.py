from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..common.validators import as_float
from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, mysql_time_to_hhmm
from .model import AttendanceRecord
from .repository import AttendanceRepository
from .status import normalize_status

_COLUMNS = """
    record_id, work_date, bs_date, employee_name, employee_id,
    on_duty, off_duty, clock_in, clock_out, status,
    gross_hours, regular_hours, overtime_hours, remarks, imported_by, source_sheet
"""


def _status(row: Dict[str, Any]) -> AttendanceStatus:
    status = AttendanceStatus.from_text(row.get("status"))
    if status is not None:
        return status
    # Unknown legacy text: re-derive rather than trust it.
    return normalize_status(
        row.get("status"),
        row.get("gross_hours"),
        False,
        row.get("clock_in") is not None,
        row.get("clock_out") is not None,
    )


def _to_record(row: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=int(row["record_id"]),
        work_date=row["work_date"],
        bs_date=row.get("bs_date") or "",
        employee_name=row["employee_name"],
        employee_id=row.get("employee_id"),
        on_duty=mysql_time_to_hhmm(row.get("on_duty")),
        off_duty=mysql_time_to_hhmm(row.get("off_duty")),
        clock_in=mysql_time_to_hhmm(row.get("clock_in")),
        clock_out=mysql_time_to_hhmm(row.get("clock_out")),
        status=_status(row),
        gross_hours=as_float(row.get("gross_hours")),
        regular_hours=as_float(row.get("regular_hours")),
        overtime_hours=as_float(row.get("overtime_hours")),
        remarks=row.get("remarks"),
        imported_by=row.get("imported_by"),
        source_sheet=row.get("source_sheet"),
    )


def _params(r: AttendanceRecord) -> tuple:
    return (
        r.work_date,
        r.bs_date,
        r.employee_name,
        r.employee_id,
        r.on_duty,
        r.off_duty,
        r.clock_in,
        r.clock_out,
        r.status.value,
        r.gross_hours,
        r.regular_hours,
        r.overtime_hours,
        r.remarks,
        r.imported_by,
        r.source_sheet,
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_between(self, *, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE work_date BETWEEN %s AND %s
                ORDER BY work_date, employee_name
                """,
                (start_date, end_date),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE record_id=%s", (int(record_id),))
            row = fetchone(cur)
            return _to_record(row) if row else None

    def write_batch(self, records: Sequence[AttendanceRecord]) -> int:
        if not records:
            return 0
        # One transaction per batch; (employee_name, work_date) is UNIQUE so a re-import updates.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO attendance_records(
                    work_date, bs_date, employee_name, employee_id,
                    on_duty, off_duty, clock_in, clock_out, status,
                    gross_hours, regular_hours, overtime_hours, remarks, imported_by, source_sheet
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    bs_date=VALUES(bs_date), employee_id=VALUES(employee_id),
                    on_duty=VALUES(on_duty), off_duty=VALUES(off_duty),
                    clock_in=VALUES(clock_in), clock_out=VALUES(clock_out), status=VALUES(status),
                    gross_hours=VALUES(gross_hours), regular_hours=VALUES(regular_hours),
                    overtime_hours=VALUES(overtime_hours), remarks=VALUES(remarks),
                    imported_by=VALUES(imported_by), source_sheet=VALUES(source_sheet)
                """,
                [_params(r) for r in records],
            )
        return len(records)

    def update_record(self, record: AttendanceRecord) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET on_duty=%s, off_duty=%s, clock_in=%s, clock_out=%s, status=%s,
                    gross_hours=%s, regular_hours=%s, overtime_hours=%s, remarks=%s
                WHERE record_id=%s
                """,
                (
                    record.on_duty,
                    record.off_duty,
                    record.clock_in,
                    record.clock_out,
                    record.status.value,
                    record.gross_hours,
                    record.regular_hours,
                    record.overtime_hours,
                    record.remarks,
                    int(record.record_id),
                ),
            )
            # MySQL reports 0 affected rows when nothing changed; treat an existing row as success.
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 FROM attendance_records WHERE record_id=%s", (int(record.record_id),))
            return fetchone(cur) is not None

    def delete_by_id(self, record_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE record_id=%s", (int(record_id),))
            return cur.rowcount > 0

    def delete_between(self, *, start_date: date, end_date: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM attendance_records WHERE work_date BETWEEN %s AND %s",
                (start_date, end_date),
            )
            return int(cur.rowcount)

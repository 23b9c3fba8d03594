from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_between(self, *, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def write_batch(self, records: Sequence[AttendanceRecord]) -> int:
        """Upsert one batch atomically, keyed by (employee_name, work_date).

        Returns the number of records written.
        """

        raise NotImplementedError

    def update_record(self, record: AttendanceRecord) -> bool:
        raise NotImplementedError

    def delete_by_id(self, record_id: int) -> bool:
        raise NotImplementedError

    def delete_between(self, *, start_date: date, end_date: date) -> int:
        raise NotImplementedError

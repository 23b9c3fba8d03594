from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from ..core.exceptions import SpreadsheetFormatError

# logical field -> accepted header text (lower-cased, trimmed, exact match)
HEADER_VOCABULARY: Dict[str, str] = {
    "name": "name",
    "date_ad": "date (ad)",
    "bs_date": "bs date",
    "on_duty": "on duty",
    "off_duty": "off duty",
    "clock_in": "clock in",
    "clock_out": "clock out",
    "status": "status",
    "normal_hours": "normal hours",
    "ot_hours": "ot hours",
    "total_hours": "total hours",
    "remarks": "remarks",
    "day": "day",
    "rate": "rate",
    # payroll sheet columns
    "normal_pay": "norman",
    "ot_pay": "ot pay",
    "total_pay": "total pay",
    "absent_days": "absent days",
    "deduction": "deduction",
    "extra": "extra",
    "bonus": "bonus",
    "salary_total": "salary total",
    "tds": "tds",
    "gross": "gross",
    "advance": "advance",
    "payroll_remark": "remark",
}

# Numeric columns carried through on ImportedRow.extras.
EXTRA_FIELDS = (
    "rate",
    "normal_pay",
    "ot_pay",
    "total_pay",
    "absent_days",
    "deduction",
    "extra",
    "bonus",
    "salary_total",
    "tds",
    "gross",
    "advance",
)


@dataclass(frozen=True)
class HeaderMap:
    indexes: Dict[str, int]

    @classmethod
    def from_header_row(cls, header_row: Sequence[Any]) -> "HeaderMap":
        """Map each recognized logical field to its column index.

        Raises SpreadsheetFormatError when there is no "name" column.
        """

        normalized = [str(h if h is not None else "").strip().lower() for h in header_row]
        indexes: Dict[str, int] = {}
        for field_name, header in HEADER_VOCABULARY.items():
            if header in normalized:
                indexes[field_name] = normalized.index(header)

        if "name" not in indexes:
            raise SpreadsheetFormatError('Missing required "Name" column in the sheet header')
        return cls(indexes=indexes)

    def has(self, field_name: str) -> bool:
        return field_name in self.indexes

    def value(self, row: Sequence[Any], field_name: str) -> Optional[Any]:
        idx = self.indexes.get(field_name)
        if idx is None or idx >= len(row):
            return None
        return row[idx]

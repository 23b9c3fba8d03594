from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Mapping

from ..common.validators import as_float, require_int
from ..core.enums import WageBasis

_TEXT_FIELDS = {"employee_name", "wage_basis", "remark"}


@dataclass(frozen=True)
class PayrollRow:
    """Read-model: one employee's pay for one Nepali month (regenerated on demand)."""

    employee_id: int
    employee_name: str
    wage_basis: WageBasis
    total_hours: float
    regular_hours: float
    overtime_hours: float
    rate: float
    daily_rate: float
    regular_pay: float
    ot_pay: float
    total_pay: float
    absent_days: int
    deduction: float
    allowance: float
    salary_total: float
    tds: float
    gross: float
    advance: float
    net_payment: float
    remark: str = ""

    def as_dict(self) -> dict:
        data = asdict(self)
        data["wage_basis"] = self.wage_basis.value
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PayrollRow":
        """Rebuild a row a client sent back (e.g. for a quick adjustment)."""

        kwargs: dict = {}
        for f in fields(cls):
            value = data.get(f.name)
            if f.name == "employee_id":
                kwargs[f.name] = require_int(value, "employee_id")
            elif f.name == "absent_days":
                kwargs[f.name] = int(as_float(value))
            elif f.name == "wage_basis":
                kwargs[f.name] = WageBasis.from_text(value)
            elif f.name in _TEXT_FIELDS:
                kwargs[f.name] = str(value or "")
            else:
                kwargs[f.name] = as_float(value)
        return cls(**kwargs)

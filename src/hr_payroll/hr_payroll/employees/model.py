from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import EmploymentStatus, WageBasis


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee on the roster.

    wage_amount is a monthly salary or an hourly rate depending on wage_basis.
    """

    employee_id: int
    name: str
    status: EmploymentStatus = EmploymentStatus.WORKING
    wage_basis: WageBasis = WageBasis.MONTHLY
    wage_amount: float = 0.0
    allowance: float = 0.0
    created_by: Optional[str] = None

    @property
    def is_working(self) -> bool:
        return self.status == EmploymentStatus.WORKING

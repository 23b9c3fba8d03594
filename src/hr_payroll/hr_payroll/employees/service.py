from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.validators import as_float, require_non_empty
from ..core.enums import EmploymentStatus, WageBasis
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


class EmployeeService:
    """Use cases: read the roster and create employees (HR action or import provisioning)."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def list_roster(self) -> Sequence[Employee]:
        return list(self._employees.list_all())

    def create_employee(
        self,
        *,
        name: str,
        wage_basis: WageBasis = WageBasis.MONTHLY,
        wage_amount=0,
        allowance=0,
        status: EmploymentStatus = EmploymentStatus.WORKING,
        created_by: Optional[str] = None,
    ) -> Employee:
        name = " ".join(require_non_empty(name, "Employee name").split())
        return self._employees.create_if_absent(
            name=name,
            status=status,
            wage_basis=wage_basis,
            wage_amount=as_float(wage_amount),
            allowance=as_float(allowance),
            created_by=created_by,
        )

    def provision(self, name: str, created_by: str) -> Employee:
        """Auto-provision an employee first seen in an attendance sheet."""

        employee = self.create_employee(name=name, created_by=created_by)
        logger.info("Provisioned employee %r from attendance import by %s", employee.name, created_by)
        return employee

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..common.validators import as_float, normalize_name
from ..core.enums import EmploymentStatus, WageBasis
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = "employee_id, name, status, wage_basis, wage_amount, allowance, created_by"


def _to_employee(row: Dict[str, Any]) -> Employee:
    return Employee(
        employee_id=int(row["employee_id"]),
        name=row["name"],
        status=EmploymentStatus.from_text(row.get("status")),
        wage_basis=WageBasis.from_text(row.get("wage_basis")),
        wage_amount=as_float(row.get("wage_amount")),
        allowance=as_float(row.get("allowance")),
        created_by=row.get("created_by"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY name")
            return [_to_employee(r) for r in fetchall(cur)]

    def create_if_absent(
        self,
        *,
        name: str,
        status: EmploymentStatus,
        wage_basis: WageBasis,
        wage_amount: float,
        allowance: float,
        created_by: Optional[str],
    ) -> Employee:
        # name_key is UNIQUE: a concurrent import creating the same name becomes a no-op update.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(name, name_key, status, wage_basis, wage_amount, allowance, created_by)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE employee_id=LAST_INSERT_ID(employee_id)
                """,
                (
                    name,
                    normalize_name(name),
                    status.value,
                    wage_basis.value,
                    float(wage_amount),
                    float(allowance),
                    created_by,
                ),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (int(cur.lastrowid),))
            return _to_employee(fetchone(cur))

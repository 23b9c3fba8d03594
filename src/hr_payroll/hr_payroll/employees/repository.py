from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import EmploymentStatus, WageBasis
from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for the employee roster.

    Services depend on this interface, never on a concrete database.
    """

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

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
        """Idempotent create keyed by normalized name; returns the stored employee."""

        raise NotImplementedError

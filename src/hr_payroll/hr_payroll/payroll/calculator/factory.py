from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from ...core.enums import WageBasis
from .base import PayrollCalculator
from .hourly_calculator import HourlyPayrollCalculator
from .monthly_calculator import MonthlyPayrollCalculator


@dataclass
class PayrollCalculatorFactory:
    """Factory Pattern: pick the calculator for an employee's wage basis."""

    calculators: Dict[WageBasis, PayrollCalculator] = field(
        default_factory=lambda: {
            WageBasis.MONTHLY: MonthlyPayrollCalculator(),
            WageBasis.HOURLY: HourlyPayrollCalculator(),
        }
    )

    def for_basis(self, wage_basis: WageBasis) -> PayrollCalculator:
        return self.calculators.get(wage_basis) or self.calculators[WageBasis.MONTHLY]

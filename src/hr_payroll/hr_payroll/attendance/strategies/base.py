from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...core.enums import AttendanceStatus


@dataclass(frozen=True)
class StatusContext:
    raw_status: str  # upper-cased, trimmed
    gross_hours: float
    is_saturday: bool
    clock_in_present: bool
    clock_out_present: bool


class StatusRule(ABC):
    """Strategy Pattern: one step of the status precedence chain.

    decide() returns None to let the next rule try.
    """

    @abstractmethod
    def decide(self, ctx: StatusContext) -> Optional[AttendanceStatus]:
        raise NotImplementedError

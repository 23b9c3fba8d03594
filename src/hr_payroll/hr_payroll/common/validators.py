from __future__ import annotations

import math
from typing import Any

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_int(value: Any, field_name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer") from None


def as_float(value: Any, default: float = 0.0) -> float:
    """Numeric fallback: anything that is not a finite number becomes `default`."""

    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, str):
        value = value.strip().replace(",", "")
        if not value:
            return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(number) or math.isinf(number):
        return default
    return number


def normalize_name(value: Any) -> str:
    """Join key for employee names: trimmed, single-spaced, lower-case."""

    if value is None:
        return ""
    return " ".join(str(value).split()).lower()


def require_bs_month(year: Any, month: Any) -> tuple[int, int]:
    """Validate a (Nepali year, 0-based month) pair coming from a request."""

    bs_year = require_int(year, "bs_year")
    bs_month = require_int(month, "bs_month")
    if not 0 <= bs_month <= 11:
        raise ValidationError("bs_month must be between 0 and 11")
    return bs_year, bs_month

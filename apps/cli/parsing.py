"""Input parsing helpers."""
from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Tuple

from .errors import ValidationError


def parse_month(value: Optional[str]) -> Optional[Tuple[int, int]]:
    if value is None:
        return None
    try:
        dt = datetime.strptime(value, "%Y-%m")
    except ValueError as exc:
        raise ValidationError("Month must be in YYYY-MM format") from exc
    return dt.year, dt.month


def parse_day(value: Optional[str], label: str = "date") -> Optional[date]:
    if value is None:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as exc:
        raise ValidationError(f"{label} must be in YYYY-MM-DD format") from exc

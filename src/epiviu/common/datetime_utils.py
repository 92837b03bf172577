from __future__ import annotations

import calendar
from datetime import date, datetime
from typing import Optional

from ..core.constants import DATE_FORMAT, MONTH_FORMAT
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except (TypeError, ValueError):
        raise ValidationError(f"Data inválida: {value!r} (use AAAA-MM-DD)") from None


def parse_optional_date(value: Optional[str], default: date) -> date:
    if value is None or not value.strip():
        return default
    return parse_iso_date(value.strip())


def format_iso_date(value: Optional[date]) -> Optional[str]:
    return value.strftime(DATE_FORMAT) if value else None


def month_range(value: str) -> tuple[date, date]:
    """Expand YYYY-MM into the first and last calendar day of that month."""
    try:
        first = datetime.strptime(value, MONTH_FORMAT).date()
    except (TypeError, ValueError):
        raise ValidationError(f"Mês inválido: {value!r} (use AAAA-MM)") from None
    last_day = calendar.monthrange(first.year, first.month)[1]
    return first, first.replace(day=last_day)


def today_local() -> date:
    """Current local calendar date.

    Note: Wrapped so tests can patch it.
    """
    return datetime.now().date()

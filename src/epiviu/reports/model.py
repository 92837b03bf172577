from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from ..common.datetime_utils import format_iso_date
from ..core.enums import Shift


@dataclass(frozen=True)
class ReportRow:
    """Read-model do relatório: uma linha por (setor, data perdida) ou setor sem falta."""

    sector_id: int
    staff_id: int
    staff_name: str
    shift: Shift
    sector_name: str
    missed_date: Optional[date] = None

    def to_dict(self) -> dict:
        return {
            "staff_name": self.staff_name,
            "shift": self.shift.value,
            "sector_name": self.sector_name,
            "missed_date": format_iso_date(self.missed_date),
        }


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class Totals:
    """Visited/missed counts over `days` calendar days.

    Each sector is due one visit per day, so a multi-day range is measured in
    sector-days: `visited_count = total_sectors * days - missed_count`.
    """

    total_sectors: int
    missed_count: int
    visited_count: int
    visited_percent: int
    days: int = 1

    @classmethod
    def from_counts(cls, total_sectors: int, missed_count: int, days: int = 1) -> "Totals":
        expected = total_sectors * days
        visited = expected - missed_count
        percent = _round_half_up(100 * visited / expected) if expected else 0
        return cls(
            total_sectors=total_sectors,
            missed_count=missed_count,
            visited_count=visited,
            visited_percent=percent,
            days=days,
        )

    @classmethod
    def from_rows(cls, rows: Iterable[ReportRow], days: int = 1) -> "Totals":
        rows = list(rows)
        sectors = {r.sector_id for r in rows}
        missed = sum(1 for r in rows if r.missed_date is not None)
        return cls.from_counts(len(sectors), missed, days)

    def to_dict(self) -> dict:
        return {
            "total_sectors": self.total_sectors,
            "days": self.days,
            "missed_count": self.missed_count,
            "visited_count": self.visited_count,
            "visited_percent": self.visited_percent,
        }


@dataclass(frozen=True)
class StaffSubtotal:
    staff_id: int
    staff_name: str
    shift: Shift
    totals: Totals

    def to_dict(self) -> dict:
        return {"staff_name": self.staff_name, "shift": self.shift.value, **self.totals.to_dict()}


@dataclass(frozen=True)
class ShiftSubtotal:
    shift: Shift
    totals: Totals

    def to_dict(self) -> dict:
        return {"shift": self.shift.value, **self.totals.to_dict()}


@dataclass(frozen=True)
class ReportSummary:
    start_date: date
    end_date: date
    totals: Totals
    by_staff: list[StaffSubtotal]
    by_shift: list[ShiftSubtotal]

    def to_dict(self) -> dict:
        return {
            "start_date": format_iso_date(self.start_date),
            "end_date": format_iso_date(self.end_date),
            "totals": self.totals.to_dict(),
            "by_staff": [s.to_dict() for s in self.by_staff],
            "by_shift": [s.to_dict() for s in self.by_shift],
        }

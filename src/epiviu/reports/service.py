from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import month_range, parse_optional_date, today_local
from ..core.enums import Shift
from ..core.exceptions import ValidationError
from .model import ReportRow, ReportSummary, ShiftSubtotal, StaffSubtotal, Totals
from .repository import ReportRepository

_SHIFT_ORDER = {Shift.MORNING: 0, Shift.AFTERNOON: 1, Shift.ONCALL: 2}


@dataclass(frozen=True)
class ReportData:
    start_date: date
    end_date: date
    rows: list[ReportRow]

    @property
    def days(self) -> int:
        return (self.end_date - self.start_date).days + 1


def _row_key(r: ReportRow):
    return (r.staff_name, r.sector_name, r.sector_id, r.missed_date or date.min)


class ReportService:
    """Turns raw missed-visit rows into day/month reports and subtotals."""

    def __init__(self, reports: ReportRepository, *, clock: Callable[[], date] = today_local):
        self._reports = reports
        self._clock = clock

    def resolve_range(self, start: Optional[str] = None, end: Optional[str] = None) -> tuple[date, date]:
        """Parse optional YYYY-MM-DD bounds; both default to today."""
        today = self._clock()
        start_d = parse_optional_date(start, today)
        end_d = parse_optional_date(end, today)
        if start_d > end_d:
            raise ValidationError("Data inicial posterior à data final")
        return start_d, end_d

    def report(self, start_date: Optional[date] = None, end_date: Optional[date] = None) -> ReportData:
        today = self._clock()
        start_date = start_date or today
        end_date = end_date or today
        if start_date > end_date:
            raise ValidationError("Data inicial posterior à data final")

        rows = self._reports.get_report_rows(start_date=start_date, end_date=end_date)
        return ReportData(start_date=start_date, end_date=end_date, rows=sorted(rows, key=_row_key))

    def summarize(self, data: ReportData) -> ReportSummary:
        days = data.days
        by_staff: dict[int, list[ReportRow]] = {}
        by_shift: dict[Shift, list[ReportRow]] = {}
        for r in data.rows:
            by_staff.setdefault(r.staff_id, []).append(r)
            by_shift.setdefault(r.shift, []).append(r)

        staff_totals = [
            StaffSubtotal(
                staff_id=staff_id,
                staff_name=rows[0].staff_name,
                shift=rows[0].shift,
                totals=Totals.from_rows(rows, days),
            )
            for staff_id, rows in by_staff.items()
        ]
        staff_totals.sort(key=lambda s: (s.staff_name, s.staff_id))

        shift_totals = [ShiftSubtotal(shift=shift, totals=Totals.from_rows(rows, days)) for shift, rows in by_shift.items()]
        shift_totals.sort(key=lambda s: _SHIFT_ORDER[s.shift])

        return ReportSummary(
            start_date=data.start_date,
            end_date=data.end_date,
            totals=Totals.from_rows(data.rows, days),
            by_staff=staff_totals,
            by_shift=shift_totals,
        )

    def summary(self, start_date: Optional[date] = None, end_date: Optional[date] = None) -> ReportSummary:
        return self.summarize(self.report(start_date, end_date))

    def monthly_summary(self, month: str) -> ReportSummary:
        start_date, end_date = month_range(month)
        return self.summary(start_date, end_date)

    @staticmethod
    def daily_totals(sector_ids: Sequence[int], missed_ids: set[int]) -> Totals:
        """Dashboard panel: how many of the listed sectors are flagged as missed."""
        missed = sum(1 for sid in set(sector_ids) if sid in missed_ids)
        return Totals.from_counts(len(set(sector_ids)), missed)

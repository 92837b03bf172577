from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import ReportRow


class ReportRepository(Protocol):
    def get_report_rows(self, *, start_date: date, end_date: date) -> Sequence[ReportRow]:
        """Every sector joined with its owner, left-joined with missed visits in range.

        Sectors without a missed visit in [start_date, end_date] appear once with
        missed_date=None; sectors missed on several days appear once per day.
        """

        raise NotImplementedError

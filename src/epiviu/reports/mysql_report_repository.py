from __future__ import annotations

from datetime import date
from typing import Sequence

from ..core.enums import Shift
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_date
from .model import ReportRow
from .repository import ReportRepository


class MySQLReportRepository(ReportRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_report_rows(self, *, start_date: date, end_date: date) -> Sequence[ReportRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    sec.id AS sector_id,
                    s.id AS staff_id,
                    s.name AS staff_name,
                    s.shift,
                    sec.name AS sector_name,
                    mv.visit_date AS missed_date
                FROM sectors sec
                JOIN staff s ON s.id = sec.staff_id
                LEFT JOIN missed_visits mv
                    ON mv.sector_id = sec.id AND mv.visit_date BETWEEN %s AND %s
                ORDER BY s.name, sec.name, sec.id, mv.visit_date
                """,
                (start_date, end_date),
            )
            return [
                ReportRow(
                    sector_id=int(r["sector_id"]),
                    staff_id=int(r["staff_id"]),
                    staff_name=r["staff_name"],
                    shift=Shift(r["shift"]),
                    sector_name=r["sector_name"],
                    missed_date=normalize_mysql_date(r.get("missed_date")),
                )
                for r in fetchall(cur)
            ]

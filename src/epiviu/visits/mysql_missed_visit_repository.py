from __future__ import annotations

from datetime import date
from typing import Optional, Set

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date
from .model import MissedVisit
from .repository import MissedVisitRepository


class MySQLMissedVisitRepository(MissedVisitRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, *, sector_id: int, visit_date: date) -> Optional[MissedVisit]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, sector_id, visit_date, created_by
                FROM missed_visits
                WHERE sector_id=%s AND visit_date=%s
                """,
                (int(sector_id), visit_date),
            )
            r = fetchone(cur)
            if not r:
                return None
            return MissedVisit(
                visit_id=int(r["id"]),
                sector_id=int(r["sector_id"]),
                visit_date=normalize_mysql_date(r["visit_date"]),
                created_by=r.get("created_by"),
            )

    def insert(self, *, sector_id: int, visit_date: date, created_by: Optional[int] = None) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO missed_visits(sector_id, visit_date, created_by) VALUES(%s,%s,%s)",
                (int(sector_id), visit_date, created_by),
            )
            return int(cur.lastrowid)

    def delete(self, *, sector_id: int, visit_date: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM missed_visits WHERE sector_id=%s AND visit_date=%s",
                (int(sector_id), visit_date),
            )
            return int(cur.rowcount)

    def list_sector_ids_for_date(self, visit_date: date) -> Set[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT sector_id FROM missed_visits WHERE visit_date=%s", (visit_date,))
            return {int(r["sector_id"]) for r in fetchall(cur)}

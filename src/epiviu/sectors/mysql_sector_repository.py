from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Sector
from .repository import SectorRepository


def _to_sector(r: dict) -> Sector:
    return Sector(sector_id=int(r["id"]), name=r["name"], staff_id=int(r["staff_id"]))


class MySQLSectorRepository(SectorRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, sector_id: int) -> Optional[Sector]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, staff_id FROM sectors WHERE id=%s", (int(sector_id),))
            row = fetchone(cur)
            return _to_sector(row) if row else None

    def list_all(self) -> Sequence[Sector]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, staff_id FROM sectors ORDER BY name, id")
            return [_to_sector(r) for r in fetchall(cur)]

    def create(self, *, name: str, staff_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO sectors(name, staff_id) VALUES(%s,%s)", (name, int(staff_id)))
            return int(cur.lastrowid)

    def reassign(self, sector_id: int, staff_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE sectors SET staff_id=%s WHERE id=%s", (int(staff_id), int(sector_id)))
            return cur.rowcount > 0

    def delete_cascade(self, sector_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM missed_visits WHERE sector_id=%s", (int(sector_id),))
            cur.execute("DELETE FROM sectors WHERE id=%s", (int(sector_id),))
            return int(cur.rowcount)

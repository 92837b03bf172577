from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role, Shift
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Staff
from .repository import StaffRepository

_COLUMNS = "id, name, shift, role, password_hash, needs_password_change"


def _to_staff(r: dict) -> Staff:
    return Staff(
        staff_id=int(r["id"]),
        name=r["name"],
        shift=Shift(r["shift"]),
        role=Role(r["role"]),
        password_hash=r.get("password_hash") or "",
        needs_password_change=bool(r.get("needs_password_change", True)),
    )


class MySQLStaffRepository(StaffRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, staff_id: int) -> Optional[Staff]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM staff WHERE id=%s", (int(staff_id),))
            row = fetchone(cur)
            return _to_staff(row) if row else None

    def get_by_name(self, name: str) -> Optional[Staff]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM staff WHERE name=%s", (name,))
            row = fetchone(cur)
            return _to_staff(row) if row else None

    def list_all(self) -> Sequence[Staff]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM staff ORDER BY name, id")
            return [_to_staff(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        name: str,
        shift: Shift,
        role: Role,
        password_hash: str,
        needs_password_change: bool = True,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO staff(name, shift, role, password_hash, needs_password_change)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (name, shift.value, role.value, password_hash, int(needs_password_change)),
            )
            return int(cur.lastrowid)

    def update_shift(self, staff_id: int, shift: Shift) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE staff SET shift=%s WHERE id=%s", (shift.value, int(staff_id)))
            return cur.rowcount > 0

    def update_password(self, staff_id: int, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE staff SET password_hash=%s, needs_password_change=0 WHERE id=%s",
                (password_hash, int(staff_id)),
            )
            return cur.rowcount > 0

    def delete_cascade(self, staff_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id FROM sectors WHERE staff_id=%s FOR UPDATE", (int(staff_id),))
            sector_ids = [int(r["id"]) for r in fetchall(cur)]

            if sector_ids:
                placeholders = ", ".join(["%s"] * len(sector_ids))
                cur.execute(f"DELETE FROM missed_visits WHERE sector_id IN ({placeholders})", tuple(sector_ids))
                cur.execute("DELETE FROM sectors WHERE staff_id=%s", (int(staff_id),))

            cur.execute("DELETE FROM staff WHERE id=%s", (int(staff_id),))
            return int(cur.rowcount)

from __future__ import annotations

import itertools
from dataclasses import replace
from datetime import date
from typing import Optional

import pytest

from epiviu.container import assemble
from epiviu.core.constants import ER_DUP_ENTRY, ER_NO_REFERENCED_ROW
from epiviu.core.enums import Role, Shift
from epiviu.core.exceptions import IntegrityError
from epiviu.core.permissions import Actor
from epiviu.reports.model import ReportRow
from epiviu.sectors.model import Sector
from epiviu.staff.model import Staff
from epiviu.visits.model import MissedVisit

TODAY = date(2024, 3, 1)


class InMemoryStore:
    """Tables + the constraints MySQL enforces (unique keys, foreign keys)."""

    def __init__(self):
        self.staff: dict[int, Staff] = {}
        self.sectors: dict[int, Sector] = {}
        self.visits: dict[tuple[int, date], MissedVisit] = {}
        self._ids = itertools.count(1)

    def next_id(self) -> int:
        return next(self._ids)


class InMemoryStaff:
    def __init__(self, store: InMemoryStore):
        self._s = store

    def get_by_id(self, staff_id: int) -> Optional[Staff]:
        return self._s.staff.get(int(staff_id))

    def get_by_name(self, name: str) -> Optional[Staff]:
        return next((s for s in self._s.staff.values() if s.name == name), None)

    def list_all(self):
        return list(self._s.staff.values())

    def create(self, *, name, shift, role, password_hash, needs_password_change=True) -> int:
        if self.get_by_name(name):
            raise IntegrityError("Duplicate entry for key 'uq_staff_name'", errno=ER_DUP_ENTRY)
        staff_id = self._s.next_id()
        self._s.staff[staff_id] = Staff(
            staff_id=staff_id,
            name=name,
            shift=shift,
            role=role,
            password_hash=password_hash,
            needs_password_change=needs_password_change,
        )
        return staff_id

    def update_shift(self, staff_id: int, shift: Shift) -> bool:
        current = self._s.staff.get(int(staff_id))
        if not current or current.shift == shift:
            return False
        self._s.staff[int(staff_id)] = replace(current, shift=shift)
        return True

    def update_password(self, staff_id: int, password_hash: str) -> bool:
        current = self._s.staff.get(int(staff_id))
        if not current:
            return False
        self._s.staff[int(staff_id)] = replace(current, password_hash=password_hash, needs_password_change=False)
        return True

    def delete_cascade(self, staff_id: int) -> int:
        owned = {sid for sid, sec in self._s.sectors.items() if sec.staff_id == int(staff_id)}
        for key in [k for k in self._s.visits if k[0] in owned]:
            del self._s.visits[key]
        for sid in owned:
            del self._s.sectors[sid]
        return 1 if self._s.staff.pop(int(staff_id), None) else 0


class InMemorySectors:
    def __init__(self, store: InMemoryStore):
        self._s = store

    def get_by_id(self, sector_id: int) -> Optional[Sector]:
        return self._s.sectors.get(int(sector_id))

    def list_all(self):
        return list(self._s.sectors.values())

    def create(self, *, name: str, staff_id: int) -> int:
        if int(staff_id) not in self._s.staff:
            raise IntegrityError("Cannot add or update a child row", errno=ER_NO_REFERENCED_ROW)
        sector_id = self._s.next_id()
        self._s.sectors[sector_id] = Sector(sector_id=sector_id, name=name, staff_id=int(staff_id))
        return sector_id

    def reassign(self, sector_id: int, staff_id: int) -> bool:
        if int(staff_id) not in self._s.staff:
            raise IntegrityError("Cannot add or update a child row", errno=ER_NO_REFERENCED_ROW)
        current = self._s.sectors.get(int(sector_id))
        if not current:
            return False
        self._s.sectors[int(sector_id)] = replace(current, staff_id=int(staff_id))
        return True

    def delete_cascade(self, sector_id: int) -> int:
        for key in [k for k in self._s.visits if k[0] == int(sector_id)]:
            del self._s.visits[key]
        return 1 if self._s.sectors.pop(int(sector_id), None) else 0


class InMemoryVisits:
    def __init__(self, store: InMemoryStore):
        self._s = store

    def get(self, *, sector_id: int, visit_date: date) -> Optional[MissedVisit]:
        return self._s.visits.get((int(sector_id), visit_date))

    def insert(self, *, sector_id: int, visit_date: date, created_by=None) -> int:
        if int(sector_id) not in self._s.sectors:
            raise IntegrityError("Cannot add or update a child row", errno=ER_NO_REFERENCED_ROW)
        if (int(sector_id), visit_date) in self._s.visits:
            raise IntegrityError("Duplicate entry for key 'uq_missed_sector_date'", errno=ER_DUP_ENTRY)
        visit_id = self._s.next_id()
        self._s.visits[(int(sector_id), visit_date)] = MissedVisit(
            visit_id=visit_id, sector_id=int(sector_id), visit_date=visit_date, created_by=created_by
        )
        return visit_id

    def delete(self, *, sector_id: int, visit_date: date) -> int:
        return 1 if self._s.visits.pop((int(sector_id), visit_date), None) else 0

    def list_sector_ids_for_date(self, visit_date: date):
        return {k[0] for k in self._s.visits if k[1] == visit_date}


class InMemoryReports:
    """Same LEFT JOIN semantics as the SQL report query (unordered on purpose)."""

    def __init__(self, store: InMemoryStore):
        self._s = store

    def get_report_rows(self, *, start_date: date, end_date: date):
        rows = []
        for sector in reversed(list(self._s.sectors.values())):
            owner = self._s.staff[sector.staff_id]
            dates = sorted(
                d for (sid, d) in self._s.visits if sid == sector.sector_id and start_date <= d <= end_date
            )
            for missed in dates or [None]:
                rows.append(
                    ReportRow(
                        sector_id=sector.sector_id,
                        staff_id=owner.staff_id,
                        staff_name=owner.name,
                        shift=owner.shift,
                        sector_name=sector.name,
                        missed_date=missed,
                    )
                )
        return rows


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def container(store):
    return assemble(
        staff_repo=InMemoryStaff(store),
        sectors_repo=InMemorySectors(store),
        visits_repo=InMemoryVisits(store),
        reports_repo=InMemoryReports(store),
        secret_key="test-secret",
        token_max_age=3600,
        default_password="1234",
        clock=lambda: TODAY,
    )


@pytest.fixture
def admin(container) -> Actor:
    staff_id = container.staff_repo.create(
        name="Administrador",
        shift=Shift.MORNING,
        role=Role.ADMIN,
        password_hash="x",
    )
    return Actor(staff_id=staff_id, role=Role.ADMIN)


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    from epiviu.main import create_app

    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()

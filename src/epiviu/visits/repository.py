from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Set

from .model import MissedVisit


class MissedVisitRepository(Protocol):
    """Store of missed-visit flags, unique per (sector_id, visit_date)."""

    def get(self, *, sector_id: int, visit_date: date) -> Optional[MissedVisit]:
        raise NotImplementedError

    def insert(self, *, sector_id: int, visit_date: date, created_by: Optional[int] = None) -> int:
        """Insert a flag; a duplicate (sector_id, visit_date) must raise IntegrityError."""

        raise NotImplementedError

    def delete(self, *, sector_id: int, visit_date: date) -> int:
        raise NotImplementedError

    def list_sector_ids_for_date(self, visit_date: date) -> Set[int]:
        raise NotImplementedError

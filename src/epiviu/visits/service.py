from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Optional, Set

from ..common.datetime_utils import today_local
from ..common.validators import require_id
from ..core.constants import ER_NO_REFERENCED_ROW
from ..core.enums import ToggleStatus
from ..core.exceptions import AuthorizationError, IntegrityError, NotFoundError
from ..core.permissions import Actor, can_toggle
from ..sectors.repository import SectorRepository
from .model import ToggleResult
from .repository import MissedVisitRepository

logger = logging.getLogger(__name__)


class ToggleService:
    """Idempotent, date-scoped missed-visit state changes.

    Toggle is check-then-act under the store's unique key on
    (sector_id, visit_date): when a concurrent caller wins the insert, the
    collision is resolved by re-reading the row instead of trusting the
    earlier read.
    """

    def __init__(
        self,
        visits: MissedVisitRepository,
        sectors: SectorRepository,
        *,
        clock: Callable[[], date] = today_local,
    ):
        self._visits = visits
        self._sectors = sectors
        self._clock = clock

    def today(self) -> date:
        return self._clock()

    def toggle_missed(self, *, actor: Actor, sector_id: int, visit_date: Optional[date] = None) -> ToggleResult:
        sector_id = require_id(sector_id, "Setor")
        visit_date = visit_date or self._clock()

        sector = self._sectors.get_by_id(sector_id)
        if not sector:
            raise NotFoundError("Setor não encontrado")
        if not can_toggle(actor.role, actor.staff_id, sector.staff_id):
            raise AuthorizationError("Você só pode marcar os seus próprios setores")

        if self._visits.get(sector_id=sector_id, visit_date=visit_date):
            # A concurrent removal may already have deleted it; the outcome is the same.
            self._visits.delete(sector_id=sector_id, visit_date=visit_date)
            status = ToggleStatus.REMOVED
        else:
            try:
                self._visits.insert(sector_id=sector_id, visit_date=visit_date, created_by=actor.staff_id)
            except IntegrityError as e:
                if e.errno == ER_NO_REFERENCED_ROW:
                    # Sector deleted after the lookup above.
                    raise NotFoundError("Setor não encontrado") from e
                if not self._visits.get(sector_id=sector_id, visit_date=visit_date):
                    raise
                logger.warning(
                    "Concurrent toggle on sector_id=%s date=%s; keeping existing flag",
                    sector_id,
                    visit_date.isoformat(),
                )
            status = ToggleStatus.ADDED

        logger.info(
            "Missed visit %s sector_id=%s date=%s by=%s",
            status.value,
            sector_id,
            visit_date.isoformat(),
            actor.staff_id,
        )
        return ToggleResult(status=status, sector_id=sector_id, visit_date=visit_date)

    def is_missed(self, sector_id: int, visit_date: Optional[date] = None) -> bool:
        return self._visits.get(sector_id=int(sector_id), visit_date=visit_date or self._clock()) is not None

    def list_missed_for_date(self, visit_date: Optional[date] = None) -> Set[int]:
        return set(self._visits.list_sector_ids_for_date(visit_date or self._clock()))

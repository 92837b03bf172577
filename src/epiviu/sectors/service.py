from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.validators import require_id, require_non_empty
from ..core.constants import ER_NO_REFERENCED_ROW
from ..core.enums import Shift
from ..core.exceptions import IntegrityError, NotFoundError, ValidationError
from ..core.permissions import Actor, require_admin
from ..staff.model import visible_in_shift
from ..staff.repository import StaffRepository
from .model import Sector
from .repository import SectorRepository

logger = logging.getLogger(__name__)


class SectorService:
    """Use case: manage sectors and their exclusive owner."""

    def __init__(self, sectors: SectorRepository, staff: StaffRepository):
        self._sectors = sectors
        self._staff = staff

    def list_sectors(self, *, shift: Optional[Shift] = None) -> Sequence[Sector]:
        rows = sorted(self._sectors.list_all(), key=lambda s: (s.name, s.sector_id))
        if shift is None:
            return rows
        visible = {s.staff_id for s in self._staff.list_all() if visible_in_shift(s.shift, shift)}
        return [s for s in rows if s.staff_id in visible]

    def get(self, sector_id: int) -> Sector:
        sector = self._sectors.get_by_id(int(sector_id))
        if not sector:
            raise NotFoundError("Setor não encontrado")
        return sector

    def _require_owner(self, staff_id) -> int:
        staff_id = require_id(staff_id, "Funcionária")
        if not self._staff.get_by_id(staff_id):
            raise ValidationError("Funcionária não encontrada para vincular o setor")
        return staff_id

    def create_sector(self, *, actor: Actor, name: str, staff_id: int) -> int:
        require_admin(actor)
        name = require_non_empty(name, "Nome do setor")
        staff_id = self._require_owner(staff_id)

        try:
            sector_id = self._sectors.create(name=name, staff_id=staff_id)
        except IntegrityError as e:
            # Owner removed between the check and the insert.
            if e.errno == ER_NO_REFERENCED_ROW:
                raise ValidationError("Funcionária não encontrada para vincular o setor") from e
            raise

        logger.info("Sector created id=%s name=%r staff_id=%s by=%s", sector_id, name, staff_id, actor.staff_id)
        return sector_id

    def reassign_sector(self, *, actor: Actor, sector_id: int, staff_id: int) -> None:
        require_admin(actor)
        sector = self.get(require_id(sector_id, "Setor"))
        staff_id = self._require_owner(staff_id)
        if sector.staff_id == staff_id:
            return

        try:
            updated = self._sectors.reassign(sector.sector_id, staff_id)
        except IntegrityError as e:
            if e.errno == ER_NO_REFERENCED_ROW:
                raise ValidationError("Funcionária não encontrada para vincular o setor") from e
            raise
        if not updated:
            raise NotFoundError("Setor não encontrado")
        logger.info("Sector id=%s reassigned %s -> %s by=%s", sector.sector_id, sector.staff_id, staff_id, actor.staff_id)

    def delete_sector(self, *, actor: Actor, sector_id: int) -> None:
        require_admin(actor)
        sector_id = require_id(sector_id, "Setor")
        if self._sectors.delete_cascade(sector_id) == 0:
            raise NotFoundError("Setor não encontrado")
        logger.info("Sector deleted id=%s by=%s", sector_id, actor.staff_id)

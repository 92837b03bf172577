from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import ToggleStatus


@dataclass(frozen=True)
class MissedVisit:
    """Presença do registro = setor NÃO visitado na data."""

    visit_id: int
    sector_id: int
    visit_date: date
    created_by: Optional[int] = None


@dataclass(frozen=True)
class ToggleResult:
    status: ToggleStatus
    sector_id: int
    visit_date: date

    def to_dict(self) -> dict:
        return {"status": self.status.value}

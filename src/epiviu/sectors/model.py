from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Sector:
    """Entidade de domínio: Setor (sala/enfermaria) com uma dona exclusiva."""

    sector_id: int
    name: str
    staff_id: int

    def to_dict(self) -> dict:
        return {"id": self.sector_id, "name": self.name, "staff_id": self.staff_id}

from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Sector


class SectorRepository(Protocol):
    def get_by_id(self, sector_id: int) -> Optional[Sector]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Sector]:
        raise NotImplementedError

    def create(self, *, name: str, staff_id: int) -> int:
        raise NotImplementedError

    def reassign(self, sector_id: int, staff_id: int) -> bool:
        raise NotImplementedError

    def delete_cascade(self, sector_id: int) -> int:
        """Delete the sector's missed visits, then the sector row, atomically.

        Returns the number of sector rows deleted.
        """

        raise NotImplementedError

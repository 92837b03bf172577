from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role, Shift
from .model import Staff


class StaffRepository(Protocol):
    """Interface de repositório para Staff.

    A camada de serviço depende desta interface, não do banco concreto.
    """

    def get_by_id(self, staff_id: int) -> Optional[Staff]:
        raise NotImplementedError

    def get_by_name(self, name: str) -> Optional[Staff]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Staff]:
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        shift: Shift,
        role: Role,
        password_hash: str,
        needs_password_change: bool = True,
    ) -> int:
        raise NotImplementedError

    def update_shift(self, staff_id: int, shift: Shift) -> bool:
        raise NotImplementedError

    def update_password(self, staff_id: int, password_hash: str) -> bool:
        raise NotImplementedError

    def delete_cascade(self, staff_id: int) -> int:
        """Delete the staff row with its sectors and their missed visits, atomically.

        Returns the number of staff rows deleted (0 when the id does not exist).
        """

        raise NotImplementedError

from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role, Shift


@dataclass(frozen=True)
class Staff:
    """Entidade de domínio: Funcionária.

    Objeto de dados puro (sem acesso ao banco).
    """

    staff_id: int
    name: str
    shift: Shift
    role: Role = Role.STAFF
    password_hash: str = ""
    needs_password_change: bool = True

    def to_public_dict(self) -> dict:
        return {
            "id": self.staff_id,
            "name": self.name,
            "shift": self.shift.value,
            "role": self.role.value,
            "needs_password_change": self.needs_password_change,
        }


def visible_in_shift(staff_shift: Shift, selected: Shift) -> bool:
    """Oncall staff belong to both the morning and the afternoon roster."""
    if staff_shift == selected:
        return True
    return staff_shift == Shift.ONCALL and selected in (Shift.MORNING, Shift.AFTERNOON)

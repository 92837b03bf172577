from __future__ import annotations

from dataclasses import dataclass

from .enums import Role
from .exceptions import AuthorizationError


@dataclass(frozen=True)
class Actor:
    """Authenticated identity threaded through service calls."""

    staff_id: int
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


def require_admin(actor: Actor) -> None:
    if not actor.is_admin:
        raise AuthorizationError("Você não tem permissão")


def can_toggle(actor_role: Role, actor_id: int, sector_owner_id: int) -> bool:
    """Admin toggles any sector; staff only the sectors they own."""
    if actor_role == Role.ADMIN:
        return True
    return int(actor_id) == int(sector_owner_id)

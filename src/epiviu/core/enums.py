from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Papel do usuário usado para autorização."""

    ADMIN = "admin"
    STAFF = "staff"


class Shift(str, Enum):
    """Turno da funcionária. ONCALL aparece tanto na manhã quanto na tarde."""

    MORNING = "morning"
    AFTERNOON = "afternoon"
    ONCALL = "oncall"


class ToggleStatus(str, Enum):
    ADDED = "added"
    REMOVED = "removed"

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.tokens import TokenService
from ..common.validators import require_choice, require_id, require_min_length, require_non_empty
from ..core.constants import DEFAULT_STAFF_PASSWORD, ER_DUP_ENTRY, MIN_PASSWORD_LENGTH
from ..core.enums import Role, Shift
from ..core.exceptions import AuthenticationError, IntegrityError, NotFoundError, ValidationError
from ..core.permissions import Actor, require_admin
from .model import Staff, visible_in_shift
from .repository import StaffRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What the client receives after login."""

    staff: Staff
    token: str

    def to_dict(self) -> dict:
        return {"token": self.token, "user": self.staff.to_public_dict()}


class AuthService:
    """Use case: authenticate staff (login) and resolve session tokens."""

    def __init__(self, staff: StaffRepository, tokens: TokenService):
        self._staff = staff
        self._tokens = tokens

    def authenticate(self, username: str, password: str) -> SessionUser:
        user = self._staff.get_by_name((username or "").strip())
        if not user:
            raise AuthenticationError("Usuário ou senha incorretos")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder or corrupted hashes
            ok = False

        if not ok:
            raise AuthenticationError("Usuário ou senha incorretos")

        logger.info("Login staff_id=%s role=%s", user.staff_id, user.role.value)
        return SessionUser(staff=user, token=self._tokens.issue(user.staff_id))

    def resolve_actor(self, token: Optional[str]) -> Actor:
        if not token:
            raise AuthenticationError("Faça login para continuar")
        staff_id = self._tokens.load(token)
        user = self._staff.get_by_id(staff_id)
        if not user:
            raise AuthenticationError("Sessão inválida")
        return Actor(staff_id=user.staff_id, role=user.role)

    def change_password(self, *, actor: Actor, new_password: str) -> None:
        require_min_length(new_password, "Senha", MIN_PASSWORD_LENGTH)
        if not self._staff.update_password(actor.staff_id, generate_password_hash(new_password)):
            raise NotFoundError("Funcionária não encontrada")


class StaffService:
    """Use case: manage staff (admin)."""

    def __init__(self, staff: StaffRepository, *, default_password: str = DEFAULT_STAFF_PASSWORD):
        self._staff = staff
        self._default_password = default_password

    def list_staff(self, *, shift: Optional[Shift] = None) -> Sequence[Staff]:
        rows = sorted(self._staff.list_all(), key=lambda s: (s.name, s.staff_id))
        if shift is None:
            return rows
        return [s for s in rows if visible_in_shift(s.shift, shift)]

    def get(self, staff_id: int) -> Staff:
        staff = self._staff.get_by_id(int(staff_id))
        if not staff:
            raise NotFoundError("Funcionária não encontrada")
        return staff

    def create_staff(self, *, actor: Actor, name: str, shift: str, role: str = Role.STAFF.value) -> int:
        require_admin(actor)
        name = require_non_empty(name, "Nome")
        shift_v = require_choice(shift, Shift, "Turno")
        role_v = require_choice(role or Role.STAFF.value, Role, "Perfil")

        if self._staff.get_by_name(name):
            raise ValidationError("Já existe uma funcionária com esse nome")

        try:
            staff_id = self._staff.create(
                name=name,
                shift=shift_v,
                role=role_v,
                password_hash=generate_password_hash(self._default_password),
                needs_password_change=True,
            )
        except IntegrityError as e:
            if e.errno == ER_DUP_ENTRY:
                raise ValidationError("Já existe uma funcionária com esse nome") from e
            raise

        logger.info("Staff created id=%s name=%r shift=%s by=%s", staff_id, name, shift_v.value, actor.staff_id)
        return staff_id

    def update_shift(self, *, actor: Actor, staff_id: int, shift: str) -> None:
        require_admin(actor)
        staff_id = require_id(staff_id, "Funcionária")
        shift_v = require_choice(shift, Shift, "Turno")

        if not self._staff.update_shift(staff_id, shift_v):
            # MySQL reports 0 changed rows when the value is unchanged.
            self.get(staff_id)
        logger.info("Staff id=%s moved to shift=%s by=%s", staff_id, shift_v.value, actor.staff_id)

    def delete_staff(self, *, actor: Actor, staff_id: int) -> None:
        require_admin(actor)
        staff_id = require_id(staff_id, "Funcionária")
        if staff_id == actor.staff_id:
            raise ValidationError("Não é possível excluir o próprio usuário")

        if self._staff.delete_cascade(staff_id) == 0:
            raise NotFoundError("Funcionária não encontrada")
        logger.info("Staff deleted id=%s by=%s", staff_id, actor.staff_id)

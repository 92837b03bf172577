from __future__ import annotations

import pytest

from epiviu.core.enums import Role, Shift
from epiviu.core.exceptions import AuthorizationError
from epiviu.core.permissions import Actor, can_toggle, require_admin
from epiviu.staff.model import visible_in_shift


@pytest.mark.parametrize(
    "role, actor_id, owner_id, allowed",
    [
        (Role.ADMIN, 1, 2, True),
        (Role.ADMIN, 1, 1, True),
        (Role.STAFF, 2, 2, True),
        (Role.STAFF, 2, 3, False),
    ],
)
def test_can_toggle(role, actor_id, owner_id, allowed):
    assert can_toggle(role, actor_id, owner_id) is allowed


def test_require_admin():
    require_admin(Actor(staff_id=1, role=Role.ADMIN))
    with pytest.raises(AuthorizationError):
        require_admin(Actor(staff_id=2, role=Role.STAFF))


@pytest.mark.parametrize(
    "staff_shift, selected, visible",
    [
        (Shift.MORNING, Shift.MORNING, True),
        (Shift.MORNING, Shift.AFTERNOON, False),
        (Shift.ONCALL, Shift.MORNING, True),
        (Shift.ONCALL, Shift.AFTERNOON, True),
        (Shift.ONCALL, Shift.ONCALL, True),
        (Shift.AFTERNOON, Shift.ONCALL, False),
    ],
)
def test_visible_in_shift(staff_shift, selected, visible):
    assert visible_in_shift(staff_shift, selected) is visible

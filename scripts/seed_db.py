"""Provision the default admin and the hospital roster.

Idempotent: staff members that already exist (by name) are left untouched,
together with their sectors. Nothing is ever deleted.
"""

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for p in (REPO_ROOT, REPO_ROOT / "src"):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from werkzeug.security import generate_password_hash

from config import get_settings_module

from epiviu.container import Container, build_container
from epiviu.core.enums import Role, Shift

logger = logging.getLogger("epiviu.seed")

ADMIN_NAME = "Administrador"

ROSTER = [
    ("Nayana", Shift.MORNING, ["Sala Verde", "EP", "UTI 3", "UC1", "Necrotério", "P3", "P6", "P9", "P11(229,230,231,232)"]),
    ("Cleonice", Shift.MORNING, ["Sala Vermelha", "UTI 1", "UTI 4", "UC2", "P1", "P4", "P7", "P11 (236,237, LEITOS EXTRAS)"]),
    ("Juliana", Shift.AFTERNOON, ["Sala Verde", "EP", "UTI 3", "UC1", "Necrotério", "P3", "P6", "P9", "P11 (233,234,235)"]),
    ("Shirley", Shift.AFTERNOON, ["Sala Vermelha", "UTI 1", "UTI 4", "UC2", "P1", "P4", "P7", "P11 (238,239)"]),
    ("Plantonista", Shift.ONCALL, ["Sala de Trauma", "UTI 2", "UTQ", "Centro Cirúrgico (CC)", "P2", "P5", "P8"]),
]


def provision(container: Container, *, default_password: str) -> int:
    """Create whatever is missing; returns the number of staff rows created."""

    created = 0
    password_hash = generate_password_hash(default_password)

    if not container.staff_repo.get_by_name(ADMIN_NAME):
        container.staff_repo.create(name=ADMIN_NAME, shift=Shift.MORNING, role=Role.ADMIN, password_hash=password_hash)
        created += 1

    for name, shift, sectors in ROSTER:
        if container.staff_repo.get_by_name(name):
            logger.info("skip %s (already provisioned)", name)
            continue
        staff_id = container.staff_repo.create(name=name, shift=shift, role=Role.STAFF, password_hash=password_hash)
        for sector_name in sectors:
            container.sectors_repo.create(name=sector_name, staff_id=staff_id)
        created += 1

    return created


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    settings = importlib.import_module(get_settings_module())
    default_password = str(getattr(settings, "DEFAULT_STAFF_PASSWORD", "1234"))
    container = build_container(
        db_config=dict(settings.DB_CONFIG),
        secret_key=settings.SECRET_KEY,
        default_password=default_password,
    )

    created = provision(container, default_password=default_password)
    print(f"OK: Seeded database -> {container.conn.config.describe()} (new staff={created})")


if __name__ == "__main__":
    main()

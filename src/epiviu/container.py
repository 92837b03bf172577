from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

from .common.datetime_utils import today_local
from .common.tokens import TokenService
from .core.constants import DEFAULT_STAFF_PASSWORD, DEFAULT_TOKEN_MAX_AGE_SECONDS
from .database.connection import DBConfig, DatabaseConnection
from .reports.mysql_report_repository import MySQLReportRepository
from .reports.repository import ReportRepository
from .reports.service import ReportService
from .sectors.mysql_sector_repository import MySQLSectorRepository
from .sectors.repository import SectorRepository
from .sectors.service import SectorService
from .staff.mysql_staff_repository import MySQLStaffRepository
from .staff.repository import StaffRepository
from .staff.service import AuthService, StaffService
from .visits.mysql_missed_visit_repository import MySQLMissedVisitRepository
from .visits.repository import MissedVisitRepository
from .visits.service import ToggleService


@dataclass(frozen=True)
class Container:
    staff_repo: StaffRepository
    sectors_repo: SectorRepository
    visits_repo: MissedVisitRepository
    reports_repo: ReportRepository

    auth_service: AuthService
    staff_service: StaffService
    sector_service: SectorService
    toggle_service: ToggleService
    report_service: ReportService

    conn: Optional[DatabaseConnection] = None


def assemble(
    *,
    staff_repo: StaffRepository,
    sectors_repo: SectorRepository,
    visits_repo: MissedVisitRepository,
    reports_repo: ReportRepository,
    secret_key: str,
    token_max_age: int = DEFAULT_TOKEN_MAX_AGE_SECONDS,
    default_password: str = DEFAULT_STAFF_PASSWORD,
    clock: Callable[[], date] = today_local,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services on top of any repository implementation."""

    tokens = TokenService(secret_key, max_age=token_max_age)
    return Container(
        staff_repo=staff_repo,
        sectors_repo=sectors_repo,
        visits_repo=visits_repo,
        reports_repo=reports_repo,
        auth_service=AuthService(staff_repo, tokens),
        staff_service=StaffService(staff_repo, default_password=default_password),
        sector_service=SectorService(sectors_repo, staff_repo),
        toggle_service=ToggleService(visits_repo, sectors_repo, clock=clock),
        report_service=ReportService(reports_repo, clock=clock),
        conn=conn,
    )


def build_container(
    *,
    db_config: dict,
    secret_key: str,
    token_max_age: int = DEFAULT_TOKEN_MAX_AGE_SECONDS,
    default_password: str = DEFAULT_STAFF_PASSWORD,
    clock: Callable[[], date] = today_local,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return assemble(
        staff_repo=MySQLStaffRepository(conn),
        sectors_repo=MySQLSectorRepository(conn),
        visits_repo=MySQLMissedVisitRepository(conn),
        reports_repo=MySQLReportRepository(conn),
        secret_key=secret_key,
        token_max_age=token_max_age,
        default_password=default_password,
        clock=clock,
        conn=conn,
    )

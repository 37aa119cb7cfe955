from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .directory.mysql_directory_repository import MySQLDirectoryRepository
from .directory.repository import DirectoryRepository
from .directory.service import DirectoryService
from .reports.mysql_report_repository import MySQLReportRepository
from .reports.repository import ReportRepository
from .reports.service import ReportService
from .users.mysql_profile_repository import MySQLProfileRepository
from .users.repository import ProfileRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    profiles_repo: ProfileRepository
    directory_repo: DirectoryRepository
    attendance_repo: AttendanceRepository
    reports_repo: ReportRepository

    auth_service: AuthService
    directory_service: DirectoryService
    attendance_service: AttendanceService
    report_service: ReportService

    conn: Optional[DatabaseConnection] = None


def build_services(
    *,
    profiles_repo: ProfileRepository,
    directory_repo: DirectoryRepository,
    attendance_repo: AttendanceRepository,
    reports_repo: ReportRepository,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    return Container(
        profiles_repo=profiles_repo,
        directory_repo=directory_repo,
        attendance_repo=attendance_repo,
        reports_repo=reports_repo,
        auth_service=AuthService(profiles_repo),
        directory_service=DirectoryService(directory_repo),
        attendance_service=AttendanceService(attendance_repo, directory_repo),
        report_service=ReportService(reports_repo),
        conn=conn,
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return build_services(
        profiles_repo=MySQLProfileRepository(conn),
        directory_repo=MySQLDirectoryRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        reports_repo=MySQLReportRepository(conn),
        conn=conn,
    )

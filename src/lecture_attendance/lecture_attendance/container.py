from __future__ import annotations

from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, Optional

from .common.auth import AuthorizationPredicate, roles_predicate
from .core.enums import Role
from .database.connection import DBConfig, DatabaseConnection
from .lectures.mysql_lecture_repository import MySQLLectureRepository
from .lectures.service import LectureService
from .modules.mysql_module_repository import MySQLModuleRepository
from .modules.service import ModuleService
from .records.mysql_record_repository import MySQLAttendanceRecordRepository
from .records.service import AttendanceRecordService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.service import StudentService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    is_authorized: AuthorizationPredicate

    students_repo: MySQLStudentRepository
    modules_repo: MySQLModuleRepository
    lectures_repo: MySQLLectureRepository
    records_repo: MySQLAttendanceRecordRepository

    student_service: StudentService
    module_service: ModuleService
    lecture_service: LectureService
    record_service: AttendanceRecordService

    # Runs records-table deletes so the page never waits on the store.
    delete_executor: Executor


def build_container(
    *,
    db_config: dict,
    authorized_roles: Iterable[Role] = (Role.ADMIN, Role.STAFF),
    is_authorized: Optional[AuthorizationPredicate] = None,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_mapping(db_config))
    is_authorized = is_authorized or roles_predicate(authorized_roles)

    students_repo = MySQLStudentRepository(conn)
    modules_repo = MySQLModuleRepository(conn)
    lectures_repo = MySQLLectureRepository(conn)
    records_repo = MySQLAttendanceRecordRepository(conn)

    return Container(
        conn=conn,
        is_authorized=is_authorized,
        students_repo=students_repo,
        modules_repo=modules_repo,
        lectures_repo=lectures_repo,
        records_repo=records_repo,
        student_service=StudentService(students_repo, is_authorized=is_authorized),
        module_service=ModuleService(modules_repo, is_authorized=is_authorized),
        lecture_service=LectureService(lectures_repo, is_authorized=is_authorized),
        record_service=AttendanceRecordService(
            records_repo,
            students_repo,
            lectures_repo,
            modules_repo,
            is_authorized=is_authorized,
        ),
        delete_executor=ThreadPoolExecutor(max_workers=4, thread_name_prefix="record-delete"),
    )

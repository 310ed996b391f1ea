from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.auth import AuthorizationPredicate, Caller, protected_procedure
from ..common.validators import require_non_empty
from ..lectures.repository import LectureRepository
from ..modules.repository import ModuleRepository
from ..students.repository import StudentRepository
from .model import AttendanceRecord, AttendanceRecordWithExtraInfo
from .presentation import join_extra_info
from .repository import AttendanceRecordRepository

logger = logging.getLogger(__name__)


class AttendanceRecordService:
    """Use cases: list attendance records for the dashboard and delete them."""

    def __init__(
        self,
        records: AttendanceRecordRepository,
        students: StudentRepository,
        lectures: LectureRepository,
        modules: ModuleRepository,
        *,
        is_authorized: AuthorizationPredicate,
    ):
        self._records = records
        self._students = students
        self._lectures = lectures
        self._modules = modules
        self._is_authorized = is_authorized

    @protected_procedure
    def get_all_attendance_records(self, caller: Optional[Caller]) -> Sequence[AttendanceRecord]:
        return self._records.find_all()

    @protected_procedure
    def get_attendance_record_count(self, caller: Optional[Caller]) -> int:
        return self._records.count()

    @protected_procedure
    def get_all_attendance_records_with_extra_info(
        self, caller: Optional[Caller]
    ) -> list[AttendanceRecordWithExtraInfo]:
        return join_extra_info(
            self._records.find_all(),
            self._students.find_all(),
            self._lectures.find_all(),
            self._modules.find_all(),
        )

    @protected_procedure
    def delete_attendance_record_by_id(self, caller: Optional[Caller], *, attendance_record_id: str) -> AttendanceRecord:
        attendance_record_id = require_non_empty(attendance_record_id, "attendanceRecordId")
        deleted = self._records.delete_by_id(attendance_record_id)
        logger.info("Deleted attendance record %s", deleted.attendance_record_id)
        return deleted

from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRecordRepository(Protocol):
    def find_all(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_by_id(self, attendance_record_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError

    def create(
        self,
        *,
        student_id: str,
        lecture_id: str,
        status: AttendanceStatus,
        timestamp: datetime,
        attendance_record_id: Optional[str] = None,
    ) -> AttendanceRecord:
        """Used by the check-in flow and seeding; an id is generated when none is given."""

        raise NotImplementedError

    def delete_by_id(self, attendance_record_id: str) -> AttendanceRecord:
        raise NotImplementedError

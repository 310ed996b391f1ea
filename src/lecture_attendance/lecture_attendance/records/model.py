from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..common.datetime_utils import to_iso
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one student's attendance at one lecture."""

    attendance_record_id: str
    student_id: str
    lecture_id: str
    status: AttendanceStatus
    timestamp: datetime

    def to_dict(self) -> dict:
        return {
            "attendanceRecordId": self.attendance_record_id,
            "studentId": self.student_id,
            "lectureId": self.lecture_id,
            "status": self.status.value,
            "timestamp": to_iso(self.timestamp),
        }


@dataclass(frozen=True)
class AttendanceRecordWithExtraInfo:
    """Read-model for the records table.

    student_full_name and module_name are computed at read time and never stored.
    """

    record: AttendanceRecord
    student_full_name: str
    module_name: str

    def to_dict(self) -> dict:
        out = self.record.to_dict()
        out["studentFullName"] = self.student_full_name
        out["moduleName"] = self.module_name
        return out

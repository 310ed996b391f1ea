from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Staff roles carried by the session."""

    ADMIN = "admin"
    STAFF = "staff"


class AttendanceStatus(str, Enum):
    """Attendance status as stored in the attendance_records table."""

    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"

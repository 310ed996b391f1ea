from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetch_count, fetchall, fetchone, translate_integrity_errors
from .model import AttendanceRecord
from .repository import AttendanceRecordRepository

_COLUMNS = "attendance_record_id, student_id, lecture_id, status, timestamp"


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_record_id=r["attendance_record_id"],
        student_id=r["student_id"],
        lecture_id=r["lecture_id"],
        status=AttendanceStatus(r["status"]),
        timestamp=r["timestamp"],
    )


class MySQLAttendanceRecordRepository(AttendanceRecordRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_all(self) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records ORDER BY timestamp DESC")
            return [_to_record(r) for r in fetchall(cur)]

    def get_by_id(self, attendance_record_id: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE attendance_record_id=%s",
                (attendance_record_id,),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM attendance_records")
            return fetch_count(cur)

    def create(
        self,
        *,
        student_id: str,
        lecture_id: str,
        status: AttendanceStatus,
        timestamp: datetime,
        attendance_record_id: Optional[str] = None,
    ) -> AttendanceRecord:
        record_id = attendance_record_id or uuid.uuid4().hex
        with translate_integrity_errors("AttendanceRecord"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(attendance_record_id, student_id, lecture_id, status, timestamp)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (record_id, student_id, lecture_id, status.value, timestamp),
            )
        return AttendanceRecord(
            attendance_record_id=record_id,
            student_id=student_id,
            lecture_id=lecture_id,
            status=status,
            timestamp=timestamp,
        )

    def delete_by_id(self, attendance_record_id: str) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE attendance_record_id=%s FOR UPDATE",
                (attendance_record_id,),
            )
            r = fetchone(cur)
            if not r:
                raise NotFoundError(f"Attendance record {attendance_record_id} not found")
            cur.execute("DELETE FROM attendance_records WHERE attendance_record_id=%s", (attendance_record_id,))
            return _to_record(r)

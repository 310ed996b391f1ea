from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.exceptions import NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetch_count, fetchall, fetchone, translate_integrity_errors
from .model import Student
from .repository import StudentRepository

_COLUMNS = "student_id, student_card_id, first_name, last_name"


def _to_student(r: Dict[str, Any]) -> Student:
    return Student(
        student_id=r["student_id"],
        student_card_id=r["student_card_id"],
        first_name=r["first_name"],
        last_name=r["last_name"],
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_all(self) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students ORDER BY student_id")
            return [_to_student(r) for r in fetchall(cur)]

    def find_all_ids(self) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT student_id FROM students ORDER BY student_id")
            return [r["student_id"] for r in fetchall(cur)]

    def get_by_id(self, student_id: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE student_id=%s", (student_id,))
            r = fetchone(cur)
            return _to_student(r) if r else None

    def get_by_card_id(self, student_card_id: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE student_card_id=%s LIMIT 1", (student_card_id,))
            r = fetchone(cur)
            return _to_student(r) if r else None

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM students")
            return fetch_count(cur)

    def create(self, *, student_id: str, student_card_id: str, first_name: str, last_name: str) -> Student:
        with translate_integrity_errors("Student"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO students(student_id, student_card_id, first_name, last_name)
                VALUES(%s,%s,%s,%s)
                """,
                (student_id, student_card_id, first_name, last_name),
            )
        return Student(
            student_id=student_id,
            student_card_id=student_card_id,
            first_name=first_name,
            last_name=last_name,
        )

    def delete_by_id(self, student_id: str) -> Student:
        with translate_integrity_errors("Student"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE student_id=%s FOR UPDATE", (student_id,))
            r = fetchone(cur)
            if not r:
                raise NotFoundError(f"Student {student_id} not found")
            cur.execute("DELETE FROM students WHERE student_id=%s", (student_id,))
            return _to_student(r)

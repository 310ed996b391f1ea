from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..core.exceptions import NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetch_count, fetchall, fetchone, translate_integrity_errors
from .model import Lecture, LectureIdWithModuleName, LectureWithModuleName
from .repository import LectureRepository


def _to_lecture(r: Dict[str, Any]) -> Lecture:
    return Lecture(
        lecture_id=r["lecture_id"],
        start_time=r["start_time"],
        end_time=r["end_time"],
        module_id=r["module_id"],
    )


class MySQLLectureRepository(LectureRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_all(self) -> Sequence[Lecture]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT lecture_id, start_time, end_time, module_id FROM lectures ORDER BY start_time")
            return [_to_lecture(r) for r in fetchall(cur)]

    def find_all_with_module_names(self) -> Sequence[LectureWithModuleName]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT l.lecture_id, l.start_time, l.end_time, l.module_id, m.module_name
                FROM lectures l
                JOIN modules m ON m.module_id = l.module_id
                ORDER BY l.start_time
                """
            )
            return [LectureWithModuleName(lecture=_to_lecture(r), module_name=r["module_name"]) for r in fetchall(cur)]

    def find_all_ids(self) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT lecture_id FROM lectures ORDER BY lecture_id")
            return [r["lecture_id"] for r in fetchall(cur)]

    def find_ids_with_module_names(self) -> Sequence[LectureIdWithModuleName]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT l.lecture_id, m.module_name
                FROM lectures l
                JOIN modules m ON m.module_id = l.module_id
                ORDER BY l.lecture_id
                """
            )
            return [
                LectureIdWithModuleName(lecture_id=r["lecture_id"], module_name=r["module_name"])
                for r in fetchall(cur)
            ]

    def get_by_id(self, lecture_id: str) -> Optional[Lecture]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT lecture_id, start_time, end_time, module_id FROM lectures WHERE lecture_id=%s",
                (lecture_id,),
            )
            r = fetchone(cur)
            return _to_lecture(r) if r else None

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM lectures")
            return fetch_count(cur)

    def create(self, *, lecture_id: str, start_time: datetime, end_time: datetime, module_id: str) -> Lecture:
        with translate_integrity_errors("Lecture"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO lectures(lecture_id, start_time, end_time, module_id)
                VALUES(%s,%s,%s,%s)
                """,
                (lecture_id, start_time, end_time, module_id),
            )
        return Lecture(lecture_id=lecture_id, start_time=start_time, end_time=end_time, module_id=module_id)

    def delete_by_id(self, lecture_id: str) -> Lecture:
        with translate_integrity_errors("Lecture"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT lecture_id, start_time, end_time, module_id FROM lectures WHERE lecture_id=%s FOR UPDATE",
                (lecture_id,),
            )
            r = fetchone(cur)
            if not r:
                raise NotFoundError(f"Lecture {lecture_id} not found")
            cur.execute("DELETE FROM lectures WHERE lecture_id=%s", (lecture_id,))
            return _to_lecture(r)

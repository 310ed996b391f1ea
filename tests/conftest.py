from __future__ import annotations

import os
from concurrent.futures import Executor, Future
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

import pytest

from src.lecture_attendance.lecture_attendance.common.auth import Caller, roles_predicate
from src.lecture_attendance.lecture_attendance.container import Container
from src.lecture_attendance.lecture_attendance.core.enums import AttendanceStatus, Role
from src.lecture_attendance.lecture_attendance.core.exceptions import ConflictError, DependencyError, NotFoundError
from src.lecture_attendance.lecture_attendance.lectures.model import (
    Lecture,
    LectureIdWithModuleName,
    LectureWithModuleName,
)
from src.lecture_attendance.lecture_attendance.lectures.service import LectureService
from src.lecture_attendance.lecture_attendance.modules.model import Module
from src.lecture_attendance.lecture_attendance.modules.service import ModuleService
from src.lecture_attendance.lecture_attendance.records.model import AttendanceRecord
from src.lecture_attendance.lecture_attendance.records.service import AttendanceRecordService
from src.lecture_attendance.lecture_attendance.students.model import Student
from src.lecture_attendance.lecture_attendance.students.service import StudentService

os.environ.setdefault("APP_ENV", "testing")


@dataclass
class InMemoryStore:
    """Rows of all four tables, with the foreign keys enforced like MySQL would."""

    students: dict[str, Student] = field(default_factory=dict)
    modules: dict[str, Module] = field(default_factory=dict)
    lectures: dict[str, Lecture] = field(default_factory=dict)
    records: dict[str, AttendanceRecord] = field(default_factory=dict)
    calls: int = 0


class InMemoryStudents:
    def __init__(self, store: InMemoryStore):
        self._store = store

    def find_all(self):
        self._store.calls += 1
        return list(self._store.students.values())

    def find_all_ids(self):
        self._store.calls += 1
        return list(self._store.students.keys())

    def get_by_id(self, student_id: str) -> Optional[Student]:
        self._store.calls += 1
        return self._store.students.get(student_id)

    def get_by_card_id(self, student_card_id: str) -> Optional[Student]:
        self._store.calls += 1
        for s in self._store.students.values():
            if s.student_card_id == student_card_id:
                return s
        return None

    def count(self) -> int:
        self._store.calls += 1
        return len(self._store.students)

    def create(self, *, student_id, student_card_id, first_name, last_name) -> Student:
        self._store.calls += 1
        taken_cards = {s.student_card_id for s in self._store.students.values()}
        if student_id in self._store.students or student_card_id in taken_cards:
            raise ConflictError("Student already exists")
        student = Student(student_id, student_card_id, first_name, last_name)
        self._store.students[student_id] = student
        return student

    def delete_by_id(self, student_id: str) -> Student:
        self._store.calls += 1
        if student_id not in self._store.students:
            raise NotFoundError(f"Student {student_id} not found")
        if any(r.student_id == student_id for r in self._store.records.values()):
            raise DependencyError("Student is still referenced by other rows")
        return self._store.students.pop(student_id)


class InMemoryModules:
    def __init__(self, store: InMemoryStore):
        self._store = store

    def find_all(self):
        self._store.calls += 1
        return list(self._store.modules.values())

    def get_by_id(self, module_id: str) -> Optional[Module]:
        self._store.calls += 1
        return self._store.modules.get(module_id)


class InMemoryLectures:
    def __init__(self, store: InMemoryStore):
        self._store = store

    def find_all(self):
        self._store.calls += 1
        return list(self._store.lectures.values())

    def find_all_with_module_names(self):
        self._store.calls += 1
        return [
            LectureWithModuleName(lecture=lec, module_name=self._store.modules[lec.module_id].module_name)
            for lec in self._store.lectures.values()
        ]

    def find_all_ids(self):
        self._store.calls += 1
        return list(self._store.lectures.keys())

    def find_ids_with_module_names(self):
        self._store.calls += 1
        return [
            LectureIdWithModuleName(lecture_id=lec.lecture_id, module_name=self._store.modules[lec.module_id].module_name)
            for lec in self._store.lectures.values()
        ]

    def get_by_id(self, lecture_id: str) -> Optional[Lecture]:
        self._store.calls += 1
        return self._store.lectures.get(lecture_id)

    def count(self) -> int:
        self._store.calls += 1
        return len(self._store.lectures)

    def create(self, *, lecture_id, start_time, end_time, module_id) -> Lecture:
        self._store.calls += 1
        if lecture_id in self._store.lectures:
            raise ConflictError("Lecture already exists")
        if module_id not in self._store.modules:
            raise DependencyError("Lecture references a row that does not exist")
        lecture = Lecture(lecture_id, start_time, end_time, module_id)
        self._store.lectures[lecture_id] = lecture
        return lecture

    def delete_by_id(self, lecture_id: str) -> Lecture:
        self._store.calls += 1
        if lecture_id not in self._store.lectures:
            raise NotFoundError(f"Lecture {lecture_id} not found")
        if any(r.lecture_id == lecture_id for r in self._store.records.values()):
            raise DependencyError("Lecture is still referenced by other rows")
        return self._store.lectures.pop(lecture_id)


class InMemoryRecords:
    def __init__(self, store: InMemoryStore):
        self._store = store

    def find_all(self):
        self._store.calls += 1
        return list(self._store.records.values())

    def get_by_id(self, attendance_record_id: str) -> Optional[AttendanceRecord]:
        self._store.calls += 1
        return self._store.records.get(attendance_record_id)

    def count(self) -> int:
        self._store.calls += 1
        return len(self._store.records)

    def create(self, *, student_id, lecture_id, status, timestamp, attendance_record_id=None) -> AttendanceRecord:
        self._store.calls += 1
        record_id = attendance_record_id or f"R{len(self._store.records) + 1}"
        if record_id in self._store.records:
            raise ConflictError("AttendanceRecord already exists")
        if student_id not in self._store.students or lecture_id not in self._store.lectures:
            raise DependencyError("AttendanceRecord references a row that does not exist")
        record = AttendanceRecord(record_id, student_id, lecture_id, AttendanceStatus(status), timestamp)
        self._store.records[record_id] = record
        return record

    def delete_by_id(self, attendance_record_id: str) -> AttendanceRecord:
        self._store.calls += 1
        if attendance_record_id not in self._store.records:
            raise NotFoundError(f"Attendance record {attendance_record_id} not found")
        return self._store.records.pop(attendance_record_id)


class ManualExecutor(Executor):
    """Holds submitted jobs until the test runs them."""

    def __init__(self):
        self.jobs: list = []

    def submit(self, fn, /, *args, **kwargs) -> Future:
        fut: Future = Future()
        self.jobs.append((fut, fn, args, kwargs))
        return fut

    def run_pending(self) -> None:
        jobs, self.jobs = self.jobs, []
        for fut, fn, args, kwargs in jobs:
            if not fut.set_running_or_notify_cancel():
                continue
            try:
                fut.set_result(fn(*args, **kwargs))
            except Exception as e:
                fut.set_exception(e)


@dataclass
class Repos:
    students: InMemoryStudents
    modules: InMemoryModules
    lectures: InMemoryLectures
    records: InMemoryRecords


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def repos(store) -> Repos:
    return Repos(
        students=InMemoryStudents(store),
        modules=InMemoryModules(store),
        lectures=InMemoryLectures(store),
        records=InMemoryRecords(store),
    )


@pytest.fixture
def is_authorized():
    return roles_predicate([Role.ADMIN, Role.STAFF])


@pytest.fixture
def staff() -> Caller:
    return Caller(user_id="u1", role=Role.STAFF)


@pytest.fixture
def delete_executor() -> ManualExecutor:
    return ManualExecutor()


@pytest.fixture
def container(repos, is_authorized, delete_executor) -> Container:
    return Container(
        conn=None,
        is_authorized=is_authorized,
        students_repo=repos.students,
        modules_repo=repos.modules,
        lectures_repo=repos.lectures,
        records_repo=repos.records,
        student_service=StudentService(repos.students, is_authorized=is_authorized),
        module_service=ModuleService(repos.modules, is_authorized=is_authorized),
        lecture_service=LectureService(repos.lectures, is_authorized=is_authorized),
        record_service=AttendanceRecordService(
            repos.records,
            repos.students,
            repos.lectures,
            repos.modules,
            is_authorized=is_authorized,
        ),
        delete_executor=delete_executor,
    )


@pytest.fixture
def scenario(store):
    """Ann Lee, late to the first CS101 lecture."""
    store.students["S1"] = Student("S1", "card1", "Ann", "Lee")
    store.modules["M1"] = Module("M1", "CS101")
    store.lectures["L1"] = Lecture("L1", datetime(2024, 1, 10, 9, 0), datetime(2024, 1, 10, 10, 0), "M1")
    store.records["R1"] = AttendanceRecord("R1", "S1", "L1", AttendanceStatus.LATE, datetime(2024, 1, 10, 9, 5))
    return store


@pytest.fixture
def app(container):
    from src.lecture_attendance.lecture_attendance.main import create_app

    app = create_app(container=container)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def staff_client(client):
    with client.session_transaction() as sess:
        sess["user_id"] = "u1"
        sess["role"] = Role.STAFF.value
    return client

from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.auth import AuthorizationPredicate, Caller, protected_procedure
from ..common.validators import require_max_length, require_non_empty
from ..core.constants import STUDENT_ID_MAX_LENGTH
from .model import Student
from .repository import StudentRepository

logger = logging.getLogger(__name__)


class StudentService:
    """Use cases: create, browse and delete students (staff)."""

    def __init__(self, students: StudentRepository, *, is_authorized: AuthorizationPredicate):
        self._students = students
        self._is_authorized = is_authorized

    @protected_procedure
    def create_student(
        self,
        caller: Optional[Caller],
        *,
        first_name: str,
        last_name: str,
        student_id: str,
        student_card_id: str,
    ) -> Student:
        first_name = require_non_empty(first_name, "firstName")
        last_name = require_non_empty(last_name, "lastName")
        student_id = require_max_length(require_non_empty(student_id, "studentId"), "Student ID", STUDENT_ID_MAX_LENGTH)
        student_card_id = require_non_empty(student_card_id, "studentCardId")

        return self._students.create(
            student_id=student_id,
            student_card_id=student_card_id,
            first_name=first_name,
            last_name=last_name,
        )

    @protected_procedure
    def get_all_students(self, caller: Optional[Caller]) -> Sequence[Student]:
        return self._students.find_all()

    @protected_procedure
    def get_student_by_id(self, caller: Optional[Caller], card_id: str) -> Optional[Student]:
        """Look a student up by the id printed on their card (studentCardId)."""
        card_id = require_max_length(require_non_empty(card_id, "id"), "id", STUDENT_ID_MAX_LENGTH)
        return self._students.get_by_card_id(card_id)

    @protected_procedure
    def get_student_count(self, caller: Optional[Caller]) -> int:
        return self._students.count()

    @protected_procedure
    def get_all_student_ids(self, caller: Optional[Caller]) -> list[dict]:
        return [{"studentId": sid} for sid in self._students.find_all_ids()]

    @protected_procedure
    def delete_student_by_id(
        self,
        caller: Optional[Caller],
        *,
        student_id: str,
        first_name: Optional[str] = None,
    ) -> Student:
        student_id = require_non_empty(student_id, "studentId")
        # firstName is accepted for the confirmation dialog but never used to match.
        if first_name is not None:
            require_non_empty(first_name, "firstName")

        deleted = self._students.delete_by_id(student_id)
        logger.info("Deleted student %s", deleted.student_id)
        return deleted

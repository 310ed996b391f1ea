from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Student:
    """Domain entity: a student who can attend lectures.

    Note: Plain data object, no DB access here.
    """

    student_id: str
    student_card_id: str
    first_name: str
    last_name: str

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def to_dict(self) -> dict:
        return {
            "studentId": self.student_id,
            "studentCardId": self.student_card_id,
            "firstName": self.first_name,
            "lastName": self.last_name,
        }

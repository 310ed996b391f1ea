from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    """Repository interface for Student.

    Note: services depend on this interface, not on a concrete database.
    """

    def find_all(self) -> Sequence[Student]:
        raise NotImplementedError

    def find_all_ids(self) -> Sequence[str]:
        raise NotImplementedError

    def get_by_id(self, student_id: str) -> Optional[Student]:
        raise NotImplementedError

    def get_by_card_id(self, student_card_id: str) -> Optional[Student]:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError

    def create(self, *, student_id: str, student_card_id: str, first_name: str, last_name: str) -> Student:
        """Raises ConflictError when the id or the card id is taken."""

        raise NotImplementedError

    def delete_by_id(self, student_id: str) -> Student:
        """Delete and return the row; raises NotFoundError when it does not exist."""

        raise NotImplementedError

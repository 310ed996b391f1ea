from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Lecture, LectureIdWithModuleName, LectureWithModuleName


class LectureRepository(Protocol):
    def find_all(self) -> Sequence[Lecture]:
        raise NotImplementedError

    def find_all_with_module_names(self) -> Sequence[LectureWithModuleName]:
        raise NotImplementedError

    def find_all_ids(self) -> Sequence[str]:
        raise NotImplementedError

    def find_ids_with_module_names(self) -> Sequence[LectureIdWithModuleName]:
        raise NotImplementedError

    def get_by_id(self, lecture_id: str) -> Optional[Lecture]:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError

    def create(self, *, lecture_id: str, start_time: datetime, end_time: datetime, module_id: str) -> Lecture:
        """Raises ConflictError on a taken id and DependencyError on an unknown module."""

        raise NotImplementedError

    def delete_by_id(self, lecture_id: str) -> Lecture:
        raise NotImplementedError

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..common.datetime_utils import to_iso


@dataclass(frozen=True)
class Lecture:
    """Domain entity: one scheduled lecture of a module."""

    lecture_id: str
    start_time: datetime
    end_time: datetime
    module_id: str

    def to_dict(self) -> dict:
        return {
            "lectureId": self.lecture_id,
            "startTime": to_iso(self.start_time),
            "endTime": to_iso(self.end_time),
            "moduleId": self.module_id,
        }


@dataclass(frozen=True)
class LectureWithModuleName:
    """Read-model: a lecture with its module's name attached."""

    lecture: Lecture
    module_name: str

    def to_dict(self) -> dict:
        out = self.lecture.to_dict()
        out["Module"] = {"moduleName": self.module_name}
        return out


@dataclass(frozen=True)
class LectureIdWithModuleName:
    lecture_id: str
    module_name: str

    def to_dict(self) -> dict:
        return {"lectureId": self.lecture_id, "Module": {"moduleName": self.module_name}}

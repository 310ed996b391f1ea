from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.auth import AuthorizationPredicate, Caller, protected_procedure
from ..common.validators import require_datetime, require_non_empty
from ..core.constants import LECTURE_CREATE_FAILED_MESSAGE
from ..core.exceptions import InternalError, ValidationError
from .model import Lecture, LectureIdWithModuleName, LectureWithModuleName
from .repository import LectureRepository

logger = logging.getLogger(__name__)


class LectureService:
    """Use cases: schedule, browse and delete lectures."""

    def __init__(self, lectures: LectureRepository, *, is_authorized: AuthorizationPredicate):
        self._lectures = lectures
        self._is_authorized = is_authorized

    @protected_procedure
    def get_all_lectures(self, caller: Optional[Caller]) -> Sequence[Lecture]:
        return self._lectures.find_all()

    @protected_procedure
    def get_all_lectures_with_module_names(self, caller: Optional[Caller]) -> Sequence[LectureWithModuleName]:
        return self._lectures.find_all_with_module_names()

    @protected_procedure
    def get_lecture_count(self, caller: Optional[Caller]) -> int:
        return self._lectures.count()

    @protected_procedure
    def get_all_lecture_ids(self, caller: Optional[Caller]) -> list[dict]:
        return [{"lectureId": lid} for lid in self._lectures.find_all_ids()]

    @protected_procedure
    def get_lecture_ids_with_module_names(self, caller: Optional[Caller]) -> Sequence[LectureIdWithModuleName]:
        return self._lectures.find_ids_with_module_names()

    @protected_procedure
    def create_new_lecture(
        self,
        caller: Optional[Caller],
        *,
        lecture_id: str,
        start_time: datetime,
        end_time: datetime,
        module_id: str,
    ) -> Lecture:
        """Create a lecture.

        Input problems are reported as ValidationError. Anything the store
        rejects (taken id, unknown module, connection failure) is logged and
        reported to the caller only as a generic InternalError.
        """
        lecture_id = require_non_empty(lecture_id, "lectureId")
        start_time = require_datetime(start_time, "startTime")
        end_time = require_datetime(end_time, "endTime")
        module_id = require_non_empty(module_id, "moduleId")
        if end_time < start_time:
            raise ValidationError("endTime must not be before startTime")

        try:
            return self._lectures.create(
                lecture_id=lecture_id,
                start_time=start_time,
                end_time=end_time,
                module_id=module_id,
            )
        except Exception as e:
            logger.error("Error creating lecture %s: %s", lecture_id, e)
            raise InternalError(LECTURE_CREATE_FAILED_MESSAGE) from None

    @protected_procedure
    def delete_lecture_record_by_id(self, caller: Optional[Caller], *, lecture_id: str) -> Lecture:
        lecture_id = require_non_empty(lecture_id, "lectureId")
        deleted = self._lectures.delete_by_id(lecture_id)
        logger.info("Deleted lecture %s", deleted.lecture_id)
        return deleted

from __future__ import annotations

import logging
from concurrent.futures import Executor, Future
from typing import Callable, Optional, Sequence

from ..common.auth import Caller
from ..core.constants import NOT_IMPLEMENTED_MESSAGE
from .model import AttendanceRecordWithExtraInfo
from .presentation import RecordRowUI, build_rows
from .service import AttendanceRecordService
from .tracker import DeleteProgressTracker

logger = logging.getLogger(__name__)

DeleteDispatcher = Callable[[str], Future]


def service_dispatcher(executor: Executor, service: AttendanceRecordService, caller: Optional[Caller]) -> DeleteDispatcher:
    """Issue deletes on `executor` so the caller never waits for the store."""

    def dispatch(record_id: str) -> Future:
        return executor.submit(service.delete_attendance_record_by_id, caller, attendance_record_id=record_id)

    return dispatch


class RecordTable:
    """Client-side records table: rows plus the view / edit / delete row actions.

    The row list is a snapshot; callers refetch it once a delete has settled.
    """

    def __init__(
        self,
        rows: Sequence[AttendanceRecordWithExtraInfo],
        *,
        delete_record: DeleteDispatcher,
        tracker: Optional[DeleteProgressTracker] = None,
        notify: Optional[Callable[[str], None]] = None,
    ):
        self._rows = list(rows)
        self._delete_record = delete_record
        self.tracker = tracker or DeleteProgressTracker()
        self._notify = notify or (lambda message: logger.warning("%s", message))

    def replace_rows(self, rows: Sequence[AttendanceRecordWithExtraInfo]) -> None:
        self._rows = list(rows)

    def rows_ui(self) -> list[RecordRowUI]:
        return build_rows(self._rows, id_being_deleted=self.tracker.id_being_deleted)

    def view_info(self, record_id: str) -> str:
        # TODO: point at the record detail page once it exists.
        return "#"

    def edit(self, record_id: str) -> str:
        self._notify(NOT_IMPLEMENTED_MESSAGE)
        return NOT_IMPLEMENTED_MESSAGE

    def delete(self, record_id: str) -> Optional[Future]:
        """Start deleting `record_id` without waiting for the store.

        A row that is already being deleted is not dispatched again; None is
        returned instead of a second future.
        """
        if not self.tracker.begin(record_id):
            logger.info("Delete of attendance record %s already in progress", record_id)
            return None
        try:
            future = self._delete_record(record_id)
        except Exception:
            self.tracker.settle(record_id)
            raise
        future.add_done_callback(lambda f: self._settle(record_id, f))
        return future

    def _settle(self, record_id: str, future: Future) -> None:
        self.tracker.settle(record_id)
        if not future.cancelled() and future.exception() is not None:
            self._notify(f"Failed to delete attendance record {record_id}: {future.exception()}")

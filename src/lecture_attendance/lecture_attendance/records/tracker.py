from __future__ import annotations

import threading
from typing import Callable, Optional

IDLE = "idle"
DELETING = "deleting"


class DeleteProgressTracker:
    """Single-slot record of which attendance record is being deleted.

    States are `idle` (no id) and `deleting(id)`. Starting a delete while
    another is in flight replaces the tracked id; it never blocks the call.
    Starting the delete that is already tracked is refused.
    Completion callbacks may arrive from worker threads.
    """

    def __init__(self, on_change: Optional[Callable[[Optional[str]], None]] = None):
        self._lock = threading.Lock()
        self._id_being_deleted: Optional[str] = None
        self._on_change = on_change

    @property
    def id_being_deleted(self) -> Optional[str]:
        return self._id_being_deleted

    @property
    def state(self) -> str:
        return IDLE if self._id_being_deleted is None else DELETING

    def is_deleting(self, record_id: str) -> bool:
        return self._id_being_deleted is not None and self._id_being_deleted == record_id

    def begin(self, record_id: str) -> bool:
        """Track `record_id` as the row being deleted.

        Returns False, changing nothing, when that row is already tracked.
        """
        with self._lock:
            if self._id_being_deleted == record_id:
                return False
            self._id_being_deleted = record_id
        self._notify()
        return True

    def settle(self, record_id: str) -> bool:
        """Return to idle if `record_id` is still the tracked one.

        A settle for an older delete leaves a newer delete's progress showing.
        """
        with self._lock:
            if self._id_being_deleted != record_id:
                return False
            self._id_being_deleted = None
        self._notify()
        return True

    def _notify(self) -> None:
        if self._on_change:
            self._on_change(self._id_being_deleted)

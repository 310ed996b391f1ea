from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import format_timestamp
from ..core.enums import AttendanceStatus
from ..lectures.model import Lecture
from ..modules.model import Module
from ..students.model import Student
from .model import AttendanceRecord, AttendanceRecordWithExtraInfo


@dataclass(frozen=True)
class Badge:
    text: str
    color: str
    icon: Optional[str] = None


# present -> affirmative, late -> cautionary, absent -> negative
_STATUS_BADGES = {
    AttendanceStatus.PRESENT: ("green", "check-check"),
    AttendanceStatus.LATE: ("amber", "check"),
    AttendanceStatus.ABSENT: ("red", "x"),
}

DELETE_ICON = "trash"
DELETING_ICON = "loader"


@dataclass(frozen=True)
class RecordRowUI:
    attendance_record_id: str
    student_id: str
    student_name: str
    lecture_id: str
    module_badge: Badge
    status_badge: Badge
    timestamp: str
    deleting: bool

    @property
    def delete_icon(self) -> str:
        return DELETING_ICON if self.deleting else DELETE_ICON

    @property
    def view_info_href(self) -> str:
        return "#"


def join_extra_info(
    records: Iterable[AttendanceRecord],
    students: Iterable[Student],
    lectures: Iterable[Lecture],
    modules: Iterable[Module],
) -> list[AttendanceRecordWithExtraInfo]:
    """Attach studentFullName and moduleName to each record.

    Pure projection over the three lookups; unresolved references give "".
    """
    names_by_student = {s.student_id: s.full_name for s in students}
    module_by_lecture = {lec.lecture_id: lec.module_id for lec in lectures}
    names_by_module = {m.module_id: m.module_name for m in modules}

    out: list[AttendanceRecordWithExtraInfo] = []
    for r in records:
        module_id = module_by_lecture.get(r.lecture_id)
        out.append(
            AttendanceRecordWithExtraInfo(
                record=r,
                student_full_name=names_by_student.get(r.student_id, ""),
                module_name=names_by_module.get(module_id, "") if module_id else "",
            )
        )
    return out


def status_badge(status: AttendanceStatus) -> Badge:
    color, icon = _STATUS_BADGES[status]
    return Badge(text=status.value.upper(), color=color, icon=icon)


def to_row_ui(row: AttendanceRecordWithExtraInfo, *, id_being_deleted: Optional[str] = None) -> RecordRowUI:
    r = row.record
    return RecordRowUI(
        attendance_record_id=r.attendance_record_id,
        student_id=r.student_id,
        student_name=row.student_full_name,
        lecture_id=r.lecture_id,
        module_badge=Badge(text=row.module_name, color="neutral"),
        status_badge=status_badge(r.status),
        timestamp=format_timestamp(r.timestamp),
        deleting=id_being_deleted is not None and id_being_deleted == r.attendance_record_id,
    )


def build_rows(
    rows: Sequence[AttendanceRecordWithExtraInfo],
    *,
    id_being_deleted: Optional[str] = None,
) -> list[RecordRowUI]:
    return [to_row_ui(row, id_being_deleted=id_being_deleted) for row in rows]

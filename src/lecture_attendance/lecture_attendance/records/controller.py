from __future__ import annotations

import threading
from functools import wraps
from typing import Callable, Optional, Sequence

from flask import Flask, flash, redirect, render_template, url_for

from ..common.auth import Caller
from ..common.web import current_caller, ok, procedure_input
from ..container import Container
from .model import AttendanceRecordWithExtraInfo
from .table import RecordTable, service_dispatcher
from .tracker import DeleteProgressTracker


def register(app: Flask, container: Container) -> None:
    svc = container.record_service

    # One delete slot per signed-in user, kept across requests.
    trackers: dict[str, DeleteProgressTracker] = {}
    trackers_lock = threading.Lock()

    def tracker_for(caller: Caller) -> DeleteProgressTracker:
        with trackers_lock:
            return trackers.setdefault(caller.user_id, DeleteProgressTracker())

    def record_table(
        caller: Caller,
        rows: Sequence[AttendanceRecordWithExtraInfo] = (),
        notify: Optional[Callable[[str], None]] = None,
    ) -> RecordTable:
        return RecordTable(
            rows,
            delete_record=service_dispatcher(container.delete_executor, svc, caller),
            tracker=tracker_for(caller),
            notify=notify,
        )

    def staff_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if not container.is_authorized(current_caller()):
                return render_template("403.html"), 403
            return view(*args, **kwargs)

        return wrapper

    @app.route("/api/trpc/attendanceRecord.getAllAttendanceRecords", endpoint="record_get_all")
    def get_all_attendance_records():
        return ok([r.to_dict() for r in svc.get_all_attendance_records(current_caller())])

    @app.route("/api/trpc/attendanceRecord.getAttendanceRecordCount", endpoint="record_count")
    def get_attendance_record_count():
        return ok(svc.get_attendance_record_count(current_caller()))

    @app.route(
        "/api/trpc/attendanceRecord.getAllAttendanceRecordsWithExtraInfo",
        endpoint="record_get_all_with_extra_info",
    )
    def get_all_attendance_records_with_extra_info():
        rows = svc.get_all_attendance_records_with_extra_info(current_caller())
        return ok([row.to_dict() for row in rows])

    @app.route(
        "/api/trpc/attendanceRecord.deleteAttendanceRecordById",
        methods=["POST"],
        endpoint="record_delete",
    )
    def delete_attendance_record_by_id():
        data = procedure_input()
        deleted = svc.delete_attendance_record_by_id(
            current_caller(),
            attendance_record_id=data.get("attendanceRecordId"),
        )
        return ok(deleted.to_dict())

    @app.route("/dashboard/records", endpoint="records")
    @staff_required
    def records_page():
        caller = current_caller()
        table = record_table(caller, svc.get_all_attendance_records_with_extra_info(caller))
        return render_template("records/record_table.html", rows=table.rows_ui(), active_page="records")

    @app.route("/dashboard/records/<record_id>/edit", methods=["POST"], endpoint="record_edit")
    @staff_required
    def edit_record(record_id: str):
        record_table(current_caller(), notify=lambda message: flash(message, "info")).edit(record_id)
        return redirect(url_for("records"))

    @app.route("/dashboard/records/<record_id>/delete", methods=["POST"], endpoint="record_delete_form")
    @staff_required
    def delete_record(record_id: str):
        if record_table(current_caller()).delete(record_id) is None:
            flash(f"Attendance record {record_id} is already being deleted.", "info")
        else:
            flash(f"Deleting attendance record {record_id}.", "info")
        return redirect(url_for("records"))

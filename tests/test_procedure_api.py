from __future__ import annotations

import mysql.connector
import pytest

from src.lecture_attendance.lecture_attendance.core.enums import Role
from src.lecture_attendance.lecture_attendance.core.exceptions import DependencyError


@pytest.mark.parametrize(
    "method, path",
    [
        ("get", "/api/trpc/student.getAllStudents"),
        ("get", "/api/trpc/lecture.getLectureCount"),
        ("get", "/api/trpc/attendanceRecord.getAllAttendanceRecordsWithExtraInfo"),
        ("post", "/api/trpc/student.createStudent"),
    ],
)
def test_procedures_require_a_session(client, store, method, path):
    resp = getattr(client, method)(path, json={"studentId": "way-too-long-id"})

    assert resp.status_code == 401
    assert resp.get_json() == {"success": False, "error": "UNAUTHORIZED", "message": "UNAUTHORIZED"}
    assert store.calls == 0


def test_role_outside_the_allowed_set_is_unauthorized(client):
    with client.session_transaction() as sess:
        sess["user_id"] = "u9"
        sess["role"] = "student"

    assert client.get("/api/trpc/student.getStudentCount").status_code == 401


def test_create_then_get_student_by_card_id(staff_client):
    resp = staff_client.post(
        "/api/trpc/student.createStudent",
        json={"firstName": "Ann", "lastName": "Lee", "studentId": "S1", "studentCardId": "card1"},
    )
    assert resp.status_code == 200
    assert resp.get_json()["data"] == {
        "studentId": "S1",
        "studentCardId": "card1",
        "firstName": "Ann",
        "lastName": "Lee",
    }

    found = staff_client.get("/api/trpc/student.getStudentById?input=card1").get_json()
    assert found == {"success": True, "data": resp.get_json()["data"]}


def test_long_student_id_is_bad_request(staff_client, store):
    resp = staff_client.post(
        "/api/trpc/student.createStudent",
        json={"firstName": "Ann", "lastName": "Lee", "studentId": "S12345678", "studentCardId": "card1"},
    )
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "VALIDATION"
    assert store.students == {}


def test_duplicate_student_is_conflict(staff_client, scenario):
    resp = staff_client.post(
        "/api/trpc/student.createStudent",
        json={"firstName": "Ann", "lastName": "Lee", "studentId": "S1", "studentCardId": "card9"},
    )
    assert resp.status_code == 409


def test_non_object_body_is_bad_request(staff_client):
    resp = staff_client.post("/api/trpc/attendanceRecord.deleteAttendanceRecordById", json=["R1"])
    assert resp.status_code == 400


def test_records_with_extra_info(staff_client, scenario):
    body = staff_client.get("/api/trpc/attendanceRecord.getAllAttendanceRecordsWithExtraInfo").get_json()

    assert body["success"] is True
    (row,) = body["data"]
    assert row["studentFullName"] == "Ann Lee"
    assert row["moduleName"] == "CS101"
    assert row["status"] == "late"


def test_delete_record_then_not_found(staff_client, scenario):
    path = "/api/trpc/attendanceRecord.deleteAttendanceRecordById"

    first = staff_client.post(path, json={"attendanceRecordId": "R1"})
    second = staff_client.post(path, json={"attendanceRecordId": "R1"})

    assert first.status_code == 200
    assert first.get_json()["data"]["attendanceRecordId"] == "R1"
    assert second.status_code == 404
    assert staff_client.get("/api/trpc/attendanceRecord.getAttendanceRecordCount").get_json()["data"] == 0


def test_delete_lecture_with_records_is_unprocessable(staff_client, scenario):
    resp = staff_client.post("/api/trpc/lecture.deleteLectureRecordById", json={"lectureId": "L1"})
    assert resp.status_code == 422
    assert resp.get_json()["error"] == "DEPENDENCY"


def test_create_lecture_and_list_with_module_names(staff_client, scenario):
    resp = staff_client.post(
        "/api/trpc/lecture.createNewLecture",
        json={"lectureId": "L2", "startTime": "2024-01-11T09:00:00", "endTime": "2024-01-11T10:00:00", "moduleId": "M1"},
    )
    assert resp.status_code == 200
    assert resp.get_json()["data"]["startTime"] == "2024-01-11T09:00:00"

    ids = staff_client.get("/api/trpc/lecture.getLectureIdsWithModuleNames").get_json()["data"]
    assert {"lectureId": "L2", "Module": {"moduleName": "CS101"}} in ids


def test_failed_lecture_create_is_generic_internal_error(staff_client, scenario):
    resp = staff_client.post(
        "/api/trpc/lecture.createNewLecture",
        json={"lectureId": "L2", "startTime": "2024-01-11T09:00:00", "endTime": "2024-01-11T10:00:00", "moduleId": "M9"},
    )
    assert resp.status_code == 500
    assert resp.get_json() == {"success": False, "error": "INTERNAL", "message": "Failed to create lecture"}


def test_mixed_utc_suffixes_create_a_lecture(staff_client, scenario):
    resp = staff_client.post(
        "/api/trpc/lecture.createNewLecture",
        json={"lectureId": "L2", "startTime": "2024-01-11T09:00:00Z", "endTime": "2024-01-11T10:00:00", "moduleId": "M1"},
    )

    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert (data["startTime"], data["endTime"]) == ("2024-01-11T09:00:00", "2024-01-11T10:00:00")


def test_offset_end_before_naive_start_is_bad_request(staff_client, scenario):
    resp = staff_client.post(
        "/api/trpc/lecture.createNewLecture",
        json={
            "lectureId": "L2",
            "startTime": "2024-01-11T09:00:00",
            "endTime": "2024-01-11T10:00:00+02:00",
            "moduleId": "M1",
        },
    )

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "VALIDATION"


def test_bad_datetime_is_bad_request(staff_client, scenario):
    resp = staff_client.post(
        "/api/trpc/lecture.createNewLecture",
        json={"lectureId": "L2", "startTime": "tomorrow", "endTime": "2024-01-11T10:00:00", "moduleId": "M1"},
    )
    assert resp.status_code == 400


def test_get_all_modules(staff_client, scenario):
    body = staff_client.get("/api/trpc/module.getAllModules").get_json()
    assert body["data"] == [{"moduleId": "M1", "moduleName": "CS101"}]


def test_records_page_renders_joined_row(staff_client, scenario):
    html = staff_client.get("/dashboard/records").get_data(as_text=True)

    assert "Ann Lee" in html
    assert "CS101" in html
    assert "LATE" in html
    assert "10-Jan-2024 09:05:00" in html


def test_records_page_is_forbidden_without_a_session(client):
    assert client.get("/dashboard/records").status_code == 403


def test_edit_flashes_not_implemented_and_keeps_the_record(staff_client, scenario):
    resp = staff_client.post("/dashboard/records/R1/edit", follow_redirects=True)

    assert "Not implemented yet" in resp.get_data(as_text=True)
    assert "R1" in scenario.records


def test_delete_form_shows_progress_until_the_delete_lands(staff_client, scenario, delete_executor):
    resp = staff_client.post("/dashboard/records/R1/delete", follow_redirects=True)
    html = resp.get_data(as_text=True)

    assert "Deleting attendance record R1." in html
    assert 'data-icon="loader"' in html
    assert "R1" in scenario.records

    delete_executor.run_pending()
    html = staff_client.get("/dashboard/records").get_data(as_text=True)

    assert scenario.records == {}
    assert 'data-icon="loader"' not in html


def test_second_delete_form_for_same_row_is_not_dispatched(staff_client, scenario, delete_executor):
    staff_client.post("/dashboard/records/R1/delete")
    resp = staff_client.post("/dashboard/records/R1/delete", follow_redirects=True)

    assert "Attendance record R1 is already being deleted." in resp.get_data(as_text=True)
    assert len(delete_executor.jobs) == 1


def test_delete_progress_is_per_user(app, staff_client, scenario):
    staff_client.post("/dashboard/records/R1/delete")

    other = app.test_client()
    with other.session_transaction() as sess:
        sess["user_id"] = "u2"
        sess["role"] = Role.STAFF.value
    html = other.get("/dashboard/records").get_data(as_text=True)

    assert 'data-icon="loader"' not in html


def test_failed_background_delete_returns_row_to_idle(staff_client, scenario, repos, delete_executor, monkeypatch):
    def refuse(attendance_record_id):
        raise DependencyError("AttendanceRecord is still referenced by other rows")

    monkeypatch.setattr(repos.records, "delete_by_id", refuse)
    staff_client.post("/dashboard/records/R1/delete")
    delete_executor.run_pending()

    html = staff_client.get("/dashboard/records").get_data(as_text=True)

    assert "R1" in scenario.records
    assert 'data-icon="trash"' in html
    assert 'data-icon="loader"' not in html


def test_admin_role_is_also_authorized(client):
    with client.session_transaction() as sess:
        sess["user_id"] = "a1"
        sess["role"] = Role.ADMIN.value

    assert client.get("/api/trpc/student.getStudentCount").get_json() == {"success": True, "data": 0}


def test_store_outage_keeps_the_json_envelope(staff_client, repos, monkeypatch):
    def unreachable():
        raise mysql.connector.errors.OperationalError(msg="Lost connection to MySQL server", errno=2013)

    monkeypatch.setattr(repos.students, "find_all", unreachable)

    resp = staff_client.get("/api/trpc/student.getAllStudents")

    assert resp.status_code == 500
    assert resp.get_json() == {"success": False, "error": "INTERNAL", "message": "Internal server error"}


def test_unknown_route_is_still_a_plain_404(staff_client):
    assert staff_client.get("/dashboard/nowhere").status_code == 404

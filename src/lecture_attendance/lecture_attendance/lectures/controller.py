from __future__ import annotations

from flask import Flask

from ..common.datetime_utils import parse_iso_datetime
from ..common.web import current_caller, ok, procedure_input
from ..container import Container


def register(app: Flask, container: Container) -> None:
    svc = container.lecture_service
    modules = container.module_service

    @app.route("/api/trpc/lecture.getAllLectures", endpoint="lecture_get_all")
    def get_all_lectures():
        return ok([lec.to_dict() for lec in svc.get_all_lectures(current_caller())])

    @app.route("/api/trpc/lecture.getAllLecturesWithModuleNames", endpoint="lecture_get_all_with_modules")
    def get_all_lectures_with_module_names():
        return ok([lec.to_dict() for lec in svc.get_all_lectures_with_module_names(current_caller())])

    @app.route("/api/trpc/lecture.getLectureCount", endpoint="lecture_count")
    def get_lecture_count():
        return ok(svc.get_lecture_count(current_caller()))

    @app.route("/api/trpc/lecture.getAllLectureIds", endpoint="lecture_ids")
    def get_all_lecture_ids():
        return ok(svc.get_all_lecture_ids(current_caller()))

    @app.route("/api/trpc/lecture.getLectureIdsWithModuleNames", endpoint="lecture_ids_with_modules")
    def get_lecture_ids_with_module_names():
        return ok([row.to_dict() for row in svc.get_lecture_ids_with_module_names(current_caller())])

    @app.route("/api/trpc/lecture.createNewLecture", methods=["POST"], endpoint="lecture_create")
    def create_new_lecture():
        caller = current_caller()
        data = procedure_input()
        lecture = svc.create_new_lecture(
            caller,
            lecture_id=data.get("lectureId"),
            start_time=parse_iso_datetime(data.get("startTime"), "startTime"),
            end_time=parse_iso_datetime(data.get("endTime"), "endTime"),
            module_id=data.get("moduleId"),
        )
        return ok(lecture.to_dict())

    @app.route("/api/trpc/lecture.deleteLectureRecordById", methods=["POST"], endpoint="lecture_delete")
    def delete_lecture_record_by_id():
        data = procedure_input()
        deleted = svc.delete_lecture_record_by_id(current_caller(), lecture_id=data.get("lectureId"))
        return ok(deleted.to_dict())

    @app.route("/api/trpc/module.getAllModules", endpoint="module_get_all")
    def get_all_modules():
        return ok([m.to_dict() for m in modules.get_all_modules(current_caller())])

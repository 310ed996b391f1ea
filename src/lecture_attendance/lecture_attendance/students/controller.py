from __future__ import annotations

from flask import Flask, request

from ..common.web import current_caller, ok, procedure_input
from ..container import Container


def register(app: Flask, container: Container) -> None:
    svc = container.student_service

    @app.route("/api/trpc/student.createStudent", methods=["POST"], endpoint="student_create")
    def create_student():
        data = procedure_input()
        student = svc.create_student(
            current_caller(),
            first_name=data.get("firstName"),
            last_name=data.get("lastName"),
            student_id=data.get("studentId"),
            student_card_id=data.get("studentCardId"),
        )
        return ok(student.to_dict())

    @app.route("/api/trpc/student.getAllStudents", endpoint="student_get_all")
    def get_all_students():
        return ok([s.to_dict() for s in svc.get_all_students(current_caller())])

    @app.route("/api/trpc/student.getStudentById", endpoint="student_get_by_id")
    def get_student_by_id():
        student = svc.get_student_by_id(current_caller(), request.args.get("input"))
        return ok(student.to_dict() if student else None)

    @app.route("/api/trpc/student.getStudentCount", endpoint="student_count")
    def get_student_count():
        return ok(svc.get_student_count(current_caller()))

    @app.route("/api/trpc/student.getAllStudentIds", endpoint="student_ids")
    def get_all_student_ids():
        return ok(svc.get_all_student_ids(current_caller()))

    @app.route("/api/trpc/student.deleteStudentById", methods=["POST"], endpoint="student_delete")
    def delete_student_by_id():
        data = procedure_input()
        deleted = svc.delete_student_by_id(
            current_caller(),
            student_id=data.get("studentId"),
            first_name=data.get("firstName"),
        )
        return ok(deleted.to_dict())

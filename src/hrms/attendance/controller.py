from __future__ import annotations

from flask import Flask, request

from ..api.responses import api_route, success, success_list
from ..common.validators import PayloadValidator
from ..container import Container
from .service import parse_attendance_mark


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance", methods=["GET"], endpoint="list_attendance")
    @api_route("Failed to fetch attendance records")
    def list_attendance():
        v = PayloadValidator(request.args)
        work_date = v.iso_date("date", "Valid date is required", required=False)
        v.raise_if_invalid()
        return success_list(
            service.list_attendance(work_date=work_date, employee_id=request.args.get("employee_id") or None)
        )

    @app.route("/api/attendance", methods=["POST"], endpoint="mark_attendance")
    @api_route("Failed to mark attendance")
    def mark_attendance():
        mark = parse_attendance_mark(request.get_json(silent=True))
        record = service.mark_attendance(
            employee_id=mark.employee_id,
            work_date=mark.work_date,
            check_in=mark.check_in,
            check_out=mark.check_out,
            status=mark.status,
        )
        return success(record, message="Attendance marked successfully", status_code=201)

    @app.route("/api/attendance/stats", methods=["GET"], endpoint="attendance_stats")
    @api_route("Failed to fetch attendance statistics")
    def attendance_stats():
        v = PayloadValidator(request.args)
        work_date = v.iso_date("date", "Valid date is required", required=False)
        v.raise_if_invalid()
        return success(service.attendance_stats(work_date=work_date))

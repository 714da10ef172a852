from __future__ import annotations

from typing import Mapping

from flask import Flask, request

from ..api.responses import api_route, success, success_list
from ..common.validators import BODY_NOT_OBJECT, PayloadValidator
from ..container import Container
from ..core.enums import LeaveStatus
from ..core.exceptions import ValidationError
from .service import parse_leave_request


def register(app: Flask, container: Container) -> None:
    service = container.leave_service

    def _approver() -> str | None:
        body = request.get_json(silent=True)
        if body is None:
            return None
        if not isinstance(body, Mapping):
            raise ValidationError.for_field("body", BODY_NOT_OBJECT)
        value = body.get("approved_by")
        return str(value) if value is not None else None

    @app.route("/api/leave-requests", methods=["GET"], endpoint="list_leave_requests")
    @api_route("Failed to fetch leave requests")
    def list_leave_requests():
        v = PayloadValidator(request.args)
        status = None
        if request.args.get("status"):
            status = v.choice("status", LeaveStatus, "Status must be one of: Pending, Approved, Rejected")
        v.raise_if_invalid()
        return success_list(
            service.list_leave_requests(status=status, employee_id=request.args.get("employee_id") or None)
        )

    @app.route("/api/leave-requests", methods=["POST"], endpoint="submit_leave_request")
    @api_route("Failed to create leave request")
    def submit_leave_request():
        leave = service.submit_leave_request(parse_leave_request(request.get_json(silent=True)))
        return success(leave, message="Leave request submitted successfully", status_code=201)

    @app.route("/api/leave-requests/<int:request_id>/approve", methods=["PUT"], endpoint="approve_leave_request")
    @api_route("Failed to approve leave request")
    def approve_leave_request(request_id: int):
        leave = service.approve_leave_request(request_id, _approver())
        return success(leave, message="Leave request approved successfully")

    @app.route("/api/leave-requests/<int:request_id>/reject", methods=["PUT"], endpoint="reject_leave_request")
    @api_route("Failed to reject leave request")
    def reject_leave_request(request_id: int):
        leave = service.reject_leave_request(request_id, _approver())
        return success(leave, message="Leave request rejected")

    @app.route("/api/leave-requests/stats", methods=["GET"], endpoint="leave_stats")
    @api_route("Failed to fetch leave request statistics")
    def leave_stats():
        return success(service.leave_stats())

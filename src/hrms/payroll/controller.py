from __future__ import annotations

from flask import Flask, request

from ..api.responses import api_route, success, success_list
from ..common.validators import PayloadValidator
from ..container import Container
from ..core.enums import PayrollStatus
from ..core.exceptions import ValidationError
from .service import parse_pay_period


def _int_arg(name: str, low: int, high: int) -> int | None:
    raw = request.args.get(name)
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        value = None
    if value is None or not low <= value <= high:
        raise ValidationError.for_field(name, f"{name} must be an integer between {low} and {high}")
    return value


def register(app: Flask, container: Container) -> None:
    service = container.payroll_service

    @app.route("/api/payroll", methods=["GET"], endpoint="list_payroll")
    @api_route("Failed to fetch payroll records")
    def list_payroll():
        v = PayloadValidator(request.args)
        status = None
        if request.args.get("status"):
            status = v.choice("status", PayrollStatus, "Status must be one of: Pending, Processed, Paid")
        v.raise_if_invalid()
        records = service.list_payroll(
            employee_id=request.args.get("employee_id") or None,
            status=status,
            month=_int_arg("month", 1, 12),
            year=_int_arg("year", 1900, 9999),
        )
        return success_list(records)

    @app.route("/api/payroll/process", methods=["POST"], endpoint="process_payroll")
    @api_route("Failed to process payroll")
    def process_payroll():
        result = service.process_payroll(parse_pay_period(request.get_json(silent=True)))
        return success(
            result,
            message=f"Payroll processed for {result.employees_processed} employees",
            status_code=201,
        )

    @app.route("/api/payroll/<int:payroll_id>/pay", methods=["PUT"], endpoint="mark_payroll_paid")
    @api_route("Failed to mark payroll as paid")
    def mark_payroll_paid(payroll_id: int):
        return success(service.mark_payroll_paid(payroll_id), message="Payroll marked as paid")

    @app.route("/api/payroll/stats", methods=["GET"], endpoint="payroll_stats")
    @api_route("Failed to fetch payroll statistics")
    def payroll_stats():
        return success(service.payroll_stats())

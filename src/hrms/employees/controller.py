from __future__ import annotations

from flask import Flask, request

from ..api.responses import api_route, success, success_list
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.employee_service

    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    @api_route("Failed to fetch employees")
    def list_employees():
        return success_list(service.list_employees())

    @app.route("/api/employees/<employee_id>", methods=["GET"], endpoint="get_employee")
    @api_route("Failed to fetch employee")
    def get_employee(employee_id: str):
        return success(service.get_employee(employee_id))

    @app.route("/api/employees", methods=["POST"], endpoint="create_employee")
    @api_route("Failed to create employee")
    def create_employee():
        employee = service.create_employee(request.get_json(silent=True))
        return success(employee, message="Employee created successfully", status_code=201)

    @app.route("/api/employees/<employee_id>", methods=["PUT"], endpoint="update_employee")
    @api_route("Failed to update employee")
    def update_employee(employee_id: str):
        employee = service.update_employee(employee_id, request.get_json(silent=True))
        return success(employee, message="Employee updated successfully")

    @app.route("/api/employees/<employee_id>", methods=["DELETE"], endpoint="delete_employee")
    @api_route("Failed to delete employee")
    def delete_employee(employee_id: str):
        service.delete_employee(employee_id)
        return success(message="Employee deleted successfully")

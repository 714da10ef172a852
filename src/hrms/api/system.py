"""Service-level routes: liveness, database probe, endpoint index."""

from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import now_local
from ..container import Container
from ..core.constants import API_VERSION
from .responses import error


def register(app: Flask, container: Container) -> None:
    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify(
            {
                "status": "OK",
                "message": "HRMS API is running",
                "timestamp": now_local(),
                "database": "MySQL",
            }
        ), 200

    @app.route("/test-db", methods=["GET"], endpoint="test_db")
    def test_db():
        conn = container.conn
        if conn is None or not conn.ping():
            return error("Database connection failed", status_code=500)
        return jsonify(
            {
                "status": "success",
                "message": "Database connection successful",
                "database": conn.config.database,
                "host": conn.config.host,
            }
        ), 200

    @app.route("/", methods=["GET"], endpoint="index")
    def index():
        return jsonify(
            {
                "message": "Welcome to HRMS API",
                "version": API_VERSION,
                "endpoints": {
                    "health": "/health",
                    "database_test": "/test-db",
                    "employees": "/api/employees",
                    "attendance": "/api/attendance",
                    "leave_requests": "/api/leave-requests",
                    "payroll": "/api/payroll",
                    "dashboard": "/api/dashboard/stats",
                },
            }
        ), 200

    @app.errorhandler(404)
    def not_found(_exc):
        return error("Route not found", status_code=404)

    @app.errorhandler(405)
    def method_not_allowed(_exc):
        return error("Method not allowed", status_code=405)

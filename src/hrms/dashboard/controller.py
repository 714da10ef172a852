from __future__ import annotations

from flask import Flask

from ..api.responses import api_route, success
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/dashboard/stats", methods=["GET"], endpoint="dashboard_stats")
    @api_route("Failed to fetch dashboard statistics")
    def dashboard_stats():
        return success(container.dashboard_service.dashboard_stats())

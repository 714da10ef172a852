"""WSGI entry point: ``flask --app hrms.wsgi run`` or any WSGI server."""

from .main import create_app

app = create_app()

"""JSON envelope shared by every route.

``{"status": "success"|"error", "data"?, "message"?, "errors"?, "count"?}``
"""

from __future__ import annotations

import logging
import traceback
from functools import wraps
from typing import Any, Optional, Sequence

from flask import current_app, jsonify

from ..core.exceptions import (
    ConflictError,
    DomainError,
    DuplicateEmailError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _plain(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


def success(
    data: Any = None,
    *,
    message: Optional[str] = None,
    count: Optional[int] = None,
    status_code: int = 200,
):
    body: dict[str, Any] = {"status": "success"}
    if message is not None:
        body["message"] = message
    if data is not None:
        body["data"] = _plain(data)
    if count is not None:
        body["count"] = count
    return jsonify(body), status_code


def success_list(items: Sequence[Any], *, message: Optional[str] = None):
    return success(list(items), message=message, count=len(items))


def error(message: str, *, status_code: int, errors: Optional[list] = None, **extra: Any):
    body: dict[str, Any] = {"status": "error", "message": message}
    if errors:
        body["errors"] = errors
    body.update(extra)
    return jsonify(body), status_code


def status_for(exc: DomainError) -> int:
    if isinstance(exc, (ValidationError, DuplicateEmailError)):
        return 400
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, ConflictError):
        return 409
    return 400


def api_route(failure_message: str):
    """Convert exceptions raised by a view into the error envelope.

    Domain errors keep their own message; anything else is logged with its
    traceback and answered with ``failure_message`` (500). Details are only
    exposed when the app runs in debug mode.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except ValidationError as exc:
                return error(str(exc), status_code=400, errors=exc.errors)
            except DomainError as exc:
                return error(str(exc), status_code=status_for(exc))
            except Exception as exc:
                logger.exception("%s", failure_message)
                if current_app.debug:
                    return error(failure_message, status_code=500, error=str(exc), trace=traceback.format_exc())
                return error(failure_message, status_code=500)

        return wrapper

    return decorator

from __future__ import annotations

import re
from datetime import date, time
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Mapping, Optional, Type, TypeVar

from ..core.constants import MAX_MONEY_AMOUNT
from ..core.exceptions import ValidationError
from .datetime_utils import parse_clock_time, parse_iso_date

E = TypeVar("E", bound=Enum)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_CLOCK_RE = re.compile(r"^([01]?[0-9]|2[0-3]):[0-5][0-9](:[0-5][0-9])?$")
_MAX_AMOUNT = Decimal(MAX_MONEY_AMOUNT)

BODY_NOT_OBJECT = "Request body must be a JSON object"


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError.for_field(field_name, f"{field_name} is required")
    return value.strip()


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class PayloadValidator:
    """Collects field-level errors for one request body.

    Every accessor returns the cleaned value (or ``None`` when the field is
    invalid/absent) so callers can read all fields first and then call
    :meth:`raise_if_invalid` once.
    """

    def __init__(self, payload: Any):
        self.errors: list[dict] = []
        if payload is not None and not isinstance(payload, Mapping):
            self._fail("body", BODY_NOT_OBJECT)
            payload = None
        self._payload: Mapping[str, Any] = payload or {}

    def _fail(self, field: str, message: str) -> None:
        self.errors.append({"field": field, "message": message})

    def text(self, field: str, message: str, *, min_len: int = 1) -> Optional[str]:
        raw = self._payload.get(field)
        value = raw.strip() if isinstance(raw, str) else ""
        if len(value) < min_len:
            self._fail(field, message)
            return None
        return value

    def email(self, field: str, message: str) -> Optional[str]:
        raw = self._payload.get(field)
        value = raw.strip().lower() if isinstance(raw, str) else ""
        if not _EMAIL_RE.match(value):
            self._fail(field, message)
            return None
        return value

    def amount(
        self,
        field: str,
        message: str,
        *,
        default: Optional[Decimal] = None,
        max_value: Decimal = _MAX_AMOUNT,
    ) -> Optional[Decimal]:
        """Decimal amount in [0, max_value]; ``default`` applies when the field is blank."""
        raw = self._payload.get(field)
        if _is_blank(raw):
            if default is not None:
                return default
            self._fail(field, message)
            return None
        if isinstance(raw, bool):
            self._fail(field, message)
            return None
        try:
            value = Decimal(str(raw).strip())
        except (InvalidOperation, ValueError):
            self._fail(field, message)
            return None
        if not value.is_finite() or value < 0:
            self._fail(field, message)
            return None
        if value > max_value:
            self._fail(field, f"{field} must not exceed {max_value}")
            return None
        return value

    def iso_date(self, field: str, message: str, *, required: bool = True) -> Optional[date]:
        raw = self._payload.get(field)
        if _is_blank(raw):
            if required:
                self._fail(field, message)
            return None
        try:
            return parse_iso_date(str(raw).strip())
        except ValueError:
            self._fail(field, message)
            return None

    def clock_time(self, field: str, message: str) -> Optional[time]:
        """Optional HH:MM time of day."""
        raw = self._payload.get(field)
        if _is_blank(raw):
            return None
        value = str(raw).strip()
        if not _CLOCK_RE.match(value):
            self._fail(field, message)
            return None
        return parse_clock_time(value)

    def choice(self, field: str, enum_cls: Type[E], message: str, *, default: Optional[E] = None) -> Optional[E]:
        raw = self._payload.get(field)
        if _is_blank(raw):
            if default is not None:
                return default
            self._fail(field, message)
            return None
        try:
            return enum_cls(str(raw).strip())
        except ValueError:
            self._fail(field, message)
            return None

    def raise_if_invalid(self) -> None:
        if self.errors:
            raise ValidationError("Validation failed", self.errors)

from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any

from flask.json.provider import DefaultJSONProvider


class HRMSJSONProvider(DefaultJSONProvider):
    """ISO dates/times and numeric decimals instead of Flask's HTTP-date/str defaults."""

    sort_keys = False

    @staticmethod
    def default(o: Any) -> Any:
        if isinstance(o, datetime):
            return o.isoformat()
        if isinstance(o, date):
            return o.isoformat()
        if isinstance(o, time):
            return o.strftime("%H:%M:%S")
        if isinstance(o, Decimal):
            return int(o) if o == o.to_integral_value() else float(o)
        if isinstance(o, Enum):
            return o.value
        return DefaultJSONProvider.default(o)

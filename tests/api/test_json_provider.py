from __future__ import annotations

import json
from datetime import date, datetime, time
from decimal import Decimal

from hrms.core.enums import LeaveStatus


def test_dates_times_and_decimals(app):
    payload = {
        "day": date(2024, 2, 1),
        "at": datetime(2024, 2, 1, 9, 30, 0),
        "clock": time(9, 5),
        "whole": Decimal("85000.00"),
        "part": Decimal("8.33"),
        "status": LeaveStatus.PENDING,
    }
    decoded = json.loads(app.json.dumps(payload))

    assert decoded == {
        "day": "2024-02-01",
        "at": "2024-02-01T09:30:00",
        "clock": "09:05:00",
        "whole": 85000,
        "part": 8.33,
        "status": "Pending",
    }

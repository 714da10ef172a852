from __future__ import annotations

import io
import json
import logging

import pytest

from hrms.logging_config import StructuredFormatter, configure_logging, reset_logging


@pytest.fixture
def fresh_logging():
    reset_logging()
    yield
    reset_logging()


def test_structured_formatter_emits_one_json_object():
    record = logging.LogRecord("hrms.payroll.service", logging.INFO, __file__, 1, "processed %d", (3,), None)
    record.employee_id = "EMP001"

    line = json.loads(StructuredFormatter().format(record))

    assert line["level"] == "INFO"
    assert line["logger"] == "hrms.payroll.service"
    assert line["message"] == "processed 3"
    assert line["employee_id"] == "EMP001"


def test_configure_logging_is_idempotent(fresh_logging):
    stream = io.StringIO()
    configure_logging(level=logging.INFO, json_format=True, handler=logging.StreamHandler(stream))
    configure_logging(level=logging.DEBUG)

    logger = logging.getLogger("hrms.employees.service")
    logger.info("Employee %s created", "EMP001")
    logger.debug("not shown")

    lines = stream.getvalue().splitlines()
    assert len(lines) == 1
    assert json.loads(lines[0])["message"] == "Employee EMP001 created"
    assert len(logging.getLogger("hrms").handlers) == 1

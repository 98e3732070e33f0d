from __future__ import annotations

import logging

from app.logger import RequestIdFilter, TrackerFormatter, request_id_var


def _record(message: str = "task created") -> logging.LogRecord:
    return logging.LogRecord("app.task_service", logging.INFO, __file__, 1, message, None, None)


def _render(record: logging.LogRecord) -> str:
    RequestIdFilter().filter(record)
    return TrackerFormatter(use_colors=False).format(record)


def test_lines_carry_the_current_request_id():
    token = request_id_var.set("req-42")
    try:
        line = _render(_record())
    finally:
        request_id_var.reset(token)

    fields = [field.strip() for field in line.split("|")]
    assert fields[1:] == ["INFO", "req-42", "task_service", "task created"]


def test_outside_a_request_the_id_is_a_dash():
    fields = [field.strip() for field in _render(_record()).split("|")]
    assert fields[2] == "-"

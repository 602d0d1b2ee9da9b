"""Structured Logging — JSON formatter output shape."""

import json
import logging

from lessonmap.infrastructure.observability import JSONFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "lessonmap.test", logging.INFO, __file__, 1, "Lesson deleted", None, None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_base_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "INFO"
    assert log["logger"] == "lessonmap.test"
    assert log["message"] == "Lesson deleted"
    assert "timestamp" in log


def test_json_formatter_surfaces_known_extras_only():
    log = json.loads(JSONFormatter().format(
        _record(lesson_id="L1", user_id="U1", image_path="a.png", secret="x"),
    ))
    assert log["lesson_id"] == "L1"
    assert log["user_id"] == "U1"
    assert log["image_path"] == "a.png"
    assert "secret" not in log

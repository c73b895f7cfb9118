"""Structured JSON-lines logger."""

import io
import json

import pytest

from spindle.core.logging import StructuredLogger, get_logger, set_log_level, set_log_output


def _lines(stream):
    return [json.loads(line) for line in stream.getvalue().splitlines()]


def test_json_record():
    stream = io.StringIO()
    logger = StructuredLogger("spindle.test", output=stream)
    logger.info("hello", n=3, values=[1, 2])
    (record,) = _lines(stream)
    assert record["level"] == "INFO"
    assert record["message"] == "hello"
    assert record["logger"] == "spindle.test"
    assert record["n"] == 3
    assert record["values"] == [1, 2]


def test_level_filtering():
    stream = io.StringIO()
    logger = StructuredLogger("spindle.test", output=stream, min_level="WARN")
    logger.debug("a")
    logger.info("b")
    logger.warn("c")
    logger.error("d")
    assert [r["message"] for r in _lines(stream)] == ["c", "d"]
    assert logger.is_enabled("ERROR")
    assert not logger.is_enabled("info")


def test_timer_emits_debug():
    stream = io.StringIO()
    logger = StructuredLogger("spindle.test", output=stream, min_level="DEBUG")
    with logger.timer("rank"):
        pass
    (record,) = _lines(stream)
    assert record["message"] == "rank completed"
    assert record["elapsed_ms"] >= 0


def test_global_level_and_output():
    stream = io.StringIO()
    logger = get_logger("spindle.test.global")
    assert get_logger("spindle.test.global") is logger
    set_log_output(stream)
    set_log_level("ERROR")
    logger.warn("hidden")
    logger.error("shown")
    assert [r["message"] for r in _lines(stream)] == ["shown"]


def test_unknown_level():
    with pytest.raises(ValueError, match="Unknown log level"):
        set_log_level("LOUD")

"""Structured Logging: JSON formatter output."""

import json
import logging

import pytest

from world_countries.infrastructure.observability import (
    JSONFormatter, _AppHandler, setup_logging,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "world_countries.test", logging.WARNING, __file__, 1,
        "Country %s not found", ("XX",), None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_base_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "WARNING"
    assert log["logger"] == "world_countries.test"
    assert log["message"] == "Country XX not found"
    assert "timestamp" in log


def test_json_formatter_surfaces_known_extras():
    log = json.loads(JSONFormatter().format(
        _record(error_code="RESOURCE_NOT_FOUND", path="/countries/XX", unrelated="x"),
    ))
    assert log["error_code"] == "RESOURCE_NOT_FOUND"
    assert log["path"] == "/countries/XX"
    assert "unrelated" not in log


def test_json_formatter_keeps_non_ascii():
    record = _record()
    record.msg = "Seeded Brasília"
    record.args = ()
    assert "Brasília" in JSONFormatter().format(record)


@pytest.fixture
def restore_root_logging():
    handlers = list(logging.root.handlers)
    level = logging.root.level
    yield
    logging.root.handlers[:] = handlers
    logging.root.setLevel(level)


def _installed_handlers():
    return [h for h in logging.root.handlers if isinstance(h, _AppHandler)]


def test_setup_logging_twice_keeps_one_handler(restore_root_logging):
    setup_logging("INFO", "json")
    setup_logging("DEBUG", "text")
    installed = _installed_handlers()
    assert len(installed) == 1
    assert not isinstance(installed[0].formatter, JSONFormatter)
    assert logging.root.level == logging.DEBUG


def test_setup_logging_keeps_foreign_handlers(restore_root_logging):
    foreign = logging.NullHandler()
    logging.root.addHandler(foreign)
    setup_logging()
    setup_logging()
    assert foreign in logging.root.handlers
    assert len(_installed_handlers()) == 1

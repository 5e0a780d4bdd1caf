# tests/test_logging.py
import json
import logging

import pytest
import structlog

from jokebox.core import logging as jokebox_logging
from jokebox.core.settings import settings


def _record(message, *args, **extra):
    record = logging.LogRecord("jokebox.services", logging.INFO, __file__, 1, message, args, None)
    record.__dict__.update(extra)
    return record


def test_json_format_renders_one_object_per_line():
    formatter = jokebox_logging.build_formatter("json")

    line = formatter.format(_record("Post %s created by %s", 7, 1, request_id="abc"))

    payload = json.loads(line)
    assert payload["event"] == "Post 7 created by 1"
    assert payload["level"] == "info"
    assert payload["logger"] == "jokebox.services"
    assert payload["request_id"] == "abc"
    assert "timestamp" in payload


def test_text_format_is_not_json():
    formatter = jokebox_logging.build_formatter("text")

    line = formatter.format(_record("Comment %s deleted", 3))

    assert "Comment 3 deleted" in line
    assert not line.startswith("{")


@pytest.fixture()
def fresh_root(monkeypatch):
    root = logging.getLogger()
    level = root.level
    monkeypatch.setattr(jokebox_logging, "_configured", False)
    monkeypatch.setattr(root, "handlers", [])
    yield root
    root.setLevel(level)


def test_configure_logging_installs_handler_once(fresh_root):
    json_settings = settings.model_copy(update={"log_format": "JSON", "debug": False})

    jokebox_logging.configure_logging(json_settings)
    jokebox_logging.configure_logging(json_settings)

    assert len(fresh_root.handlers) == 1
    assert isinstance(fresh_root.handlers[0].formatter, structlog.stdlib.ProcessorFormatter)
    assert jokebox_logging._configured is True

# tests/unit/core/test_logger.py
from __future__ import annotations

import io
import json
import logging
import sys

from chirpy.core.logger import JSONFormatter, configure_logging, ensure_request_id, init_app
from flask import Flask


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("chirpy.test", logging.INFO, __file__, 1, "hello %s", ("world",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_renders_known_extras():
    payload = json.loads(JSONFormatter().format(_record(user_id=3, chirp_id=9, secret="x")))

    assert payload["message"] == "hello world"
    assert payload["level"] == "INFO"
    assert payload["name"] == "chirpy.test"
    assert payload["user_id"] == 3
    assert payload["chirp_id"] == 9
    assert "secret" not in payload
    assert payload["request_id"] is None


def test_json_formatter_includes_exception():
    try:
        raise ValueError("bad")
    except ValueError:
        record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())
    payload = json.loads(JSONFormatter().format(record))
    assert "ValueError: bad" in payload["exc_info"]


def test_configure_logging_sets_level_and_single_handler(restore_root_logger):
    configure_logging("warning")

    assert restore_root_logger.level == logging.WARNING
    assert len(restore_root_logger.handlers) == 1
    assert isinstance(restore_root_logger.handlers[0].formatter, JSONFormatter)


def test_request_id_uses_correlation_header():
    app = Flask("chirpy")
    with app.test_request_context(headers={"X-Correlation-ID": "corr-1"}):
        assert ensure_request_id() == "corr-1"
        assert ensure_request_id() == "corr-1"


def test_request_id_generated_once_per_request():
    app = Flask("chirpy")
    with app.test_request_context():
        first = ensure_request_id()
        assert ensure_request_id() == first


def test_response_carries_request_id():
    app = Flask("chirpy")
    init_app(app)
    app.add_url_rule("/ping", view_func=lambda: "pong")

    response = app.test_client().get("/ping", headers={"X-Request-ID": "req-42"})

    assert response.headers["X-Request-ID"] == "req-42"


def test_configured_handler_writes_json_lines(restore_root_logger):
    buffer = io.StringIO()
    configure_logging("INFO", stream=buffer)

    logging.getLogger("chirpy.services.store.service").info(
        "Chirp created", extra={"chirp_id": 4, "user_id": 2, "password": "hunter2"}
    )

    line = json.loads(buffer.getvalue().splitlines()[-1])
    assert line["message"] == "Chirp created"
    assert (line["chirp_id"], line["user_id"]) == (4, 2)
    assert "hunter2" not in buffer.getvalue()

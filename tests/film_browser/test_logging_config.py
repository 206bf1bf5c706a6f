import json
import logging

import pytest
from pythonjsonlogger import jsonlogger

from film_browser.logging_config import LOG_FORMAT_ENV, configure_logging


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    yield root
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


def test_json_is_default(root_logger, monkeypatch):
    monkeypatch.delenv(LOG_FORMAT_ENV, raising=False)

    configure_logging()

    assert len(root_logger.handlers) == 1
    assert isinstance(root_logger.handlers[0].formatter, jsonlogger.JsonFormatter)
    assert root_logger.level == logging.INFO


def test_env_selects_plain(root_logger, monkeypatch):
    monkeypatch.setenv(LOG_FORMAT_ENV, "PLAIN")

    configure_logging(level=logging.DEBUG)

    formatter = root_logger.handlers[0].formatter
    assert not isinstance(formatter, jsonlogger.JsonFormatter)
    assert root_logger.level == logging.DEBUG


def test_argument_wins_over_env(root_logger, monkeypatch):
    monkeypatch.setenv(LOG_FORMAT_ENV, "plain")

    configure_logging(force_format="json")

    assert isinstance(root_logger.handlers[0].formatter, jsonlogger.JsonFormatter)


def test_json_records_carry_app_and_extra_fields(root_logger, monkeypatch):
    monkeypatch.delenv(LOG_FORMAT_ENV, raising=False)
    configure_logging()

    record = logging.LogRecord("film_browser.core", logging.WARNING, __file__, 1, "Zero eligible rows", None, None)
    record.view_id = "dashboard"
    payload = json.loads(root_logger.handlers[0].formatter.format(record))

    assert payload["app"] == "film_browser"
    assert payload["level"] == "WARNING"
    assert payload["message"] == "Zero eligible rows"
    assert payload["view_id"] == "dashboard"


def test_unknown_format_rejected(root_logger):
    with pytest.raises(ValueError):
        configure_logging(force_format="xml")


def test_dev_server_access_logs_are_quieted(root_logger, monkeypatch):
    werkzeug = logging.getLogger("werkzeug")
    monkeypatch.setattr(werkzeug, "level", werkzeug.level)

    configure_logging(force_format="plain")

    assert werkzeug.level == logging.WARNING

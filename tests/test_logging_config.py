import logging

import pytest

from duckduckgone.logging_config import (
    RedactTokenFilter,
    get_logger,
    resolve_level,
    setup_logging,
)


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_resolve_level_prefers_argument(monkeypatch):
    monkeypatch.setenv("DDG_LOG_LEVEL", "ERROR")

    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level(None) == logging.ERROR


def test_resolve_level_unknown_falls_back_to_warning(monkeypatch):
    monkeypatch.delenv("DDG_LOG_LEVEL", raising=False)

    assert resolve_level("chatty") == logging.WARNING
    assert resolve_level(None) == logging.WARNING


def test_without_outputs_only_null_handler():
    setup_logging(level="INFO")

    handlers = logging.getLogger().handlers
    assert len(handlers) == 1
    assert isinstance(handlers[0], logging.NullHandler)


def test_file_log_redacts_bearer_token(tmp_path):
    log_file = tmp_path / "logs" / "ddg.log"
    setup_logging(level="DEBUG", log_file=str(log_file))

    get_logger("duckduckgone.test").debug("headers: Authorization: Bearer s3cr3t")
    for handler in logging.getLogger().handlers:
        handler.flush()

    text = log_file.read_text()
    assert "Bearer ***" in text
    assert "s3cr3t" not in text


def test_filter_leaves_other_records_alone():
    record = logging.LogRecord(
        "x", logging.INFO, __file__, 1, "address %s", ("a@duck.com",), None
    )

    assert RedactTokenFilter().filter(record) is True
    assert record.getMessage() == "address a@duck.com"

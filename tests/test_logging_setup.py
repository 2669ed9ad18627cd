from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

import logging_setup
from logging_setup import RedactingFilter, configure_logging


def _record(msg: str, *args: object) -> logging.LogRecord:
    return logging.LogRecord("test", logging.INFO, __file__, 1, msg, args, None)


def test_filter_redacts_api_keys() -> None:
    record = _record("calling with api_key=%s", "sk-abcdef123456")

    assert RedactingFilter().filter(record) is True
    assert record.getMessage() == "calling with api_key=***REDACTED***"


def test_filter_redacts_bare_secret_tokens() -> None:
    record = _record("key sk-ABCDEFGH12345678 rejected")

    RedactingFilter().filter(record)

    assert "sk-ABCDEFGH" not in record.getMessage()
    assert "***REDACTED***" in record.getMessage()


def test_filter_leaves_plain_messages_alone() -> None:
    record = _record("settled on %r", "привет")

    RedactingFilter().filter(record)

    assert record.args == ("привет",)
    assert record.getMessage() == "settled on 'привет'"


def test_configure_logging_adds_rotating_file(monkeypatch, tmp_path: Path) -> None:  # noqa: ANN001
    captured: dict = {}
    monkeypatch.setattr(logging_setup.logging, "basicConfig", lambda **kwargs: captured.update(kwargs))

    log_path = tmp_path / "logs" / "russian_helper.log"
    configure_logging("debug", log_path)

    assert captured["level"] == logging.DEBUG
    handlers = captured["handlers"]
    file_handlers = [h for h in handlers if isinstance(h, logging.handlers.RotatingFileHandler)]
    assert len(file_handlers) == 1
    assert log_path.parent.is_dir()
    assert all(any(isinstance(f, RedactingFilter) for f in h.filters) for h in handlers)
    for handler in handlers:
        handler.close()


def test_configure_logging_unknown_level_defaults_to_info(monkeypatch) -> None:  # noqa: ANN001
    captured: dict = {}
    monkeypatch.setattr(logging_setup.logging, "basicConfig", lambda **kwargs: captured.update(kwargs))

    configure_logging("chatty")

    assert captured["level"] == logging.INFO
    assert len(captured["handlers"]) == 1

from __future__ import annotations

from unittest.mock import MagicMock

import clipboard
from clipboard import ClipboardService


def test_copy_returns_failure_when_dependency_missing(monkeypatch) -> None:  # noqa: ANN001
    monkeypatch.setattr(clipboard, "pyperclip", None)

    result = ClipboardService().copy_text("привет → [privet]")

    assert result.success is False
    assert result.reason == "clipboard dependency missing"


def test_copy_returns_failure_on_empty_text() -> None:
    result = ClipboardService().copy_text("   ")

    assert result.success is False
    assert result.reason == "empty text"


def test_copy_puts_text_on_clipboard(monkeypatch) -> None:  # noqa: ANN001
    fake = MagicMock()
    monkeypatch.setattr(clipboard, "pyperclip", fake)

    result = ClipboardService().copy_text("кот → [kot]\n")

    assert result.success is True
    fake.copy.assert_called_once_with("кот → [kot]\n")


def test_copy_reports_clipboard_errors(monkeypatch) -> None:  # noqa: ANN001
    fake = MagicMock()
    fake.copy.side_effect = RuntimeError("no clipboard mechanism")
    monkeypatch.setattr(clipboard, "pyperclip", fake)

    result = ClipboardService().copy_text("кот")

    assert result.success is False
    assert result.reason == "no clipboard mechanism"

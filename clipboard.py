"""Clipboard copy for pronunciation guides and translations."""

from __future__ import annotations

import logging

from errors import DEPENDENCY_MISSING, ERROR_MESSAGES
from models import CopyResult

try:
    import pyperclip
except Exception:  # pragma: no cover
    pyperclip = None  # type: ignore

logger = logging.getLogger(__name__)


class ClipboardService:
    def copy_text(self, text: str) -> CopyResult:
        if not text.strip():
            return CopyResult(success=False, reason="empty text")
        if pyperclip is None:
            return CopyResult(success=False, reason=ERROR_MESSAGES[DEPENDENCY_MISSING])
        try:
            pyperclip.copy(text)
        except Exception as exc:
            logger.warning("Clipboard copy failed: %s", exc)
            return CopyResult(success=False, reason=str(exc))
        return CopyResult(success=True, reason="ok")

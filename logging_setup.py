from __future__ import annotations

import logging
import logging.handlers
import re
import sys
from pathlib import Path
from typing import Optional

_SECRET_PATTERNS = [
    re.compile(r"(api_key\s*[=:]\s*['\"]?)([^\s'\",]+)", re.IGNORECASE),
    re.compile(r"(DASHSCOPE_API_KEY\s*=\s*)(\S+)", re.IGNORECASE),
    re.compile(r"()(sk-[A-Za-z0-9]{8,})"),
]

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class RedactingFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = message
        for pattern in _SECRET_PATTERNS:
            redacted = pattern.sub(r"\1***REDACTED***", redacted)
        if redacted != message:
            record.msg = redacted
            record.args = ()
        return True


def configure_logging(log_level: str, log_path: Optional[Path] = None) -> None:
    level = getattr(logging, log_level.upper(), logging.INFO)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                log_path,
                maxBytes=5 * 1024 * 1024,
                backupCount=5,
                encoding="utf-8",
                delay=True,
            )
        )
    redactor = RedactingFilter()
    for handler in handlers:
        handler.addFilter(redactor)
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
    logging.getLogger("dashscope").setLevel(logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.WARNING)

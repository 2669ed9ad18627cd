"""Simple JSON-based config store."""

from __future__ import annotations

import json
from pathlib import Path

DEFAULTS: dict = {
    "api_key": "",
    "model": "qwen-plus",
    "request_timeout_s": 30,
    "local_settle_ms": 500,
    "global_settle_ms": 1000,
    "move_threshold_px": 5,
    "capture_radius_px": 100,
    "ocr_language": "rus+eng",
    "popup_hide_s": 10,
    "popup_leave_hide_s": 3,
    "log_level": "INFO",
}


class JsonConfigStore:
    def __init__(self, path: Path | None = None) -> None:
        self._path = path or Path.home() / ".config" / "russian_helper" / "config.json"
        self._path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        return self._path

    def get_api_key(self) -> str:
        return self._get_str("api_key")

    def set_api_key(self, key: str) -> None:
        self._set("api_key", key)

    def get_model(self) -> str:
        return self._get_str("model") or DEFAULTS["model"]

    def set_model(self, model: str) -> None:
        self._set("model", model)

    def get_request_timeout_s(self) -> float:
        return self._get_float("request_timeout_s")

    def get_local_settle_s(self) -> float:
        return self._get_int("local_settle_ms") / 1000.0

    def get_global_settle_s(self) -> float:
        return self._get_int("global_settle_ms") / 1000.0

    def get_move_threshold_px(self) -> int:
        return self._get_int("move_threshold_px")

    def get_capture_radius_px(self) -> int:
        return self._get_int("capture_radius_px")

    def get_ocr_language(self) -> str:
        return self._get_str("ocr_language") or DEFAULTS["ocr_language"]

    def get_popup_hide_s(self) -> float:
        return self._get_float("popup_hide_s")

    def get_popup_leave_hide_s(self) -> float:
        return self._get_float("popup_leave_hide_s")

    def get_log_level(self) -> str:
        return (self._get_str("log_level") or DEFAULTS["log_level"]).upper()

    def get_log_file(self) -> Path:
        value = self._read_all().get("log_file")
        if value:
            return Path(str(value))
        return self._path.parent / "russian_helper.log"

    def _get_str(self, key: str) -> str:
        data = self._read_all()
        return str(data.get(key, DEFAULTS[key]))

    def _get_int(self, key: str) -> int:
        data = self._read_all()
        try:
            return int(data.get(key, DEFAULTS[key]))
        except (TypeError, ValueError):
            return int(DEFAULTS[key])

    def _get_float(self, key: str) -> float:
        data = self._read_all()
        try:
            return float(data.get(key, DEFAULTS[key]))
        except (TypeError, ValueError):
            return float(DEFAULTS[key])

    def _set(self, key: str, value: object) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def _read_all(self) -> dict:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError):
            return {}
        return data if isinstance(data, dict) else {}

    def _write_all(self, data: dict) -> None:
        self._path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")

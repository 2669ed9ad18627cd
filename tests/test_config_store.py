from __future__ import annotations

import json
from pathlib import Path

from config import JsonConfigStore


def test_config_read_write(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    store = JsonConfigStore(path=path)

    assert store.get_api_key() == ""
    assert store.get_model() == "qwen-plus"

    store.set_api_key("abc")
    store.set_model("qwen-max")

    reloaded = JsonConfigStore(path=path)
    assert reloaded.get_api_key() == "abc"
    assert reloaded.get_model() == "qwen-max"


def test_config_defaults(tmp_path: Path) -> None:
    store = JsonConfigStore(path=tmp_path / "config.json")

    assert store.get_local_settle_s() == 0.5
    assert store.get_global_settle_s() == 1.0
    assert store.get_move_threshold_px() == 5
    assert store.get_capture_radius_px() == 100
    assert store.get_ocr_language() == "rus+eng"
    assert store.get_popup_hide_s() == 10.0
    assert store.get_popup_leave_hide_s() == 3.0
    assert store.get_log_level() == "INFO"
    assert store.get_log_file() == tmp_path / "russian_helper.log"


def test_config_bad_values_fall_back(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps({"local_settle_ms": "soon", "request_timeout_s": None, "log_level": "debug"}),
        encoding="utf-8",
    )

    store = JsonConfigStore(path=path)
    assert store.get_local_settle_s() == 0.5
    assert store.get_request_timeout_s() == 30.0
    assert store.get_log_level() == "DEBUG"


def test_config_invalid_json_fallback(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{invalid", encoding="utf-8")

    store = JsonConfigStore(path=path)
    assert store.get_api_key() == ""
    assert store.get_global_settle_s() == 1.0


def test_config_non_object_json_fallback(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("[1, 2]", encoding="utf-8")

    assert JsonConfigStore(path=path).get_capture_radius_px() == 100

from __future__ import annotations

import asyncio

import pytest

pytest.importorskip("PySide6.QtWidgets")

from main import App  # noqa: E402


def test_spawn_without_running_loop_raises() -> None:
    app = App.__new__(App)
    app._loop = None
    app._tasks = set()
    coro = asyncio.sleep(0)

    with pytest.raises(RuntimeError):
        app._spawn(coro)

    assert coro.cr_frame is None

"""Global pointer capture based on pynput."""

from __future__ import annotations

import asyncio
import logging
import threading
from queue import Empty, Full, Queue
from typing import Callable, Optional

from models import Point

try:
    from pynput import mouse
except Exception:  # pragma: no cover
    mouse = None  # type: ignore

logger = logging.getLogger(__name__)


class GlobalPointerAdapter:
    """Forwards screen-wide pointer motion to the event loop.

    The listener thread only does a non-blocking ``put_nowait`` and, when no
    drain is already pending, one ``call_soon_threadsafe``. Samples beyond
    ``queue_maxsize`` are dropped rather than waited on.
    """

    def __init__(self, queue_maxsize: int = 64) -> None:
        self._queue: Queue[Point] = Queue(maxsize=queue_maxsize)
        self._listener: Optional[object] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._on_move: Optional[Callable[[Point], None]] = None
        self._lock = threading.Lock()
        self._drain_scheduled = False
        self.dropped_events = 0

    @property
    def running(self) -> bool:
        return self._listener is not None

    def start(
        self,
        on_move: Callable[[Point], None],
        loop: asyncio.AbstractEventLoop,
    ) -> None:
        if mouse is None:
            raise RuntimeError("pynput is not installed")
        if self._listener is not None:
            return
        self._on_move = on_move
        self._loop = loop
        self._listener = mouse.Listener(on_move=self._handle_move)
        self._listener.start()
        logger.info("Global pointer hook started")

    def stop(self) -> None:
        listener = self._listener
        if listener is not None:
            listener.stop()
            self._listener = None
            logger.info("Global pointer hook stopped (%d samples dropped)", self.dropped_events)
        self._on_move = None
        self._loop = None
        self._clear_queue()

    def _handle_move(self, x: int, y: int) -> None:
        """Runs on the listener thread; must never block."""
        loop = self._loop
        if loop is None or loop.is_closed():
            return
        try:
            self._queue.put_nowait(Point(int(x), int(y)))
        except Full:
            self.dropped_events += 1
            return
        with self._lock:
            if self._drain_scheduled:
                return
            self._drain_scheduled = True
        try:
            loop.call_soon_threadsafe(self._drain)
        except RuntimeError:
            # loop closed between the check and the call
            with self._lock:
                self._drain_scheduled = False

    def _drain(self) -> None:
        with self._lock:
            self._drain_scheduled = False
        on_move = self._on_move
        while True:
            try:
                point = self._queue.get_nowait()
            except Empty:
                return
            if on_move is not None:
                on_move(point)

    def _clear_queue(self) -> None:
        while True:
            try:
                self._queue.get_nowait()
            except Empty:
                return

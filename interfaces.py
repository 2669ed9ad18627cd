"""Protocol interfaces used by HoverResolver and the cache."""

from __future__ import annotations

import asyncio
from typing import Callable, Protocol

from models import Point, PresentationState


class ScreenRecognizer(Protocol):
    async def recognize_text(self, center: Point, radius: int) -> str: ...


class TranslationFetcher(Protocol):
    async def fetch(self, word: str) -> str: ...


class PresentationSink(Protocol):
    def present(self, state: PresentationState) -> None: ...

    def dismiss(self) -> None: ...


class PointerSource(Protocol):
    @property
    def running(self) -> bool: ...

    def start(
        self,
        on_move: Callable[[Point], None],
        loop: asyncio.AbstractEventLoop,
    ) -> None: ...

    def stop(self) -> None: ...


"""State-machine based hover resolution."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import replace
from typing import Callable, Optional

from errors import ERROR_MESSAGES, NO_RUSSIAN_TEXT, RECOGNITION_FAILED
from interfaces import PresentationSink, ScreenRecognizer
from models import HoverSession, HoverState, Point, PresentationKind, PresentationState
from translation_cache import TranslationCache
from transliteration import TransliterationEngine
from word_locator import first_russian_word, is_russian, word_at

logger = logging.getLogger(__name__)

StateCallback = Callable[[HoverState, HoverState], None]


class HoverResolver:
    """Turns a stream of pointer samples into word lookups.

    One instance per input stream. Text-surface samples arrive through
    ``on_text_move`` and arm the settle timer whenever the word under the
    pointer changes; screen samples arrive through ``on_pointer_move`` and
    arm it whenever the pointer travels more than ``move_threshold_px``.
    All methods must be called on the loop thread.
    """

    def __init__(
        self,
        engine: TransliterationEngine,
        cache: TranslationCache,
        sink: PresentationSink,
        recognizer: Optional[ScreenRecognizer] = None,
        settle_s: float = 0.5,
        move_threshold_px: float = 5.0,
        capture_radius: int = 100,
        name: str = "local",
        clock: Callable[[], float] = time.monotonic,
        on_state_change: Optional[StateCallback] = None,
    ) -> None:
        self._engine = engine
        self._cache = cache
        self._sink = sink
        self._recognizer = recognizer
        self._settle_s = settle_s
        self._move_threshold_px = move_threshold_px
        self._capture_radius = capture_radius
        self._name = name
        self._clock = clock
        self._on_state_change = on_state_change

        self._state = HoverState.IDLE
        self._session = HoverSession()
        self._session_id = 0
        self._busy = False
        self._task: Optional[asyncio.Task[None]] = None

    @property
    def state(self) -> HoverState:
        return self._state

    @property
    def session(self) -> HoverSession:
        return self._session

    @property
    def current_task(self) -> Optional[asyncio.Task[None]]:
        return self._task

    def is_current(self, session_id: int) -> bool:
        return session_id == self._session_id

    # ------------------------------------------------------------------
    # Input streams
    # ------------------------------------------------------------------

    def on_text_move(self, text: str, offset: int, position: Optional[Point] = None) -> None:
        word = word_at(text, offset)
        if not word or not is_russian(word):
            self._session.candidate = ""
            self._cancel_arm()
            if self._state == HoverState.PRESENTING:
                self.dismiss()
            return

        self._session.last_position = position
        if word == self._session.candidate:
            return
        self._session.candidate = word
        self._arm(word, position)

    def on_pointer_move(self, position: Point) -> None:
        last = self._session.last_position
        if last is not None and last.distance_to(position) <= self._move_threshold_px:
            return
        self._session.last_position = position
        self._arm("", position)

    def on_leave(self) -> None:
        self._session.candidate = ""
        self._cancel_arm()
        self.dismiss()

    def trigger(
        self,
        word: str = "",
        position: Optional[Point] = None,
        text: Optional[str] = None,
    ) -> Optional[asyncio.Task[None]]:
        """Resolve right away, skipping the settle window."""
        self._session.disarm()
        if self._busy:
            logger.debug("[%s] trigger ignored, lookup in flight", self._name)
            return None
        return self._start_resolution(word, position, text)

    def dismiss(self) -> None:
        self._session.disarm()
        if self._state in (HoverState.RESOLVING, HoverState.PRESENTING):
            # late results of the abandoned cycle must not reach the sink
            self._session_id += 1
        self._sink.dismiss()
        self._transition(HoverState.IDLE)

    def reset(self) -> None:
        self.dismiss()
        self._session.reset()

    # ------------------------------------------------------------------
    # Debounce
    # ------------------------------------------------------------------

    def _arm(self, word: str, position: Optional[Point]) -> None:
        loop = asyncio.get_running_loop()
        deadline = self._clock() + self._settle_s
        session = self._session
        session.pending_word = word
        session.pending_position = position
        session.timer_armed = True
        session.timer_deadline = deadline
        loop.call_later(self._settle_s, self._on_deadline, deadline)
        if self._state == HoverState.IDLE:
            self._transition(HoverState.ARMED)

    def _cancel_arm(self) -> None:
        self._session.disarm()
        if self._state == HoverState.ARMED:
            self._transition(HoverState.IDLE)

    def _on_deadline(self, deadline: float) -> None:
        session = self._session
        if not session.timer_armed or session.timer_deadline != deadline:
            return

        word = session.pending_word
        position = session.pending_position
        session.disarm()

        if self._busy:
            logger.debug("[%s] settle ignored, lookup in flight", self._name)
            if self._state == HoverState.ARMED:
                self._transition(HoverState.IDLE)
            return

        stale = (word != session.candidate) if word else (position != session.last_position)
        if stale:
            logger.debug("[%s] stale settle discarded", self._name)
            if self._state == HoverState.ARMED:
                self._transition(HoverState.IDLE)
            return

        logger.debug(
            "[%s] settled on %r (%.0f ms late)",
            self._name,
            word or position,
            max(0.0, self._clock() - deadline) * 1000,
        )
        self._start_resolution(word, position, None)

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def _start_resolution(
        self,
        word: str,
        position: Optional[Point],
        text: Optional[str],
    ) -> asyncio.Task[None]:
        loop = asyncio.get_running_loop()
        if self._state == HoverState.PRESENTING:
            self._transition(HoverState.IDLE)
        self._busy = True
        self._session_id += 1
        self._transition(HoverState.RESOLVING)
        self._task = loop.create_task(self._resolve(self._session_id, word, position, text))
        return self._task

    async def _resolve(
        self,
        session_id: int,
        word: str,
        position: Optional[Point],
        text: Optional[str],
    ) -> None:
        pronunciation = ""
        try:
            self._publish(
                session_id,
                PresentationState(kind=PresentationKind.LOADING, word=word, position=position),
            )
            if not word:
                word = await self._recognize(position, text)

            if not word or not is_russian(word):
                self._publish(
                    session_id,
                    PresentationState(
                        kind=PresentationKind.EMPTY,
                        message=ERROR_MESSAGES[NO_RUSSIAN_TEXT],
                        position=position,
                    ),
                )
                self._finish(session_id, "")
                return

            pronunciation = self._engine.pronounce(word)
            self._publish(
                session_id,
                PresentationState(
                    kind=PresentationKind.PENDING,
                    word=word,
                    pronunciation=pronunciation,
                    position=position,
                ),
            )

            entry = await self._cache.get(word)
            kind = PresentationKind.ERROR if entry.is_error else PresentationKind.TRANSLATED
            self._publish(
                session_id,
                PresentationState(
                    kind=kind,
                    word=word,
                    pronunciation=pronunciation,
                    entry=entry,
                    message=entry.error,
                    position=position,
                ),
            )
            self._finish(session_id, word)
        except Exception as exc:
            logger.exception("[%s] lookup for %r failed", self._name, word)
            self._publish(
                session_id,
                PresentationState(
                    kind=PresentationKind.ERROR,
                    word=word,
                    pronunciation=pronunciation,
                    message=f"Error: {exc}",
                    position=position,
                ),
            )
            self._finish(session_id, word)
        finally:
            self._busy = False

    async def _recognize(self, position: Optional[Point], text: Optional[str]) -> str:
        if text is None:
            if self._recognizer is None or position is None:
                return ""
            try:
                text = await self._recognizer.recognize_text(position, self._capture_radius)
            except Exception as exc:
                logger.warning("[%s] %s (%s)", self._name, ERROR_MESSAGES[RECOGNITION_FAILED], exc)
                return ""
        return first_russian_word(text or "")

    def _publish(self, session_id: int, state: PresentationState) -> None:
        if not self.is_current(session_id):
            logger.debug("[%s] dropping %s for abandoned lookup", self._name, state.kind.value)
            return
        self._sink.present(replace(state, session_id=session_id))

    def _finish(self, session_id: int, word: str) -> None:
        if not self.is_current(session_id):
            return
        self._session.last_trigger_word = word
        self._transition(HoverState.PRESENTING)

    def _transition(self, to_state: HoverState) -> None:
        from_state = self._state
        if from_state == to_state:
            return
        self._state = to_state
        logger.debug("[%s] %s -> %s", self._name, from_state.value, to_state.value)
        if self._on_state_change:
            self._on_state_change(from_state, to_state)

"""Core data models for the app."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class HoverState(str, Enum):
    IDLE = "IDLE"
    ARMED = "ARMED"
    RESOLVING = "RESOLVING"
    PRESENTING = "PRESENTING"


class PresentationKind(str, Enum):
    LOADING = "loading"
    PENDING = "pending"
    TRANSLATED = "translated"
    ERROR = "error"
    EMPTY = "empty"


@dataclass(frozen=True)
class Point:
    x: int
    y: int

    def distance_to(self, other: Point) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class TranslationEntry:
    meaning: str
    examples: str
    grammar: str
    level: str
    terminal: bool = True
    error: str = ""

    @property
    def is_error(self) -> bool:
        return bool(self.error)

    @classmethod
    def pending(cls) -> TranslationEntry:
        return cls(
            meaning="Loading...",
            examples="Please wait...",
            grammar="Loading...",
            level="Loading...",
            terminal=False,
        )

    @classmethod
    def failure(cls, message: str) -> TranslationEntry:
        return cls(
            meaning="Translation Error",
            examples="Unable to get translation",
            grammar="Error",
            level="Error",
            error=message or "unknown error",
        )

    @classmethod
    def degraded(cls, raw_text: str) -> TranslationEntry:
        """Entry for a provider answer that is not the expected JSON shape."""
        return cls(
            meaning=raw_text,
            examples="See translation above",
            grammar="Information available in translation",
            level="See translation above",
        )


@dataclass(frozen=True)
class PresentationState:
    kind: PresentationKind
    word: str = ""
    pronunciation: str = ""
    entry: Optional[TranslationEntry] = None
    message: str = ""
    position: Optional[Point] = None
    session_id: int = 0


@dataclass
class HoverSession:
    """Debounce bookkeeping for one input stream."""

    last_position: Optional[Point] = None
    candidate: str = ""
    last_trigger_word: str = ""
    pending_word: str = ""
    pending_position: Optional[Point] = None
    timer_armed: bool = False
    timer_deadline: float = 0.0

    def disarm(self) -> None:
        self.timer_armed = False
        self.pending_word = ""
        self.pending_position = None

    def reset(self) -> None:
        self.disarm()
        self.last_position = None
        self.candidate = ""
        self.last_trigger_word = ""
        self.timer_deadline = 0.0


@dataclass
class CopyResult:
    success: bool
    reason: str


@dataclass
class FlashcardAnswer:
    word: str
    pronunciation: str
    entry: TranslationEntry

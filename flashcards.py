"""Flashcard drill over common words."""

from __future__ import annotations

from typing import Optional, Sequence

from models import FlashcardAnswer
from translation_cache import TranslationCache
from transliteration import TransliterationEngine

DEFAULT_DECK: tuple[str, ...] = (
    "привет", "здравствуйте", "спасибо", "пожалуйста", "извините",
    "да", "нет", "хорошо", "плохо", "большой", "маленький",
    "красивый", "умный", "добрый", "новый", "старый", "молодой",
    "холодный", "горячий", "быстрый", "медленный", "дорогой",
    "дешевый", "легкий", "тяжелый", "счастливый", "грустный",
    "веселый", "серьезный", "важный", "интересный", "сложный",
    "простой", "правильный", "неправильный", "возможный",
    "невозможный", "свободный", "занятый", "готовый", "готов",
)


class FlashcardDeck:
    """Cycles through a fixed word list; answers come from the shared cache."""

    def __init__(
        self,
        engine: TransliterationEngine,
        cache: TranslationCache,
        words: Sequence[str] = DEFAULT_DECK,
    ) -> None:
        if not words:
            raise ValueError("flashcard deck is empty")
        self._engine = engine
        self._cache = cache
        self._words = tuple(words)
        self._index = 0
        self._score = 0
        self._answer: Optional[FlashcardAnswer] = None
        self._scored = False

    @property
    def current_word(self) -> str:
        return self._words[self._index]

    @property
    def score(self) -> int:
        return self._score

    @property
    def answer_shown(self) -> bool:
        return self._answer is not None

    @property
    def progress(self) -> str:
        return f"Card {self._index + 1} of {len(self._words)}"

    def restart(self) -> None:
        self._index = 0
        self._score = 0
        self._answer = None
        self._scored = False

    def next_card(self) -> str:
        self._index = (self._index + 1) % len(self._words)
        self._answer = None
        self._scored = False
        return self.current_word

    def mark_known(self) -> int:
        if not self._scored:
            self._scored = True
            self._score += 1
        return self._score

    async def reveal(self) -> FlashcardAnswer:
        if self._answer is not None:
            return self._answer
        word = self.current_word
        entry = await self._cache.get(word)
        answer = FlashcardAnswer(
            word=word,
            pronunciation=self._engine.pronounce(word),
            entry=entry,
        )
        if word == self.current_word:
            self._answer = answer
        return answer

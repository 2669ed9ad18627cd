from __future__ import annotations

import asyncio

import pytest

from flashcards import DEFAULT_DECK, FlashcardDeck
from translation_cache import SEED_ENTRIES, TranslationCache
from transliteration import TransliterationEngine


class NoFetch:
    async def fetch(self, word: str) -> str:
        raise AssertionError(f"unexpected fetch for {word}")


def _deck(words=("привет", "спасибо", "да")) -> FlashcardDeck:  # noqa: ANN001
    return FlashcardDeck(TransliterationEngine(), TranslationCache(NoFetch()), words=words)


def test_default_deck_has_forty_one_words() -> None:
    assert len(DEFAULT_DECK) == 41


def test_empty_deck_is_rejected() -> None:
    with pytest.raises(ValueError):
        _deck(words=())


def test_next_card_wraps_and_reports_progress() -> None:
    deck = _deck()

    assert deck.progress == "Card 1 of 3"
    assert deck.next_card() == "спасибо"
    assert deck.next_card() == "да"
    assert deck.next_card() == "привет"
    assert deck.progress == "Card 1 of 3"


def test_mark_known_counts_once_per_card() -> None:
    deck = _deck()

    deck.mark_known()
    deck.mark_known()
    deck.next_card()
    deck.mark_known()

    assert deck.score == 2
    deck.restart()
    assert deck.score == 0
    assert deck.current_word == "привет"


def test_reveal_uses_cached_translation() -> None:
    deck = _deck()

    answer = asyncio.run(deck.reveal())

    assert answer.word == "привет"
    assert answer.pronunciation == "privet"
    assert answer.entry == SEED_ENTRIES["привет"]
    assert deck.answer_shown is True
    deck.next_card()
    assert deck.answer_shown is False

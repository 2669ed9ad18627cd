from __future__ import annotations

import pytest

from word_locator import extract_russian_words, first_russian_word, is_russian, word_at


def test_is_russian() -> None:
    assert is_russian("hello") is False
    assert is_russian("привет") is True
    assert is_russian("hi привет") is True
    assert is_russian("") is False


@pytest.mark.parametrize("offset", [2, 3, 4, 5, 6])
def test_word_at_returns_whole_word_for_any_interior_offset(offset: int) -> None:
    assert word_at("я люблю котов", offset) == "люблю"


def test_word_at_edges() -> None:
    text = "я люблю котов"
    assert word_at(text, 0) == "я"
    assert word_at(text, len(text) - 1) == "котов"


@pytest.mark.parametrize("offset", [-1, 1, 7, 13, 100])
def test_word_at_whitespace_or_out_of_range_is_empty(offset: int) -> None:
    assert word_at("я люблю котов", offset) == ""


def test_word_at_stops_at_punctuation_and_keeps_digits() -> None:
    assert word_at("Привет,мир2024!", 9) == "мир2024"
    assert word_at("Привет,мир2024!", 6) == ""


def test_first_russian_word_skips_latin_tokens() -> None:
    assert first_russian_word("hello «мир», дом") == "мир"
    assert first_russian_word("hello world") == ""
    assert first_russian_word("") == ""


def test_extract_russian_words_distinct_in_order() -> None:
    text = "Привет привет, мир! я Привет OCR123 дом"
    assert extract_russian_words(text) == ["Привет", "привет", "мир", "дом"]

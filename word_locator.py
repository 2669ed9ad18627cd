"""Word extraction and Cyrillic classification."""

from __future__ import annotations

import re

_CYRILLIC_FIRST = 0x0400
_CYRILLIC_LAST = 0x04FF
_RUSSIAN_RUN = re.compile(r"[а-яёА-ЯЁ]+")
_EDGE_PUNCTUATION = ".,!?:;\"'()[]{}«»—-…"


def is_russian(word: str) -> bool:
    """True when ``word`` has at least one code point in U+0400..U+04FF."""
    return any(_CYRILLIC_FIRST <= ord(char) <= _CYRILLIC_LAST for char in word)


def word_at(text: str, offset: int) -> str:
    """Return the letter/digit run that contains ``offset``, or ``""``."""
    if offset < 0 or offset >= len(text):
        return ""
    if not text[offset].isalnum():
        return ""
    start = offset
    end = offset + 1
    while start > 0 and text[start - 1].isalnum():
        start -= 1
    while end < len(text) and text[end].isalnum():
        end += 1
    return text[start:end]


def first_russian_word(text: str) -> str:
    """First whitespace token of ``text`` that contains Cyrillic.

    Recognized screen text has no per-character coordinates, so the first
    Russian token wins regardless of where the pointer actually is.
    """
    for token in text.split():
        clean = token.strip(_EDGE_PUNCTUATION)
        if clean and is_russian(clean):
            return clean
    return ""


def extract_russian_words(text: str) -> list[str]:
    """Distinct Cyrillic runs longer than one letter, in order of appearance."""
    seen: set[str] = set()
    words: list[str] = []
    for match in _RUSSIAN_RUN.finditer(text or ""):
        word = match.group(0)
        if len(word) <= 1 or word in seen:
            continue
        seen.add(word)
        words.append(word)
    return words

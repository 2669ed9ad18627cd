from __future__ import annotations

from transliteration import CHARACTER_RULES, COMMON_WORDS, DIGRAPH_RULES, TransliterationEngine


def test_empty_input_returns_empty() -> None:
    engine = TransliterationEngine()
    assert engine.pronounce("") == ""


def test_latin_text_passes_through() -> None:
    engine = TransliterationEngine()
    assert engine.pronounce("hello") == "hello"
    assert engine.pronounce("R2-D2!") == "R2-D2!"


def test_single_letter_rules_cover_both_cases() -> None:
    engine = TransliterationEngine()
    assert engine.pronounce("конь") == "kon'"
    assert engine.pronounce("КОНЬ") == "kon'"
    assert len(CHARACTER_RULES) == 66
    assert len(DIGRAPH_RULES) == 8


def test_digraph_overrides_single_letters() -> None:
    engine = TransliterationEngine()
    # ж + ч alone would give "zhch"
    assert engine.pronounce("мужчины") == "mooshcheeny"


def test_digraph_match_is_case_insensitive() -> None:
    engine = TransliterationEngine()
    assert engine.pronounce("СЧА") == "scha"


def test_digraph_takes_precedence_and_consumes_pair() -> None:
    engine = TransliterationEngine(digraph_rules={"сч": "SCH", "тс": "TS"})

    assert engine.pronounce("сча") == "SCHa"
    # "тс" consumes both letters, so "сч" is never considered at index 1
    assert engine.pronounce("тсч") == "TSch"


def test_known_word_bypasses_rules() -> None:
    engine = TransliterationEngine()

    assert engine.pronounce("привет") == "privet"
    assert engine.pronounce("ПРИВЕТ") == "privet"
    assert engine.pronounce("Привет") == "privet"
    assert TransliterationEngine(common_words={}).pronounce("привет") == "preeveyet"


def test_common_word_table_is_lowercase() -> None:
    assert all(word == word.lower() for word in COMMON_WORDS)
    assert len(COMMON_WORDS) >= 100


def test_unmapped_characters_are_kept() -> None:
    engine = TransliterationEngine()
    assert engine.pronounce("кот-2") == "kot-2"


def test_pronunciation_guide_lines() -> None:
    engine = TransliterationEngine()

    guide = engine.pronunciation_guide("Привет, world!\nкот")

    assert guide == "Привет → [privet]\nworld → (not Russian)\nкот → [kot]\n"


def test_pronunciation_guide_empty_text() -> None:
    engine = TransliterationEngine()
    assert engine.pronunciation_guide("   \n") == ""

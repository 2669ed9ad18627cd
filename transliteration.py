"""Rule-based Russian to Latin phonetic transliteration."""

from __future__ import annotations

from typing import Final

from word_locator import is_russian

_LOWER_RULES: Final[dict[str, str]] = {
    # vowels
    "а": "a",
    "е": "ye",
    "ё": "yo",
    "и": "ee",
    "о": "o",
    "у": "oo",
    "ы": "y",
    "э": "e",
    "ю": "yu",
    "я": "ya",
    # consonants
    "б": "b",
    "в": "v",
    "г": "g",
    "д": "d",
    "ж": "zh",
    "з": "z",
    "й": "y",
    "к": "k",
    "л": "l",
    "м": "m",
    "н": "n",
    "п": "p",
    "р": "r",
    "с": "s",
    "т": "t",
    "ф": "f",
    "х": "kh",
    "ц": "ts",
    "ч": "ch",
    "ш": "sh",
    "щ": "shch",
    # signs
    "ъ": "'",
    "ь": "'",
}

CHARACTER_RULES: Final[dict[str, str]] = {
    **_LOWER_RULES,
    **{letter.upper(): sound for letter, sound in _LOWER_RULES.items()},
}

DIGRAPH_RULES: Final[dict[str, str]] = {
    "жч": "shch",
    "жш": "zhsh",
    "чш": "chsh",
    "тс": "ts",
    "дс": "ds",
    "зж": "zzh",
    "сж": "szh",
    "сч": "sch",
}

COMMON_WORDS: Final[dict[str, str]] = {
    # greetings
    "привет": "privet",
    "здравствуйте": "zdravstvuyte",
    "доброе": "dobroye",
    "утро": "utro",
    "день": "dyen",
    "вечер": "vecher",
    "добрый": "dobryy",
    "пока": "poka",
    "до": "do",
    "свидания": "svidaniya",
    # everyday words
    "как": "kak",
    "дела": "dela",
    "хорошо": "khorosho",
    "плохо": "plokho",
    "спасибо": "spasibo",
    "пожалуйста": "pozhalusta",
    "извините": "izvinite",
    "да": "da",
    "нет": "nyet",
    "что": "chto",
    "где": "gde",
    "когда": "kogda",
    "почему": "pochemu",
    "кто": "kto",
    "я": "ya",
    "ты": "ty",
    "он": "on",
    "она": "ona",
    "оно": "ono",
    "мы": "my",
    "вы": "vy",
    "они": "oni",
    "это": "eto",
    "то": "to",
    "все": "vse",
    "всего": "vsego",
    "очень": "ochen",
    "много": "mnogo",
    "мало": "malo",
    "большой": "bolshoy",
    "маленький": "malenkiy",
    "новый": "novyy",
    "старый": "staryy",
    "хороший": "khoroshiy",
    "плохой": "plokhoy",
    "красивый": "krasivyy",
    "красивая": "krasivaya",
    "красивое": "krasivoye",
    "красивые": "krasivye",
    "изучаю": "izuchayu",
    "русский": "russkiy",
    "язык": "yazyk",
    "слово": "slovo",
    "предложение": "predlozheniye",
    "текст": "tekst",
    "книга": "kniga",
    "дом": "dom",
    "работа": "rabota",
    "семья": "semya",
    "друг": "drug",
    "подруга": "podruga",
    "любовь": "lyubov",
    "жизнь": "zhizn",
    "время": "vremya",
    "место": "mesto",
    "город": "gorod",
    "страна": "strana",
    "мир": "mir",
    "человек": "chelovek",
    "люди": "lyudi",
    "ребенок": "rebenok",
    "дети": "deti",
    "мужчина": "muzhchina",
    "женщина": "zhenschina",
    "мама": "mama",
    "папа": "papa",
    "брат": "brat",
    "сестра": "sestra",
    "бабушка": "babushka",
    "дедушка": "dedushka",
    "еда": "eda",
    "вода": "voda",
    "хлеб": "khleb",
    "молоко": "moloko",
    "чай": "chay",
    "кофе": "kofe",
    "мясо": "myaso",
    "рыба": "ryba",
    "овощи": "ovoshchi",
    "фрукты": "frukty",
    "цвет": "tsvet",
    "красный": "krasnyy",
    "синий": "siniy",
    "зеленый": "zelenyy",
    "желтый": "zheltyy",
    "белый": "belyy",
    "черный": "chernyy",
    "число": "chislo",
    "один": "odin",
    "два": "dva",
    "три": "tri",
    "четыре": "chetyre",
    "пять": "pyat",
    "шесть": "shest",
    "семь": "sem",
    "восемь": "vosem",
    "девять": "devyat",
    "десять": "desyat",
}

_GUIDE_PUNCTUATION: Final[str] = ".,!?:;\"'()[]{}"


class TransliterationEngine:
    """Deterministic phonetic spelling of Russian words.

    Curated spellings for common words win over the rules. Otherwise the word
    is scanned left to right and a matching letter pair consumes both letters
    before the single-letter table is consulted. Characters with no rule are
    copied through unchanged, so Latin text comes back as-is.
    """

    def __init__(
        self,
        character_rules: dict[str, str] | None = None,
        digraph_rules: dict[str, str] | None = None,
        common_words: dict[str, str] | None = None,
    ) -> None:
        self._character_rules = character_rules if character_rules is not None else CHARACTER_RULES
        self._digraph_rules = digraph_rules if digraph_rules is not None else DIGRAPH_RULES
        self._common_words = common_words if common_words is not None else COMMON_WORDS

    def pronounce(self, word: str) -> str:
        if not word:
            return ""
        known = self._common_words.get(word.lower())
        if known is not None:
            return known
        return self._apply_rules(word)

    def pronunciation_guide(self, text: str) -> str:
        """One ``word → [pronunciation]`` line per whitespace token."""
        lines: list[str] = []
        for token in text.split():
            clean = token.strip(_GUIDE_PUNCTUATION)
            if is_russian(clean):
                lines.append(f"{clean} → [{self.pronounce(clean)}]")
            else:
                lines.append(f"{clean} → (not Russian)")
        if not lines:
            return ""
        return "\n".join(lines) + "\n"

    def _apply_rules(self, word: str) -> str:
        parts: list[str] = []
        i = 0
        length = len(word)
        while i < length:
            if i + 1 < length:
                pair = word[i : i + 2].lower()
                digraph = self._digraph_rules.get(pair)
                if digraph is not None:
                    parts.append(digraph)
                    i += 2
                    continue
            char = word[i]
            parts.append(self._character_rules.get(char, char))
            i += 1
        return "".join(parts)

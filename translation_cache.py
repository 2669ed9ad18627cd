"""Process-wide translation memo with in-flight request coalescing."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Optional

from interfaces import TranslationFetcher
from models import TranslationEntry

logger = logging.getLogger(__name__)

SEED_ENTRIES: dict[str, TranslationEntry] = {
    "привет": TranslationEntry(
        "Hello / Hi", "Привет, как дела? - Hello, how are you?", "Interjection", "A1"
    ),
    "здравствуйте": TranslationEntry(
        "Hello (formal)",
        "Здравствуйте, рад вас видеть. - Hello, nice to see you.",
        "Interjection",
        "A1",
    ),
    "спасибо": TranslationEntry(
        "Thank you", "Спасибо за помощь. - Thank you for help.", "Interjection", "A1"
    ),
    "пожалуйста": TranslationEntry(
        "Please / You're welcome",
        "Пожалуйста, помогите мне. - Please help me.",
        "Interjection",
        "A1",
    ),
    "извините": TranslationEntry(
        "Excuse me / Sorry",
        "Извините, где банк? - Excuse me, where is the bank?",
        "Interjection",
        "A1",
    ),
    "да": TranslationEntry("Yes", "Да, я понимаю. - Yes, I understand.", "Particle", "A1"),
    "нет": TranslationEntry("No", "Нет, я не знаю. - No, I don't know.", "Particle", "A1"),
    "хорошо": TranslationEntry(
        "Good / Well / OK", "Хорошо, я согласен. - OK, I agree.", "Adverb", "A1"
    ),
    "плохо": TranslationEntry("Bad / Poorly", "Мне плохо. - I feel bad.", "Adverb", "A1"),
    "как": TranslationEntry(
        "How / As / Like", "Как дела? - How are you?", "Adverb/Conjunction", "A1"
    ),
    "дела": TranslationEntry(
        "Affairs / Matters / Things", "Как дела? - How are things?", "Noun (plural)", "A1"
    ),
    "русский": TranslationEntry(
        "Russian", "Я изучаю русский язык. - I study Russian language.", "Adjective", "A1"
    ),
    "язык": TranslationEntry(
        "Language / Tongue", "Русский язык - Russian language", "Noun (masculine)", "A1"
    ),
    "я": TranslationEntry("I", "Я студент. - I am a student.", "Personal Pronoun", "A1"),
    "изучаю": TranslationEntry(
        "I study / I am studying", "Я изучаю русский. - I study Russian.", "Verb (1st person)", "A1"
    ),
}


def parse_entry(raw_text: str) -> TranslationEntry:
    """Build a terminal entry from the provider's answer.

    Anything that is not a JSON object degrades to an entry whose meaning is
    the raw text; this never raises.
    """
    text = (raw_text or "").strip()
    body = text
    if body.startswith("```"):
        body = body.strip("`")
        if body.lower().startswith("json"):
            body = body[4:]
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, TypeError):
        logger.info("Provider answer is not JSON, keeping raw text")
        return TranslationEntry.degraded(text)
    if not isinstance(data, dict):
        return TranslationEntry.degraded(text)
    return TranslationEntry(
        meaning=_field(data, "meaning", "Translation not available"),
        examples=_field(data, "examples", "Examples not available"),
        grammar=_field(data, "grammar", "Grammar info not available"),
        level=_field(data, "level", "Level not available"),
    )


def _field(data: dict, key: str, default: str) -> str:
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, list):
        return "\n".join(str(item) for item in value)
    return str(value)


class TranslationCache:
    def __init__(
        self,
        fetcher: TranslationFetcher,
        seed: Optional[dict[str, TranslationEntry]] = None,
    ) -> None:
        self._fetcher = fetcher
        self._entries: dict[str, TranslationEntry] = dict(SEED_ENTRIES if seed is None else seed)
        self._in_flight: dict[str, asyncio.Future[TranslationEntry]] = {}
        self._tasks: set[asyncio.Task[None]] = set()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and word.lower() in self._entries

    def peek(self, word: str) -> Optional[TranslationEntry]:
        return self._entries.get(word.lower())

    def get(self, word: str) -> asyncio.Future[TranslationEntry]:
        """Return a future for the entry of ``word``.

        Must be called on the loop thread. Installing the pending entry and
        scheduling the fetch happen without an await in between, so a second
        caller for the same key always finds the in-flight future.

        Each caller gets its own shielded view of the shared future, so
        cancelling one waiter leaves the others and the fetch untouched.
        """
        loop = asyncio.get_running_loop()
        key = word.lower()

        entry = self._entries.get(key)
        if entry is not None and entry.terminal:
            done: asyncio.Future[TranslationEntry] = loop.create_future()
            done.set_result(entry)
            return done

        in_flight = self._in_flight.get(key)
        if in_flight is not None:
            logger.debug("Joining in-flight lookup for %r", key)
            return asyncio.shield(in_flight)

        future: asyncio.Future[TranslationEntry] = loop.create_future()
        self._entries[key] = TranslationEntry.pending()
        self._in_flight[key] = future
        task = loop.create_task(self._fetch(key, word, future))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return asyncio.shield(future)

    async def _fetch(
        self,
        key: str,
        word: str,
        future: asyncio.Future[TranslationEntry],
    ) -> None:
        logger.info("Fetching translation for %r", key)
        try:
            raw = await self._fetcher.fetch(word)
        except Exception as exc:
            logger.warning("Translation fetch for %r failed: %s", key, exc)
            entry = TranslationEntry.failure(str(exc))
        else:
            entry = parse_entry(raw)
            logger.info("Translation for %r cached", key)

        self._entries[key] = entry
        self._in_flight.pop(key, None)
        if not future.done():
            future.set_result(entry)

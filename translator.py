"""Translation fetcher backed by DashScope text generation.

The model is asked for a small JSON object (meaning, examples, grammar,
level). The fetcher only returns the raw message text; turning it into a
cache entry, including the degraded fallback for non-JSON answers, is the
cache's job.
"""

from __future__ import annotations

import asyncio
import logging
import os

from errors import AUTH_FAILED, ERROR_MESSAGES, FETCH_FAILED, NETWORK_ERROR, PROVIDER_MISSING

try:
    import dashscope
except Exception:  # pragma: no cover
    dashscope = None  # type: ignore

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are a helpful Russian language assistant. Always respond with valid JSON."

USER_PROMPT = """You are a Russian language expert. Please provide a detailed translation and analysis for the Russian word: '{word}'

Please respond in the following JSON format:
{{
    "meaning": "English translation and explanation",
    "examples": "2-3 example sentences using this word",
    "grammar": "Grammatical information (part of speech, gender, etc.)",
    "level": "CEFR level (A1, A2, B1, B2, C1, C2)"
}}

Keep responses concise but informative."""


class TranslationFetchError(RuntimeError):
    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code


class DashscopeTranslationFetcher:
    def __init__(
        self,
        api_key: str,
        model: str = "qwen-plus",
        request_timeout_s: float = 30.0,
        temperature: float = 0.3,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._request_timeout_s = request_timeout_s
        self._temperature = temperature

    def set_api_key(self, api_key: str) -> None:
        self._api_key = api_key

    async def fetch(self, word: str) -> str:
        return await asyncio.to_thread(self._fetch_sync, word)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _fetch_sync(self, word: str) -> str:
        if dashscope is None:
            raise TranslationFetchError(PROVIDER_MISSING, ERROR_MESSAGES[PROVIDER_MISSING])

        api_key = self._api_key or os.getenv("DASHSCOPE_API_KEY", "")
        if not api_key:
            raise TranslationFetchError(AUTH_FAILED, "No API key configured")

        try:
            response = dashscope.Generation.call(
                api_key=api_key,
                model=self._model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": USER_PROMPT.format(word=word)},
                ],
                result_format="message",
                temperature=self._temperature,
                timeout=self._request_timeout_s,
            )
        except Exception as exc:
            raise self._to_fetch_error(exc) from exc

        status = self._status_code(response)
        if status != 200:
            message = f"API Error: {status} - {self._error_detail(response)}"
            logger.warning("DashScope call for %r failed: %s", word, message)
            raise self._to_fetch_error(RuntimeError(message))

        text = self._extract_text(response)
        if not text:
            raise TranslationFetchError(FETCH_FAILED, "No response from API")
        return text

    def _status_code(self, response: object) -> int:
        if isinstance(response, dict):
            value = response.get("status_code", 200)
        else:
            value = getattr(response, "status_code", 200)
        try:
            return int(value)
        except (TypeError, ValueError):
            return 0

    def _error_detail(self, response: object) -> str:
        if isinstance(response, dict):
            code = response.get("code") or ""
            message = response.get("message") or ""
            return f"{code} {message}".strip()
        return str(response)

    def _extract_text(self, response: object) -> str:
        """Pull the assistant message out of a dashscope response dict."""
        if isinstance(response, dict):
            output = response.get("output") or {}
            choices = output.get("choices") or []
            if choices:
                message = choices[0].get("message") or {}
                content = message.get("content", "")
                if isinstance(content, list):
                    return "".join(
                        str(part.get("text", "")) for part in content if isinstance(part, dict)
                    )
                return str(content or "")
            return str(output.get("text") or "")
        return ""

    def _to_fetch_error(self, exc: Exception) -> TranslationFetchError:
        """Map an SDK/network exception to a coded fetch error."""
        message = str(exc)
        low = message.lower()
        if "401" in low or "auth" in low or "api key" in low:
            code = AUTH_FAILED
        elif "timeout" in low or "network" in low or "connection" in low:
            code = NETWORK_ERROR
        else:
            code = FETCH_FAILED
        return TranslationFetchError(code, message)

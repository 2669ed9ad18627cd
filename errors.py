"""Shared error codes and user-facing messages."""

from __future__ import annotations

RECOGNITION_FAILED = "RECOGNITION_FAILED"
NO_RUSSIAN_TEXT = "NO_RUSSIAN_TEXT"
FETCH_FAILED = "FETCH_FAILED"
AUTH_FAILED = "AUTH_FAILED"
NETWORK_ERROR = "NETWORK_ERROR"
PROVIDER_MISSING = "PROVIDER_MISSING"
DEPENDENCY_MISSING = "DEPENDENCY_MISSING"

ERROR_MESSAGES = {
    RECOGNITION_FAILED: "Could not read text from the screen.",
    NO_RUSSIAN_TEXT: "No Russian text found in this area",
    FETCH_FAILED: "Translation service returned an error.",
    AUTH_FAILED: "API key is invalid.",
    NETWORK_ERROR: "Network failed, please retry.",
    PROVIDER_MISSING: "dashscope is not installed",
    DEPENDENCY_MISSING: "clipboard dependency missing",
}

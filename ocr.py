"""Screen text recognition around the pointer."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from models import Point
from word_locator import extract_russian_words

try:
    from PIL import ImageGrab
except Exception:  # pragma: no cover
    ImageGrab = None  # type: ignore

try:
    import pytesseract
except Exception:  # pragma: no cover
    pytesseract = None  # type: ignore

logger = logging.getLogger(__name__)

Box = tuple[int, int, int, int]

CHAR_WHITELIST = (
    "абвгдеёжзийклмнопрстуфхцчшщъыьэюяАБВГДЕЁЖЗИЙКЛМНОПРСТУФХЦЧШЩЪЫЬЭЮЯ"
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789.,!?-"
)


def capture_box(center: Point, radius: int, bounds: Optional[Box] = None) -> Optional[Box]:
    """Square around ``center`` clipped to ``bounds``; None when nothing is left."""
    left = center.x - radius
    top = center.y - radius
    right = center.x + radius
    bottom = center.y + radius
    if bounds is not None:
        b_left, b_top, b_right, b_bottom = bounds
        left = max(left, b_left)
        top = max(top, b_top)
        right = min(right, b_right)
        bottom = min(bottom, b_bottom)
    if right - left <= 0 or bottom - top <= 0:
        return None
    return (left, top, right, bottom)


class TesseractScreenRecognizer:
    """Grabs a square of the screen and runs tesseract over it.

    Every failure is logged and reported as an empty string so the caller
    falls through to "no Russian text found".
    """

    def __init__(
        self,
        language: str = "rus+eng",
        screen_bounds: Optional[Box] = None,
    ) -> None:
        self.language = language
        self.screen_bounds = screen_bounds

    async def recognize_text(self, center: Point, radius: int) -> str:
        return await asyncio.to_thread(self._recognize_sync, center, radius)

    def _recognize_sync(self, center: Point, radius: int) -> str:
        if ImageGrab is None or pytesseract is None:
            logger.warning("Screen OCR unavailable: Pillow/pytesseract not installed")
            return ""
        box = capture_box(center, radius, self.screen_bounds)
        if box is None:
            return ""
        try:
            image = ImageGrab.grab(bbox=box, all_screens=True)
            text = pytesseract.image_to_string(
                image,
                lang=self.language,
                config=f"-c tessedit_char_whitelist={CHAR_WHITELIST}",
            )
        except Exception as exc:
            logger.warning("Screen OCR at %s failed: %s", center, exc)
            return ""
        return " ".join(extract_russian_words(text.strip()))

from __future__ import annotations

import asyncio
from unittest.mock import MagicMock

import ocr
from models import Point
from ocr import TesseractScreenRecognizer, capture_box


def test_capture_box_is_square_around_center() -> None:
    assert capture_box(Point(200, 300), 100) == (100, 200, 300, 400)


def test_capture_box_clips_to_screen_bounds() -> None:
    assert capture_box(Point(30, 40), 100, bounds=(0, 0, 1920, 1080)) == (0, 0, 130, 140)


def test_capture_box_outside_screen_is_none() -> None:
    assert capture_box(Point(-500, -500), 100, bounds=(0, 0, 1920, 1080)) is None


def test_recognize_keeps_only_russian_runs(monkeypatch) -> None:  # noqa: ANN001
    grab = MagicMock()
    tesseract = MagicMock()
    tesseract.image_to_string.return_value = "  File Edit\nПривет, мир! я привет\n"
    monkeypatch.setattr(ocr, "ImageGrab", grab)
    monkeypatch.setattr(ocr, "pytesseract", tesseract)

    recognizer = TesseractScreenRecognizer(language="rus", screen_bounds=(0, 0, 800, 600))
    text = asyncio.run(recognizer.recognize_text(Point(50, 50), 100))

    assert text == "Привет мир привет"
    grab.grab.assert_called_once_with(bbox=(0, 0, 150, 150), all_screens=True)
    assert tesseract.image_to_string.call_args.kwargs["lang"] == "rus"


def test_recognize_without_dependencies_returns_empty(monkeypatch) -> None:  # noqa: ANN001
    monkeypatch.setattr(ocr, "pytesseract", None)

    text = asyncio.run(TesseractScreenRecognizer().recognize_text(Point(10, 10), 50))

    assert text == ""


def test_recognize_failure_returns_empty(monkeypatch) -> None:  # noqa: ANN001
    grab = MagicMock()
    grab.grab.side_effect = OSError("no display")
    monkeypatch.setattr(ocr, "ImageGrab", grab)
    monkeypatch.setattr(ocr, "pytesseract", MagicMock())

    text = asyncio.run(TesseractScreenRecognizer().recognize_text(Point(10, 10), 50))

    assert text == ""

"""Application entrypoint."""

from __future__ import annotations

import asyncio
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from clipboard import ClipboardService
from config import JsonConfigStore
from flashcards import FlashcardDeck
from hover_resolver import HoverResolver
from interfaces import PointerSource
from logging_setup import configure_logging
from models import Point
from ocr import TesseractScreenRecognizer
from overlay import TranslationPopup
from pointer_hook import GlobalPointerAdapter
from translation_cache import TranslationCache
from translator import DashscopeTranslationFetcher
from transliteration import TransliterationEngine
from word_locator import word_at

try:
    from PySide6 import QtAsyncio
    from PySide6.QtCore import Qt
    from PySide6.QtWidgets import (
        QApplication,
        QFileDialog,
        QHBoxLayout,
        QInputDialog,
        QLabel,
        QMessageBox,
        QPushButton,
        QTextEdit,
        QVBoxLayout,
        QWidget,
    )
except Exception as exc:  # pragma: no cover
    raise SystemExit(f"PySide6 is required to run the desktop app: {exc}")

logger = logging.getLogger(__name__)

TextMoveCallback = Callable[[str, int, Point], None]

PLACEHOLDER_OUTPUT = (
    "Enter Russian text and hover over words to see translations and pronunciation guides..."
)
READY_STATUS = "Ready - Hover over Russian words to see translations"


class HoverTextEdit(QTextEdit):
    """Text surface that reports the character under the pointer."""

    def __init__(
        self,
        on_move: TextMoveCallback,
        on_leave: Callable[[], None],
        on_lookup: TextMoveCallback,
    ) -> None:
        super().__init__()
        self._on_move = on_move
        self._on_leave = on_leave
        self._on_lookup = on_lookup
        self.setMouseTracking(True)
        self.viewport().setMouseTracking(True)
        self.setContextMenuPolicy(Qt.NoContextMenu)

    def mouseMoveEvent(self, event) -> None:  # noqa: N802, ANN001
        super().mouseMoveEvent(event)
        self._on_move(*self._hit(event))

    def mousePressEvent(self, event) -> None:  # noqa: N802, ANN001
        if event.button() == Qt.RightButton:
            self._on_lookup(*self._hit(event))
            return
        super().mousePressEvent(event)

    def leaveEvent(self, event) -> None:  # noqa: N802, ANN001
        self._on_leave()
        super().leaveEvent(event)

    def _hit(self, event) -> tuple[str, int, Point]:  # noqa: ANN001
        pos = event.position().toPoint()
        cursor = self.cursorForPosition(pos)
        index = cursor.position()
        # cursorForPosition snaps to the nearest gap; left of it means the previous char
        if index > 0 and pos.x() < self.cursorRect(cursor).x():
            index -= 1
        global_pos = event.globalPosition().toPoint()
        return self.toPlainText(), index, Point(global_pos.x(), global_pos.y())


class MainWindow(QWidget):
    def __init__(self, app: App) -> None:
        super().__init__()
        self._app = app
        self.setWindowTitle("Russian Helper")
        self.resize(760, 620)

        self.input = HoverTextEdit(
            on_move=app.on_text_move,
            on_leave=app.on_text_leave,
            on_lookup=app.on_text_lookup,
        )
        self.input.setPlaceholderText("Type or paste Russian text here...")
        self.input.textChanged.connect(self.update_word_count)

        self.output = QTextEdit()
        self.output.setReadOnly(True)
        self.output.setPlainText(PLACEHOLDER_OUTPUT)

        self.word_count = QLabel("Words: 0")
        self.status = QLabel(READY_STATUS)

        self.pronounce_button = QPushButton("🔊 Pronunciation Guide")
        self.pronounce_button.clicked.connect(app.generate_guide)
        self.copy_button = QPushButton("📋 Copy")
        self.copy_button.clicked.connect(app.copy_output)
        self.save_button = QPushButton("💾 Save")
        self.save_button.clicked.connect(app.save_output)
        self.clear_button = QPushButton("🧹 Clear")
        self.clear_button.clicked.connect(app.clear)
        self.global_button = QPushButton("🌐 Enable Global Hook")
        self.global_button.clicked.connect(app.toggle_global_hook)
        self.mode_button = QPushButton("🔄 Switch to Flashcards")
        self.mode_button.clicked.connect(app.toggle_mode)
        self.api_button = QPushButton("🔑 API Key")
        self.api_button.clicked.connect(app.set_api_key)

        buttons = QHBoxLayout()
        for button in (
            self.pronounce_button,
            self.copy_button,
            self.save_button,
            self.clear_button,
            self.global_button,
            self.mode_button,
            self.api_button,
        ):
            buttons.addWidget(button)

        self.translation_panel = QWidget()
        translation_layout = QVBoxLayout()
        translation_layout.setContentsMargins(0, 0, 0, 0)
        translation_layout.addWidget(self.input, 3)
        translation_layout.addWidget(self.word_count)
        translation_layout.addWidget(self.output, 2)
        self.translation_panel.setLayout(translation_layout)

        self.flashcard_panel = QWidget()
        self.card_word = QLabel("")
        self.card_word.setAlignment(Qt.AlignCenter)
        self.card_word.setStyleSheet("font-size: 32px; font-weight: bold;")
        self.card_answer = QLabel("")
        self.card_answer.setAlignment(Qt.AlignCenter)
        self.card_answer.setWordWrap(True)
        self.score = QLabel("Score: 0")
        show_answer = QPushButton("Show Answer")
        show_answer.clicked.connect(app.show_answer)
        knew_it = QPushButton("✔ I knew it")
        knew_it.clicked.connect(app.mark_known)
        next_card = QPushButton("Next ➜")
        next_card.clicked.connect(app.next_card)
        card_buttons = QHBoxLayout()
        for button in (show_answer, knew_it, next_card):
            card_buttons.addWidget(button)
        flashcard_layout = QVBoxLayout()
        flashcard_layout.addWidget(self.score)
        flashcard_layout.addWidget(self.card_word, 1)
        flashcard_layout.addWidget(self.card_answer, 2)
        flashcard_layout.addLayout(card_buttons)
        self.flashcard_panel.setLayout(flashcard_layout)
        self.flashcard_panel.hide()

        layout = QVBoxLayout()
        layout.addLayout(buttons)
        layout.addWidget(self.translation_panel, 1)
        layout.addWidget(self.flashcard_panel, 1)
        layout.addWidget(self.status)
        self.setLayout(layout)

    def update_word_count(self) -> None:
        self.word_count.setText(f"Words: {len(self.input.toPlainText().split())}")

    def closeEvent(self, event) -> None:  # noqa: N802, ANN001
        self._app.quit()
        super().closeEvent(event)


class App:
    def __init__(self) -> None:
        self.app = QApplication(sys.argv)
        self.config_store = JsonConfigStore()
        configure_logging(self.config_store.get_log_level(), self.config_store.get_log_file())
        logger.info("=== Russian Helper starting (config: %s) ===", self.config_store.path)

        self.engine = TransliterationEngine()
        self.fetcher = DashscopeTranslationFetcher(
            api_key=self.config_store.get_api_key(),
            model=self.config_store.get_model(),
            request_timeout_s=self.config_store.get_request_timeout_s(),
        )
        self.cache = TranslationCache(self.fetcher)
        self.clipboard = ClipboardService()
        self.deck = FlashcardDeck(self.engine, self.cache)
        self.pointer_hook: PointerSource = GlobalPointerAdapter()

        hide_ms = int(self.config_store.get_popup_hide_s() * 1000)
        leave_ms = int(self.config_store.get_popup_leave_hide_s() * 1000)
        self.local_popup = TranslationPopup(hide_after_ms=hide_ms, leave_hide_ms=leave_ms)
        self.global_popup = TranslationPopup(hide_after_ms=hide_ms, leave_hide_ms=leave_ms)

        screen = self.app.primaryScreen()
        bounds = None
        if screen is not None:
            geom = screen.geometry()
            bounds = (geom.x(), geom.y(), geom.x() + geom.width(), geom.y() + geom.height())
        self.recognizer = TesseractScreenRecognizer(
            language=self.config_store.get_ocr_language(),
            screen_bounds=bounds,
        )

        self.local_resolver = HoverResolver(
            engine=self.engine,
            cache=self.cache,
            sink=self.local_popup,
            settle_s=self.config_store.get_local_settle_s(),
            name="local",
        )
        self.global_resolver = HoverResolver(
            engine=self.engine,
            cache=self.cache,
            sink=self.global_popup,
            recognizer=self.recognizer,
            settle_s=self.config_store.get_global_settle_s(),
            move_threshold_px=self.config_store.get_move_threshold_px(),
            capture_radius=self.config_store.get_capture_radius_px(),
            name="global",
        )

        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._tasks: set[asyncio.Task] = set()
        self._flashcard_mode = False
        self.window = MainWindow(self)

    # ------------------------------------------------------------------
    # Text surface
    # ------------------------------------------------------------------

    def on_text_move(self, text: str, offset: int, position: Point) -> None:
        if self._loop is None:
            return
        self.local_resolver.on_text_move(text, offset, position)

    def on_text_leave(self) -> None:
        self.local_resolver.on_leave()

    def on_text_lookup(self, text: str, offset: int, position: Point) -> None:
        if self._loop is None:
            return
        word = word_at(text, offset)
        if word:
            self.local_resolver.trigger(word=word, position=position)

    # ------------------------------------------------------------------
    # Toolbar actions
    # ------------------------------------------------------------------

    def generate_guide(self) -> None:
        text = self.window.input.toPlainText()
        if not text.strip():
            QMessageBox.information(None, "No Text", "Please enter some Russian text first.")
            return
        guide = self.engine.pronunciation_guide(text)
        self.window.output.setPlainText(f"🔊 Pronunciation Guide:\n\n{guide}")
        self._status("Pronunciation generated successfully!")

    def copy_output(self) -> None:
        result = self.clipboard.copy_text(self.window.output.toPlainText())
        if result.success:
            self._status("Text copied to clipboard!")
        else:
            self._status(f"Error copying to clipboard: {result.reason}")

    def save_output(self) -> None:
        default_name = f"russian_pronunciation_{datetime.now():%Y%m%d_%H%M%S}.txt"
        path, _ = QFileDialog.getSaveFileName(
            None, "Save", default_name, "Text files (*.txt);;All files (*.*)"
        )
        if not path:
            return
        try:
            Path(path).write_text(self.window.output.toPlainText(), encoding="utf-8")
        except OSError as exc:
            logger.warning("Saving %s failed: %s", path, exc)
            self._status(f"Error saving file: {exc}")
            QMessageBox.critical(None, "Error", f"Error saving file: {exc}")
            return
        self._status(f"File saved: {path}")

    def clear(self) -> None:
        self.window.input.clear()
        self.window.output.setPlainText(PLACEHOLDER_OUTPUT)
        self.local_resolver.reset()
        self._status(READY_STATUS)

    def toggle_global_hook(self) -> None:
        if self.pointer_hook.running:
            self.pointer_hook.stop()
            self.global_resolver.reset()
            self.window.global_button.setText("🌐 Enable Global Hook")
            self._status("Global hook disabled.")
            return
        if self._loop is None:
            return
        try:
            self.pointer_hook.start(self.global_resolver.on_pointer_move, self._loop)
        except Exception as exc:
            logger.warning("Global hook unavailable: %s", exc)
            QMessageBox.critical(None, "Error", f"Error toggling global hook: {exc}")
            return
        self.window.global_button.setText("🌐 Disable Global Hook")
        self._status("Global hook enabled! Hover over Russian text for 1 second to see translations.")

    def set_api_key(self) -> None:
        value, ok = QInputDialog.getText(None, "API Key", "DashScope API Key")
        if not ok:
            return
        self.config_store.set_api_key(value)
        self.fetcher.set_api_key(value)
        QMessageBox.information(None, "Saved", "API Key saved and applied.")

    # ------------------------------------------------------------------
    # Flashcards
    # ------------------------------------------------------------------

    def toggle_mode(self) -> None:
        self._flashcard_mode = not self._flashcard_mode
        window = self.window
        if self._flashcard_mode:
            self.local_resolver.reset()
            window.translation_panel.hide()
            window.flashcard_panel.show()
            window.mode_button.setText("🔄 Switch to Translation")
            self.deck.restart()
            self._show_card()
            self._status("Flashcard mode activated!")
        else:
            window.flashcard_panel.hide()
            window.translation_panel.show()
            window.mode_button.setText("🔄 Switch to Flashcards")
            self._status("Translation mode activated!")

    def next_card(self) -> None:
        self.deck.next_card()
        self._show_card()

    def mark_known(self) -> None:
        self.window.score.setText(f"Score: {self.deck.mark_known()}")

    def show_answer(self) -> None:
        if self.deck.answer_shown or self._loop is None:
            return
        self._spawn(self._reveal_answer())

    async def _reveal_answer(self) -> None:
        word = self.deck.current_word
        answer = await self.deck.reveal()
        if answer.word != self.deck.current_word:
            return
        entry = answer.entry
        self.window.card_answer.setText(
            f"[{answer.pronunciation}]\n\n{entry.meaning}\n\n{entry.examples}"
        )
        self._status(f"Answer shown for: {word}")

    def _show_card(self) -> None:
        self.window.card_word.setText(self.deck.current_word)
        self.window.card_answer.setText("")
        self.window.score.setText(f"Score: {self.deck.score}")
        self._status(self.deck.progress)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _spawn(self, coro) -> None:  # noqa: ANN001
        if self._loop is None:
            coro.close()
            raise RuntimeError("event loop is not running")
        task = self._loop.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _status(self, text: str) -> None:
        self.window.status.setText(text)

    async def _bootstrap(self) -> None:
        self._loop = asyncio.get_running_loop()
        self.window.show()
        logger.info("Main window shown")

    def run(self) -> int:
        QtAsyncio.run(self._bootstrap(), keep_running=True, quit_qapp=True)
        return 0

    def quit(self) -> None:
        logger.info("Shutting down")
        self.pointer_hook.stop()
        self.local_resolver.reset()
        self.global_resolver.reset()
        self.local_popup.close()
        self.global_popup.close()
        self.app.quit()


def main() -> int:
    app = App()
    return app.run()


if __name__ == "__main__":
    raise SystemExit(main())

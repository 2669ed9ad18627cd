"""Transient popup showing pronunciation and translation."""

from __future__ import annotations

from typing import Optional

from models import Point, PresentationKind, PresentationState

try:
    from PySide6.QtCore import Qt, QTimer
    from PySide6.QtWidgets import QApplication, QLabel, QPushButton, QVBoxLayout, QWidget
except Exception:  # pragma: no cover
    Qt = None  # type: ignore
    QTimer = None  # type: ignore
    QApplication = None  # type: ignore
    QLabel = object  # type: ignore
    QPushButton = object  # type: ignore
    QVBoxLayout = object  # type: ignore
    QWidget = object  # type: ignore

POINTER_OFFSET = 20
SCREEN_MARGIN = 10

_BASE_STYLE = (
    "color: white; padding: 2px 12px;"
    "background: transparent;"
)
_ERROR_STYLE = "color: #FF6B6B; font-size: 14px; padding: 2px 12px;"


def popup_origin(
    pointer: Point,
    size: tuple[int, int],
    screen: tuple[int, int],
) -> Point:
    """Top-left corner for a popup of ``size`` next to ``pointer``.

    Prefers right of and above the pointer, flips left or below when that
    would leave the screen, and keeps a small margin from the edges.
    """
    width, height = size
    screen_width, _ = screen
    left = pointer.x + POINTER_OFFSET
    top = pointer.y - height - POINTER_OFFSET
    if left + width > screen_width:
        left = pointer.x - width - POINTER_OFFSET
    if top < 0:
        top = pointer.y + POINTER_OFFSET
    if left < 0:
        left = SCREEN_MARGIN
    if top < 0:
        top = SCREEN_MARGIN
    return Point(left, top)


class TranslationPopup(QWidget):
    """Frameless always-on-top window fed with presentation states.

    Hides itself ``hide_after_ms`` after being shown. While the pointer is
    over the popup the timer is paused; leaving restarts it with the shorter
    ``leave_hide_ms`` grace window.
    """

    def __init__(self, hide_after_ms: int = 10000, leave_hide_ms: int = 3000) -> None:
        if Qt is None:
            raise RuntimeError("PySide6 is not installed")
        super().__init__()
        self.setWindowFlags(
            Qt.WindowStaysOnTopHint | Qt.FramelessWindowHint | Qt.Tool
        )
        self.setAttribute(Qt.WA_ShowWithoutActivating, True)
        self.setStyleSheet("background: rgba(20,20,20,230); border-radius: 10px;")
        self.setFixedWidth(360)

        self._hide_after_ms = hide_after_ms
        self._leave_hide_ms = leave_hide_ms
        self._last_position: Optional[Point] = None

        self._word = QLabel("")
        self._word.setStyleSheet(_BASE_STYLE + "font-size: 20px; font-weight: bold;")
        self._pronunciation = QLabel("")
        self._pronunciation.setStyleSheet(_BASE_STYLE + "font-size: 14px; color: #9AD0FF;")
        self._meaning = QLabel("")
        self._meaning.setWordWrap(True)
        self._meaning.setStyleSheet(_BASE_STYLE + "font-size: 15px;")
        self._examples = QLabel("")
        self._examples.setWordWrap(True)
        self._examples.setStyleSheet(_BASE_STYLE + "font-size: 13px; color: #CCCCCC;")
        self._details = QLabel("")
        self._details.setStyleSheet(_BASE_STYLE + "font-size: 12px; color: #AAAAAA;")
        self._error = QLabel("")
        self._error.setWordWrap(True)
        self._error.setStyleSheet(_ERROR_STYLE)
        close_button = QPushButton("✕")
        close_button.setFlat(True)
        close_button.setStyleSheet("color: #AAAAAA; border: none;")
        close_button.clicked.connect(self.dismiss)

        layout = QVBoxLayout()
        layout.setContentsMargins(4, 8, 4, 8)
        layout.addWidget(close_button, alignment=Qt.AlignRight)
        for label in (
            self._word,
            self._pronunciation,
            self._meaning,
            self._examples,
            self._details,
            self._error,
        ):
            layout.addWidget(label)
        self.setLayout(layout)

        self._hide_timer = QTimer(self)
        self._hide_timer.setSingleShot(True)
        self._hide_timer.timeout.connect(self.hide)

    # ------------------------------------------------------------------
    # PresentationSink
    # ------------------------------------------------------------------

    def present(self, state: PresentationState) -> None:
        kind = state.kind
        self._error.hide()
        if kind == PresentationKind.LOADING:
            self._set_header(state.word or "…", "")
            self._set_body("Loading...", "Please wait...", "")
        elif kind == PresentationKind.PENDING:
            self._set_header(state.word, state.pronunciation)
            self._set_body("Loading...", "Please wait...", "")
        elif kind == PresentationKind.TRANSLATED and state.entry is not None:
            entry = state.entry
            self._set_header(state.word, state.pronunciation)
            self._set_body(entry.meaning, entry.examples, f"{entry.grammar} · {entry.level}")
        elif kind == PresentationKind.EMPTY:
            self._set_header("", "")
            self._set_body("", "", "")
            self._show_error(state.message)
        else:
            self._set_header(state.word, state.pronunciation)
            self._set_body("Translation Error", "Unable to get translation", "")
            self._show_error(state.message)

        if state.position is not None:
            self._last_position = state.position
        self._place()
        self.show()
        self._restart_hide_timer(self._hide_after_ms)

    def dismiss(self) -> None:
        self._hide_timer.stop()
        self.hide()

    # ------------------------------------------------------------------
    # Qt events
    # ------------------------------------------------------------------

    def enterEvent(self, event) -> None:  # noqa: N802, ANN001
        self._hide_timer.stop()
        super().enterEvent(event)

    def leaveEvent(self, event) -> None:  # noqa: N802, ANN001
        if self.isVisible():
            self._restart_hide_timer(self._leave_hide_ms)
        super().leaveEvent(event)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _set_header(self, word: str, pronunciation: str) -> None:
        self._word.setText(word)
        self._pronunciation.setText(f"[{pronunciation}]" if pronunciation else "")
        self._pronunciation.setVisible(bool(pronunciation))

    def _set_body(self, meaning: str, examples: str, details: str) -> None:
        self._meaning.setText(meaning)
        self._examples.setText(examples)
        self._details.setText(details)
        self._meaning.setVisible(bool(meaning))
        self._examples.setVisible(bool(examples))
        self._details.setVisible(bool(details))

    def _show_error(self, message: str) -> None:
        self._error.setText(message)
        self._error.show()

    def _place(self) -> None:
        if self._last_position is None or QApplication is None:
            return
        screen = QApplication.primaryScreen()
        if screen is None:
            return
        self.adjustSize()
        geom = screen.geometry()
        origin = popup_origin(
            self._last_position,
            (self.width(), self.height()),
            (geom.width(), geom.height()),
        )
        self.move(origin.x, origin.y)

    def _restart_hide_timer(self, delay_ms: int) -> None:
        self._hide_timer.stop()
        self._hide_timer.start(delay_ms)

"""Prompt display under the viewer with a copy-to-clipboard button."""
from __future__ import annotations

import html
import logging

from PySide6 import QtCore
from PySide6.QtGui import QGuiApplication
from PySide6.QtWidgets import QWidget, QHBoxLayout, QLabel, QPushButton

from camprompt.core.prompt_mapper import DEFAULT_SUBJECT, PromptParts, format_full_prompt
from camprompt.ui.error_notifier import ErrorNotifier
from camprompt.viewers.camera.camera_state import CameraSnapshot

logger = logging.getLogger(__name__)

COPY_LABEL = "Copy"
COPIED_LABEL = "Copied"
COPIED_FEEDBACK_MS = 2000


def format_display_prompt(parts: PromptParts) -> str:
    """Rich text of the short prompt: ``framing, angle, view, (technical)``."""
    def span(text: str, color: str) -> str:
        return f'<span style="color:{color}">{html.escape(text)}</span>'

    return ", ".join((
        span(parts.framing, "#f4f4f5"),
        span(parts.angle, "#f4f4f5"),
        span(parts.view, "#f4f4f5"),
        span(f"({parts.technical})", "#71717a"),
    ))


class PromptBar(QWidget):
    """Shows the prompt of the latest snapshot and copies the full prompt."""

    # Signals
    copied = QtCore.Signal(str)

    def __init__(self, subject: str = DEFAULT_SUBJECT, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.subject = subject
        self.parts: PromptParts | None = None

        layout = QHBoxLayout(self)
        self.prompt_label = QLabel("", self)
        self.prompt_label.setTextFormat(QtCore.Qt.RichText)
        self.prompt_label.setTextInteractionFlags(QtCore.Qt.TextSelectableByMouse)
        self.prompt_label.setWordWrap(True)
        self.copy_button = QPushButton(COPY_LABEL, self)
        self.copy_button.clicked.connect(self.copy_to_clipboard)
        layout.addWidget(self.prompt_label, 1)
        layout.addWidget(self.copy_button)
        self.setLayout(layout)

        self._feedback_timer = QtCore.QTimer(self)
        self._feedback_timer.setSingleShot(True)
        self._feedback_timer.setInterval(COPIED_FEEDBACK_MS)
        self._feedback_timer.timeout.connect(self._reset_copy_button)

    def set_snapshot(self, snapshot: CameraSnapshot) -> None:
        self.set_parts(snapshot.prompt)

    def set_parts(self, parts: PromptParts) -> None:
        self.parts = parts
        self.prompt_label.setText(format_display_prompt(parts))

    def set_subject(self, subject: str) -> None:
        self.subject = subject or DEFAULT_SUBJECT

    @property
    def full_prompt(self) -> str:
        if self.parts is None:
            return ""
        return format_full_prompt(self.parts, self.subject)

    def copy_to_clipboard(self) -> None:
        text = self.full_prompt
        if not text:
            return
        clipboard = QGuiApplication.clipboard()
        if clipboard is None:
            ErrorNotifier.instance().notify(
                title="Clipboard",
                msg="Clipboard is not available.",
                severity="warning",
            )
            return
        clipboard.setText(text)
        logger.info("Prompt copied: %s", text)

        self.copy_button.setText(COPIED_LABEL)
        self._feedback_timer.start()
        self.copied.emit(text)

    def _reset_copy_button(self) -> None:
        self.copy_button.setText(COPY_LABEL)

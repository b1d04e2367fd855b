# -*- coding: utf-8 -*-
"""Loading panel shown while an analysis is in flight."""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QLabel, QProgressBar, QVBoxLayout, QWidget

from eyescreen.constants import LOADING_MESSAGES


class LoadingWidget(QWidget):
    """Busy indicator with a rotating status message."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.progress_bar = QProgressBar()
        # 0..0 renders as an indeterminate busy bar.
        self.progress_bar.setRange(0, 0)
        self.progress_bar.setTextVisible(False)
        self.message_label = QLabel(LOADING_MESSAGES[0])
        self.message_label.setObjectName("loadingMessage")
        self.message_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.hint_label = QLabel("This may take a few moments.")
        self.hint_label.setObjectName("mutedText")
        self.hint_label.setAlignment(Qt.AlignmentFlag.AlignCenter)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(24, 48, 24, 48)
        layout.setSpacing(10)
        layout.addStretch(1)
        layout.addWidget(self.progress_bar)
        layout.addWidget(self.message_label)
        layout.addWidget(self.hint_label)
        layout.addStretch(1)

    def set_message(self, message: str) -> None:
        self.message_label.setText(message)

# -*- coding: utf-8 -*-
"""Main window: upload, loading, error and result pages."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QCloseEvent
from PyQt6.QtWidgets import (
    QFrame,
    QLabel,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from eyescreen.constants import APP_NAME, DISCLAIMER
from eyescreen.core.state import AppState, Phase
from eyescreen.gui.controller import AppController
from eyescreen.gui.loading_widget import LoadingWidget
from eyescreen.gui.result_widget import ResultWidget
from eyescreen.gui.upload_widget import UploadWidget

logger = logging.getLogger(__name__)


STYLE_SHEET = """
QMainWindow, QWidget { background-color: #0f172a; color: #e2e8f0; }
QLabel#appTitle { font-size: 24px; font-weight: bold; color: #22d3ee; }
QLabel#sectionTitle { font-size: 16px; font-weight: bold; }
QLabel#mutedText { color: #94a3b8; }
QLabel#loadingMessage { font-size: 16px; color: #22d3ee; }
QLabel#warningText { color: #fbbf24; }
QLabel#disclaimerTitle { color: #fbbf24; font-weight: bold; }
QFrame#uploadArea { border: 2px dashed #334155; border-radius: 12px; }
QFrame#errorBanner { background-color: #450a0a; border: 1px solid #b91c1c; border-radius: 8px; }
QPushButton { background-color: #0891b2; color: white; padding: 6px 14px; border-radius: 6px; }
QPushButton:disabled { background-color: #334155; color: #64748b; }
"""


class ErrorBanner(QFrame):
    """Error message with a single "Try Again" action."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("errorBanner")
        self.title_label = QLabel("An error occurred:")
        self.title_label.setObjectName("sectionTitle")
        self.message_label = QLabel()
        self.message_label.setWordWrap(True)
        self.retry_button = QPushButton("Try Again")

        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 12, 16, 12)
        layout.addWidget(self.title_label, alignment=Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.message_label, alignment=Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.retry_button, alignment=Qt.AlignmentFlag.AlignCenter)

    def set_message(self, message: str) -> None:
        self.message_label.setText(message)


class MainWindow(QMainWindow):
    """Render the controller's AppState; all decisions live in the session."""

    def __init__(
        self,
        settings: dict[str, Any] | None = None,
        controller: AppController | None = None,
    ) -> None:
        super().__init__()
        self.settings = settings or {}
        self.controller = controller or AppController.from_settings(self.settings, parent=self)
        self.setWindowTitle("EyeScreen - AI Eye Screening")
        self.resize(1100, 760)
        self.setStyleSheet(STYLE_SHEET)

        self.title_label = QLabel("EyeScreen")
        self.title_label.setObjectName("appTitle")
        self.subtitle_label = QLabel("Upload a photo of an eye for an AI-assisted preliminary screening.")
        self.subtitle_label.setObjectName("mutedText")

        self.upload_widget = UploadWidget()
        self.upload_widget.set_max_size_mb(float(self.settings.get("upload", {}).get("max_size_mb", 10)))
        self.loading_widget = LoadingWidget()
        self.error_banner = ErrorBanner()
        self.result_widget = ResultWidget()

        self.pages = QStackedWidget()
        self.pages.addWidget(self.upload_widget)
        self.pages.addWidget(self.loading_widget)
        self.pages.addWidget(self.error_banner)
        self.pages.addWidget(self.result_widget)

        disclaimer_title = QLabel("Disclaimer:")
        disclaimer_title.setObjectName("disclaimerTitle")
        disclaimer_text = QLabel(DISCLAIMER)
        disclaimer_text.setObjectName("mutedText")
        disclaimer_text.setWordWrap(True)

        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setContentsMargins(24, 20, 24, 16)
        layout.setSpacing(12)
        layout.addWidget(self.title_label)
        layout.addWidget(self.subtitle_label)
        layout.addWidget(self.pages, 1)
        layout.addWidget(disclaimer_title, alignment=Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(disclaimer_text)
        self.setCentralWidget(central)

        self.upload_widget.file_selected.connect(self._on_file_selected)
        self.error_banner.retry_button.clicked.connect(self.controller.reset)
        self.result_widget.reset_requested.connect(self.controller.reset)
        self.controller.state_changed.connect(self.render)
        self.controller.loading_message_changed.connect(self.loading_widget.set_message)

        self.render(self.controller.state)
        logger.info("%s main window ready", APP_NAME)

    def _on_file_selected(self, path: Path) -> None:
        if not self.controller.upload(path):
            logger.info("Upload of %s not accepted in current state", path)

    def render(self, state: AppState) -> None:
        self.upload_widget.setEnabled(state.can_upload)
        if state.phase is Phase.IDLE:
            self.result_widget.clear()
            self.pages.setCurrentWidget(self.upload_widget)
        elif state.phase is Phase.LOADING:
            self.pages.setCurrentWidget(self.loading_widget)
        elif state.phase is Phase.FAILED:
            self.error_banner.set_message(state.error_message or "")
            self.pages.setCurrentWidget(self.error_banner)
        elif state.phase is Phase.SUCCEEDED and state.result is not None:
            self.result_widget.show_result(state.result, state.preview, state.result_warnings)
            self.pages.setCurrentWidget(self.result_widget)

    def closeEvent(self, event: QCloseEvent) -> None:
        self.controller.shutdown()
        super().closeEvent(event)

# -*- coding: utf-8 -*-
"""Upload area: file picker button plus drag-and-drop target."""

from __future__ import annotations

from pathlib import Path

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QDragEnterEvent, QDropEvent
from PyQt6.QtWidgets import QFileDialog, QFrame, QLabel, QPushButton, QVBoxLayout, QWidget

IMAGE_FILE_FILTER = "Images (*.png *.jpg *.jpeg *.webp)"
ACCEPTED_SUFFIXES = {".png", ".jpg", ".jpeg", ".webp"}


class UploadWidget(QFrame):
    """Emit ``file_selected`` with the path of a chosen or dropped image."""

    file_selected = pyqtSignal(Path)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("uploadArea")
        self.setAcceptDrops(True)
        self.setFrameShape(QFrame.Shape.StyledPanel)

        self.title_label = QLabel("Click to upload or drag and drop")
        self.title_label.setObjectName("sectionTitle")
        self.title_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.formats_label = QLabel("PNG, JPG, or WEBP (MAX. 10MB)")
        self.formats_label.setObjectName("mutedText")
        self.formats_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.tip_label = QLabel(
            "For best results use a sharp, well-lit close-up of one eye, looking straight at the camera."
        )
        self.tip_label.setObjectName("mutedText")
        self.tip_label.setWordWrap(True)
        self.tip_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.browse_button = QPushButton("Choose Image...")
        self.browse_button.clicked.connect(self._browse)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(32, 48, 32, 48)
        layout.setSpacing(10)
        layout.addStretch(1)
        layout.addWidget(self.title_label)
        layout.addWidget(self.formats_label)
        layout.addWidget(self.browse_button, alignment=Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.tip_label)
        layout.addStretch(1)

    def set_max_size_mb(self, max_size_mb: float) -> None:
        self.formats_label.setText(f"PNG, JPG, or WEBP (MAX. {max_size_mb:g}MB)")

    def _browse(self) -> None:
        file_name, _ = QFileDialog.getOpenFileName(self, "Select eye image", "", IMAGE_FILE_FILTER)
        if file_name:
            self.file_selected.emit(Path(file_name))

    @staticmethod
    def _first_image_path(event: QDragEnterEvent | QDropEvent) -> Path | None:
        mime = event.mimeData()
        if mime is None or not mime.hasUrls():
            return None
        for url in mime.urls():
            if url.isLocalFile():
                path = Path(url.toLocalFile())
                if path.suffix.lower() in ACCEPTED_SUFFIXES:
                    return path
        return None

    def dragEnterEvent(self, event: QDragEnterEvent) -> None:
        if self.isEnabled() and self._first_image_path(event) is not None:
            event.acceptProposedAction()
        else:
            event.ignore()

    def dropEvent(self, event: QDropEvent) -> None:
        path = self._first_image_path(event)
        if not self.isEnabled() or path is None:
            event.ignore()
            return
        event.acceptProposedAction()
        self.file_selected.emit(path)

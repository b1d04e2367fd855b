# -*- coding: utf-8 -*-
"""Result view: annotated image next to the structured findings."""

from __future__ import annotations

from PyQt6.QtCore import QRect, Qt, pyqtSignal
from PyQt6.QtGui import QColor, QFont, QPainter, QPaintEvent, QPen, QPixmap
from PyQt6.QtWidgets import (
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QPushButton,
    QScrollArea,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)

from eyescreen.models.analysis_result import AnalysisResult, BoundingBox
from eyescreen.utils.image_utils import ImagePreview


class AnnotatedImageLabel(QLabel):
    """Draw the uploaded image scaled to fit, with numbered symptom boxes on top."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._pixmap = QPixmap()
        self._boxes: list[BoundingBox] = []
        self._highlighted: int | None = None
        self.setMinimumSize(320, 240)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)

    def set_image(self, pixmap: QPixmap, boxes: list[BoundingBox]) -> None:
        self._pixmap = pixmap
        self._boxes = list(boxes)
        self._highlighted = None
        self.update()

    def set_highlighted(self, index: int | None) -> None:
        self._highlighted = index
        self.update()

    def clear_image(self) -> None:
        self._pixmap = QPixmap()
        self._boxes = []
        self._highlighted = None
        self.update()

    def image_rect(self) -> QRect:
        """Area of the widget the scaled image occupies."""
        if self._pixmap.isNull():
            return QRect()
        scaled = self._pixmap.size().scaled(self.size(), Qt.AspectRatioMode.KeepAspectRatio)
        left = (self.width() - scaled.width()) // 2
        top = (self.height() - scaled.height()) // 2
        return QRect(left, top, scaled.width(), scaled.height())

    def paintEvent(self, event: QPaintEvent) -> None:
        if self._pixmap.isNull():
            super().paintEvent(event)
            return

        target = self.image_rect()
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
        painter.drawPixmap(target, self._pixmap)

        font = QFont(painter.font())
        font.setBold(True)
        painter.setFont(font)
        for index, box in enumerate(self._boxes):
            left, top, width, height = box.to_pixels(target.width(), target.height())
            rect = QRect(target.left() + left, target.top() + top, width, height)
            highlighted = index == self._highlighted
            color = QColor(250, 204, 21) if highlighted else QColor(34, 211, 238)
            painter.setPen(QPen(color, 3 if highlighted else 2))
            fill = QColor(color)
            fill.setAlpha(60 if highlighted else 25)
            painter.fillRect(rect, fill)
            painter.drawRect(rect)
            painter.drawText(rect.left() + 4, rect.top() + 14, str(index + 1))
        painter.end()


class ResultWidget(QWidget):
    """Show one AnalysisResult. Emits ``reset_requested`` for a new analysis."""

    reset_requested = pyqtSignal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.image_label = AnnotatedImageLabel()

        self.status_label = QLabel()
        self.status_label.setObjectName("resultStatus")
        self.diagnosis_label = QLabel()
        self.diagnosis_label.setObjectName("sectionTitle")
        self.diagnosis_label.setWordWrap(True)
        self.confidence_label = QLabel()
        self.summary_label = QLabel()
        self.summary_label.setWordWrap(True)
        self.notice_label = QLabel()
        self.notice_label.setObjectName("warningText")
        self.notice_label.setWordWrap(True)
        self.notice_label.hide()

        self.symptoms_list = QListWidget()
        self.symptoms_list.currentRowChanged.connect(self._on_symptom_selected)
        self.differentials_list = QListWidget()
        self.possible_symptoms_label = QLabel()
        self.possible_symptoms_label.setWordWrap(True)
        self.treatment_label = QLabel()
        self.treatment_label.setWordWrap(True)
        self.next_steps_label = QLabel()
        self.next_steps_label.setWordWrap(True)

        self.reset_button = QPushButton("Analyze Another Image")
        self.reset_button.clicked.connect(self.reset_requested.emit)

        details = QWidget()
        details_layout = QVBoxLayout(details)
        details_layout.setContentsMargins(0, 0, 0, 0)
        details_layout.setSpacing(8)
        details_layout.addWidget(self.status_label)
        details_layout.addWidget(self.diagnosis_label)
        details_layout.addWidget(self.confidence_label)
        details_layout.addWidget(self.notice_label)
        details_layout.addWidget(self._group("Summary", self.summary_label))
        details_layout.addWidget(self._group("Detected Symptoms", self.symptoms_list))
        details_layout.addWidget(self._group("Differential Diagnoses", self.differentials_list))
        details_layout.addWidget(self._group("Possible Symptoms", self.possible_symptoms_label))
        details_layout.addWidget(self._group("Treatment Information", self.treatment_label))
        details_layout.addWidget(self._group("Next Steps", self.next_steps_label))
        details_layout.addStretch(1)

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(details)

        columns = QHBoxLayout()
        columns.addWidget(self.image_label, 1)
        columns.addWidget(scroll, 1)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addLayout(columns, 1)
        layout.addWidget(self.reset_button, alignment=Qt.AlignmentFlag.AlignRight)

    @staticmethod
    def _group(title: str, content: QWidget) -> QGroupBox:
        group = QGroupBox(title)
        group_layout = QVBoxLayout(group)
        group_layout.addWidget(content)
        return group

    def show_result(self, result: AnalysisResult, preview: ImagePreview | None, warnings: list[str] | None = None) -> None:
        pixmap = QPixmap()
        if preview is not None and not preview.released:
            pixmap.loadFromData(preview.to_png_bytes(), "PNG")
        self.image_label.set_image(pixmap, [symptom.bounding_box for symptom in result.symptoms])

        if result.is_healthy:
            self.status_label.setText("No significant concerns detected")
        else:
            self.status_label.setText("Potential concern detected")
        self.diagnosis_label.setText(result.primary_diagnosis)
        self.confidence_label.setText(f"Confidence: {result.confidence_score:.0f}%")
        self.summary_label.setText(result.summary)

        self.symptoms_list.clear()
        for index, symptom in enumerate(result.symptoms, start=1):
            self.symptoms_list.addItem(
                f"{index}. {symptom.name} ({symptom.anatomical_layer}): {symptom.description}"
            )
        if not result.symptoms:
            self.symptoms_list.addItem("No visible symptoms detected.")

        self.differentials_list.clear()
        for item in result.differential_diagnoses:
            self.differentials_list.addItem(f"{item.name}: {item.reasoning}")
        if not result.differential_diagnoses:
            self.differentials_list.addItem("None listed.")

        self.possible_symptoms_label.setText(
            ", ".join(result.possible_symptoms) if result.possible_symptoms else "None listed."
        )
        self.treatment_label.setText(result.treatment)
        self.next_steps_label.setText(result.next_steps)

        if warnings:
            self.notice_label.setText("Some values in this report look inconsistent: " + "; ".join(warnings))
            self.notice_label.show()
        else:
            self.notice_label.clear()
            self.notice_label.hide()

    def clear(self) -> None:
        self.image_label.clear_image()
        self.symptoms_list.clear()
        self.differentials_list.clear()
        for label in (
            self.status_label,
            self.diagnosis_label,
            self.confidence_label,
            self.summary_label,
            self.possible_symptoms_label,
            self.treatment_label,
            self.next_steps_label,
            self.notice_label,
        ):
            label.clear()
        self.notice_label.hide()

    def _on_symptom_selected(self, row: int) -> None:
        self.image_label.set_highlighted(row if row >= 0 else None)

# -*- coding: utf-8 -*-
"""Analysis result data model."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class BoundingBox:
    """Rectangle in percent of the image size, top-left origin."""

    x: float
    y: float
    width: float
    height: float

    def to_pixels(self, image_width: int, image_height: int) -> tuple[int, int, int, int]:
        """Return ``(left, top, width, height)`` in pixels, clamped to the image."""
        def clamp(value: float) -> float:
            return min(100.0, max(0.0, value))

        left = int(round(clamp(self.x) / 100.0 * image_width))
        top = int(round(clamp(self.y) / 100.0 * image_height))
        right = int(round(clamp(self.x + self.width) / 100.0 * image_width))
        bottom = int(round(clamp(self.y + self.height) / 100.0 * image_height))
        return left, top, max(0, right - left), max(0, bottom - top)

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


@dataclass(frozen=True)
class Symptom:
    """A finding located in the image."""

    name: str
    description: str
    anatomical_layer: str
    bounding_box: BoundingBox

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "anatomicalLayer": self.anatomical_layer,
            "boundingBox": self.bounding_box.to_dict(),
        }


@dataclass(frozen=True)
class DifferentialDiagnosis:
    """Lower-likelihood alternative to the primary diagnosis."""

    name: str
    reasoning: str

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "reasoning": self.reasoning}


@dataclass(frozen=True)
class AnalysisResult:
    """Structured outcome of one successful analysis call."""

    is_healthy: bool
    primary_diagnosis: str
    summary: str
    confidence_score: float
    treatment: str
    next_steps: str
    symptoms: tuple[Symptom, ...] = field(default_factory=tuple)
    differential_diagnoses: tuple[DifferentialDiagnosis, ...] = field(default_factory=tuple)
    possible_symptoms: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Return the camelCase shape used on the wire."""
        return {
            "isHealthy": self.is_healthy,
            "primaryDiagnosis": self.primary_diagnosis,
            "summary": self.summary,
            "symptoms": [symptom.to_dict() for symptom in self.symptoms],
            "differentialDiagnoses": [item.to_dict() for item in self.differential_diagnoses],
            "possibleSymptoms": list(self.possible_symptoms),
            "treatment": self.treatment,
            "confidenceScore": self.confidence_score,
            "nextSteps": self.next_steps,
        }


def _in_percent_range(value: float) -> bool:
    return math.isfinite(value) and 0.0 <= value <= 100.0


def check_invariants(result: AnalysisResult) -> list[str]:
    """Return human-readable violations of the result's domain rules.

    The remote model is untrusted, so these are reported rather than enforced.
    """
    problems: list[str] = []
    if not _in_percent_range(result.confidence_score):
        problems.append(f"confidenceScore {result.confidence_score!r} is outside 0..100")

    for index, symptom in enumerate(result.symptoms, start=1):
        box = symptom.bounding_box
        for label, value in (("x", box.x), ("y", box.y), ("width", box.width), ("height", box.height)):
            if not _in_percent_range(value):
                problems.append(f"symptom {index} ({symptom.name}) boundingBox.{label}={value!r} is outside 0..100")

    if not result.next_steps.strip():
        problems.append("nextSteps is empty")

    if result.is_healthy:
        if result.symptoms:
            problems.append("healthy result lists symptoms")
        if result.possible_symptoms:
            problems.append("healthy result lists possible symptoms")
        if result.differential_diagnoses:
            problems.append("healthy result lists differential diagnoses")
        if result.primary_diagnosis != "None":
            problems.append(f"healthy result has primaryDiagnosis {result.primary_diagnosis!r}")
        if result.treatment != "N/A":
            problems.append(f"healthy result has treatment {result.treatment!r}")
        if result.confidence_score != 100:
            problems.append(f"healthy result has confidenceScore {result.confidence_score!r}")
    return problems

# -*- coding: utf-8 -*-
"""Response schema sent to Gemini and the strict parser for its replies."""

from __future__ import annotations

import json
import math
from typing import Any

from eyescreen.errors import MalformedResponseError
from eyescreen.models.analysis_result import (
    AnalysisResult,
    BoundingBox,
    DifferentialDiagnosis,
    Symptom,
)


def _string(description: str) -> dict[str, str]:
    return {"type": "STRING", "description": description}


def _number(description: str) -> dict[str, str]:
    return {"type": "NUMBER", "description": description}


BOUNDING_BOX_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "description": "Bounding box coordinates as percentages.",
    "properties": {
        "x": _number("The top-left x-coordinate as a percentage (0-100)."),
        "y": _number("The top-left y-coordinate as a percentage (0-100)."),
        "width": _number("The width of the box as a percentage (0-100)."),
        "height": _number("The height of the box as a percentage (0-100)."),
    },
    "required": ["x", "y", "width", "height"],
}

SYMPTOM_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "name": _string("The name of the symptom (e.g., 'Redness', 'Cloudiness', 'Yellowish Bump')."),
        "description": _string("A brief description of the symptom found in the image."),
        "anatomicalLayer": _string(
            "The anatomical layer of the eye where the symptom is observed "
            "(e.g., 'Conjunctiva', 'Sclera', 'Cornea', 'Iris', 'Lens')."
        ),
        "boundingBox": BOUNDING_BOX_SCHEMA,
    },
    "required": ["name", "description", "anatomicalLayer", "boundingBox"],
}

DIFFERENTIAL_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "name": _string("The name of the alternative disease."),
        "reasoning": _string("A brief reasoning why this might be a possibility."),
    },
    "required": ["name", "reasoning"],
}

ANALYSIS_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "isHealthy": {"type": "BOOLEAN", "description": "Whether the eye appears healthy."},
        "primaryDiagnosis": _string("The name of the most likely suspected eye disease. 'None' if healthy."),
        "summary": _string(
            "A detailed explanation of the findings and the reasoning for the primary diagnosis, "
            "written for a non-medical user."
        ),
        "symptoms": {
            "type": "ARRAY",
            "description": "Detected symptoms or areas of concern visible in the image.",
            "items": SYMPTOM_SCHEMA,
        },
        "differentialDiagnoses": {
            "type": "ARRAY",
            "description": (
                "Other possible diagnoses, ranked by likelihood. "
                "Empty array if healthy or if confidence is very high."
            ),
            "items": DIFFERENTIAL_SCHEMA,
        },
        "possibleSymptoms": {
            "type": "ARRAY",
            "description": "Common symptoms associated with the primary diagnosis. Empty array if healthy.",
            "items": {"type": "STRING"},
        },
        "treatment": _string(
            "General information about treatment options for the primary diagnosis. Not a prescription. "
            "Must strongly advise consulting a doctor. 'N/A' if healthy."
        ),
        "confidenceScore": _number("Confidence (0-100) in the primary diagnosis. 100 if healthy."),
        "nextSteps": _string(
            "Recommended next steps for the user. Always recommend professional consultation."
        ),
    },
    "required": [
        "isHealthy",
        "primaryDiagnosis",
        "summary",
        "symptoms",
        "differentialDiagnoses",
        "possibleSymptoms",
        "treatment",
        "confidenceScore",
        "nextSteps",
    ],
}


def _object(value: Any, path: str, schema: dict[str, Any]) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise MalformedResponseError(f"{path} must be an object, got {type(value).__name__}")
    expected = set(schema["properties"])
    missing = [name for name in schema["required"] if name not in value]
    if missing:
        raise MalformedResponseError(f"{path} is missing required field(s): {', '.join(missing)}")
    unknown = sorted(set(value) - expected)
    if unknown:
        raise MalformedResponseError(f"{path} has unexpected field(s): {', '.join(unknown)}")
    return value


def _str(value: Any, path: str) -> str:
    if not isinstance(value, str):
        raise MalformedResponseError(f"{path} must be a string, got {type(value).__name__}")
    return value


def _bool(value: Any, path: str) -> bool:
    if not isinstance(value, bool):
        raise MalformedResponseError(f"{path} must be a boolean, got {type(value).__name__}")
    return value


def _num(value: Any, path: str) -> float:
    # bool is an int subclass; a JSON true is not a number here.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedResponseError(f"{path} must be a number, got {type(value).__name__}")
    if not math.isfinite(value):
        raise MalformedResponseError(f"{path} must be finite, got {value!r}")
    return float(value)


def _list(value: Any, path: str) -> list[Any]:
    if not isinstance(value, list):
        raise MalformedResponseError(f"{path} must be an array, got {type(value).__name__}")
    return value


def _parse_symptom(value: Any, path: str) -> Symptom:
    data = _object(value, path, SYMPTOM_SCHEMA)
    box = _object(data["boundingBox"], f"{path}.boundingBox", BOUNDING_BOX_SCHEMA)
    return Symptom(
        name=_str(data["name"], f"{path}.name"),
        description=_str(data["description"], f"{path}.description"),
        anatomical_layer=_str(data["anatomicalLayer"], f"{path}.anatomicalLayer"),
        bounding_box=BoundingBox(
            x=_num(box["x"], f"{path}.boundingBox.x"),
            y=_num(box["y"], f"{path}.boundingBox.y"),
            width=_num(box["width"], f"{path}.boundingBox.width"),
            height=_num(box["height"], f"{path}.boundingBox.height"),
        ),
    )


def _parse_differential(value: Any, path: str) -> DifferentialDiagnosis:
    data = _object(value, path, DIFFERENTIAL_SCHEMA)
    return DifferentialDiagnosis(
        name=_str(data["name"], f"{path}.name"),
        reasoning=_str(data["reasoning"], f"{path}.reasoning"),
    )


def result_from_dict(data: Any) -> AnalysisResult:
    """Build an AnalysisResult from decoded JSON, rejecting anything off-schema."""
    root = _object(data, "response", ANALYSIS_SCHEMA)
    return AnalysisResult(
        is_healthy=_bool(root["isHealthy"], "isHealthy"),
        primary_diagnosis=_str(root["primaryDiagnosis"], "primaryDiagnosis"),
        summary=_str(root["summary"], "summary"),
        confidence_score=_num(root["confidenceScore"], "confidenceScore"),
        treatment=_str(root["treatment"], "treatment"),
        next_steps=_str(root["nextSteps"], "nextSteps"),
        symptoms=tuple(
            _parse_symptom(item, f"symptoms[{i}]") for i, item in enumerate(_list(root["symptoms"], "symptoms"))
        ),
        differential_diagnoses=tuple(
            _parse_differential(item, f"differentialDiagnoses[{i}]")
            for i, item in enumerate(_list(root["differentialDiagnoses"], "differentialDiagnoses"))
        ),
        possible_symptoms=tuple(
            _str(item, f"possibleSymptoms[{i}]")
            for i, item in enumerate(_list(root["possibleSymptoms"], "possibleSymptoms"))
        ),
    )


def parse_response(raw_response: str) -> AnalysisResult:
    """Parse the model's JSON text into an AnalysisResult."""
    try:
        parsed = json.loads(raw_response)
    except json.JSONDecodeError as exc:
        raise MalformedResponseError(f"Response is not valid JSON: {exc}", raw_text=raw_response) from exc
    try:
        return result_from_dict(parsed)
    except MalformedResponseError as exc:
        raise MalformedResponseError(str(exc), raw_text=raw_response) from exc

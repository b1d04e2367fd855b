# -*- coding: utf-8 -*-
"""Shared pytest fixtures."""

from __future__ import annotations

import copy
import io
import json
import os
import sys
from pathlib import Path
from typing import Any

import pytest
from PIL import Image


SRC_DIR = Path(__file__).resolve().parents[1] / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


def make_image_bytes(image_format: str = "PNG", size: tuple[int, int] = (8, 6)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, (200, 120, 110)).save(buffer, format=image_format)
    return buffer.getvalue()


UNHEALTHY_RESPONSE: dict[str, Any] = {
    "isHealthy": False,
    "primaryDiagnosis": "Conjunctivitis",
    "summary": "The white of the eye is red and there is discharge near the inner corner.",
    "symptoms": [
        {
            "name": "Redness",
            "description": "Diffuse redness across the sclera.",
            "anatomicalLayer": "Conjunctiva",
            "boundingBox": {"x": 10, "y": 20.5, "width": 40, "height": 30},
        },
        {
            "name": "Discharge",
            "description": "Yellowish discharge at the inner canthus.",
            "anatomicalLayer": "Conjunctiva",
            "boundingBox": {"x": 70, "y": 45, "width": 12.5, "height": 10},
        },
    ],
    "differentialDiagnoses": [
        {"name": "Allergic conjunctivitis", "reasoning": "Redness can also come from allergies."},
    ],
    "possibleSymptoms": ["Itching", "Tearing", "Sensitivity to light"],
    "treatment": "Often treated with lubricating or antibiotic drops. Consult a doctor.",
    "confidenceScore": 82,
    "nextSteps": "Consult an ophthalmologist for a comprehensive diagnosis.",
}

HEALTHY_RESPONSE: dict[str, Any] = {
    "isHealthy": True,
    "primaryDiagnosis": "None",
    "summary": "The eye looks healthy.",
    "symptoms": [],
    "differentialDiagnoses": [],
    "possibleSymptoms": [],
    "treatment": "N/A",
    "confidenceScore": 100,
    "nextSteps": "Keep up regular check-ups with an eye care professional.",
}


def gemini_envelope(text: str) -> dict[str, Any]:
    return {
        "candidates": [
            {
                "content": {"role": "model", "parts": [{"text": text}]},
                "finishReason": "STOP",
            }
        ]
    }


@pytest.fixture
def png_bytes() -> bytes:
    return make_image_bytes("PNG")


@pytest.fixture
def sample_eye_png(tmp_path: Path, png_bytes: bytes) -> Path:
    path = tmp_path / "eye.png"
    path.write_bytes(png_bytes)
    return path


@pytest.fixture
def unhealthy_response() -> dict[str, Any]:
    return copy.deepcopy(UNHEALTHY_RESPONSE)


@pytest.fixture
def healthy_response() -> dict[str, Any]:
    return copy.deepcopy(HEALTHY_RESPONSE)


@pytest.fixture
def default_config() -> dict:
    from eyescreen.config import get_default_config

    return get_default_config()


class FakeGeminiClient:
    """Stands in for GeminiClient; records payloads and returns a canned reply."""

    def __init__(self, reply: dict[str, Any] | str | Exception, api_key: str = "test-key") -> None:
        self.reply = reply
        self.api_key = api_key
        self.model = "gemini-test"
        self.calls: list[dict[str, Any]] = []

    def validate_key(self) -> bool:
        return bool(self.api_key)

    def generate_content(self, payload: dict[str, Any]) -> dict[str, Any]:
        self.calls.append(payload)
        if isinstance(self.reply, Exception):
            raise self.reply
        text = self.reply if isinstance(self.reply, str) else json.dumps(self.reply)
        return gemini_envelope(text)

    @staticmethod
    def extract_text(response_payload: dict[str, Any]) -> str:
        from eyescreen.integrations.gemini_client import GeminiClient

        return GeminiClient.extract_text(response_payload)


@pytest.fixture
def fake_client_factory():
    return FakeGeminiClient


@pytest.fixture
def make_envelope():
    return gemini_envelope


@pytest.fixture(scope="session")
def qt_app():
    pytest.importorskip("PyQt6")
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app

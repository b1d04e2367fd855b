# -*- coding: utf-8 -*-
"""Eye image analysis orchestration."""

from __future__ import annotations

import logging
from typing import Any

from eyescreen.config import resolve_api_key
from eyescreen.errors import ConfigurationError
from eyescreen.integrations.gemini_client import GeminiClient
from eyescreen.models.analysis_request import AnalysisRequest
from eyescreen.models.analysis_result import AnalysisResult
from eyescreen.pipeline.response_schema import ANALYSIS_SCHEMA, parse_response
from eyescreen.utils.image_utils import encode_bytes_base64

logger = logging.getLogger(__name__)


ANALYSIS_PROMPT = """You are an AI assistant specialized in ophthalmological image analysis. Your purpose is to assist in identifying potential eye diseases from images, acting as a preliminary screening tool.

**IMPORTANT:** You are not a doctor. Your analysis is not a medical diagnosis.

**Instructions:**
1.  **Analyze the Image:** Carefully examine the provided image of a human eye.
2.  **Identify Findings:** Look for any abnormalities, signs of disease, or areas of concern.
3.  **Formulate Output:** Respond ONLY with a JSON object that adheres to the provided schema.
4.  **Primary Diagnosis:** Provide the single most likely potential diagnosis based on the visual evidence. If the eye appears healthy, state 'None'.
5.  **Differential Diagnosis:** Provide a list of 2-3 other possible diagnoses, even if their likelihood is lower. For each, include a brief 'reasoning'. If the eye is clearly healthy or you are very certain, this array can be empty.
6.  **Summary:** Write a clear, concise summary explaining your reasoning for the primary diagnosis, referencing the symptoms found. It must be easily understandable by a non-medical person.
7.  **Symptoms & Bounding Boxes:** For each distinct symptom or abnormality found, create a tight-fitting bounding box. The coordinates (x, y, width, height) must be percentages (0-100) of the image dimensions, measured from the top-left corner. For each symptom, also identify the most likely `anatomicalLayer` it appears on (e.g., 'Conjunctiva', 'Sclera', 'Cornea').
8.  **Associated Symptoms:** If a disease is suspected, list common symptoms associated with that condition (e.g., "Blurry vision", "Itching", "Sensitivity to light"). This should be a general list, not just what's in the image.
9.  **Treatment Information:** Briefly describe common, general treatment approaches for the suspected condition. Frame this as informational only. Emphasize that a doctor must be consulted for actual treatment plans. For healthy eyes, use 'N/A'.
10. **Confidence Score:** Provide a confidence score (0-100) for your assessment of the primary diagnosis. A higher score indicates greater certainty. For a healthy eye, the score should be 100.
11. **Next Steps:** Always recommend that the user consult a qualified healthcare professional (like an ophthalmologist) for a definitive diagnosis and treatment, regardless of your findings.
12. **Healthy Eye:** If no abnormalities are found, set `isHealthy` to true, `primaryDiagnosis` to 'None', `treatment` to 'N/A', provide a reassuring summary, and leave the arrays for symptoms, possible symptoms and differential diagnoses empty."""


class Analyzer:
    """Build the Gemini request for one eye image and parse the reply."""

    def __init__(self, client: GeminiClient) -> None:
        self.client = client

    @classmethod
    def from_settings(cls, settings: dict[str, Any]) -> "Analyzer":
        analysis = settings.get("analysis", {})
        client = GeminiClient(
            api_key=resolve_api_key(settings),
            model=str(analysis.get("model", "gemini-2.5-flash")),
            base_url=str(analysis.get("base_url", "https://generativelanguage.googleapis.com/v1beta")),
            timeout=float(analysis.get("timeout_seconds", 60.0)),
        )
        return cls(client)

    def build_payload(self, image_bytes: bytes, mime_type: str) -> dict[str, Any]:
        return {
            "contents": [
                {
                    "role": "user",
                    "parts": [
                        {"text": ANALYSIS_PROMPT},
                        {"inline_data": {"mime_type": mime_type, "data": encode_bytes_base64(image_bytes)}},
                    ],
                }
            ],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": ANALYSIS_SCHEMA,
            },
        }

    def analyze(self, image_bytes: bytes, mime_type: str) -> AnalysisResult:
        """Run one analysis call.

        Raises ConfigurationError before any work when no key is set,
        TransportError when the call fails and MalformedResponseError when the
        reply does not match the schema. Nothing is retried.
        """
        if not self.client.validate_key():
            raise ConfigurationError("Gemini API key is not set. Add GEMINI_API_KEY to the environment or .env file.")

        payload = self.build_payload(image_bytes, mime_type)
        logger.info(
            "Prepared analysis request: model=%s, mime=%s, image=%d bytes",
            self.client.model,
            mime_type,
            len(image_bytes),
        )
        response_payload = self.client.generate_content(payload)
        raw_response = self.client.extract_text(response_payload)
        logger.debug("Raw model response (%d chars)", len(raw_response))

        result = parse_response(raw_response)
        logger.info(
            "Parsed analysis: healthy=%s, diagnosis=%r, confidence=%s, symptoms=%d",
            result.is_healthy,
            result.primary_diagnosis,
            result.confidence_score,
            len(result.symptoms),
        )
        return result

    def analyze_request(self, analysis_request: AnalysisRequest) -> AnalysisResult:
        return self.analyze(analysis_request.image_bytes, analysis_request.mime_type)

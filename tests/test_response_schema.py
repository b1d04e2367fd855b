# -*- coding: utf-8 -*-
"""Tests for the response schema and the strict reply parser."""

from __future__ import annotations

import json

import pytest

from eyescreen.errors import MalformedResponseError
from eyescreen.pipeline.response_schema import ANALYSIS_SCHEMA, parse_response


def test_schema_requires_every_top_level_field() -> None:
    assert set(ANALYSIS_SCHEMA["required"]) == set(ANALYSIS_SCHEMA["properties"])
    assert len(ANALYSIS_SCHEMA["required"]) == 9


def test_schema_nested_objects_require_all_fields() -> None:
    symptom = ANALYSIS_SCHEMA["properties"]["symptoms"]["items"]
    assert symptom["required"] == ["name", "description", "anatomicalLayer", "boundingBox"]
    assert symptom["properties"]["boundingBox"]["required"] == ["x", "y", "width", "height"]
    differential = ANALYSIS_SCHEMA["properties"]["differentialDiagnoses"]["items"]
    assert differential["required"] == ["name", "reasoning"]


def test_schema_uses_gemini_type_names() -> None:
    props = ANALYSIS_SCHEMA["properties"]
    assert props["isHealthy"]["type"] == "BOOLEAN"
    assert props["confidenceScore"]["type"] == "NUMBER"
    assert props["possibleSymptoms"]["items"] == {"type": "STRING"}


def test_unhealthy_reply_preserves_order_and_nested_fields(unhealthy_response: dict) -> None:
    result = parse_response(json.dumps(unhealthy_response))

    assert result.is_healthy is False
    assert result.primary_diagnosis == "Conjunctivitis"
    assert [symptom.name for symptom in result.symptoms] == ["Redness", "Discharge"]
    first = result.symptoms[0]
    assert first.description == "Diffuse redness across the sclera."
    assert first.anatomical_layer == "Conjunctiva"
    assert (first.bounding_box.x, first.bounding_box.y) == (10.0, 20.5)
    assert (first.bounding_box.width, first.bounding_box.height) == (40.0, 30.0)
    assert result.symptoms[1].bounding_box.width == 12.5
    assert len(result.differential_diagnoses) == 1
    assert result.differential_diagnoses[0].reasoning == "Redness can also come from allergies."
    assert result.possible_symptoms == ("Itching", "Tearing", "Sensitivity to light")
    assert result.confidence_score == 82.0


def test_round_trip_to_wire_shape(unhealthy_response: dict) -> None:
    result = parse_response(json.dumps(unhealthy_response))
    assert result.to_dict() == unhealthy_response


def test_healthy_reply_parses(healthy_response: dict) -> None:
    result = parse_response(json.dumps(healthy_response))
    assert result.is_healthy is True
    assert result.symptoms == ()
    assert result.differential_diagnoses == ()
    assert result.possible_symptoms == ()


def test_missing_next_steps_fails(unhealthy_response: dict) -> None:
    del unhealthy_response["nextSteps"]
    with pytest.raises(MalformedResponseError, match="nextSteps"):
        parse_response(json.dumps(unhealthy_response))


def test_missing_nested_bounding_box_field_fails(unhealthy_response: dict) -> None:
    del unhealthy_response["symptoms"][1]["boundingBox"]["height"]
    with pytest.raises(MalformedResponseError, match=r"symptoms\[1\]\.boundingBox"):
        parse_response(json.dumps(unhealthy_response))


def test_unknown_field_fails(unhealthy_response: dict) -> None:
    unhealthy_response["severity"] = "mild"
    with pytest.raises(MalformedResponseError, match="severity"):
        parse_response(json.dumps(unhealthy_response))


def test_invalid_json_keeps_raw_text() -> None:
    with pytest.raises(MalformedResponseError) as info:
        parse_response("Sure! Here is the analysis: {")
    assert info.value.raw_text.startswith("Sure!")


def test_array_payload_fails() -> None:
    with pytest.raises(MalformedResponseError, match="must be an object"):
        parse_response("[]")


def test_boolean_confidence_fails(unhealthy_response: dict) -> None:
    unhealthy_response["confidenceScore"] = True
    with pytest.raises(MalformedResponseError, match="confidenceScore"):
        parse_response(json.dumps(unhealthy_response))


def test_string_flag_fails(unhealthy_response: dict) -> None:
    unhealthy_response["isHealthy"] = "false"
    with pytest.raises(MalformedResponseError, match="isHealthy"):
        parse_response(json.dumps(unhealthy_response))


def test_nan_confidence_fails(unhealthy_response: dict) -> None:
    raw = json.dumps(unhealthy_response).replace('"confidenceScore": 82', '"confidenceScore": NaN')
    with pytest.raises(MalformedResponseError, match="finite"):
        parse_response(raw)


def test_null_array_fails(unhealthy_response: dict) -> None:
    unhealthy_response["possibleSymptoms"] = None
    with pytest.raises(MalformedResponseError, match="possibleSymptoms"):
        parse_response(json.dumps(unhealthy_response))


def test_out_of_range_values_are_not_rejected_by_parser(unhealthy_response: dict) -> None:
    unhealthy_response["confidenceScore"] = 140
    unhealthy_response["symptoms"][0]["boundingBox"]["x"] = -5
    result = parse_response(json.dumps(unhealthy_response))
    assert result.confidence_score == 140.0
    assert result.symptoms[0].bounding_box.x == -5.0

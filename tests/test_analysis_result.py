# -*- coding: utf-8 -*-
"""Tests for the result model and its invariant checks."""

from __future__ import annotations

import dataclasses
import json

import pytest

from eyescreen.models.analysis_result import BoundingBox, check_invariants
from eyescreen.pipeline.response_schema import parse_response


def test_valid_unhealthy_result_has_no_violations(unhealthy_response: dict) -> None:
    assert check_invariants(parse_response(json.dumps(unhealthy_response))) == []


def test_valid_healthy_result_has_no_violations(healthy_response: dict) -> None:
    result = parse_response(json.dumps(healthy_response))
    assert check_invariants(result) == []
    assert result.primary_diagnosis == "None"
    assert result.treatment == "N/A"
    assert result.confidence_score == 100


def test_healthy_result_with_symptoms_is_flagged(healthy_response: dict, unhealthy_response: dict) -> None:
    healthy_response["symptoms"] = unhealthy_response["symptoms"]
    healthy_response["possibleSymptoms"] = ["Itching"]
    healthy_response["confidenceScore"] = 90
    problems = check_invariants(parse_response(json.dumps(healthy_response)))
    assert "healthy result lists symptoms" in problems
    assert "healthy result lists possible symptoms" in problems
    assert any("confidenceScore" in problem for problem in problems)


def test_out_of_range_bounding_box_is_flagged(unhealthy_response: dict) -> None:
    unhealthy_response["symptoms"][1]["boundingBox"]["width"] = 120
    problems = check_invariants(parse_response(json.dumps(unhealthy_response)))
    assert problems == ["symptom 2 (Discharge) boundingBox.width=120.0 is outside 0..100"]


def test_confidence_above_hundred_is_flagged(unhealthy_response: dict) -> None:
    unhealthy_response["confidenceScore"] = 101
    problems = check_invariants(parse_response(json.dumps(unhealthy_response)))
    assert problems == ["confidenceScore 101.0 is outside 0..100"]


def test_blank_next_steps_is_flagged(unhealthy_response: dict) -> None:
    unhealthy_response["nextSteps"] = "  "
    assert check_invariants(parse_response(json.dumps(unhealthy_response))) == ["nextSteps is empty"]


def test_result_is_immutable(unhealthy_response: dict) -> None:
    result = parse_response(json.dumps(unhealthy_response))
    with pytest.raises(dataclasses.FrozenInstanceError):
        result.is_healthy = True  # type: ignore[misc]


def test_bounding_box_to_pixels() -> None:
    box = BoundingBox(x=10, y=20, width=50, height=25)
    assert box.to_pixels(200, 100) == (20, 20, 100, 25)


def test_bounding_box_to_pixels_clamps_to_image() -> None:
    box = BoundingBox(x=80, y=-10, width=40, height=30)
    assert box.to_pixels(100, 100) == (80, 0, 20, 20)

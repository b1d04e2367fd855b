# -*- coding: utf-8 -*-
"""Analysis state and its pure transition functions."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from eyescreen.models.analysis_request import AnalysisRequest
from eyescreen.models.analysis_result import AnalysisResult, check_invariants
from eyescreen.utils.image_utils import ImagePreview


class Phase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class InvalidTransitionError(RuntimeError):
    """Raised when an event is not allowed in the current phase."""


@dataclass(frozen=True)
class AppState:
    """Immutable snapshot of what the UI shows.

    ``request_id`` grows with every accepted upload so that a completion
    can be matched to the request that produced it.
    """

    phase: Phase = Phase.IDLE
    request: AnalysisRequest | None = None
    preview: ImagePreview | None = None
    result: AnalysisResult | None = None
    error_message: str | None = None
    request_id: int = 0

    @property
    def can_upload(self) -> bool:
        return self.phase is Phase.IDLE

    @property
    def is_loading(self) -> bool:
        return self.phase is Phase.LOADING

    @property
    def result_warnings(self) -> list[str]:
        return check_invariants(self.result) if self.result is not None else []


def begin_upload(state: AppState, request: AnalysisRequest, preview: ImagePreview | None) -> AppState:
    """Idle -> Loading."""
    if state.phase is not Phase.IDLE:
        raise InvalidTransitionError(f"Upload is only accepted while idle (phase={state.phase.value})")
    return AppState(
        phase=Phase.LOADING,
        request=request,
        preview=preview,
        result=None,
        error_message=None,
        request_id=state.request_id + 1,
    )


def reject_upload(state: AppState, message: str) -> AppState:
    """Idle -> Failed for an upload that could not be turned into a request."""
    if state.phase is not Phase.IDLE:
        raise InvalidTransitionError(f"Upload is only accepted while idle (phase={state.phase.value})")
    return AppState(phase=Phase.FAILED, error_message=message, request_id=state.request_id + 1)


def _is_current(state: AppState, request_id: int) -> bool:
    return state.phase is Phase.LOADING and state.request_id == request_id


def complete(state: AppState, request_id: int, result: AnalysisResult) -> AppState:
    """Loading -> Succeeded. Stale completions leave the state unchanged."""
    if not _is_current(state, request_id):
        return state
    return replace(state, phase=Phase.SUCCEEDED, result=result, error_message=None)


def fail(state: AppState, request_id: int, message: str) -> AppState:
    """Loading -> Failed. Stale completions leave the state unchanged."""
    if not _is_current(state, request_id):
        return state
    return replace(state, phase=Phase.FAILED, result=None, error_message=message)


def reset(state: AppState) -> AppState:
    """Succeeded/Failed -> Idle, dropping request, preview, result and error."""
    if state.phase is Phase.LOADING:
        raise InvalidTransitionError("Cannot reset while an analysis is in flight")
    if state.phase is Phase.IDLE:
        return state
    return AppState(request_id=state.request_id)

# -*- coding: utf-8 -*-
"""Analysis session: one upload at a time, run on a background worker."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Callable

from eyescreen.constants import GENERIC_FAILURE_MESSAGE
from eyescreen.core import state as transitions
from eyescreen.core.state import AppState, Phase
from eyescreen.errors import AnalysisError, ConfigurationError, UnsupportedImageError
from eyescreen.models.analysis_request import AnalysisRequest
from eyescreen.pipeline.analyzer import Analyzer
from eyescreen.utils.image_utils import ImagePreview

logger = logging.getLogger(__name__)


StateCallback = Callable[[AppState], None]
UploadSource = AnalysisRequest | bytes | str | Path

UNSUPPORTED_IMAGE_MESSAGE = "The selected file is not a supported image. Please upload a PNG, JPG or WEBP photo."
MISSING_KEY_MESSAGE = "The analysis service is not configured: the Gemini API key is missing."


class AnalysisSession:
    """Own the app state and drive it through upload, analysis and reset.

    ``state_changed`` is called after every transition, from whichever thread
    made it; GUI code must hop back to its own thread.
    """

    def __init__(
        self,
        analyzer: Analyzer,
        *,
        max_upload_mb: float = 10.0,
        executor: ThreadPoolExecutor | None = None,
    ) -> None:
        self.analyzer = analyzer
        self.max_upload_mb = float(max_upload_mb)
        self._executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="eyescreen-analysis")
        self._lock = threading.Lock()
        self._state = AppState()
        self.state_changed: StateCallback | None = None

    @property
    def state(self) -> AppState:
        with self._lock:
            return self._state

    @property
    def is_busy(self) -> bool:
        return self.state.is_loading

    def upload(self, source: UploadSource) -> Future | None:
        """Start analysing an image. Returns None when the upload is not accepted."""
        with self._lock:
            if not self._state.can_upload:
                logger.warning("Upload ignored: session is %s", self._state.phase.value)
                return None

            try:
                analysis_request = self._build_request(source)
                preview = ImagePreview.from_bytes(analysis_request.image_bytes)
            except UnsupportedImageError as exc:
                logger.warning("Upload rejected: %s", exc)
                self._state = transitions.reject_upload(self._state, UNSUPPORTED_IMAGE_MESSAGE)
                snapshot = self._state
                analysis_request = None
            else:
                if analysis_request.size_mb > self.max_upload_mb:
                    logger.warning(
                        "Image %s is %.1f MB, above the advised %.1f MB",
                        analysis_request.source_name or "<bytes>",
                        analysis_request.size_mb,
                        self.max_upload_mb,
                    )
                self._state = transitions.begin_upload(self._state, analysis_request, preview)
                snapshot = self._state
                logger.info(
                    "Analysis #%d started for %s (%s)",
                    snapshot.request_id,
                    analysis_request.source_name or "<bytes>",
                    analysis_request.mime_type,
                )

        # Announce Loading before the worker can report a completion.
        self._notify(snapshot)
        if analysis_request is None:
            return None
        return self._executor.submit(self._run, snapshot.request_id, analysis_request)

    def reset(self) -> bool:
        """Return to idle from a finished analysis. Returns True if the state changed."""
        with self._lock:
            previous = self._state
            if previous.phase is Phase.LOADING:
                logger.warning("Reset ignored: analysis #%d is still running", previous.request_id)
                return False
            if previous.phase is Phase.IDLE:
                return False
            self._state = transitions.reset(previous)
            snapshot = self._state

        if previous.preview is not None:
            previous.preview.release()
        logger.info("Session reset after analysis #%d", previous.request_id)
        self._notify(snapshot)
        return True

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def _build_request(self, source: UploadSource) -> AnalysisRequest:
        if isinstance(source, AnalysisRequest):
            return source
        if isinstance(source, bytes):
            return AnalysisRequest.from_bytes(source)
        return AnalysisRequest.from_path(source)

    def _run(self, request_id: int, analysis_request: AnalysisRequest) -> AppState:
        try:
            result = self.analyzer.analyze_request(analysis_request)
        except ConfigurationError as exc:
            logger.error("Analysis #%d not started: %s", request_id, exc)
            return self._apply_failure(request_id, MISSING_KEY_MESSAGE)
        except AnalysisError as exc:
            logger.error("Analysis #%d failed with %s: %s", request_id, type(exc).__name__, exc)
            return self._apply_failure(request_id, GENERIC_FAILURE_MESSAGE)
        except Exception:
            logger.exception("Analysis #%d failed unexpectedly", request_id)
            return self._apply_failure(request_id, GENERIC_FAILURE_MESSAGE)

        with self._lock:
            self._state = transitions.complete(self._state, request_id, result)
            snapshot = self._state
        for warning in snapshot.result_warnings:
            logger.warning("Analysis #%d result check: %s", request_id, warning)
        logger.info("Analysis #%d finished (phase=%s)", request_id, snapshot.phase.value)
        self._notify(snapshot)
        return snapshot

    def _apply_failure(self, request_id: int, message: str) -> AppState:
        with self._lock:
            self._state = transitions.fail(self._state, request_id, message)
            snapshot = self._state
        self._notify(snapshot)
        return snapshot

    def _notify(self, snapshot: AppState) -> None:
        if self.state_changed is None:
            return
        try:
            self.state_changed(snapshot)
        except Exception:
            logger.exception("state_changed callback failed")

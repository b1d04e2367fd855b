# -*- coding: utf-8 -*-
"""Qt bridge between the analysis session and the widgets."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from eyescreen.core.session import AnalysisSession
from eyescreen.core.state import AppState, Phase
from eyescreen.core.status_ticker import StatusTicker
from eyescreen.pipeline.analyzer import Analyzer

logger = logging.getLogger(__name__)


class AppController(QObject):
    """Forward session transitions to the GUI thread and run the loading ticker."""

    state_changed = pyqtSignal(object)
    loading_message_changed = pyqtSignal(str)

    # Emitted from the worker thread; delivered queued on the GUI thread.
    _session_state = pyqtSignal(object)

    def __init__(self, session: AnalysisSession, loading_interval_ms: int = 2000, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self.session = session
        self.ticker = StatusTicker()
        self._timer = QTimer(self)
        self._timer.setInterval(int(loading_interval_ms))
        self._timer.timeout.connect(self._advance_ticker)

        self._session_state.connect(self._on_session_state)
        self.session.state_changed = self._session_state.emit

    @classmethod
    def from_settings(cls, settings: dict[str, Any], parent: QObject | None = None) -> "AppController":
        session = AnalysisSession(
            Analyzer.from_settings(settings),
            max_upload_mb=float(settings.get("upload", {}).get("max_size_mb", 10)),
        )
        interval = int(settings.get("ui", {}).get("loading_message_interval_ms", 2000))
        return cls(session, loading_interval_ms=interval, parent=parent)

    @property
    def state(self) -> AppState:
        return self.session.state

    def upload(self, path: Path) -> bool:
        """Submit an image file. Returns False if the session is busy."""
        logger.info("Upload requested: %s", path)
        return self.session.upload(path) is not None

    def reset(self) -> None:
        self.session.reset()

    def shutdown(self) -> None:
        self._timer.stop()
        self.session.state_changed = None
        self.session.shutdown(wait=False)

    def _on_session_state(self, state: AppState) -> None:
        if state.phase is Phase.LOADING:
            if not self._timer.isActive():
                self.loading_message_changed.emit(self.ticker.restart())
                self._timer.start()
        else:
            self._timer.stop()
        self.state_changed.emit(state)

    def _advance_ticker(self) -> None:
        self.loading_message_changed.emit(self.ticker.advance())

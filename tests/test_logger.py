# -*- coding: utf-8 -*-
"""Tests for session logging setup."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from eyescreen.utils.logger import setup_session_logging


@pytest.fixture
def clean_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)
    for attr in ("_eyescreen_logging_configured", "_eyescreen_session_log"):
        if hasattr(root, attr):
            delattr(root, attr)


def test_creates_session_log_once(tmp_path: Path, clean_root_logger, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EYESCREEN_LOG_LEVEL", "debug")

    first = setup_session_logging(tmp_path, "Eye Screen")
    second = setup_session_logging(tmp_path, "Eye Screen")

    assert first is not None
    assert first == second
    assert first.parent == tmp_path / "logs"
    assert first.name.startswith("eye-screen-")
    assert clean_root_logger.level == logging.DEBUG
    assert "Eye Screen starting" in first.read_text(encoding="utf-8")


def test_unknown_level_falls_back_to_info(tmp_path: Path, clean_root_logger, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EYESCREEN_LOG_LEVEL", "chatty")
    setup_session_logging(tmp_path, "eyescreen")
    assert clean_root_logger.level == logging.INFO

# -*- coding: utf-8 -*-
"""Tests for the loading message ticker."""

from __future__ import annotations

import pytest

from eyescreen.constants import LOADING_MESSAGES
from eyescreen.core.status_ticker import StatusTicker


def test_starts_with_first_message() -> None:
    assert StatusTicker().current() == LOADING_MESSAGES[0]


def test_advance_wraps_around() -> None:
    ticker = StatusTicker(["one", "two"])
    assert ticker.advance() == "two"
    assert ticker.advance() == "one"


def test_restart_returns_to_first() -> None:
    ticker = StatusTicker(["one", "two", "three"])
    ticker.advance()
    ticker.advance()
    assert ticker.restart() == "one"


def test_empty_messages_rejected() -> None:
    with pytest.raises(ValueError):
        StatusTicker([])

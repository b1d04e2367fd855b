# -*- coding: utf-8 -*-
"""Rotating status text shown while an analysis is loading."""

from __future__ import annotations

from collections.abc import Sequence

from eyescreen.constants import LOADING_MESSAGES


class StatusTicker:
    """Cycle through a fixed list of messages. Purely cosmetic."""

    def __init__(self, messages: Sequence[str] = LOADING_MESSAGES) -> None:
        if not messages:
            raise ValueError("StatusTicker needs at least one message")
        self._messages = tuple(messages)
        self._index = 0

    def current(self) -> str:
        return self._messages[self._index]

    def advance(self) -> str:
        self._index = (self._index + 1) % len(self._messages)
        return self.current()

    def restart(self) -> str:
        self._index = 0
        return self.current()

"""Scheduling primitives that drive an exam session's clock."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol


class Ticker(Protocol):
    """Recurring scheduled callback running on the caller's event loop."""

    def start(self, callback: Callable[[], None]) -> None: ...

    def stop(self) -> None: ...

    def is_active(self) -> bool: ...


class NullTicker:
    """Ticker used when no scheduler is available.

    The session never advances on its own; the user can still answer and
    submit manually, and scoring works purely in memory.
    """

    def __init__(self) -> None:
        self._active: bool = False

    def start(self, callback: Callable[[], None]) -> None:
        self._active = True

    def stop(self) -> None:
        self._active = False

    def is_active(self) -> bool:
        return self._active

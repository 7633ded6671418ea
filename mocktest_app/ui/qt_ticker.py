"""QTimer-backed ticker that drives an exam session on the Qt event loop."""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtCore import QObject, QTimer

from mocktest_app.constants.exam_constants import TICK_INTERVAL_MS


class QtTicker:
    """Calls the session's tick handler every ``interval_ms`` milliseconds."""

    def __init__(self, parent: QObject | None = None, interval_ms: int = TICK_INTERVAL_MS) -> None:
        self._timer = QTimer(parent)
        self._timer.setInterval(interval_ms)
        self._callback: Callable[[], None] | None = None
        self._timer.timeout.connect(self._fire)

    def start(self, callback: Callable[[], None]) -> None:
        self._callback = callback
        if not self._timer.isActive():
            self._timer.start()

    def stop(self) -> None:
        if self._timer.isActive():
            self._timer.stop()
        self._callback = None

    def is_active(self) -> bool:
        return self._timer.isActive()

    def _fire(self) -> None:
        if self._callback is not None:
            self._callback()

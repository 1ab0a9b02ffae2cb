"""Debounced value tracker backed by a single-shot ``QTimer``."""

from __future__ import annotations

from typing import Any

from PySide6.QtCore import QObject, QTimer, Signal

from utils.app_settings import DEFAULT_DEBOUNCE_MS


class DebouncedValue(QObject):
    """Expose a delayed copy of a rapidly changing value.

    Every change to :attr:`value` restarts the timer.  Only when the timer
    fires uninterrupted does :attr:`debounced` catch up with the latest value,
    and ``debouncedChanged`` is emitted only if it actually differs.  Deleting
    the owner (or calling :meth:`cancel`) stops a pending timer.
    """

    debouncedChanged = Signal(object)

    def __init__(self, initial: Any = "", delay_ms: int = DEFAULT_DEBOUNCE_MS, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._value = initial
        self._debounced = initial
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(delay_ms)
        self._timer.timeout.connect(self._commit)

    @property
    def value(self) -> Any:
        return self._value

    @property
    def debounced(self) -> Any:
        return self._debounced

    @property
    def delay_ms(self) -> int:
        return self._timer.interval()

    @property
    def is_pending(self) -> bool:
        return self._value != self._debounced

    def set_value(self, value: Any) -> None:
        if value == self._value:
            return
        self._value = value
        self._timer.start()

    def flush(self) -> None:
        """Fire a pending timer immediately."""

        if self._timer.isActive():
            self._timer.stop()
            self._commit()

    def cancel(self) -> None:
        self._timer.stop()

    def reset(self, value: Any = "") -> None:
        """Set both the raw and debounced value without emitting."""

        self._timer.stop()
        self._value = value
        self._debounced = value

    def _commit(self) -> None:
        if self._value == self._debounced:
            return
        self._debounced = self._value
        self.debouncedChanged.emit(self._debounced)


__all__ = ["DebouncedValue"]

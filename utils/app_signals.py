from __future__ import annotations

from PySide6.QtCore import QObject, Signal


class AppSignals(QObject):
    """Global Qt signals for app-wide events.

    Panels can subscribe to these to stay in sync with application state.
    """

    userChanged = Signal(object)  # username, or None after logout


# Global singleton instance
app_signals = AppSignals()


__all__ = ["app_signals", "AppSignals"]

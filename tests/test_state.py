from __future__ import annotations

import pytest

from utils.app_signals import app_signals
from utils.state import AppState


def test_active_user():
    assert AppState.get_active_user() is None
    assert not AppState.is_authenticated()
    AppState.set_active_user("admin")
    assert AppState.get_active_user() == "admin"
    assert AppState.is_authenticated()


def test_clear_emits_user_changed(qt_app):
    seen: list[object] = []

    def record(user: object) -> None:
        seen.append(user)

    app_signals.userChanged.connect(record)
    try:
        AppState.set_active_user("admin")
        AppState.clear()
    finally:
        app_signals.userChanged.disconnect(record)
    assert seen == ["admin", None]
    assert AppState.get_active_user() is None


def test_signal_failure_does_not_break_state(monkeypatch: pytest.MonkeyPatch):
    class _Broken:
        @property
        def userChanged(self):
            raise RuntimeError("no signals")

    import utils.app_signals as signals_module

    monkeypatch.setattr(signals_module, "app_signals", _Broken())
    AppState.set_active_user("someone")
    assert AppState.get_active_user() == "someone"

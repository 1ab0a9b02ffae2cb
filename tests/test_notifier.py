from __future__ import annotations

import pytest

try:
    from PySide6.QtWidgets import QWidget
except ImportError as exc:  # pragma: no cover - environment-specific
    pytest.skip(f"PySide6 unavailable: {exc}", allow_module_level=True)

from notifications.models import Notification
from notifications.panels.toast_overlay import MAX_VISIBLE, ToastOverlay
from notifications.services import Notifier


def test_notify_emits_toast_payload(qt_app):
    notifier = Notifier(throttle_seconds=0)
    toasts: list[dict] = []
    badges: list[int] = []
    notifier.showToast.connect(toasts.append)
    notifier.badgeCountChanged.connect(badges.append)

    assert notifier.notify(Notification(title="Vehicle deleted", message="Gone", severity="success", vehicle_id=7))
    assert toasts[0]["severity"] == "success"
    assert toasts[0]["vehicle_id"] == 7
    assert toasts[0]["toast_mode"] == "auto"
    assert toasts[0]["toast_duration_ms"] == 4500
    assert badges == [1]

    notifier.clear_badge()
    assert badges == [1, 0]


def test_unknown_severity_falls_back_to_info(qt_app):
    notifier = Notifier(throttle_seconds=0)
    notifier.notify(Notification(title="t", message="m", severity="loud"))  # type: ignore[arg-type]
    assert notifier.recent(1)[0]["severity"] == "info"


def test_duplicates_are_throttled(qt_app):
    notifier = Notifier(throttle_seconds=60)
    assert notifier.notify(Notification(title="Vehicle sold", message="done", severity="success"))
    assert not notifier.notify(Notification(title="Vehicle sold", message="done", severity="success"))
    assert notifier.notify(Notification(title="Vehicle sold", message="other", severity="success"))
    assert [n["message"] for n in notifier.recent()] == ["other", "done"]


def test_repeated_errors_are_always_shown(qt_app):
    notifier = Notifier(throttle_seconds=60)
    toasts: list[dict] = []
    notifier.showToast.connect(toasts.append)
    for _ in range(2):
        assert notifier.notify(Notification(title="Delete failed", message="nope", severity="error"))
    assert [t["message"] for t in toasts] == ["nope", "nope"]


def test_throttle_entries_expire(qt_app, monkeypatch):
    import types

    import notifications.services.notifier as notifier_module

    clock = [100.0]
    monkeypatch.setattr(notifier_module, "time", types.SimpleNamespace(monotonic=lambda: clock[0]))
    notifier = Notifier(throttle_seconds=2.0)
    notifier.notify(Notification(title="a", message="1", severity="info"))
    notifier.notify(Notification(title="b", message="2", severity="info"))
    assert len(notifier._throttle) == 2

    clock[0] += 5
    assert notifier.notify(Notification(title="c", message="3", severity="info"))
    assert list(notifier._throttle) == [("c", "3")]
    assert notifier.notify(Notification(title="a", message="1", severity="info"))


def test_overlay_renders_and_caps_toasts(qt_app):
    host = QWidget()
    host.resize(800, 600)
    notifier = Notifier(throttle_seconds=0)
    overlay = ToastOverlay(host, notifier)

    for i in range(MAX_VISIBLE + 2):
        notifier.notify(Notification(title="n", message=f"message {i}", toast_mode="sticky"))

    texts = [toast.message_label.text() for toast in overlay.toasts()]
    assert len(texts) == MAX_VISIBLE
    assert texts[-1] == f"message {MAX_VISIBLE + 1}"

    overlay.toasts()[0].dismiss()
    assert len(overlay.toasts()) == MAX_VISIBLE - 1
    host.deleteLater()

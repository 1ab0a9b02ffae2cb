"""Transient toast stack rendered on top of a host window."""

from __future__ import annotations

from typing import Any

from PySide6.QtCore import QEvent, QObject, Qt, QTimer
from PySide6.QtWidgets import QFrame, QHBoxLayout, QLabel, QToolButton, QVBoxLayout, QWidget

from notifications.services import Notifier, get_notifier


SEVERITY_COLORS: dict[str, tuple[str, str]] = {
    "success": ("#e8f5e9", "#1b5e20"),
    "error": ("#fdecea", "#b71c1c"),
    "warning": ("#fff8e1", "#8d6e00"),
    "info": ("#e3f2fd", "#0d47a1"),
}

MAX_VISIBLE = 4


class _Toast(QFrame):
    def __init__(self, payload: dict[str, Any], parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("toast")
        bg, fg = SEVERITY_COLORS.get(str(payload.get("severity")), SEVERITY_COLORS["info"])
        self.setStyleSheet(
            f"#toast {{ background: {bg}; border-radius: 8px; border: 1px solid {fg}; }}"
            f" QLabel {{ color: {fg}; }}"
        )
        layout = QHBoxLayout(self)
        layout.setContentsMargins(12, 8, 8, 8)
        layout.setSpacing(8)

        self.message_label = QLabel(str(payload.get("message", "")))
        self.message_label.setWordWrap(True)
        self.message_label.setToolTip(str(payload.get("title", "")))
        layout.addWidget(self.message_label, stretch=1)

        self.close_button = QToolButton()
        self.close_button.setText("×")
        self.close_button.setAutoRaise(True)
        self.close_button.clicked.connect(self.dismiss)
        layout.addWidget(self.close_button)

        if payload.get("toast_mode") != "sticky":
            QTimer.singleShot(int(payload.get("toast_duration_ms") or 4500), self, self.dismiss)

    def dismiss(self) -> None:
        self.hide()
        self.deleteLater()


class ToastOverlay(QWidget):
    """Shows notifier toasts in the bottom-right corner of ``host``."""

    def __init__(self, host: QWidget, notifier: Notifier | None = None) -> None:
        super().__init__(host)
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, False)
        self.setFixedWidth(360)
        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(0, 0, 0, 0)
        self._layout.setSpacing(8)
        self._layout.addStretch(1)

        self._notifier = notifier or get_notifier()
        self._notifier.showToast.connect(self.show_toast)
        host.installEventFilter(self)
        self._reposition()

    def toasts(self) -> list[_Toast]:
        return [w for w in self.findChildren(_Toast) if not w.isHidden()]

    def show_toast(self, payload: dict[str, Any]) -> None:
        visible = self.toasts()
        for extra in visible[: max(0, len(visible) - MAX_VISIBLE + 1)]:
            extra.dismiss()
        toast = _Toast(payload, self)
        self._layout.addWidget(toast)
        toast.show()
        self.show()
        self.raise_()
        self._reposition()

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:  # type: ignore[override]
        if watched is self.parentWidget() and event.type() == QEvent.Type.Resize:
            self._reposition()
        return super().eventFilter(watched, event)

    def _reposition(self) -> None:
        host = self.parentWidget()
        if host is None:
            return
        height = min(host.height(), 400)
        self.setGeometry(host.width() - self.width() - 16, host.height() - height - 16, self.width(), height)

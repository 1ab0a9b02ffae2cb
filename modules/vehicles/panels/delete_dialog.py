"""Confirmation dialog shown before a vehicle is deleted."""

from __future__ import annotations

import html

from PySide6.QtWidgets import QDialog, QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from ..models.vehicle import PendingDelete
from ..services.mutations import DeleteFlow


class DeleteConfirmationDialog(QDialog):
    """Modal bound to a :class:`DeleteFlow`.

    Cancel drops the pending target.  Delete fires the request and the dialog
    closes only once the flow reports success; on failure it stays open so the
    user can retry or cancel.
    """

    def __init__(self, flow: DeleteFlow, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._flow = flow
        self.setWindowTitle("Delete Vehicle")
        self.setModal(True)
        self.setMinimumWidth(380)

        layout = QVBoxLayout(self)
        layout.setSpacing(12)

        self.message_label = QLabel("")
        self.message_label.setWordWrap(True)
        layout.addWidget(self.message_label)

        self.error_label = QLabel("")
        self.error_label.setWordWrap(True)
        self.error_label.setStyleSheet("color: #b71c1c;")
        self.error_label.hide()
        layout.addWidget(self.error_label)

        buttons = QHBoxLayout()
        buttons.addStretch(1)
        self.cancel_button = QPushButton("Cancel")
        self.cancel_button.setAutoDefault(False)
        self.delete_button = QPushButton("Delete")
        self.delete_button.setStyleSheet("QPushButton { color: #b71c1c; font-weight: 600; }")
        buttons.addWidget(self.cancel_button)
        buttons.addWidget(self.delete_button)
        layout.addLayout(buttons)

        self.cancel_button.clicked.connect(self.reject)
        self.delete_button.clicked.connect(self._flow.confirm)
        self._flow.pendingChanged.connect(self._on_pending_changed)
        self._flow.busyChanged.connect(self._on_busy_changed)
        self._flow.failed.connect(self._on_failed)
        self._on_pending_changed(self._flow.pending)

    def _on_pending_changed(self, pending: PendingDelete | None) -> None:
        if pending is None:
            if self.isVisible():
                self.accept()
            return
        self.message_label.setText(
            f"Are you sure you want to delete the vehicle with serial number "
            f"<b>{html.escape(pending.serial_number)}</b>? This action cannot be undone."
        )

    def _on_busy_changed(self, busy: bool) -> None:
        self.delete_button.setEnabled(not busy)
        self.cancel_button.setEnabled(not busy)
        self.delete_button.setText("Deleting…" if busy else "Delete")
        if busy:
            self.error_label.hide()

    def _on_failed(self, message: str) -> None:
        self.error_label.setText(message)
        self.error_label.show()

    def reject(self) -> None:  # type: ignore[override]
        if self._flow.busy:
            return
        super().reject()
        self._flow.cancel()

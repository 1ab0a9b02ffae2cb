"""Login dialog gating the vehicle admin console.

Credentials are checked by an injected authenticator; on success the
username is stored in ``utils.state.AppState`` and ``sessionReady`` fires.
"""
from __future__ import annotations

from PySide6.QtCore import Signal
from PySide6.QtWidgets import (
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QLabel,
    QLineEdit,
    QVBoxLayout,
    QWidget,
)

from utils.state import AppState

from ..auth import LOGIN_ERROR, Authenticator


class LoginDialog(QDialog):
    """Modal startup dialog collecting username and password."""

    sessionReady = Signal(str)  # username

    def __init__(self, authenticator: Authenticator, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Vehicle Admin Login")
        self.setModal(True)
        self._authenticator = authenticator

        # Widgets
        self.username_edit = QLineEdit()
        self.password_edit = QLineEdit()
        self.password_edit.setEchoMode(QLineEdit.EchoMode.Password)
        self.error_label = QLabel("")
        self.error_label.setStyleSheet("color: #b71c1c;")
        self.error_label.hide()

        self.buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel)
        self.btn_login = self.buttons.button(QDialogButtonBox.StandardButton.Ok)
        self.btn_login.setText("Login")
        self.btn_login.setEnabled(False)

        # Layout
        form = QFormLayout()
        form.addRow("Username", self.username_edit)
        form.addRow("Password", self.password_edit)

        layout = QVBoxLayout(self)
        layout.addLayout(form)
        layout.addWidget(self.error_label)
        layout.addWidget(self.buttons)

        # Signals
        self.username_edit.textChanged.connect(self._update_login_enabled)
        self.password_edit.textChanged.connect(self._update_login_enabled)
        self.buttons.accepted.connect(self._accept)
        self.buttons.rejected.connect(self.reject)

    def _update_login_enabled(self) -> None:
        ok = self.username_edit.text().strip() != "" and self.password_edit.text() != ""
        self.btn_login.setEnabled(ok)

    # ------------------------------------------------------------------
    def _accept(self) -> None:
        username = self.username_edit.text().strip()
        if not self._authenticator.authenticate(username, self.password_edit.text()):
            self.error_label.setText(LOGIN_ERROR)
            self.error_label.show()
            self.password_edit.clear()
            return

        self.error_label.hide()
        AppState.set_active_user(username)
        self.sessionReady.emit(username)
        self.accept()


__all__ = ["LoginDialog"]

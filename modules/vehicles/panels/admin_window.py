"""Main window of the vehicle admin console."""

from __future__ import annotations

import logging

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from notifications.panels.toast_overlay import ToastOverlay
from notifications.services import Notifier
from utils.app_signals import app_signals
from utils.state import AppState

from .. import VehicleAdminServices
from .dashboard_panel import VehicleDashboardPanel
from .vehicle_form_dialog import VehicleFormDialog


logger = logging.getLogger(__name__)


class VehicleAdminWindow(QMainWindow):
    """Header with Add Vehicle / Back to Dashboard / Logout over two views."""

    loggedOut = Signal()

    def __init__(
        self,
        services: VehicleAdminServices,
        notifier: Notifier | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Vehicle Management System")
        self.resize(1280, 800)
        self._services = services
        self._started = False

        central = QWidget(self)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(16, 12, 16, 12)
        layout.setSpacing(12)

        header = QHBoxLayout()
        title_column = QVBoxLayout()
        title = QLabel("Bajaj Finance")
        title.setStyleSheet("font-size: 20px; font-weight: 700;")
        title_column.addWidget(title)
        subtitle = QLabel("Vehicle Management System")
        subtitle.setStyleSheet("color: palette(Mid);")
        title_column.addWidget(subtitle)
        header.addLayout(title_column)
        header.addStretch(1)

        self.user_label = QLabel("")
        header.addWidget(self.user_label)

        self.add_button = QPushButton("Add Vehicle")
        self.add_button.setCursor(Qt.CursorShape.PointingHandCursor)
        header.addWidget(self.add_button)

        self.back_button = QPushButton("Back to Dashboard")
        self.back_button.setCursor(Qt.CursorShape.PointingHandCursor)
        self.back_button.hide()
        header.addWidget(self.back_button)

        self.logout_button = QPushButton("Logout")
        self.logout_button.setCursor(Qt.CursorShape.PointingHandCursor)
        header.addWidget(self.logout_button)
        layout.addLayout(header)

        self.stack = QStackedWidget(central)
        self.dashboard = VehicleDashboardPanel(
            services.state,
            services.search,
            services.delete_flow,
            services.edit_flow,
            self.stack,
        )
        self.stack.addWidget(self.dashboard)

        self.add_form = VehicleFormDialog(services.create_flow, self.stack)
        self.add_form.setWindowFlags(Qt.WindowType.Widget)
        self.add_form.setModal(False)
        self.add_form.finished.connect(lambda _result: self.show_dashboard())
        self.stack.addWidget(self.add_form)
        layout.addWidget(self.stack, stretch=1)

        self.setCentralWidget(central)
        self.toasts = ToastOverlay(central, notifier)

        self.add_button.clicked.connect(self.show_add_form)
        self.back_button.clicked.connect(self.show_dashboard)
        self.logout_button.clicked.connect(self.logout)

        app_signals.userChanged.connect(self._on_user_changed)
        self._on_user_changed(AppState.get_active_user())

    def _on_user_changed(self, user: object) -> None:
        self.user_label.setText(f"Signed in as {user}" if user else "")

    # ------------------------------------------------------------------ views
    def show_add_form(self) -> None:
        self.add_form.load_values()
        self.add_form.show()
        self.stack.setCurrentWidget(self.add_form)
        self.add_button.hide()
        self.back_button.show()

    def show_dashboard(self) -> None:
        self.stack.setCurrentWidget(self.dashboard)
        self.back_button.hide()
        self.add_button.show()

    def is_showing_dashboard(self) -> bool:
        return self.stack.currentWidget() is self.dashboard

    # ------------------------------------------------------------------ session
    def start(self) -> None:
        """Issue the initial (unfiltered) fetch, or the fresh one after a re-login."""

        if self._started:
            self._services.state.refetch()
            return
        self._started = True
        self._services.search.start()

    def logout(self) -> None:
        """Drop the session: user, search filters and any open edit or delete."""

        logger.info("User %s logged out", AppState.get_active_user())
        AppState.clear()
        self._services.search.reset()
        self._services.edit_flow.close()
        self._services.delete_flow.cancel()
        self.add_form.load_values()
        self.show_dashboard()
        self.loggedOut.emit()
        self.close()


__all__ = ["VehicleAdminWindow"]

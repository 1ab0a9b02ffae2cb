"""Per-row actions for the vehicle table."""

from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QAction
from PySide6.QtWidgets import QMenu, QToolButton, QWidget

from ..models.vehicle import Vehicle


class ActionMenuButton(QToolButton):
    """"…" button opening Edit / Mark as Sold / Delete for one vehicle.

    Edit and Mark as Sold are disabled for sold vehicles; Delete never is.
    """

    editRequested = Signal(object)
    markSoldRequested = Signal(object)
    deleteRequested = Signal(object)

    def __init__(self, vehicle: Vehicle, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._vehicle = vehicle
        self.setText("…")
        self.setToolTip("Actions")
        self.setAccessibleName(f"Actions for vehicle {vehicle.serial_number}")
        self.setCursor(Qt.CursorShape.PointingHandCursor)
        self.setPopupMode(QToolButton.ToolButtonPopupMode.InstantPopup)

        menu = QMenu(self)
        self.edit_action = QAction("Edit", self)
        self.mark_sold_action = QAction("Mark as Sold", self)
        self.delete_action = QAction("Delete", self)
        for action in (self.edit_action, self.mark_sold_action):
            action.setEnabled(not vehicle.is_sold)
        menu.addAction(self.edit_action)
        menu.addAction(self.mark_sold_action)
        menu.addSeparator()
        menu.addAction(self.delete_action)
        self.setMenu(menu)

        self.edit_action.triggered.connect(lambda: self.editRequested.emit(self._vehicle))
        self.mark_sold_action.triggered.connect(lambda: self.markSoldRequested.emit(self._vehicle))
        self.delete_action.triggered.connect(lambda: self.deleteRequested.emit(self._vehicle))

    @property
    def vehicle(self) -> Vehicle:
        return self._vehicle

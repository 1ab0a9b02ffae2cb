"""Search section of the vehicle dashboard."""

from __future__ import annotations

from PySide6 import QtCore, QtWidgets

from ...models.enums import SearchMode
from ...models.vehicle import SearchState
from ...services.search import SearchCoordinator


class VehicleSearchBar(QtWidgets.QWidget):
    """Mode toggle, one input for the active mode, pending indicator and Clear Filters.

    The widget holds no search state of its own; it forwards edits to the
    :class:`SearchCoordinator` and re-renders from its ``stateChanged``.
    """

    def __init__(self, coordinator: SearchCoordinator, parent: QtWidgets.QWidget | None = None) -> None:
        super().__init__(parent)
        self._coordinator = coordinator

        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(8)

        mode_row = QtWidgets.QHBoxLayout()
        mode_row.setSpacing(4)
        mode_caption = QtWidgets.QLabel("Search by:", self)
        mode_caption.setStyleSheet("font-weight: 600;")
        mode_row.addWidget(mode_caption)

        self.mode_group = QtWidgets.QButtonGroup(self)
        self.mode_group.setExclusive(True)
        self.mode_buttons: dict[SearchMode, QtWidgets.QToolButton] = {}
        for mode in SearchMode:
            button = QtWidgets.QToolButton(self)
            button.setText(mode.label)
            button.setCheckable(True)
            button.setCursor(QtCore.Qt.CursorShape.PointingHandCursor)
            button.clicked.connect(lambda _checked=False, m=mode: self._coordinator.set_mode(m))
            self.mode_group.addButton(button)
            self.mode_buttons[mode] = button
            mode_row.addWidget(button)
        mode_row.addStretch(1)
        layout.addLayout(mode_row)

        input_row = QtWidgets.QHBoxLayout()
        input_row.setSpacing(8)
        self.search_field = QtWidgets.QLineEdit(self)
        self.search_field.setClearButtonEnabled(True)
        self.search_field.textEdited.connect(self._coordinator.set_query)
        input_row.addWidget(self.search_field, stretch=1)

        self.pending_label = QtWidgets.QLabel("Searching…", self)
        self.pending_label.setStyleSheet("color: palette(Mid);")
        self.pending_label.hide()
        input_row.addWidget(self.pending_label)

        self.clear_button = QtWidgets.QPushButton("Clear Filters", self)
        self.clear_button.setEnabled(False)
        self.clear_button.clicked.connect(self._coordinator.clear)
        input_row.addWidget(self.clear_button)
        layout.addLayout(input_row)

        self._coordinator.stateChanged.connect(self._render)
        self._coordinator.pendingChanged.connect(self.pending_label.setVisible)
        self._render(self._coordinator.state)

    # ------------------------------------------------------------------ helpers
    def _render(self, state: SearchState) -> None:
        self.mode_buttons[state.mode].setChecked(True)
        self.search_field.setPlaceholderText(f"Search by {state.mode.label.lower()}…")
        if self.search_field.text() != state.active_query:
            self.search_field.blockSignals(True)
            self.search_field.setText(state.active_query)
            self.search_field.blockSignals(False)
        self.clear_button.setEnabled(state.has_filters)

    # ------------------------------------------------------------------ API
    def focus_search(self) -> None:
        self.search_field.setFocus(QtCore.Qt.FocusReason.ShortcutFocusReason)

"""Vehicle dashboard: counters, search, table, pagination and row actions.

The panel is a thin view.  The vehicle list, loading flag and page live in
:class:`VehicleListState`; the search inputs live in
:class:`SearchCoordinator`; delete and edit are driven through their flows.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Sequence

from PySide6.QtCore import QAbstractTableModel, QModelIndex, QObject, Qt
from PySide6.QtGui import QColor, QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QAbstractItemView,
    QFrame,
    QHBoxLayout,
    QLabel,
    QStackedLayout,
    QTableView,
    QVBoxLayout,
    QWidget,
)

from ..models.vehicle import Vehicle
from ..services.mutations import DeleteFlow, EditFlow
from ..services.pagination import Page
from ..services.search import SearchCoordinator
from ..services.vehicle_list import VehicleListState
from .action_menu import ActionMenuButton
from .delete_dialog import DeleteConfirmationDialog
from .vehicle_form_dialog import FIELD_LABELS, VehicleFormDialog
from .widgets.pagination_controls import PaginationControls
from .widgets.search_bar import VehicleSearchBar


logger = logging.getLogger(__name__)

__all__ = ["VehicleDashboardPanel", "VehicleTableModel"]

EMPTY_FILTERED_TEXT = "No vehicles found matching your search criteria."
EMPTY_TEXT = "No vehicles found. Add a vehicle to get started."
LOADING_TEXT = "Loading vehicles..."


@dataclass
class ColumnDefinition:
    key: str
    title: str
    alignment: Qt.AlignmentFlag = Qt.AlignmentFlag.AlignVCenter | Qt.AlignmentFlag.AlignLeft


COLUMNS: tuple[ColumnDefinition, ...] = (
    ColumnDefinition("id", "ID", Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter),
    ColumnDefinition("serial_number", FIELD_LABELS["serial_number"]),
    ColumnDefinition("dealer_code", FIELD_LABELS["dealer_code"]),
    ColumnDefinition("dealer_name", FIELD_LABELS["dealer_name"]),
    ColumnDefinition("dealer_address", FIELD_LABELS["dealer_address"]),
    ColumnDefinition("dealer_city", FIELD_LABELS["dealer_city"]),
    ColumnDefinition("dealer_state", FIELD_LABELS["dealer_state"]),
    ColumnDefinition("model_name", FIELD_LABELS["model_name"]),
    ColumnDefinition("model_id", FIELD_LABELS["model_id"]),
    ColumnDefinition("battery_power", FIELD_LABELS["battery_power"]),
    ColumnDefinition("status", "Status", Qt.AlignmentFlag.AlignCenter),
    ColumnDefinition("actions", "Actions", Qt.AlignmentFlag.AlignCenter),
)

ACTIONS_COLUMN = len(COLUMNS) - 1
RECORD_ROLE = Qt.ItemDataRole.UserRole + 1

STATUS_COLORS: dict[bool, str] = {True: "#b71c1c", False: "#2e7d32"}


class VehicleTableModel(QAbstractTableModel):
    """Table model presenting the vehicles on the current page."""

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._records: list[Vehicle] = []

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:  # type: ignore[override]
        return 0 if parent.isValid() else len(self._records)

    def columnCount(self, parent: QModelIndex = QModelIndex()) -> int:  # type: ignore[override]
        return 0 if parent.isValid() else len(COLUMNS)

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole) -> Any:  # type: ignore[override]
        if not index.isValid() or not (0 <= index.row() < len(self._records)):
            return None
        record = self._records[index.row()]
        column = COLUMNS[index.column()]

        if role == Qt.ItemDataRole.DisplayRole:
            if column.key == "actions":
                return None
            if column.key == "id":
                return str(record.id)
            if column.key == "status":
                return "Sold" if record.is_sold else "Available"
            return getattr(record, column.key) or "-"

        if role == Qt.ItemDataRole.ForegroundRole and column.key == "status":
            return QColor(STATUS_COLORS[record.is_sold])

        if role == Qt.ItemDataRole.ToolTipRole and column.key == "dealer_address" and record.dealer_address:
            return record.dealer_address

        if role == RECORD_ROLE:
            return record

        if role == Qt.ItemDataRole.TextAlignmentRole:
            return int(column.alignment)

        return None

    def headerData(
        self,
        section: int,
        orientation: Qt.Orientation,
        role: int = Qt.ItemDataRole.DisplayRole,
    ) -> Any:  # type: ignore[override]
        if orientation == Qt.Orientation.Horizontal and role == Qt.ItemDataRole.DisplayRole:
            return COLUMNS[section].title
        return super().headerData(section, orientation, role)

    def flags(self, index: QModelIndex) -> Qt.ItemFlag:  # type: ignore[override]
        if not index.isValid():
            return Qt.ItemFlag.ItemIsEnabled
        return Qt.ItemFlag.ItemIsEnabled | Qt.ItemFlag.ItemIsSelectable

    def set_records(self, records: Sequence[Vehicle]) -> None:
        self.beginResetModel()
        self._records = list(records)
        self.endResetModel()

    def record(self, row: int) -> Vehicle | None:
        if 0 <= row < len(self._records):
            return self._records[row]
        return None


class VehicleDashboardPanel(QWidget):
    """Primary widget of the admin console."""

    def __init__(
        self,
        state: VehicleListState,
        search: SearchCoordinator,
        delete_flow: DeleteFlow,
        edit_flow: EditFlow,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setObjectName("vehicleDashboardPanel")
        self._state = state
        self._search = search
        self._delete_flow = delete_flow
        self._edit_flow = edit_flow

        self._setup_ui()

        self._search.searchRequested.connect(self._state.refetch)
        self._search.stateChanged.connect(lambda _state: self._render())
        self._state.vehiclesChanged.connect(lambda _vehicles: self._render())
        self._state.pageChanged.connect(lambda _page: self._render())
        self._state.loadingChanged.connect(lambda _loading: self._render())
        self.pagination.previousRequested.connect(self._state.previous_page)
        self.pagination.nextRequested.connect(self._state.next_page)
        self._render()

    # ----- UI construction -------------------------------------------------
    def _setup_ui(self) -> None:
        main_layout = QVBoxLayout(self)
        main_layout.setContentsMargins(12, 12, 12, 12)
        main_layout.setSpacing(12)

        header_layout = QHBoxLayout()
        title_column = QVBoxLayout()
        title = QLabel("Vehicle Dashboard")
        title.setStyleSheet("font-size: 22px; font-weight: 700;")
        title_column.addWidget(title)
        subtitle = QLabel("Manage your vehicle inventory")
        subtitle.setStyleSheet("color: palette(Mid);")
        title_column.addWidget(subtitle)
        header_layout.addLayout(title_column)
        header_layout.addStretch(1)

        self.total_value = self._add_counter(header_layout, "Total")
        self.showing_value = self._add_counter(header_layout, "Showing")
        main_layout.addLayout(header_layout)

        search_card = QFrame(self)
        search_card.setObjectName("vehicleSearchCard")
        search_card.setStyleSheet(
            "#vehicleSearchCard { border-radius: 12px; background: palette(Base); border: 1px solid palette(Midlight); }"
        )
        search_layout = QVBoxLayout(search_card)
        search_layout.setContentsMargins(16, 16, 16, 16)
        self.search_bar = VehicleSearchBar(self._search, search_card)
        search_layout.addWidget(self.search_bar)
        main_layout.addWidget(search_card)

        self.content_stack = QStackedLayout()

        self.loading_label = QLabel(LOADING_TEXT)
        self.loading_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.loading_label.setStyleSheet("font-size: 16px; color: palette(Mid);")
        self.content_stack.addWidget(self.loading_label)

        self.empty_label = QLabel(EMPTY_TEXT)
        self.empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.empty_label.setWordWrap(True)
        self.empty_label.setStyleSheet("font-size: 16px; color: palette(Mid);")
        self.content_stack.addWidget(self.empty_label)

        table_container = QWidget()
        table_layout = QVBoxLayout(table_container)
        table_layout.setContentsMargins(0, 0, 0, 0)
        table_layout.setSpacing(8)

        self.model = VehicleTableModel(self)
        self.table_view = QTableView()
        self.table_view.setObjectName("vehicleTable")
        self.table_view.setModel(self.model)
        self.table_view.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.table_view.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.table_view.setAlternatingRowColors(True)
        self.table_view.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.table_view.verticalHeader().setVisible(False)
        self.table_view.verticalHeader().setDefaultSectionSize(40)
        self.table_view.horizontalHeader().setStretchLastSection(True)
        table_layout.addWidget(self.table_view, stretch=1)

        self.pagination = PaginationControls(table_container)
        table_layout.addWidget(self.pagination)
        self.content_stack.addWidget(table_container)
        self._table_container = table_container

        main_layout.addLayout(self.content_stack, stretch=1)

        self.search_shortcut = QShortcut(QKeySequence.StandardKey.Find, self)
        self.search_shortcut.activated.connect(self.search_bar.focus_search)

    def _add_counter(self, layout: QHBoxLayout, caption: str) -> QLabel:
        box = QFrame(self)
        box.setObjectName(f"counter{caption}")
        box.setStyleSheet(f"#counter{caption} {{ border: 1px solid palette(Midlight); border-radius: 8px; }}")
        box_layout = QVBoxLayout(box)
        box_layout.setContentsMargins(12, 6, 12, 6)
        box_layout.setSpacing(0)
        caption_label = QLabel(caption)
        caption_label.setStyleSheet("font-size: 11px; color: palette(Mid);")
        box_layout.addWidget(caption_label)
        value = QLabel("0")
        value.setStyleSheet("font-weight: 600;")
        box_layout.addWidget(value)
        layout.addWidget(box)
        return value

    # ----- Rendering -------------------------------------------------------
    def _render(self) -> None:
        page: Page[Vehicle] = self._state.page()
        self.total_value.setText(str(page.total_items))
        self.showing_value.setText(str(len(page.visible)))

        if self._state.loading:
            self.content_stack.setCurrentWidget(self.loading_label)
        elif not page.total_items:
            self.empty_label.setText(EMPTY_FILTERED_TEXT if self._search.has_filters else EMPTY_TEXT)
            self.content_stack.setCurrentWidget(self.empty_label)
        else:
            self.content_stack.setCurrentWidget(self._table_container)

        self.model.set_records(page.visible)
        for row, vehicle in enumerate(page.visible):
            self.table_view.setIndexWidget(self.model.index(row, ACTIONS_COLUMN), self._make_action_button(vehicle))
        self.pagination.update_state(page)

    def _make_action_button(self, vehicle: Vehicle) -> ActionMenuButton:
        button = ActionMenuButton(vehicle)
        button.editRequested.connect(self.open_edit)
        button.markSoldRequested.connect(self.mark_sold)
        button.deleteRequested.connect(self.request_delete)
        return button

    def action_button(self, row: int) -> ActionMenuButton | None:
        widget = self.table_view.indexWidget(self.model.index(row, ACTIONS_COLUMN))
        return widget if isinstance(widget, ActionMenuButton) else None

    # ----- Actions --------------------------------------------------------
    def open_edit(self, vehicle: Vehicle) -> VehicleFormDialog | None:
        if not self._edit_flow.open(vehicle):
            return None
        dialog = VehicleFormDialog(self._edit_flow, self)
        dialog.setAttribute(Qt.WidgetAttribute.WA_DeleteOnClose)
        dialog.open()
        return dialog

    def mark_sold(self, vehicle: Vehicle) -> None:
        self._state.mark_sold(vehicle.id)

    def request_delete(self, vehicle: Vehicle) -> DeleteConfirmationDialog:
        self._delete_flow.request(vehicle)
        dialog = DeleteConfirmationDialog(self._delete_flow, self)
        dialog.setAttribute(Qt.WidgetAttribute.WA_DeleteOnClose)
        dialog.open()
        return dialog

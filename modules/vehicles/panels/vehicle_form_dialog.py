"""Add / edit dialog for a single vehicle."""

from __future__ import annotations

import logging
from typing import Optional, Union

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QDialog,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from ..api.validators import ValidationError, field_errors
from ..models.vehicle import FORM_FIELDS, REQUIRED_MESSAGES
from ..services.mutations import CreateFlow, EditFlow


logger = logging.getLogger(__name__)

FIELD_LABELS: dict[str, str] = {
    "dealer_code": "Dealer Code",
    "dealer_name": "Dealer Name",
    "dealer_address": "Dealer Address",
    "dealer_city": "Dealer City",
    "dealer_state": "Dealer State",
    "model_name": "Model Name",
    "model_id": "Model ID",
    "battery_power": "Battery Power",
    "serial_number": "Serial Number",
}

FormFlow = Union[CreateFlow, EditFlow]


class VehicleFormDialog(QDialog):
    """Modal form driven by a :class:`CreateFlow` (add) or :class:`EditFlow` (edit).

    Field errors are shown under a field once it has been edited, or for every
    field after a rejected save.  Save is enabled only while the form is valid
    and no save is in flight.
    """

    def __init__(self, flow: FormFlow, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._flow = flow
        self._touched: set[str] = set()
        self._valid = False
        self.edits: dict[str, QLineEdit] = {}
        self.error_labels: dict[str, QLabel] = {}

        self.setModal(True)
        self.setMinimumWidth(480)
        if isinstance(flow, EditFlow) and flow.editing is not None:
            self.setWindowTitle(f"Edit Vehicle #{flow.editing.id}")
        else:
            self.setWindowTitle("Add Vehicle")

        self.setup_ui()
        self.load_values()

        self._flow.busyChanged.connect(self._update_save_button_state)
        self._flow.failed.connect(self._on_failed)
        if isinstance(flow, EditFlow):
            flow.saved.connect(self._on_saved)
            flow.editingChanged.connect(self._on_editing_changed)
        else:
            flow.created.connect(self._on_created)

    # ------------------------------------------------------------------
    # UI construction
    # ------------------------------------------------------------------
    def setup_ui(self) -> None:
        main_layout = QVBoxLayout(self)
        form_layout = QFormLayout()
        form_layout.setFieldGrowthPolicy(QFormLayout.FieldGrowthPolicy.AllNonFixedFieldsGrow)
        main_layout.addLayout(form_layout)

        for name in FORM_FIELDS:
            edit = QLineEdit()
            edit.setObjectName(f"field_{name}")
            edit.setAccessibleName(FIELD_LABELS[name])
            if name in REQUIRED_MESSAGES:
                edit.setPlaceholderText("Required")
            edit.textEdited.connect(lambda _text, n=name: self._on_field_edited(n))

            error_label = QLabel("")
            error_label.setStyleSheet("color: #b71c1c; font-size: 11px;")
            error_label.hide()

            container = QWidget()
            column = QVBoxLayout(container)
            column.setContentsMargins(0, 0, 0, 0)
            column.setSpacing(2)
            column.addWidget(edit)
            column.addWidget(error_label)

            caption = QLabel(FIELD_LABELS[name] + (" *" if name in REQUIRED_MESSAGES else "") + ":")
            caption.setBuddy(edit)
            form_layout.addRow(caption, container)
            self.edits[name] = edit
            self.error_labels[name] = error_label

        self.status_label = QLabel("")
        self.status_label.setWordWrap(True)
        self.status_label.setStyleSheet("color: #b71c1c;")
        self.status_label.hide()
        main_layout.addWidget(self.status_label)

        button_row = QHBoxLayout()
        button_row.addStretch(1)
        self.save_button = QPushButton("Save")
        self.save_button.setDefault(True)
        self.save_button.setEnabled(False)
        self.cancel_button = QPushButton("Cancel")
        self.cancel_button.setAutoDefault(False)
        button_row.addWidget(self.save_button)
        button_row.addWidget(self.cancel_button)
        main_layout.addLayout(button_row)

        self.save_button.clicked.connect(self.on_save_clicked)
        self.cancel_button.clicked.connect(self.reject)

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------
    def load_values(self) -> None:
        values = self._flow.form_values() if isinstance(self._flow, EditFlow) else {n: "" for n in FORM_FIELDS}
        for name, edit in self.edits.items():
            edit.setText(values.get(name, ""))
        self._touched.clear()
        self.status_label.hide()
        self._refresh_errors()

    def values(self) -> dict[str, str]:
        return {name: edit.text() for name, edit in self.edits.items()}

    def _on_field_edited(self, name: str) -> None:
        self._touched.add(name)
        self._refresh_errors()

    def _refresh_errors(self, errors: Optional[dict[str, str]] = None, *, show_all: bool = False) -> None:
        if errors is None:
            errors = field_errors(self.values())
        for name, label in self.error_labels.items():
            message = errors.get(name) if (show_all or name in self._touched) else None
            label.setText(message or "")
            label.setVisible(bool(message))
        self._valid = not errors
        self._update_save_button_state()

    def _update_save_button_state(self, *_args: object) -> None:
        self.save_button.setEnabled(self._valid and not self._flow.busy)
        self.save_button.setText("Saving…" if self._flow.busy else "Save")

    # ------------------------------------------------------------------
    # Save handling
    # ------------------------------------------------------------------
    def on_save_clicked(self) -> None:
        self.status_label.hide()
        data = self.values()
        try:
            if isinstance(self._flow, EditFlow):
                self._flow.save(data)
            else:
                self._flow.submit(data)
        except ValidationError as exc:
            self._touched.update(exc.field_errors)
            self._refresh_errors(exc.field_errors, show_all=True)

    def _on_failed(self, message: str) -> None:
        logger.debug("Vehicle form save failed: %s", message)
        self.status_label.setText(message)
        self.status_label.show()

    def _on_saved(self, _vehicle_id: int) -> None:
        self.accept()

    def _on_editing_changed(self, vehicle: object) -> None:
        if vehicle is None and self.isVisible():
            super().reject()

    def _on_created(self) -> None:
        self.load_values()
        self.accept()

    def reject(self) -> None:  # type: ignore[override]
        if isinstance(self._flow, EditFlow):
            self._flow.close()
        super().reject()

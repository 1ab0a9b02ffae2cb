"""Delete, edit-save and add workflows layered over :class:`VehicleListState`."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from PySide6.QtCore import QObject, Signal

from ..api.responses import ApiResponse
from ..api.validators import validate_form
from ..models.vehicle import PendingDelete, Vehicle, VehicleForm
from .vehicle_list import VehicleListState


logger = logging.getLogger(__name__)


class DeleteFlow(QObject):
    """Delete with an explicit confirmation step.

    The pending target is a snapshot (id + serial number) so the dialog keeps
    naming the right vehicle even if the list is refetched underneath it.  A
    failed delete keeps the target so the user can retry or cancel.
    """

    pendingChanged = Signal(object)  # PendingDelete | None
    busyChanged = Signal(bool)
    deleted = Signal(int)
    failed = Signal(str)

    def __init__(self, state: VehicleListState, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._state = state
        self._pending: Optional[PendingDelete] = None
        self._busy = False

    @property
    def pending(self) -> Optional[PendingDelete]:
        return self._pending

    @property
    def busy(self) -> bool:
        return self._busy

    def request(self, vehicle: Vehicle) -> PendingDelete:
        self._set_pending(PendingDelete.of(vehicle))
        return self._pending  # type: ignore[return-value]

    def cancel(self) -> None:
        self._set_pending(None)

    def confirm(self) -> bool:
        """Fire the delete for the pending target; False when nothing to do."""

        target = self._pending
        if target is None or self._busy:
            return False
        self._set_busy(True)
        self._state.delete_entry(target.vehicle_id, lambda response: self._on_finished(target, response))
        return True

    def _on_finished(self, target: PendingDelete, response: ApiResponse) -> None:
        self._set_busy(False)
        if response.success:
            if self._pending == target:
                self._set_pending(None)
            self.deleted.emit(target.vehicle_id)
        else:
            logger.debug("Delete of vehicle %s failed; keeping it pending", target.vehicle_id)
            self.failed.emit(response.error or "Failed to delete vehicle")

    def _set_pending(self, pending: Optional[PendingDelete]) -> None:
        if pending == self._pending:
            return
        self._pending = pending
        self.pendingChanged.emit(pending)

    def _set_busy(self, busy: bool) -> None:
        self._busy = busy
        self.busyChanged.emit(busy)


class _FormFlow(QObject):
    busyChanged = Signal(bool)
    failed = Signal(str)

    def __init__(self, state: VehicleListState, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._state = state
        self._busy = False

    @property
    def busy(self) -> bool:
        return self._busy

    def _set_busy(self, busy: bool) -> None:
        self._busy = busy
        self.busyChanged.emit(busy)


class EditFlow(_FormFlow):
    """Edit-with-refresh: open, save, close on success, stay open on failure."""

    editingChanged = Signal(object)  # Vehicle | None
    saved = Signal(int)

    def __init__(self, state: VehicleListState, parent: QObject | None = None) -> None:
        super().__init__(state, parent)
        self._editing: Optional[Vehicle] = None

    @property
    def editing(self) -> Optional[Vehicle]:
        return self._editing

    def open(self, vehicle: Vehicle) -> bool:
        if vehicle.is_sold:
            logger.debug("Vehicle %s is sold; edit refused", vehicle.id)
            return False
        self._editing = vehicle
        self.editingChanged.emit(vehicle)
        return True

    def form_values(self) -> dict[str, str]:
        if self._editing is None:
            return VehicleForm.blank_values()
        return self._editing.to_form_data()

    def close(self) -> None:
        if self._editing is None:
            return
        self._editing = None
        self.editingChanged.emit(None)

    def save(self, data: Mapping[str, Any]) -> bool:
        """Validate and submit; raises ``ValidationError`` for bad input."""

        vehicle = self._editing
        if vehicle is None or self._busy:
            return False
        form = validate_form(data)
        self._set_busy(True)
        self._state.update_entry(vehicle.id, form, lambda response: self._on_finished(vehicle, response))
        return True

    def _on_finished(self, vehicle: Vehicle, response: ApiResponse) -> None:
        self._set_busy(False)
        if response.success:
            self.saved.emit(vehicle.id)
            if self._editing is not None and self._editing.id == vehicle.id:
                self.close()
        else:
            self.failed.emit(response.error or "Failed to update vehicle")


class CreateFlow(_FormFlow):
    """Add-vehicle submission; the view resets and returns to the list on success."""

    created = Signal()

    def submit(self, data: Mapping[str, Any]) -> bool:
        if self._busy:
            return False
        form = validate_form(data)
        self._set_busy(True)
        self._state.create_entry(form, self._on_finished)
        return True

    def _on_finished(self, response: ApiResponse) -> None:
        self._set_busy(False)
        if response.success:
            self.created.emit()
        else:
            self.failed.emit(response.error or "Failed to add vehicle")


__all__ = ["CreateFlow", "DeleteFlow", "EditFlow"]

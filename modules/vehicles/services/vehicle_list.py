"""Authoritative in-memory vehicle list for the dashboard.

The list is replaced wholesale by every list response and is only ever
mutated here.  "Mark as sold" patches the entry optimistically before the
server answers and restores the captured prior status if the call fails.

Overlapping list fetches are not cancelled.  By default whichever response
arrives last wins, even if it belongs to an older request; pass
``discard_stale_responses=True`` to drop responses older than the most
recently issued fetch instead.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from functools import partial
from typing import Any, Callable, Optional

from PySide6.QtCore import QObject, Signal

from notifications.models import Notification
from notifications.services import Notifier, get_notifier
from utils.app_settings import DEFAULT_PAGE_SIZE

from ..api.client import VehicleApiClient
from ..api.responses import ApiResponse, VehicleListResponse
from ..models.enums import VehicleStatus
from ..models.vehicle import SearchFilters, Vehicle, VehicleForm
from .pagination import Page, clamp_page, paginate
from .tasks import TaskRunner


logger = logging.getLogger(__name__)

MutationCallback = Callable[[ApiResponse], None]


class VehicleListState(QObject):
    """Owns the fetched vehicles, the loading flag, the last error and the page."""

    vehiclesChanged = Signal(list)
    loadingChanged = Signal(bool)
    pageChanged = Signal(object)  # Page
    errorOccurred = Signal(str)

    def __init__(
        self,
        client: VehicleApiClient,
        runner: TaskRunner,
        *,
        notifier: Notifier | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        discard_stale_responses: bool = False,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._client = client
        self._runner = runner
        self._notifier = notifier or get_notifier()
        self._page_size = page_size
        self._discard_stale = discard_stale_responses

        self._vehicles: list[Vehicle] = []
        self._loading = True
        self._last_error: Optional[str] = None
        self._current_page = 1
        self._issued = 0

    # ------------------------------------------------------------------ read access
    @property
    def vehicles(self) -> tuple[Vehicle, ...]:
        return tuple(self._vehicles)

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def last_error(self) -> Optional[str]:
        return self._last_error

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def current_page(self) -> int:
        return self.page().current_page

    def page(self) -> Page[Vehicle]:
        return paginate(self._vehicles, self._current_page, self._page_size)

    def find(self, vehicle_id: int) -> Optional[Vehicle]:
        for vehicle in self._vehicles:
            if vehicle.id == vehicle_id:
                return vehicle
        return None

    # ------------------------------------------------------------------ fetching
    def refetch(self, filters: SearchFilters | None = None) -> int:
        """Issue a list request and return its sequence number."""

        filters = filters or SearchFilters.none()
        self._issued += 1
        seq = self._issued
        self._set_loading(True)
        logger.debug("Fetching vehicles #%s with %s", seq, filters)
        self._runner.submit(
            lambda: self._client.list_vehicles(filters.serial_number, filters.dealer_code),
            partial(self._on_list_response, seq),
            partial(self._on_list_failure, seq),
        )
        return seq

    def _on_list_failure(self, seq: int, message: str) -> None:
        self._on_list_response(seq, VehicleListResponse(vehicles=[], error=message or "Failed to fetch vehicles"))

    def _on_list_response(self, seq: int, response: VehicleListResponse) -> None:
        if self._discard_stale and seq < self._issued:
            logger.debug("Discarding stale vehicle list #%s (latest #%s)", seq, self._issued)
            return
        if response.error:
            self._vehicles = []
            self._last_error = response.error
            self._show_toast("Unable to load vehicles", response.error, severity="error")
            self.errorOccurred.emit(response.error)
        else:
            self._vehicles = list(response.vehicles)
            self._last_error = None
            self._current_page = 1
        logger.debug("Vehicle list #%s applied: %s entries", seq, len(self._vehicles))
        self._emit_list()
        self._set_loading(False)

    # ------------------------------------------------------------------ pagination
    def go_to_page(self, page: int) -> None:
        total = self.page().total_pages
        target = clamp_page(page, total)
        if target == self.current_page:
            return
        self._current_page = target
        self.pageChanged.emit(self.page())

    def next_page(self) -> None:
        self.go_to_page(self.current_page + 1)

    def previous_page(self) -> None:
        self.go_to_page(self.current_page - 1)

    # ------------------------------------------------------------------ mutations
    def mark_sold(self, vehicle_id: int) -> bool:
        """Optimistically flag ``vehicle_id`` as sold, then confirm with the server.

        Returns False (and does nothing) when the vehicle is unknown or
        already sold.
        """

        index = next((i for i, v in enumerate(self._vehicles) if v.id == vehicle_id), None)
        if index is None:
            logger.warning("mark_sold: vehicle %s is not in the current list", vehicle_id)
            return False
        vehicle = self._vehicles[index]
        if vehicle.is_sold:
            return False

        prior_status = vehicle.status
        self._vehicles[index] = replace(vehicle, status=VehicleStatus.SOLD.value)
        self._emit_list()

        self._runner.submit(
            lambda: self._client.set_sold(vehicle_id),
            partial(self._on_sold_response, vehicle_id, prior_status),
            lambda message: self._on_sold_response(vehicle_id, prior_status, ApiResponse.failed(message)),
        )
        return True

    def _on_sold_response(self, vehicle_id: int, prior_status: Optional[str], response: ApiResponse) -> None:
        if response.success:
            self._show_toast("Vehicle sold", response.message or "Vehicle marked as sold successfully")
            self.refetch()
            return

        self._restore_status(vehicle_id, prior_status)
        error = response.error or "Failed to mark vehicle as sold"
        self._show_toast("Mark as sold failed", error, severity="error")
        self.errorOccurred.emit(error)

    def _restore_status(self, vehicle_id: int, prior_status: Optional[str]) -> None:
        for index, vehicle in enumerate(self._vehicles):
            if vehicle.id == vehicle_id:
                self._vehicles[index] = replace(vehicle, status=prior_status)
                logger.debug("Rolled back status of vehicle %s to %r", vehicle_id, prior_status)
                self._emit_list()
                return

    def delete_entry(self, vehicle_id: int, on_complete: MutationCallback | None = None) -> None:
        self._run_mutation(
            "delete",
            vehicle_id,
            lambda: self._client.delete_vehicle(vehicle_id),
            titles=("Vehicle deleted", "Delete failed"),
            fallbacks=("Vehicle deleted successfully", "Failed to delete vehicle"),
            on_complete=on_complete,
        )

    def update_entry(self, vehicle_id: int, form: VehicleForm, on_complete: MutationCallback | None = None) -> None:
        self._run_mutation(
            "update",
            vehicle_id,
            lambda: self._client.update_vehicle(vehicle_id, form),
            titles=("Vehicle updated", "Update failed"),
            fallbacks=("Vehicle updated successfully", "Failed to update vehicle"),
            on_complete=on_complete,
        )

    def create_entry(self, form: VehicleForm, on_complete: MutationCallback | None = None) -> None:
        self._run_mutation(
            "create",
            0,
            lambda: self._client.create_vehicle(form),
            titles=("Vehicle added", "Add failed"),
            fallbacks=("Vehicle added successfully", "Failed to add vehicle"),
            on_complete=on_complete,
        )

    def _run_mutation(
        self,
        kind: str,
        vehicle_id: int,
        task: Callable[[], Any],
        *,
        titles: tuple[str, str],
        fallbacks: tuple[str, str],
        on_complete: MutationCallback | None,
    ) -> None:
        def finish(response: ApiResponse) -> None:
            if response.success:
                self._show_toast(titles[0], response.message or fallbacks[0])
                self.refetch()
            else:
                error = response.error or fallbacks[1]
                self._show_toast(titles[1], error, severity="error")
                self.errorOccurred.emit(error)
            if on_complete is not None:
                on_complete(response)

        logger.debug("Submitting %s for vehicle %s", kind, vehicle_id)
        self._runner.submit(task, finish, lambda message: finish(ApiResponse.failed(message)))

    # ------------------------------------------------------------------ helpers
    def _emit_list(self) -> None:
        self.vehiclesChanged.emit(list(self._vehicles))
        self.pageChanged.emit(self.page())

    def _set_loading(self, loading: bool) -> None:
        if loading == self._loading:
            return
        self._loading = loading
        self.loadingChanged.emit(loading)

    def _show_toast(self, title: str, message: str, *, severity: str = "success") -> None:
        try:
            self._notifier.notify(
                Notification(
                    title=title,
                    message=message,
                    severity=severity if severity in {"info", "success", "warning", "error"} else "info",
                    source="Vehicle Dashboard",
                )
            )
        except Exception:
            logger.exception("Failed to publish notification %r", title)


__all__ = ["VehicleListState"]

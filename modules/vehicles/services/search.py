"""Search coordination for the vehicle dashboard."""

from __future__ import annotations

import logging

from PySide6.QtCore import QObject, Signal

from utils.app_settings import DEFAULT_DEBOUNCE_MS

from ..models.enums import SearchMode
from ..models.vehicle import SearchFilters, SearchState
from .debounce import DebouncedValue


logger = logging.getLogger(__name__)


class SearchCoordinator(QObject):
    """Owns the two raw search inputs and the exclusive search mode.

    Each input is fed through its own :class:`DebouncedValue`.  A search is
    requested when either debounced value changes or when the mode changes,
    and always carries only the active mode's (trimmed) debounced query.
    Nothing is requested before :meth:`start` or after :meth:`close`.
    """

    searchRequested = Signal(object)  # SearchFilters
    stateChanged = Signal(object)  # SearchState
    pendingChanged = Signal(bool)

    def __init__(
        self,
        delay_ms: int = DEFAULT_DEBOUNCE_MS,
        mode: SearchMode = SearchMode.SERIAL_NUMBER,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._mode = SearchMode(mode)
        self._trackers: dict[SearchMode, DebouncedValue] = {
            SearchMode.SERIAL_NUMBER: DebouncedValue("", delay_ms, self),
            SearchMode.DEALER_CODE: DebouncedValue("", delay_ms, self),
        }
        for tracker in self._trackers.values():
            tracker.debouncedChanged.connect(self._on_debounced_changed)
        self._pending = False
        self._active = False

    # ------------------------------------------------------------------ state
    @property
    def mode(self) -> SearchMode:
        return self._mode

    @property
    def state(self) -> SearchState:
        return SearchState(
            mode=self._mode,
            serial_query=self._trackers[SearchMode.SERIAL_NUMBER].value,
            dealer_query=self._trackers[SearchMode.DEALER_CODE].value,
        )

    @property
    def is_pending(self) -> bool:
        return any(tracker.is_pending for tracker in self._trackers.values())

    @property
    def has_filters(self) -> bool:
        return self.state.has_filters

    def tracker(self, mode: SearchMode) -> DebouncedValue:
        return self._trackers[SearchMode(mode)]

    def current_filters(self) -> SearchFilters:
        return SearchFilters.for_mode(self._mode, self._trackers[self._mode].debounced)

    # ------------------------------------------------------------------ API
    def start(self) -> None:
        """Begin issuing searches; the first one lists everything."""

        self._active = True
        self._request("initial")

    def close(self) -> None:
        self._active = False
        for tracker in self._trackers.values():
            tracker.cancel()

    def set_mode(self, mode: SearchMode) -> None:
        mode = SearchMode(mode)
        changed = mode is not self._mode
        self._mode = mode
        self._trackers[mode.other()].set_value("")
        self._emit_state()
        if changed:
            logger.debug("Search mode -> %s", mode.value)
            self._request("mode")

    def set_serial_query(self, text: str) -> None:
        self._trackers[SearchMode.SERIAL_NUMBER].set_value(text)
        self._emit_state()

    def set_dealer_query(self, text: str) -> None:
        self._trackers[SearchMode.DEALER_CODE].set_value(text)
        self._emit_state()

    def set_query(self, text: str) -> None:
        """Update the raw query of whichever mode is active."""

        self._trackers[self._mode].set_value(text)
        self._emit_state()

    def clear(self) -> None:
        for tracker in self._trackers.values():
            tracker.set_value("")
        self._emit_state()

    def reset(self) -> None:
        """Back to empty queries in serial-number mode without requesting a search."""

        self._mode = SearchMode.SERIAL_NUMBER
        for tracker in self._trackers.values():
            tracker.reset("")
        logger.debug("Search reset")
        self._emit_state()

    # ------------------------------------------------------------------ helpers
    def _on_debounced_changed(self, _value: object) -> None:
        self._emit_state()
        self._request("debounce")

    def _request(self, reason: str) -> None:
        if not self._active:
            return
        filters = self.current_filters()
        logger.debug("Search requested (%s): %s", reason, filters)
        self.searchRequested.emit(filters)

    def _emit_state(self) -> None:
        self.stateChanged.emit(self.state)
        pending = self.is_pending
        if pending != self._pending:
            self._pending = pending
            self.pendingChanged.emit(pending)


__all__ = ["SearchCoordinator"]

"""Run blocking API calls off the GUI thread.

Results are handed back on the thread that owns the runner (the GUI thread)
through queued signal connections, so callbacks may touch widgets and list
state directly.  Overlapping submissions are independent: each one completes
whenever its worker finishes, and nothing already running is cancelled.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Protocol

from PySide6.QtCore import QObject, QThread, Signal, Slot


logger = logging.getLogger(__name__)

Task = Callable[[], Any]
DoneCallback = Callable[[Any], None]
ErrorCallback = Callable[[str], None]


class TaskRunner(Protocol):
    def submit(self, task: Task, on_done: DoneCallback, on_error: Optional[ErrorCallback] = None) -> None:
        ...


class _ApiWorkerThread(QThread):
    """Executes one task and reports its outcome."""

    completed = Signal(object)
    failed = Signal(str)

    def __init__(self, task: Task, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._task = task

    def run(self) -> None:  # type: ignore[override]
        try:
            result = self._task()
        except Exception as exc:
            logger.exception("Background task failed")
            self.failed.emit(str(exc) or exc.__class__.__name__)
        else:
            self.completed.emit(result)


class _Delivery(QObject):
    """Lives on the runner's thread so worker signals are queued onto it."""

    def __init__(
        self,
        on_done: DoneCallback,
        on_error: Optional[ErrorCallback],
        on_release: Callable[["_Delivery"], None],
        parent: QObject,
    ) -> None:
        super().__init__(parent)
        self._on_done = on_done
        self._on_error = on_error
        self._on_release = on_release
        self.worker: _ApiWorkerThread | None = None

    @Slot(object)
    def deliver(self, result: Any) -> None:
        self._on_done(result)

    @Slot(str)
    def deliver_error(self, message: str) -> None:
        if self._on_error is not None:
            self._on_error(message)
        else:
            logger.error("Unhandled background task failure: %s", message)

    @Slot()
    def release(self) -> None:
        self._on_release(self)


class ApiTaskRunner(QObject):
    """Qt implementation of :class:`TaskRunner` backed by one thread per task."""

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._active: set[_Delivery] = set()

    @property
    def pending(self) -> int:
        return len(self._active)

    def submit(self, task: Task, on_done: DoneCallback, on_error: Optional[ErrorCallback] = None) -> None:
        worker = _ApiWorkerThread(task)
        delivery = _Delivery(on_done, on_error, self._release, self)
        delivery.worker = worker
        worker.completed.connect(delivery.deliver)
        worker.failed.connect(delivery.deliver_error)
        worker.finished.connect(delivery.release)
        self._active.add(delivery)
        worker.start()

    def _release(self, delivery: _Delivery) -> None:
        self._active.discard(delivery)
        if delivery.worker is not None:
            delivery.worker.deleteLater()
            delivery.worker = None
        delivery.deleteLater()

    def shutdown(self, timeout_ms: int = 5000) -> None:
        """Wait for in-flight workers; used when the application exits."""

        for delivery in list(self._active):
            worker = delivery.worker
            if worker is not None and not worker.wait(timeout_ms):
                logger.warning("Background task still running at shutdown")


__all__ = ["ApiTaskRunner", "TaskRunner"]

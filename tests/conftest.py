from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

import pytest

# Qt widgets require a platform plugin.  Offscreen avoids libGL dependencies
# inside the test container.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(scope="session")
def qt_app():
    QtWidgets = pytest.importorskip("PySide6.QtWidgets")
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app


@pytest.fixture(autouse=True)
def reset_state():
    from utils.state import AppState

    AppState._active_user = None
    yield
    AppState._active_user = None


@dataclass
class _Submission:
    task: Callable[[], Any]
    on_done: Callable[[Any], None]
    on_error: Optional[Callable[[str], None]]
    settled: bool = False


class ManualTaskRunner:
    """Collects submitted tasks; tests settle them one at a time, in any order."""

    def __init__(self) -> None:
        self.submissions: list[_Submission] = []

    def submit(self, task, on_done, on_error=None) -> None:
        self.submissions.append(_Submission(task, on_done, on_error))

    @property
    def pending(self) -> list[_Submission]:
        return [s for s in self.submissions if not s.settled]

    def resolve(self, index: int = 0) -> Any:
        """Run the ``index``-th unsettled task and deliver its result."""

        submission = self.pending[index]
        submission.settled = True
        result = submission.task()
        submission.on_done(result)
        return result

    def fail(self, index: int = 0, message: str = "boom") -> None:
        submission = self.pending[index]
        submission.settled = True
        if submission.on_error is not None:
            submission.on_error(message)

    def resolve_all(self) -> None:
        while self.pending:
            self.resolve(0)


@dataclass
class FakeVehicleClient:
    """In-memory stand-in for ``VehicleApiClient`` that records every call."""

    vehicles: list = field(default_factory=list)
    list_error: Optional[str] = None
    mutation_error: Optional[str] = None
    calls: list = field(default_factory=list)

    def list_vehicles(self, serial_number=None, dealer_code=None):
        from modules.vehicles.api.responses import VehicleListResponse

        self.calls.append(("list", serial_number, dealer_code))
        if self.list_error:
            return VehicleListResponse(vehicles=[], error=self.list_error)
        result = list(self.vehicles)
        if serial_number:
            result = [v for v in result if v.serial_number == serial_number]
        if dealer_code:
            result = [v for v in result if v.dealer_code == dealer_code]
        return VehicleListResponse(vehicles=result)

    def _mutation(self, name: str, *args: Any):
        from modules.vehicles.api.responses import ApiResponse

        self.calls.append((name, *args))
        if self.mutation_error:
            return ApiResponse.failed(self.mutation_error)
        return ApiResponse.ok(f"{name} ok")

    def set_sold(self, vehicle_id):
        return self._mutation("set_sold", vehicle_id)

    def delete_vehicle(self, vehicle_id):
        return self._mutation("delete", vehicle_id)

    def update_vehicle(self, vehicle_id, form):
        return self._mutation("update", vehicle_id, form)

    def create_vehicle(self, form):
        return self._mutation("create", form)

    def calls_named(self, name: str) -> list:
        return [call for call in self.calls if call[0] == name]


class RecordingNotifier:
    def __init__(self) -> None:
        self.notes: list = []

    def notify(self, note) -> bool:
        self.notes.append(note)
        return True

    def severities(self) -> list[str]:
        return [note.severity for note in self.notes]


def make_vehicle(vehicle_id: int, **overrides: Any):
    from modules.vehicles.models import Vehicle

    values = {
        "id": vehicle_id,
        "dealer_code": f"D{vehicle_id:03d}",
        "model_name": "Chetak",
        "serial_number": f"SN{vehicle_id:04d}",
    }
    values.update(overrides)
    return Vehicle(**values)


@pytest.fixture
def runner() -> ManualTaskRunner:
    return ManualTaskRunner()


@pytest.fixture
def client() -> FakeVehicleClient:
    return FakeVehicleClient(vehicles=[make_vehicle(i) for i in range(1, 13)])


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def list_state(qt_app, client, runner, notifier):
    from modules.vehicles.services.vehicle_list import VehicleListState

    return VehicleListState(client, runner, notifier=notifier)

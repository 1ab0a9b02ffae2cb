from __future__ import annotations

import pytest

from modules.vehicles.api.responses import VehicleListResponse
from modules.vehicles.models import SearchFilters, VehicleForm
from modules.vehicles.services.vehicle_list import VehicleListState

from tests.conftest import make_vehicle


def _loaded(list_state, runner):
    list_state.refetch()
    runner.resolve()
    return list_state


def test_starts_empty_and_loading(list_state):
    assert list_state.vehicles == ()
    assert list_state.loading is True
    assert list_state.last_error is None


def test_refetch_replaces_list_and_resets_page(list_state, runner, client):
    _loaded(list_state, runner)
    assert len(list_state.vehicles) == 12
    assert list_state.loading is False

    list_state.go_to_page(3)
    assert list_state.current_page == 3

    list_state.refetch(SearchFilters(serial_number="SN0002"))
    assert list_state.loading is True
    runner.resolve()
    assert [v.id for v in list_state.vehicles] == [2]
    assert list_state.current_page == 1
    assert client.calls[-1] == ("list", "SN0002", None)


def test_fetch_error_empties_list_and_toasts(list_state, runner, client, notifier):
    _loaded(list_state, runner)
    errors: list[str] = []
    list_state.errorOccurred.connect(errors.append)

    client.list_error = "HTTP 500: Internal Server Error"
    list_state.refetch()
    runner.resolve()

    assert list_state.vehicles == ()
    assert list_state.loading is False
    assert list_state.last_error == "HTTP 500: Internal Server Error"
    assert errors == ["HTTP 500: Internal Server Error"]
    assert notifier.severities() == ["error"]


def test_runner_failure_is_treated_as_fetch_error(list_state, runner):
    list_state.refetch()
    runner.fail(0, "worker crashed")
    assert list_state.loading is False
    assert list_state.last_error == "worker crashed"


def test_page_navigation_clamps(list_state, runner):
    _loaded(list_state, runner)
    pages: list[int] = []
    list_state.pageChanged.connect(lambda page: pages.append(page.current_page))

    list_state.previous_page()
    assert list_state.current_page == 1
    list_state.next_page()
    list_state.next_page()
    list_state.next_page()
    assert list_state.current_page == 3
    assert pages == [2, 3]
    assert [v.id for v in list_state.page().visible] == [11, 12]


def test_mark_sold_is_optimistic_then_refetches(list_state, runner, client, notifier):
    _loaded(list_state, runner)

    assert list_state.mark_sold(3) is True
    assert list_state.find(3).is_sold
    assert client.calls_named("set_sold") == []

    runner.resolve()
    assert client.calls_named("set_sold") == [("set_sold", 3)]
    assert notifier.severities() == ["success"]
    # the confirming refetch is unfiltered
    assert len(runner.pending) == 1
    runner.resolve()
    assert client.calls[-1] == ("list", None, None)


def test_mark_sold_failure_restores_prior_status(list_state, runner, client, notifier):
    _loaded(list_state, runner)
    client.mutation_error = "Vehicle not found"
    errors: list[str] = []
    list_state.errorOccurred.connect(errors.append)

    assert list_state.find(4).status is None
    list_state.mark_sold(4)
    assert list_state.find(4).status == "sold"

    runner.resolve()
    assert list_state.find(4).status is None
    assert errors == ["Vehicle not found"]
    assert notifier.severities() == ["error"]
    assert runner.pending == []


def test_mark_sold_rollback_keeps_unusual_status_verbatim(qt_app, runner, notifier):
    from tests.conftest import FakeVehicleClient

    client = FakeVehicleClient(vehicles=[make_vehicle(1, status="reserved")], mutation_error="nope")
    state = VehicleListState(client, runner, notifier=notifier)
    _loaded(state, runner)
    state.mark_sold(1)
    runner.fail(0, "network down")
    assert state.find(1).status == "reserved"


def test_mark_sold_ignores_unknown_and_sold(qt_app, runner, notifier):
    from tests.conftest import FakeVehicleClient

    client = FakeVehicleClient(vehicles=[make_vehicle(1, status="sold")])
    state = VehicleListState(client, runner, notifier=notifier)
    _loaded(state, runner)
    assert state.mark_sold(1) is False
    assert state.mark_sold(99) is False
    assert runner.pending == []


def test_last_response_wins_by_default(list_state, runner):
    list_state.refetch(SearchFilters(serial_number="SN0001"))
    list_state.refetch(SearchFilters(serial_number="SN0002"))
    # the newer request answers first, the older one last
    runner.resolve(1)
    assert [v.id for v in list_state.vehicles] == [2]
    runner.resolve(0)
    assert [v.id for v in list_state.vehicles] == [1]


def test_stale_responses_can_be_discarded(qt_app, client, runner, notifier):
    state = VehicleListState(client, runner, notifier=notifier, discard_stale_responses=True)
    state.refetch(SearchFilters(serial_number="SN0001"))
    state.refetch(SearchFilters(serial_number="SN0002"))
    runner.resolve(1)
    runner.resolve(0)
    assert [v.id for v in state.vehicles] == [2]
    assert state.loading is False


def test_update_and_create_refetch_on_success(list_state, runner, client):
    form = VehicleForm(dealer_code="D1", model_name="Chetak", serial_number="SN-NEW")
    results = []

    list_state.create_entry(form, results.append)
    runner.resolve()
    assert results[-1].success
    assert client.calls_named("create") == [("create", form)]
    assert len(runner.pending) == 1

    list_state.update_entry(5, form, results.append)
    runner.resolve(1)
    assert results[-1].message == "update ok"
    assert client.calls_named("update") == [("update", 5, form)]


def test_failed_mutation_reports_without_refetch(list_state, runner, client, notifier):
    client.mutation_error = "Serial number already exists"
    results = []
    list_state.create_entry(
        VehicleForm(dealer_code="D1", model_name="M", serial_number="S"), results.append
    )
    runner.resolve()
    assert results[0].error == "Serial number already exists"
    assert runner.pending == []
    assert notifier.severities() == ["error"]


def test_list_response_envelope_success_flag():
    assert VehicleListResponse().success
    assert not VehicleListResponse(error="x").success


@pytest.mark.parametrize("page_size", [1, 5, 7])
def test_page_size_is_respected(qt_app, client, runner, notifier, page_size):
    state = VehicleListState(client, runner, notifier=notifier, page_size=page_size)
    _loaded(state, runner)
    assert len(state.page().visible) == page_size

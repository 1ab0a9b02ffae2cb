from __future__ import annotations

import json

import httpx
import pytest

from modules.vehicles.api.client import VehicleApiClient
from modules.vehicles.api.responses import GENERIC_ERROR
from modules.vehicles.models import VehicleForm


BASE = "http://api.test/api/v1/bajaj"

RECORD = {
    "id": "7",
    "dealer_code": "D007",
    "model_name": "Chetak",
    "serial_number": "SN0007",
    "dealer_city": None,
}


def _client(handler) -> tuple[VehicleApiClient, list[httpx.Request]]:
    seen: list[httpx.Request] = []

    def wrapped(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    return VehicleApiClient(BASE, transport=httpx.MockTransport(wrapped)), seen


@pytest.mark.parametrize(
    "body",
    [
        [RECORD],
        {"data": [RECORD]},
        {"data": RECORD},
        {"vehicles": [RECORD]},
    ],
)
def test_list_accepts_every_response_shape(body):
    client, _ = _client(lambda request: httpx.Response(200, json=body))
    result = client.list_vehicles()
    assert result.success
    assert [v.id for v in result.vehicles] == [7]
    assert result.vehicles[0].dealer_city == ""
    assert result.vehicles[0].status is None


def test_list_unknown_shape_is_empty():
    client, _ = _client(lambda request: httpx.Response(200, json={"unexpected": True}))
    result = client.list_vehicles()
    assert result.success and result.vehicles == []


def test_list_skips_entries_without_id():
    client, _ = _client(lambda request: httpx.Response(200, json=[RECORD, {"serial_number": "x"}, "junk"]))
    assert [v.id for v in client.list_vehicles().vehicles] == [7]


def test_list_sends_only_non_empty_filter():
    client, seen = _client(lambda request: httpx.Response(200, json=[]))
    client.list_vehicles(serial_number="SN1")
    client.list_vehicles(dealer_code="")
    assert seen[0].url.path == "/api/v1/bajaj/vehicles"
    assert dict(seen[0].url.params) == {"serial_number": "SN1"}
    assert dict(seen[1].url.params) == {}


@pytest.mark.parametrize(
    "response, expected",
    [
        (httpx.Response(404, json={"error": "Vehicle not found", "message": "ignored"}), "Vehicle not found"),
        (httpx.Response(400, json={"message": "Bad filter"}), "Bad filter"),
        (httpx.Response(500, json={}), "Failed to fetch vehicles"),
        (httpx.Response(502, text="<html>bad gateway</html>"), "HTTP 502: Bad Gateway"),
    ],
)
def test_list_error_messages(response, expected):
    client, _ = _client(lambda request: response)
    result = client.list_vehicles()
    assert result.vehicles == []
    assert result.error == expected


def test_transport_errors_are_folded_into_the_envelope():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client, _ = _client(handler)
    result = client.delete_vehicle(3)
    assert not result.success
    assert result.error == "connection refused"


def test_unexpected_exceptions_use_generic_message():
    def handler(request):
        raise KeyError("weird")

    client, _ = _client(handler)
    assert client.set_sold(3).error == GENERIC_ERROR


def test_set_sold_sends_status_only():
    client, seen = _client(lambda request: httpx.Response(200, json={"message": "Marked"}))
    result = client.set_sold(9)
    assert result.success and result.message == "Marked"
    assert seen[0].method == "PATCH"
    assert seen[0].url.path.endswith("/update-vehicle/9")
    assert json.loads(seen[0].content) == {"status": "sold"}


def test_create_and_update_send_full_form():
    client, seen = _client(lambda request: httpx.Response(201, content=b""))
    form = VehicleForm(dealer_code="D1", model_name="M", serial_number="S1")

    created = client.create_vehicle(form)
    updated = client.update_vehicle(4, form)

    assert created.message == "Vehicle added successfully"
    assert updated.message == "Vehicle updated successfully"
    assert [r.method for r in seen] == ["POST", "PATCH"]
    assert seen[0].url.path.endswith("/add-vehicle")
    assert seen[1].url.path.endswith("/update-vehicle/4")
    assert json.loads(seen[0].content)["serial_number"] == "S1"
    assert set(json.loads(seen[1].content)) == set(form.model_dump())


def test_delete_uses_server_message():
    client, seen = _client(lambda request: httpx.Response(200, json={"message": "Gone"}))
    assert client.delete_vehicle(7).message == "Gone"
    assert seen[0].method == "DELETE"
    assert seen[0].url.path.endswith("/delete-vehicle/7")


@pytest.mark.parametrize("body", [{"data": RECORD}, {"vehicle": RECORD}, RECORD])
def test_get_vehicle_unwraps(body):
    client, seen = _client(lambda request: httpx.Response(200, json=body))
    result = client.get_vehicle(7)
    assert result.success and result.vehicle.serial_number == "SN0007"
    assert seen[0].url.path.endswith("/vehicles/7")


def test_get_vehicle_not_found():
    client, _ = _client(lambda request: httpx.Response(404, json={"error": "Vehicle not found"}))
    result = client.get_vehicle(7)
    assert result.vehicle is None and result.error == "Vehicle not found"

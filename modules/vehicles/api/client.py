"""HTTP client for the remote vehicle inventory API.

Every public method returns an envelope from :mod:`.responses`; transport
failures, non-2xx answers and undecodable bodies are all folded into the
envelope's ``error`` string so callers never see a raw exception.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, TypeVar

import httpx

from utils.app_settings import VehicleAdminSettings

from ..models.enums import VehicleStatus
from ..models.vehicle import Vehicle, VehicleForm
from .responses import GENERIC_ERROR, ApiResponse, VehicleListResponse, VehicleResponse


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = httpx.Timeout(10.0, connect=5.0)

R = TypeVar("R")


class ApiRequestError(RuntimeError):
    """A request reached the server but was answered with a non-2xx status."""


class VehicleApiClient:
    """Thin wrapper around httpx exposing the vehicle operations."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: httpx.Timeout | float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else DEFAULT_TIMEOUT,
            transport=transport,
            headers={
                "Content-Type": "application/json",
                "User-Agent": "Vehicle-Admin-Console",
            },
        )

    @classmethod
    def from_settings(cls, settings: VehicleAdminSettings) -> "VehicleApiClient":
        return cls(settings.api_base_url, timeout=httpx.Timeout(settings.api_timeout, connect=5.0))

    def close(self) -> None:
        self._client.close()

    # ------------------------------------------------------------------ plumbing
    def _request(
        self,
        method: str,
        path: str,
        *,
        fallback: str,
        params: Optional[Dict[str, str]] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> Any:
        logger.debug("[API Call] %s %s%s params=%s data=%s", method, self.base_url, path, params, payload)
        response = self._client.request(method, path, params=params or None, json=payload)
        if response.is_error:
            raise ApiRequestError(self._error_message(response, fallback))
        data = response.json() if response.content else {}
        logger.debug("[API Success] %s %s -> %s", method, path, data)
        return data

    @staticmethod
    def _error_message(response: httpx.Response, fallback: str) -> str:
        try:
            body = response.json()
        except ValueError:
            return f"HTTP {response.status_code}: {response.reason_phrase}"
        if isinstance(body, dict):
            return str(body.get("error") or body.get("message") or fallback)
        return fallback

    def _guard(self, label: str, call: Callable[[], R], on_error: Callable[[str], R]) -> R:
        """Run ``call`` and normalise any failure through ``on_error``."""

        try:
            return call()
        except ApiRequestError as exc:
            message = str(exc)
        except (httpx.HTTPError, ValueError) as exc:
            message = str(exc) or GENERIC_ERROR
        except Exception:
            logger.exception("[API Error] %s failed unexpectedly", label)
            return on_error(GENERIC_ERROR)
        logger.error("[API Error] %s %s", label, message)
        return on_error(message)

    @staticmethod
    def _to_vehicles(items: List[Any]) -> List[Vehicle]:
        vehicles: List[Vehicle] = []
        for item in items:
            if not isinstance(item, dict):
                logger.warning("[API Warning] Skipping non-object vehicle entry: %r", item)
                continue
            try:
                vehicles.append(Vehicle.from_payload(item))
            except ValueError as exc:
                logger.warning("[API Warning] Skipping vehicle entry: %s", exc)
        return vehicles

    @classmethod
    def _extract_vehicle_list(cls, data: Any) -> List[Vehicle]:
        # list-all answers {"data": [...]}; a search hit answers {"data": {...}}
        if isinstance(data, list):
            return cls._to_vehicles(data)
        if isinstance(data, dict):
            inner = data.get("data")
            if isinstance(inner, list):
                return cls._to_vehicles(inner)
            if isinstance(inner, dict):
                return cls._to_vehicles([inner])
            if isinstance(data.get("vehicles"), list):
                return cls._to_vehicles(data["vehicles"])
        logger.warning("[API Warning] Unexpected response structure: %r", data)
        return []

    # ------------------------------------------------------------------ API
    def list_vehicles(
        self,
        serial_number: Optional[str] = None,
        dealer_code: Optional[str] = None,
    ) -> VehicleListResponse:
        params: Dict[str, str] = {}
        if serial_number:
            params["serial_number"] = serial_number
        if dealer_code:
            params["dealer_code"] = dealer_code

        def call() -> VehicleListResponse:
            data = self._request("GET", "/vehicles", fallback="Failed to fetch vehicles", params=params)
            return VehicleListResponse(vehicles=self._extract_vehicle_list(data))

        return self._guard("GET vehicles", call, lambda err: VehicleListResponse(vehicles=[], error=err))

    def get_vehicle(self, vehicle_id: int) -> VehicleResponse:
        def call() -> VehicleResponse:
            data = self._request("GET", f"/vehicles/{vehicle_id}", fallback="Failed to fetch vehicle")
            record = data
            if isinstance(data, dict):
                record = data.get("data") or data.get("vehicle") or data
            if not isinstance(record, dict):
                raise ApiRequestError("Failed to fetch vehicle")
            return VehicleResponse(vehicle=Vehicle.from_payload(record))

        return self._guard("GET vehicle by id", call, lambda err: VehicleResponse(error=err))

    def _mutate(
        self,
        label: str,
        method: str,
        path: str,
        *,
        fallback_error: str,
        fallback_message: str,
        payload: Optional[Dict[str, Any]] = None,
    ) -> ApiResponse:
        def call() -> ApiResponse:
            data = self._request(method, path, fallback=fallback_error, payload=payload)
            message = data.get("message") if isinstance(data, dict) else None
            return ApiResponse.ok(message or fallback_message)

        return self._guard(label, call, ApiResponse.failed)

    def create_vehicle(self, form: VehicleForm) -> ApiResponse:
        return self._mutate(
            "POST add-vehicle",
            "POST",
            "/add-vehicle",
            fallback_error="Failed to add vehicle",
            fallback_message="Vehicle added successfully",
            payload=form.model_dump(),
        )

    def update_vehicle(self, vehicle_id: int, form: VehicleForm) -> ApiResponse:
        return self._mutate(
            "PATCH update-vehicle",
            "PATCH",
            f"/update-vehicle/{vehicle_id}",
            fallback_error="Failed to update vehicle",
            fallback_message="Vehicle updated successfully",
            payload=form.model_dump(),
        )

    def delete_vehicle(self, vehicle_id: int) -> ApiResponse:
        return self._mutate(
            "DELETE vehicle",
            "DELETE",
            f"/delete-vehicle/{vehicle_id}",
            fallback_error="Failed to delete vehicle",
            fallback_message="Vehicle deleted successfully",
        )

    def set_sold(self, vehicle_id: int) -> ApiResponse:
        # the server expects only the status field here, never the full record
        return self._mutate(
            "PATCH mark as sold",
            "PATCH",
            f"/update-vehicle/{vehicle_id}",
            fallback_error="Failed to mark vehicle as sold",
            fallback_message="Vehicle marked as sold successfully",
            payload={"status": VehicleStatus.SOLD.value},
        )


__all__ = ["ApiRequestError", "DEFAULT_TIMEOUT", "VehicleApiClient"]

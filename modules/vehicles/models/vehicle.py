"""Vehicle records, the editable form schema and search value objects."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from .enums import SearchMode, VehicleStatus


FORM_FIELDS: tuple[str, ...] = (
    "dealer_code",
    "dealer_name",
    "dealer_address",
    "dealer_city",
    "dealer_state",
    "model_name",
    "model_id",
    "battery_power",
    "serial_number",
)

REQUIRED_MESSAGES: dict[str, str] = {
    "dealer_code": "Dealer code is required",
    "model_name": "Model name is required",
    "serial_number": "Serial number is required",
}


@dataclass(frozen=True)
class Vehicle:
    id: int
    dealer_code: str
    model_name: str
    serial_number: str
    dealer_name: str = ""
    dealer_address: str = ""
    dealer_city: str = ""
    dealer_state: str = ""
    model_id: str = ""
    battery_power: str = ""
    status: Optional[str] = None

    @property
    def is_sold(self) -> bool:
        return self.status == VehicleStatus.SOLD.value

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Vehicle":
        """Build a record from API JSON.

        ``id`` is coerced to ``int``; missing or null text fields become ``""``.
        ``status`` is kept verbatim so a later rollback can restore it exactly.
        """

        try:
            vehicle_id = int(payload["id"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"Vehicle payload has no usable id: {payload!r}") from exc
        values: dict[str, Any] = {"id": vehicle_id, "status": payload.get("status")}
        for name in FORM_FIELDS:
            raw = payload.get(name)
            values[name] = "" if raw is None else str(raw)
        return cls(**values)

    def to_form_data(self) -> dict[str, str]:
        return {name: getattr(self, name) or "" for name in FORM_FIELDS}


class VehicleForm(BaseModel):
    """Validated add/edit payload; required fields must be non-blank."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    dealer_code: str = Field(min_length=1)
    dealer_name: str = ""
    dealer_address: str = ""
    dealer_city: str = ""
    dealer_state: str = ""
    model_name: str = Field(min_length=1)
    model_id: str = ""
    battery_power: str = ""
    serial_number: str = Field(min_length=1)

    @classmethod
    def from_vehicle(cls, vehicle: Vehicle) -> "VehicleForm":
        return cls(**vehicle.to_form_data())

    @classmethod
    def blank_values(cls) -> dict[str, str]:
        return {name: "" for name in FORM_FIELDS}


@dataclass(frozen=True)
class SearchFilters:
    """The filter sent with a list request; at most one field is set."""

    serial_number: Optional[str] = None
    dealer_code: Optional[str] = None

    def __post_init__(self) -> None:
        if self.serial_number and self.dealer_code:
            raise ValueError("Only one search filter may be active at a time")

    @classmethod
    def none(cls) -> "SearchFilters":
        return cls()

    @classmethod
    def for_mode(cls, mode: SearchMode, query: str | None) -> "SearchFilters":
        value = (query or "").strip() or None
        if mode is SearchMode.SERIAL_NUMBER:
            return cls(serial_number=value)
        return cls(dealer_code=value)

    @property
    def is_empty(self) -> bool:
        return self.serial_number is None and self.dealer_code is None


@dataclass(frozen=True)
class SearchState:
    """Raw search inputs plus the exclusive mode that decides which one is sent."""

    mode: SearchMode = SearchMode.SERIAL_NUMBER
    serial_query: str = ""
    dealer_query: str = ""

    def query_for(self, mode: SearchMode) -> str:
        return self.serial_query if mode is SearchMode.SERIAL_NUMBER else self.dealer_query

    @property
    def active_query(self) -> str:
        return self.query_for(self.mode)

    @property
    def has_filters(self) -> bool:
        return bool(self.serial_query.strip() or self.dealer_query.strip())


@dataclass(frozen=True)
class PendingDelete:
    """Snapshot of the vehicle awaiting delete confirmation."""

    vehicle_id: int
    serial_number: str

    @classmethod
    def of(cls, vehicle: Vehicle) -> "PendingDelete":
        return cls(vehicle_id=vehicle.id, serial_number=vehicle.serial_number)


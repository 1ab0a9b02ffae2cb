from .enums import SearchMode, VehicleStatus
from .vehicle import (
    FORM_FIELDS,
    REQUIRED_MESSAGES,
    PendingDelete,
    SearchFilters,
    SearchState,
    Vehicle,
    VehicleForm,
)

__all__ = [
    "FORM_FIELDS",
    "REQUIRED_MESSAGES",
    "PendingDelete",
    "SearchFilters",
    "SearchMode",
    "SearchState",
    "Vehicle",
    "VehicleForm",
    "VehicleStatus",
]

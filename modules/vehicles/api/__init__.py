from .client import ApiRequestError, VehicleApiClient
from .responses import GENERIC_ERROR, ApiResponse, VehicleListResponse, VehicleResponse
from .validators import ValidationError, field_errors, validate_form

__all__ = [
    "ApiRequestError",
    "ApiResponse",
    "GENERIC_ERROR",
    "ValidationError",
    "VehicleApiClient",
    "VehicleListResponse",
    "VehicleResponse",
    "field_errors",
    "validate_form",
]

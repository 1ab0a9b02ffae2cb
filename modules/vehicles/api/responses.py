"""Uniform result envelopes returned by :class:`VehicleApiClient`."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from ..models.vehicle import Vehicle


GENERIC_ERROR = "An unexpected error occurred"


@dataclass(frozen=True)
class ApiResponse:
    success: bool
    message: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, message: str) -> "ApiResponse":
        return cls(success=True, message=message)

    @classmethod
    def failed(cls, error: str | None) -> "ApiResponse":
        return cls(success=False, error=error or GENERIC_ERROR)


@dataclass(frozen=True)
class VehicleListResponse:
    vehicles: List[Vehicle] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class VehicleResponse:
    vehicle: Optional[Vehicle] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None

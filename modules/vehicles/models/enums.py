"""Enumerations used throughout the vehicles module."""

from __future__ import annotations

from enum import Enum
from typing import Set


class _StrEnum(str, Enum):
    """Enum subclass that compares/serialises as its value."""

    def __str__(self) -> str:  # pragma: no cover - trivial
        return str(self.value)

    @classmethod
    def values(cls) -> Set[str]:
        return {member.value for member in cls}


class SearchMode(_StrEnum):
    SERIAL_NUMBER = "serial_number"
    DEALER_CODE = "dealer_code"

    @property
    def label(self) -> str:
        return "Serial Number" if self is SearchMode.SERIAL_NUMBER else "Dealer Code"

    def other(self) -> "SearchMode":
        return SearchMode.DEALER_CODE if self is SearchMode.SERIAL_NUMBER else SearchMode.SERIAL_NUMBER


class VehicleStatus(_StrEnum):
    SOLD = "sold"
    AVAILABLE = "available"

"""Validation helpers for vehicle add/edit forms."""

from __future__ import annotations

from typing import Any, Dict, Mapping

from pydantic import ValidationError as PydanticValidationError

from ..models.vehicle import FORM_FIELDS, REQUIRED_MESSAGES, VehicleForm


class ValidationError(RuntimeError):
    """Raised when validation fails.

    ``field_errors`` maps a form field name to the message shown next to it.
    """

    def __init__(self, field_errors: Dict[str, str]) -> None:
        super().__init__("; ".join(f"{name}: {msg}" for name, msg in field_errors.items()))
        self.field_errors = field_errors


def _message_for(error: Mapping[str, Any]) -> tuple[str, str]:
    loc = error.get("loc") or ("__root__",)
    name = str(loc[0])
    if name in REQUIRED_MESSAGES and error.get("type") in {"missing", "string_too_short"}:
        return name, REQUIRED_MESSAGES[name]
    return name, str(error.get("msg", "Invalid value"))


def validate_form(data: Mapping[str, Any]) -> VehicleForm:
    """Return a validated :class:`VehicleForm` or raise :class:`ValidationError`."""

    cleaned = {name: ("" if data.get(name) is None else data.get(name)) for name in FORM_FIELDS}
    try:
        return VehicleForm(**cleaned)
    except PydanticValidationError as exc:
        field_errors: Dict[str, str] = {}
        for error in exc.errors():
            name, message = _message_for(error)
            field_errors.setdefault(name, message)
        raise ValidationError(field_errors) from exc


def field_errors(data: Mapping[str, Any]) -> Dict[str, str]:
    """Non-raising variant used for live (on change) validation."""

    try:
        validate_form(data)
    except ValidationError as exc:
        return exc.field_errors
    return {}

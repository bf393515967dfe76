from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from menu_api.core.errors import MenuValidationError
from menu_api.menu.models import FieldError, MenuItemPayload


def _to_field_errors(exc: ValidationError, payload: dict[str, Any]) -> list[FieldError]:
    errors: list[FieldError] = []
    for error in exc.errors():
        path = str(error["loc"][0]) if error["loc"] else ""
        if path in payload:
            errors.append(FieldError(value=payload[path], msg=error["msg"], path=path))
        else:
            errors.append(FieldError(msg=error["msg"], path=path))
    return errors


def _as_mapping(payload: Any) -> dict[str, Any]:
    return payload if isinstance(payload, dict) else {}


def validate_menu_item(payload: Any) -> list[FieldError]:
    """Return every field violation in ``payload``; an empty list means valid."""
    data = _as_mapping(payload)
    try:
        MenuItemPayload.model_validate(data)
    except ValidationError as exc:
        return _to_field_errors(exc, data)
    return []


def parse_menu_item(payload: Any) -> MenuItemPayload:
    data = _as_mapping(payload)
    try:
        return MenuItemPayload.model_validate(data)
    except ValidationError as exc:
        raise MenuValidationError(_to_field_errors(exc, data)) from exc

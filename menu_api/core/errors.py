from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from menu_api.menu.models import FieldError


class MenuItemNotFoundError(LookupError):
    def __init__(self, item_id: int | None) -> None:
        super().__init__(f"Menu item {item_id} not found")
        self.item_id = item_id


class MenuValidationError(ValueError):
    def __init__(self, errors: list[FieldError]) -> None:
        super().__init__("; ".join(error.msg for error in errors))
        self.errors = errors

from __future__ import annotations

import math
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError


class Category(str, Enum):
    appetizer = "appetizer"
    entree = "entree"
    dessert = "dessert"
    beverage = "beverage"


CATEGORY_VALUES = tuple(category.value for category in Category)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _required_text(value: Any, *, label: str, min_length: int) -> str:
    if not isinstance(value, str) or not value.strip():
        raise PydanticCustomError(f"{label.lower()}_required", f"{label} is required")
    cleaned = value.strip()
    if len(cleaned) < min_length:
        raise PydanticCustomError(
            f"{label.lower()}_too_short",
            f"{label} must be at least {min_length} characters",
        )
    return cleaned


def _parse_price(value: Any) -> float:
    # bool is an int subclass; JSON true/false is never a price
    if isinstance(value, bool):
        raise ValueError("boolean price")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        return float(value.strip())
    raise ValueError("unsupported price type")


class MenuItemPayload(BaseModel):
    """
    Write body for create and update.

    Every field defaults to ``None`` and runs through its validator anyway,
    so a missing key reports the same message as an empty one and every
    failing field is collected in a single ``ValidationError``.
    """

    model_config = ConfigDict(extra="ignore", validate_default=True)

    name: str = None  # type: ignore[assignment]
    description: str = None  # type: ignore[assignment]
    price: float = None  # type: ignore[assignment]
    category: Category = None  # type: ignore[assignment]
    ingredients: list[str] = None  # type: ignore[assignment]
    available: bool = True

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, value: Any) -> str:
        return _required_text(value, label="Name", min_length=3)

    @field_validator("description", mode="before")
    @classmethod
    def validate_description(cls, value: Any) -> str:
        return _required_text(value, label="Description", min_length=10)

    @field_validator("price", mode="before")
    @classmethod
    def validate_price(cls, value: Any) -> float:
        if _is_blank(value):
            raise PydanticCustomError("price_required", "Price is required")
        try:
            price = _parse_price(value)
        except (ValueError, OverflowError):
            price = math.nan
        if not math.isfinite(price) or price <= 0:
            raise PydanticCustomError("price_not_positive", "Price must be greater than 0")
        return price

    @field_validator("category", mode="before")
    @classmethod
    def validate_category(cls, value: Any) -> Category:
        if _is_blank(value):
            raise PydanticCustomError("category_required", "Category is required")
        if value not in CATEGORY_VALUES:
            raise PydanticCustomError(
                "category_invalid",
                "Category must be appetizer, entree, dessert, or beverage",
            )
        return Category(value)

    @field_validator("ingredients", mode="before")
    @classmethod
    def validate_ingredients(cls, value: Any) -> list[str]:
        if (
            not isinstance(value, list)
            or not value
            or not all(isinstance(item, str) for item in value)
        ):
            raise PydanticCustomError(
                "ingredients_invalid",
                "Ingredients must be an array with at least one item",
            )
        return list(value)

    @field_validator("available", mode="before")
    @classmethod
    def validate_available(cls, value: Any) -> bool:
        if value is None:
            return True
        if not isinstance(value, bool):
            raise PydanticCustomError("available_invalid", "Available must be true or false")
        return value


class MenuItem(BaseModel):
    id: int
    name: str
    description: str
    price: float
    category: Category
    ingredients: list[str] = Field(min_length=1)
    available: bool = True

    @classmethod
    def from_payload(cls, item_id: int, payload: MenuItemPayload) -> MenuItem:
        return cls(id=item_id, **payload.model_dump())


class FieldError(BaseModel):
    type: str = "field"
    value: Any = None
    msg: str
    path: str
    location: str = "body"

    def to_body(self) -> dict[str, Any]:
        # ``value`` is left out only when the client never sent the key
        if "value" in self.model_fields_set:
            return self.model_dump()
        return self.model_dump(exclude={"value"})

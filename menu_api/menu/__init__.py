from menu_api.menu.models import Category, FieldError, MenuItem, MenuItemPayload
from menu_api.menu.seed import SEED_MENU, seed_store
from menu_api.menu.store import MenuStore
from menu_api.menu.validation import parse_menu_item, validate_menu_item

__all__ = [
    "Category",
    "FieldError",
    "MenuItem",
    "MenuItemPayload",
    "MenuStore",
    "SEED_MENU",
    "parse_menu_item",
    "seed_store",
    "validate_menu_item",
]

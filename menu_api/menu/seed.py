from __future__ import annotations

from typing import Any

import structlog

from menu_api.menu.store import MenuStore
from menu_api.menu.validation import parse_menu_item

logger = structlog.get_logger(__name__)

SEED_MENU: list[dict[str, Any]] = [
    {
        "name": "Classic Burger",
        "description": "Beef patty with lettuce, tomato, and cheese on a sesame seed bun",
        "price": 12.99,
        "category": "entree",
        "ingredients": ["beef", "lettuce", "tomato", "cheese", "bun"],
        "available": True,
    },
    {
        "name": "Chicken Caesar Salad",
        "description": "Grilled chicken breast over romaine lettuce with parmesan and croutons",
        "price": 11.50,
        "category": "entree",
        "ingredients": ["chicken", "romaine lettuce", "parmesan cheese", "croutons", "caesar dressing"],
        "available": True,
    },
    {
        "name": "Mozzarella Sticks",
        "description": "Crispy breaded mozzarella served with marinara sauce",
        "price": 8.99,
        "category": "appetizer",
        "ingredients": ["mozzarella cheese", "breadcrumbs", "marinara sauce"],
        "available": True,
    },
    {
        "name": "Chocolate Lava Cake",
        "description": "Warm chocolate cake with molten center, served with vanilla ice cream",
        "price": 7.99,
        "category": "dessert",
        "ingredients": ["chocolate", "flour", "eggs", "butter", "vanilla ice cream"],
        "available": True,
    },
    {
        "name": "Fresh Lemonade",
        "description": "House-made lemonade with fresh lemons and mint",
        "price": 3.99,
        "category": "beverage",
        "ingredients": ["lemons", "sugar", "water", "mint"],
        "available": True,
    },
    {
        "name": "Fish and Chips",
        "description": "Beer-battered cod with seasoned fries and coleslaw",
        "price": 14.99,
        "category": "entree",
        "ingredients": ["cod", "beer batter", "potatoes", "coleslaw", "tartar sauce"],
        "available": False,
    },
]


def seed_store(store: MenuStore, items: list[dict[str, Any]] | None = None) -> int:
    """Load the literal menu through the regular create path."""
    seeded = 0
    for raw in SEED_MENU if items is None else items:
        store.create(parse_menu_item(raw))
        seeded += 1
    logger.info("menu_seeded", items=seeded)
    return seeded

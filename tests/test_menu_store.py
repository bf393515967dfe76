from __future__ import annotations

import threading

import pytest

from menu_api.core.errors import MenuItemNotFoundError
from menu_api.menu.models import Category, MenuItemPayload
from menu_api.menu.seed import SEED_MENU, seed_store
from menu_api.menu.store import MenuStore


def _payload(**overrides) -> MenuItemPayload:
    data = {
        "name": "Garlic Bread",
        "description": "Toasted baguette with garlic butter",
        "price": 4.5,
        "category": "appetizer",
        "ingredients": ["baguette", "garlic", "butter"],
    }
    data.update(overrides)
    return MenuItemPayload.model_validate(data)


def test_new_store_is_empty() -> None:
    store = MenuStore()
    assert store.list() == []
    assert len(store) == 0


def test_create_assigns_increasing_ids_from_one() -> None:
    store = MenuStore()
    first = store.create(_payload())
    second = store.create(_payload(name="Onion Rings"))

    assert first.id == 1
    assert second.id == 2
    assert [item.id for item in store.list()] == [1, 2]


def test_ids_are_not_reused_after_delete() -> None:
    store = MenuStore()
    store.create(_payload())
    second = store.create(_payload())
    store.delete(second.id)

    third = store.create(_payload())
    assert third.id == 3


def test_get_returns_stored_item() -> None:
    store = MenuStore()
    created = store.create(_payload(category="dessert"))

    fetched = store.get(created.id)
    assert fetched == created
    assert fetched.category is Category.dessert


def test_get_missing_item_raises() -> None:
    store = MenuStore()
    with pytest.raises(MenuItemNotFoundError) as exc_info:
        store.get(42)
    assert exc_info.value.item_id == 42


def test_update_replaces_every_field_but_id() -> None:
    store = MenuStore()
    created = store.create(_payload())

    updated = store.update(
        created.id,
        _payload(name="Cheesy Bread", price=5.25, available=False),
    )

    assert updated.id == created.id
    assert updated.name == "Cheesy Bread"
    assert updated.price == 5.25
    assert updated.available is False
    assert store.get(created.id) == updated


def test_update_missing_item_does_not_mutate() -> None:
    store = MenuStore()
    store.create(_payload())
    before = store.list()

    with pytest.raises(MenuItemNotFoundError):
        store.update(99, _payload(name="Ghost"))

    assert store.list() == before


def test_delete_removes_and_returns_item() -> None:
    store = MenuStore()
    created = store.create(_payload())

    removed = store.delete(created.id)

    assert removed == created
    assert store.list() == []


def test_delete_missing_item_leaves_collection_alone() -> None:
    store = MenuStore()
    store.create(_payload())

    with pytest.raises(MenuItemNotFoundError):
        store.delete(5)
    assert len(store) == 1


def test_returned_items_are_copies() -> None:
    store = MenuStore()
    created = store.create(_payload())

    listed = store.list()
    listed[0].ingredients.append("parsley")
    created.name = "Changed"

    assert store.get(created.id).ingredients == ["baguette", "garlic", "butter"]
    assert store.get(created.id).name == "Garlic Bread"


def test_concurrent_creates_get_unique_ids() -> None:
    store = MenuStore()

    def worker() -> None:
        for _ in range(25):
            store.create(_payload())

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    ids = [item.id for item in store.list()]
    assert len(ids) == 200
    assert sorted(set(ids)) == list(range(1, 201))


def test_seed_store_loads_literal_menu() -> None:
    store = MenuStore()
    assert seed_store(store) == len(SEED_MENU) == 6

    items = store.list()
    assert [item.id for item in items] == [1, 2, 3, 4, 5, 6]
    assert {item.category for item in items} == set(Category)
    assert [item.name for item in items if not item.available] == ["Fish and Chips"]


def test_deleted_item_is_a_copy() -> None:
    store = MenuStore()
    created = store.create(_payload())
    stored = store._items[0]

    removed = store.delete(created.id)

    assert removed == stored
    assert removed is not stored
    assert removed.ingredients is not stored.ingredients

import re
from typing import Any

import structlog
from fastapi import APIRouter, Body, Depends, Request, status

from menu_api.core.config import settings
from menu_api.core.errors import MenuItemNotFoundError
from menu_api.core.rate_limit import limiter
from menu_api.menu.models import MenuItem
from menu_api.menu.store import MenuStore
from menu_api.menu.validation import parse_menu_item

logger = structlog.get_logger(__name__)

ITEM_ID_RE = re.compile(r"-?[0-9]+")

router = APIRouter(prefix="/api/menu", tags=["menu"])


def get_store(request: Request) -> MenuStore:
    return request.app.state.menu_store


def _parse_item_id(raw: str) -> int:
    # int() alone would also take "1_0" and non-ASCII digits
    if not ITEM_ID_RE.fullmatch(raw):
        raise MenuItemNotFoundError(None)
    return int(raw)


@router.get("", response_model=list[MenuItem])
async def list_menu_items(store: MenuStore = Depends(get_store)) -> list[MenuItem]:
    return store.list()


@router.get("/{item_id}", response_model=MenuItem)
async def get_menu_item(item_id: str, store: MenuStore = Depends(get_store)) -> MenuItem:
    return store.get(_parse_item_id(item_id))


@router.post("", response_model=MenuItem, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.menu_write_rate_limit)
async def create_menu_item(
    request: Request,
    payload: Any = Body(default=None),
    store: MenuStore = Depends(get_store),
) -> MenuItem:
    item = store.create(parse_menu_item(payload))
    logger.info("menu_item_created", item_id=item.id, name=item.name)
    return item


@router.put("/{item_id}", response_model=MenuItem)
@limiter.limit(settings.menu_write_rate_limit)
async def update_menu_item(
    request: Request,
    item_id: str,
    payload: Any = Body(default=None),
    store: MenuStore = Depends(get_store),
) -> MenuItem:
    """
    Replace every field of an existing item.

    Existence is checked before the body is validated, so an unknown id is
    a 404 even when the payload is also invalid.
    """
    resolved_id = _parse_item_id(item_id)
    store.get(resolved_id)
    item = store.update(resolved_id, parse_menu_item(payload))
    logger.info("menu_item_updated", item_id=item.id)
    return item


@router.delete("/{item_id}")
@limiter.limit(settings.menu_write_rate_limit)
async def delete_menu_item(
    request: Request,
    item_id: str,
    store: MenuStore = Depends(get_store),
) -> dict[str, str]:
    removed = store.delete(_parse_item_id(item_id))
    logger.info("menu_item_deleted", item_id=removed.id)
    return {"message": "Menu item deleted successfully"}

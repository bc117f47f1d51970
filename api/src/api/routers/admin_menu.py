"""Admin menu/service item management."""
from __future__ import annotations
from datetime import UTC, datetime
from typing import Any
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sitekit.models import MenuItem
from api.dependencies import get_db, require_admin
from api.routers.public import menu_item_payload

router = APIRouter()


class MenuItemCreateRequest(BaseModel):
    title: str = Field(min_length=1)
    description: str | None = None
    price: float | None = Field(default=None, ge=0)
    image_url: str | None = None
    category: str | None = None
    is_active: bool = True
    sort_order: int = 0
    metadata: dict[str, Any] | None = None


class MenuItemUpdateRequest(BaseModel):
    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    price: float | None = Field(default=None, ge=0)
    image_url: str | None = None
    category: str | None = None
    is_active: bool | None = None
    sort_order: int | None = None
    metadata: dict[str, Any] | None = None


def _admin_payload(item: MenuItem) -> dict:
    return {**menu_item_payload(item), "is_active": item.is_active}


def _apply(item: MenuItem, values: dict[str, Any]) -> None:
    for key, value in values.items():
        setattr(item, "metadata_" if key == "metadata" else key, value)


@router.get("")
async def list_menu_items(
    db: AsyncSession = Depends(get_db),
    admin: str = Depends(require_admin),
):
    _ = admin
    result = await db.execute(select(MenuItem).order_by(MenuItem.sort_order.asc(), MenuItem.id.asc()))
    return {"items": [_admin_payload(item) for item in result.scalars().all()]}


@router.post("", status_code=201)
async def create_menu_item(
    req: MenuItemCreateRequest,
    db: AsyncSession = Depends(get_db),
    admin: str = Depends(require_admin),
):
    _ = admin
    item = MenuItem()
    _apply(item, req.model_dump())
    db.add(item)
    await db.flush()
    await db.refresh(item)
    return _admin_payload(item)


@router.put("/{item_id}")
async def update_menu_item(
    item_id: int,
    req: MenuItemUpdateRequest,
    db: AsyncSession = Depends(get_db),
    admin: str = Depends(require_admin),
):
    _ = admin
    item = await db.get(MenuItem, item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Menu item not found")
    _apply(item, req.model_dump(exclude_unset=True))
    item.updated_at = datetime.now(UTC)
    await db.flush()
    await db.refresh(item)
    return _admin_payload(item)


@router.delete("/{item_id}")
async def delete_menu_item(
    item_id: int,
    db: AsyncSession = Depends(get_db),
    admin: str = Depends(require_admin),
):
    _ = admin
    item = await db.get(MenuItem, item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Menu item not found")
    await db.delete(item)
    return {"status": "deleted", "id": item_id}

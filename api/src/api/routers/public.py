"""Public site API (branding, services, contact form)."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sitekit.models import MenuItem

from api.dependencies import get_db
from api.services.email_service import send_lead_notification
from api.services.leads import create_lead, validate_contact
from api.services.site_config import SiteConfigRepository, public_site_config

logger = logging.getLogger(__name__)
router = APIRouter()


def menu_item_payload(item: MenuItem) -> dict:
    return {
        "id": item.id,
        "title": item.title,
        "description": item.description,
        "price": item.price,
        "image_url": item.image_url,
        "category": item.category,
        "sort_order": item.sort_order,
        "metadata": item.metadata_ or {},
    }


@router.get("/site/config")
async def get_public_site_config(db: AsyncSession = Depends(get_db)):
    return public_site_config(await SiteConfigRepository(db).load())


@router.get("/menu")
async def get_menu(db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        select(MenuItem)
        .where(MenuItem.is_active.is_(True))
        .order_by(MenuItem.sort_order.asc(), MenuItem.id.asc())
    )
    return {"items": [menu_item_payload(item) for item in result.scalars().all()]}


@router.post("/contact")
async def submit_contact(request: Request, db: AsyncSession = Depends(get_db)):
    form = await request.form()
    cleaned, field_errors = validate_contact(dict(form))
    if field_errors:
        return JSONResponse(status_code=400, content={"fieldErrors": field_errors})

    lead = await create_lead(db, cleaned)
    site = await SiteConfigRepository(db).load()
    await send_lead_notification(db, lead, site)
    return {"success": True, "id": lead.id}

"""Admin site configuration and provisioning."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_db, require_admin
from api.middleware.setup_guard import mark_setup_complete
from api.services.site_config import (
    SiteConfigRepository,
    admin_config_payload,
    provisioning_status,
)

logger = logging.getLogger(__name__)
router = APIRouter()


class SiteConfigUpdateRequest(BaseModel):
    business_name: str | None = None
    tagline: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    primary_color: str | None = None
    seo_description: str | None = None


@router.get("/config")
async def get_site_config(
    db: AsyncSession = Depends(get_db),
    admin: str = Depends(require_admin),
):
    _ = admin
    return admin_config_payload(await SiteConfigRepository(db).load())


@router.put("/config")
async def update_site_config(
    req: SiteConfigUpdateRequest,
    db: AsyncSession = Depends(get_db),
    admin: str = Depends(require_admin),
):
    updates = req.model_dump(exclude_unset=True)
    row = await SiteConfigRepository(db).update_branding(updates)
    logger.info("Site config updated by %s: %s", admin, sorted(updates))
    return admin_config_payload(row)


@router.get("/provision")
async def get_provision_status(
    db: AsyncSession = Depends(get_db),
    admin: str = Depends(require_admin),
):
    _ = admin
    return provisioning_status(await SiteConfigRepository(db).load())


@router.post("/provision/confirm")
async def confirm_provision(
    request: Request,
    db: AsyncSession = Depends(get_db),
    admin: str = Depends(require_admin),
):
    row = await SiteConfigRepository(db).confirm_provisioning()
    if row is None:
        raise HTTPException(status_code=404, detail="No site configuration to provision")
    mark_setup_complete(request.app)
    logger.info("Provisioning confirmed by %s", admin)
    return provisioning_status(row)

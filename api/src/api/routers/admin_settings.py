"""Admin integration settings (email)."""
from __future__ import annotations
import logging
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession
from api.dependencies import get_db, require_admin
from api.services.email_service import load_email_config, save_email_config

logger = logging.getLogger(__name__)
router = APIRouter()


class EmailConfigUpdateRequest(BaseModel):
    enabled: bool | None = None
    api_key: str | None = None
    from_email: str | None = None
    notification_email: str | None = None


@router.get("/email")
async def get_email_config(
    db: AsyncSession = Depends(get_db),
    admin: str = Depends(require_admin),
):
    _ = admin
    return await load_email_config(db)


@router.put("/email")
async def update_email_config(
    req: EmailConfigUpdateRequest,
    db: AsyncSession = Depends(get_db),
    admin: str = Depends(require_admin),
):
    updates = req.model_dump(exclude_none=True)
    try:
        updated = await save_email_config(db, updates)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    logger.info("Email settings updated by %s: %s", admin, sorted(k for k in updates if k != "api_key"))
    return updated

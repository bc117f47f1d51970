"""Admin lead management."""
from __future__ import annotations
from typing import Literal
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession
from api.dependencies import get_db, require_admin
from api.services.leads import list_leads, serialize_lead, set_lead_status

router = APIRouter()


class LeadStatusRequest(BaseModel):
    status: Literal["new", "contacted", "converted", "archived"]


@router.get("")
async def get_leads(
    db: AsyncSession = Depends(get_db),
    admin: str = Depends(require_admin),
):
    _ = admin
    return {"leads": [serialize_lead(lead) for lead in await list_leads(db)]}


@router.post("/{lead_id}/status")
async def update_lead_status(
    lead_id: int,
    req: LeadStatusRequest,
    db: AsyncSession = Depends(get_db),
    admin: str = Depends(require_admin),
):
    _ = admin
    lead = await set_lead_status(db, lead_id, req.status)
    if lead is None:
        raise HTTPException(status_code=404, detail="Lead not found")
    return serialize_lead(lead)

"""Admin dashboard."""
from __future__ import annotations
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from api.dependencies import get_db, require_admin
from api.services.leads import RECENT_LEADS_LIMIT, lead_stats, list_leads, serialize_lead
from api.services.site_config import SiteConfigRepository, provisioning_status

router = APIRouter()


@router.get("/")
async def get_dashboard(
    db: AsyncSession = Depends(get_db),
    admin: str = Depends(require_admin),
):
    _ = admin
    stats = await lead_stats(db)
    recent = await list_leads(db, limit=RECENT_LEADS_LIMIT)
    site = await SiteConfigRepository(db).load()
    return {
        "stats": stats,
        "recent_leads": [serialize_lead(lead) for lead in recent],
        "site": provisioning_status(site),
    }

"""Liveness and readiness probes."""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sitekit.database import get_session
from sitekit.models import SiteConfig

from api.middleware.setup_guard import mark_setup_complete

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/health")
async def health_check():
    return {"status": "ok", "service": "sitekit-api"}


@router.get("/health/ready")
async def readiness_check(request: Request):
    """Ready once the database answers; also reports where the tenant is in setup."""
    try:
        async with get_session() as session:
            live = await session.scalar(
                select(SiteConfig.setup_complete).where(SiteConfig.id == 1)
            )
    except (SQLAlchemyError, OSError) as exc:
        logger.warning("Readiness check failed: %s", exc)
        return JSONResponse(status_code=503, content={"status": "not_ready", "error": str(exc)})
    if live is None:
        site = "no_config"
    else:
        site = "live" if live else "pending"
    if live:
        mark_setup_complete(request.app)
    return {"status": "ready", "site": site}

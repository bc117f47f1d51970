"""FastAPI application factory."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sitekit.config import get_settings
from sitekit.database import close_engine

from api.middleware.rate_limit import RateLimitMiddleware
from api.middleware.setup_guard import SetupGuardMiddleware
from api.routers import (
    admin_dashboard,
    admin_leads,
    admin_menu,
    admin_settings,
    admin_site,
    ai,
    email,
    health,
    public,
    setup_wizard,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    try:
        yield
    finally:
        redis_client = getattr(app.state, "_rate_limit_redis", None)
        if redis_client is not None:
            await redis_client.aclose()
        await close_engine()


def _warn_insecure_defaults() -> None:
    settings = get_settings()
    if settings.secret_key == "change-me-in-production":
        logger.warning("SECRET_KEY uses insecure default value")
    if not settings.encryption_key:
        logger.warning("ENCRYPTION_KEY is empty; stored email API keys cannot be saved")
    if settings.admin_auth_bypass:
        logger.warning("ADMIN_AUTH_BYPASS is on; admin routes are not authenticated")


def create_app() -> FastAPI:
    app = FastAPI(title="Sitekit API", version="0.1.0", lifespan=lifespan)
    settings = get_settings()
    _warn_insecure_defaults()
    allowed_origins = [settings.site_url, settings.admin_url]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RateLimitMiddleware)
    app.add_middleware(SetupGuardMiddleware)
    app.include_router(admin_dashboard.router, prefix="/admin", tags=["admin"])
    app.include_router(admin_leads.router, prefix="/admin/leads", tags=["admin"])
    app.include_router(admin_site.router, prefix="/admin", tags=["admin"])
    app.include_router(admin_menu.router, prefix="/admin/menu", tags=["admin"])
    app.include_router(admin_settings.router, prefix="/admin/settings", tags=["admin"])
    app.include_router(health.router, tags=["health"])
    app.include_router(setup_wizard.router, prefix="/setup", tags=["setup"])
    app.include_router(ai.router, prefix="/api", tags=["ai"])
    app.include_router(email.router, prefix="/api", tags=["email"])
    app.include_router(public.router, prefix="/v1", tags=["public"])
    return app


app = create_app()

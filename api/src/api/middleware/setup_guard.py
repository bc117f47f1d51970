"""Setup guard middleware.

The public site API answers 503 until an operator has confirmed provisioning
(``site_config.setup_complete``). Admin, wizard and AI routes stay reachable.
"""

from __future__ import annotations

import logging
import time

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from sitekit.config import get_settings

logger = logging.getLogger(__name__)
GUARDED_PREFIX = "/v1/"


class SetupGuardMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        settings = get_settings()
        if settings.skip_setup_guard:
            return await call_next(request)
        if not request.url.path.startswith(GUARDED_PREFIX):
            return await call_next(request)

        now = time.monotonic()
        setup_complete = getattr(request.app.state, "_setup_complete", None)
        checked_at = getattr(request.app.state, "_setup_checked_at", 0.0)

        should_refresh = setup_complete is None or (
            setup_complete is False and now - checked_at >= settings.setup_guard_recheck_seconds
        )
        if should_refresh:
            setup_complete = await _check_setup()
            request.app.state._setup_complete = setup_complete
            request.app.state._setup_checked_at = now

        if not request.app.state._setup_complete:
            return JSONResponse(
                status_code=503,
                content={"detail": "Site not live yet", "redirect": "/setup"},
            )
        return await call_next(request)


def mark_setup_complete(app) -> None:
    """Let the guard open immediately after provisioning is confirmed."""
    app.state._setup_complete = True
    app.state._setup_checked_at = time.monotonic()


async def _check_setup() -> bool:
    try:
        from sitekit.database import get_session
        from sitekit.models import SiteConfig

        async with get_session() as session:
            config = await session.get(SiteConfig, 1)
            return config is not None and config.setup_complete
    except Exception:
        logger.exception("Failed to resolve setup state")
        return False

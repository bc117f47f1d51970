"""Rate limiting middleware for public write endpoints (contact, AI, email, setup)."""

from __future__ import annotations

import logging
import time
from ipaddress import ip_address, ip_network

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from sitekit.config import get_settings

logger = logging.getLogger(__name__)

_TRUSTED_PROXY_NETWORKS = (
    ip_network("127.0.0.0/8"),
    ip_network("10.0.0.0/8"),
    ip_network("172.16.0.0/12"),
    ip_network("192.168.0.0/16"),
    ip_network("::1/128"),
    ip_network("fc00::/7"),
)

# Per-path hourly limits, checked before the general per-IP limit.
_PATH_RATE_LIMITS: dict[str, int] = {
    "/v1/contact": 10,
    "/api/ai-generate": 20,
    "/api/ai-polish": 30,
    "/api/send-email": 10,
    "/setup": 20,
}

_TOO_MANY = '{"error":"Rate limit exceeded"}'


def _is_valid_ip(value: str) -> bool:
    try:
        ip_address(value)
    except ValueError:
        return False
    return True


def _is_trusted_proxy_host(host: str) -> bool:
    if not host:
        return False
    if host == "testclient":
        return True
    try:
        addr = ip_address(host)
    except ValueError:
        return False
    return any(addr in net for net in _TRUSTED_PROXY_NETWORKS)


def _extract_forwarded_client_ip(x_forwarded_for: str) -> str | None:
    # Right-to-left: left-most entries are client-controlled.
    candidates = [part.strip() for part in x_forwarded_for.split(",") if part.strip()]
    for candidate in reversed(candidates):
        if not _is_valid_ip(candidate):
            continue
        if not _is_trusted_proxy_host(candidate):
            return candidate
    for candidate in reversed(candidates):
        if _is_valid_ip(candidate):
            return candidate
    return None


def _resolve_client_ip(request: Request) -> str:
    remote_host = request.client.host if request.client else "unknown"
    if _is_trusted_proxy_host(remote_host):
        forwarded = request.headers.get("x-forwarded-for", "")
        forwarded_ip = _extract_forwarded_client_ip(forwarded)
        if forwarded_ip:
            return forwarded_ip
    return remote_host


def _too_many() -> Response:
    return Response(content=_TOO_MANY, status_code=429, media_type="application/json")


class RateLimitMiddleware(BaseHTTPMiddleware):
    async def _get_redis_client(self, request: Request):
        redis_client = getattr(request.app.state, "_rate_limit_redis", None)
        if redis_client is None:
            import redis.asyncio as aioredis

            settings = get_settings()
            redis_client = aioredis.from_url(settings.redis_url)
            request.app.state._rate_limit_redis = redis_client
        return redis_client

    async def _over_limit(self, request: Request, key: str, limit: int) -> bool:
        r = await self._get_redis_client(request)
        count = await r.incr(key)
        if count == 1:
            await r.expire(key, 3600)
        return count > limit

    async def dispatch(self, request: Request, call_next):
        path = request.url.path.rstrip("/") or "/"
        if request.method != "POST" or path not in _PATH_RATE_LIMITS:
            return await call_next(request)
        settings = get_settings()
        if not settings.rate_limit_enabled:
            return await call_next(request)

        client_ip = _resolve_client_ip(request)
        hour = int(time.time() // 3600)
        try:
            if await self._over_limit(
                request, f"ratelimit:path:{path}:{client_ip}:{hour}", _PATH_RATE_LIMITS[path]
            ):
                return _too_many()
            if settings.rate_limit_per_hour > 0 and await self._over_limit(
                request, f"ratelimit:{client_ip}:{hour}", settings.rate_limit_per_hour
            ):
                return _too_many()
        except Exception as e:
            logger.warning("Rate limit check failed: %s", e)
        return await call_next(request)

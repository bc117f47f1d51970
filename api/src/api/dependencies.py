"""FastAPI dependency injection."""

from __future__ import annotations

from collections.abc import AsyncGenerator

from fastapi import Depends, HTTPException, Request, status
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession
from sitekit.config import get_settings
from sitekit.database import get_session_factory
from sitekit.services.copy_assist import CopyAssistClient
from sitekit.services.llm_client import LLMClient, LLMConfig

from api.middleware.auth import ADMIN_TOKEN_TYPE

ADMIN_AUTH_COOKIE_NAME = "sitekit_admin_token"
BYPASS_ADMIN_SUBJECT = "local-admin"


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    factory = get_session_factory()
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_llm_client() -> AsyncGenerator[LLMClient, None]:
    settings = get_settings()
    client = LLMClient(LLMConfig.from_settings(settings), timeout=settings.ai_timeout_seconds)
    try:
        yield client
    finally:
        await client.close()


def get_copy_assist(llm: LLMClient = Depends(get_llm_client)) -> CopyAssistClient:
    return CopyAssistClient(llm)


def _extract_bearer_token(request: Request) -> str | None:
    auth = request.headers.get("Authorization", "")
    if auth.startswith("Bearer "):
        token = auth[7:].strip()
        return token or None
    return None


def _extract_cookie_token(request: Request, cookie_name: str) -> str | None:
    cookie_token = request.cookies.get(cookie_name, "").strip()
    return cookie_token or None


def _decode_token(request: Request, *, cookie_name: str) -> dict:
    """Decode JWT from Authorization header or designated auth cookie."""
    settings = get_settings()
    raw_token = _extract_bearer_token(request) or _extract_cookie_token(request, cookie_name)
    if not raw_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing token")
    try:
        payload = jwt.decode(raw_token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    return payload


def require_admin(request: Request) -> str:
    """Return the admin subject for the request, or reject it with 401."""
    if get_settings().admin_auth_bypass:
        return BYPASS_ADMIN_SUBJECT
    payload = _decode_token(request, cookie_name=ADMIN_AUTH_COOKIE_NAME)
    if payload.get("type") != ADMIN_TOKEN_TYPE:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token type")
    subject = str(payload.get("sub") or "").strip()
    if not subject:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    return subject

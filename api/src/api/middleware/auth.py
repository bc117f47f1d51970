"""Admin JWT issuing."""
from __future__ import annotations
from datetime import datetime, timedelta, timezone
from jose import jwt
from sitekit.config import get_settings

ADMIN_TOKEN_TYPE = "admin"


def create_access_token(
    subject: str,
    expires_delta: timedelta | None = None,
    token_type: str = ADMIN_TOKEN_TYPE,
) -> str:
    settings = get_settings()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    payload = {
        "sub": subject,
        "exp": expire,
        "type": token_type,
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)

"""Resend configuration + transactional email sending."""

from __future__ import annotations

import html
import logging
from datetime import UTC, datetime
from typing import Any

import httpx
from sqlalchemy.ext.asyncio import AsyncSession
from sitekit.config import get_settings
from sitekit.models import Lead, SiteConfig, SiteSetting
from sitekit.services.encryption import encrypt_value, mask_secret, try_decrypt_value

logger = logging.getLogger(__name__)

EMAIL_CONFIG_KEY = "email.resend"
RESEND_TIMEOUT_SECONDS = 15.0


class EmailNotConfiguredError(RuntimeError):
    """Raised when no Resend API key is available."""


class EmailSendError(RuntimeError):
    """Raised when Resend rejects a message or cannot be reached."""


def default_email_config() -> dict[str, Any]:
    return {
        "enabled": False,
        "api_key_encrypted": "",
        "from_email": "",
        "notification_email": "",
    }


def _coerce_bool(value: Any, default: bool = False) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
    if isinstance(value, (int, float)):
        return bool(value)
    return default


def _normalize_text(value: Any) -> str:
    return str(value or "").strip()


def normalize_email_config(payload: dict[str, Any] | None) -> dict[str, Any]:
    source = payload if isinstance(payload, dict) else {}
    base = default_email_config()
    base["enabled"] = _coerce_bool(source.get("enabled"), False)
    base["api_key_encrypted"] = _normalize_text(source.get("api_key_encrypted"))
    base["from_email"] = _normalize_text(source.get("from_email")).lower()
    base["notification_email"] = _normalize_text(source.get("notification_email")).lower()
    return base


def _resolve_api_key(config: dict[str, Any]) -> str:
    """Stored (encrypted) key first, then the RESEND_API_KEY environment fallback."""
    stored = try_decrypt_value(_normalize_text(config.get("api_key_encrypted")))
    return stored or get_settings().resend_api_key


def _response_payload(config: dict[str, Any], api_key: str) -> dict[str, Any]:
    return {
        "enabled": _coerce_bool(config.get("enabled"), False),
        "api_key_masked": mask_secret(api_key),
        "from_email": _normalize_text(config.get("from_email")) or get_settings().email_from,
        "notification_email": _normalize_text(config.get("notification_email")),
        "is_configured": bool(api_key),
    }


async def load_email_config(
    session: AsyncSession,
    *,
    include_secret_key: bool = False,
) -> dict[str, Any]:
    row = await session.get(SiteSetting, EMAIL_CONFIG_KEY)
    config = normalize_email_config(row.value if row and isinstance(row.value, dict) else None)
    api_key = _resolve_api_key(config)
    if include_secret_key:
        return {**config, "api_key": api_key}
    payload = _response_payload(config, api_key)
    payload["updated_at"] = row.updated_at.isoformat() if row and row.updated_at else None
    return payload


async def save_email_config(
    session: AsyncSession,
    payload: dict[str, Any],
) -> dict[str, Any]:
    current_row = await session.get(SiteSetting, EMAIL_CONFIG_KEY)
    current_raw = (
        current_row.value
        if current_row is not None and isinstance(current_row.value, dict)
        else default_email_config()
    )
    merged = normalize_email_config(current_raw)
    for key in ("enabled", "from_email", "notification_email"):
        if key in payload:
            merged[key] = payload[key]

    if "api_key" in payload:
        raw_key = _normalize_text(payload.get("api_key"))
        merged["api_key_encrypted"] = encrypt_value(raw_key) if raw_key else ""

    normalized = normalize_email_config(merged)
    now = datetime.now(UTC)
    if current_row is None:
        current_row = SiteSetting(
            key=EMAIL_CONFIG_KEY,
            value=normalized,
            category="email",
            description="Resend configuration for transactional emails.",
            updated_at=now,
        )
        session.add(current_row)
    else:
        current_row.value = normalized
        current_row.category = "email"
        current_row.updated_at = now
    await session.flush()
    response = _response_payload(normalized, _resolve_api_key(normalized))
    response["updated_at"] = current_row.updated_at.isoformat() if current_row.updated_at else None
    return response


async def send_email(
    *,
    api_key: str,
    to: str,
    subject: str,
    html_body: str,
    from_email: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """Send one message through Resend and return its id."""
    if not api_key:
        raise EmailNotConfiguredError("Resend API key is not configured")
    settings = get_settings()
    url = f"{settings.resend_api_base_url.rstrip('/')}/emails"
    payload = {
        "from": from_email or settings.email_from,
        "to": to,
        "subject": subject,
        "html": html_body,
    }
    try:
        async with httpx.AsyncClient(timeout=RESEND_TIMEOUT_SECONDS, transport=transport) as client:
            response = await client.post(
                url, json=payload, headers={"Authorization": f"Bearer {api_key}"}
            )
    except httpx.HTTPError as exc:
        raise EmailSendError(f"Resend request failed: {exc}") from exc
    if not response.is_success:
        raise EmailSendError(
            f"Resend API error ({response.status_code}): {response.text.strip()[:400]}"
        )
    try:
        body = response.json()
    except ValueError:
        body = {}
    return str(body.get("id") or "") if isinstance(body, dict) else ""


def lead_notification_html(lead: Lead) -> str:
    parts = [
        "<h2>New Lead Received</h2>",
        f"<p><strong>Name:</strong> {html.escape(lead.name)}</p>",
        f"<p><strong>Email:</strong> {html.escape(lead.email)}</p>",
    ]
    if lead.phone:
        parts.append(f"<p><strong>Phone:</strong> {html.escape(lead.phone)}</p>")
    parts.append("<p><strong>Message:</strong></p>")
    parts.append(f"<p>{html.escape(lead.message)}</p>")
    return "\n".join(parts)


async def send_lead_notification(
    session: AsyncSession,
    lead: Lead,
    site: SiteConfig | None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> bool:
    """Email the business about a new lead. Never raises; returns whether it was sent."""
    if site is None or not site.resend_configured:
        return False
    config = await load_email_config(session, include_secret_key=True)
    recipient = (
        _normalize_text(config.get("notification_email"))
        or _normalize_text(site.notification_email)
        or _normalize_text(site.email)
    )
    if not recipient:
        logger.info("No notification address configured; skipping lead email")
        return False
    try:
        await send_email(
            api_key=_normalize_text(config.get("api_key")),
            to=recipient,
            subject=f"New Lead: {lead.name}",
            html_body=lead_notification_html(lead),
            from_email=get_settings().lead_email_from,
            transport=transport,
        )
    except (EmailNotConfiguredError, EmailSendError) as exc:
        logger.warning("Lead notification not sent: %s", exc)
        return False
    return True

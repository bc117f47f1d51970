"""Contact-form leads: validation, storage and dashboard stats."""

from __future__ import annotations

import logging
import re
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sitekit.models import LEAD_STATUSES, Lead

logger = logging.getLogger(__name__)

MIN_MESSAGE_LENGTH = 10
RECENT_LEADS_LIMIT = 10
_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def _normalize_text(value: Any) -> str:
    return str(value or "").strip()


def validate_contact(form: dict[str, Any]) -> tuple[dict[str, str | None], dict[str, str]]:
    """Return the cleaned fields and a per-field error map (empty when valid)."""
    cleaned: dict[str, str | None] = {
        "name": _normalize_text(form.get("name")),
        "email": _normalize_text(form.get("email")).lower(),
        "phone": _normalize_text(form.get("phone")) or None,
        "message": _normalize_text(form.get("message")),
    }
    errors: dict[str, str] = {}
    if not cleaned["name"]:
        errors["name"] = "Name is required"
    if not cleaned["email"]:
        errors["email"] = "Email is required"
    elif not _EMAIL_RE.match(cleaned["email"]):
        errors["email"] = "Please enter a valid email address"
    if not cleaned["message"]:
        errors["message"] = "Message is required"
    elif len(cleaned["message"]) < MIN_MESSAGE_LENGTH:
        errors["message"] = f"Message must be at least {MIN_MESSAGE_LENGTH} characters"
    return cleaned, errors


async def create_lead(session: AsyncSession, cleaned: dict[str, str | None]) -> Lead:
    lead = Lead(
        name=cleaned["name"],
        email=cleaned["email"],
        phone=cleaned.get("phone"),
        message=cleaned["message"],
        status="new",
    )
    session.add(lead)
    await session.flush()
    logger.info("Stored lead id=%s", lead.id)
    return lead


def serialize_lead(lead: Lead) -> dict[str, Any]:
    return {
        "id": lead.id,
        "name": lead.name,
        "email": lead.email,
        "phone": lead.phone,
        "message": lead.message,
        "status": lead.status,
        "created_at": lead.created_at.isoformat() if lead.created_at else None,
        "updated_at": lead.updated_at.isoformat() if lead.updated_at else None,
    }


async def list_leads(session: AsyncSession, *, limit: int | None = None) -> list[Lead]:
    stmt = select(Lead).order_by(Lead.created_at.desc(), Lead.id.desc())
    if limit is not None:
        stmt = stmt.limit(limit)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def lead_stats(session: AsyncSession) -> dict[str, int]:
    stmt = select(
        func.count(Lead.id),
        func.sum(case((Lead.status == "new", 1), else_=0)),
        func.sum(case((Lead.status == "contacted", 1), else_=0)),
        func.sum(case((Lead.status == "converted", 1), else_=0)),
    )
    row = (await session.execute(stmt)).one()
    total, new, contacted, converted = (int(value or 0) for value in row)
    return {"total": total, "new": new, "contacted": contacted, "converted": converted}


async def set_lead_status(session: AsyncSession, lead_id: int, status: str) -> Lead | None:
    if status not in LEAD_STATUSES:
        raise ValueError(f"Unknown lead status: {status}")
    lead = await session.get(Lead, lead_id)
    if lead is None:
        return None
    lead.status = status
    lead.updated_at = datetime.now(UTC)
    await session.flush()
    await session.refresh(lead)
    return lead

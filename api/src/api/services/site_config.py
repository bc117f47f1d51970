"""Site configuration record: wizard upsert, admin edits, provisioning, public payload."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import func
from sqlalchemy.dialects.postgresql import Insert, insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sitekit.models import SiteConfig
from sitekit.models.site_config import (
    DEFAULT_BUSINESS_NAME,
    DEFAULT_PRIMARY_COLOR,
    DEFAULT_SECONDARY_COLOR,
)
from sitekit.wizard import PersistenceError, WizardState

logger = logging.getLogger(__name__)

SITE_CONFIG_ID = 1
ADMIN_EDITABLE_FIELDS = (
    "business_name",
    "tagline",
    "email",
    "phone",
    "address",
    "primary_color",
    "seo_description",
)


def _normalize_str(value: Any) -> str:
    return str(value or "").strip()


def _optional(value: Any) -> str | None:
    return _normalize_str(value) or None


def wizard_values(state: WizardState) -> dict[str, Any]:
    """Column values for a wizard submission; empty optionals become NULL."""
    return {
        "business_name": state.business_name.strip(),
        "tagline": _optional(state.tagline),
        "description": _optional(state.description),
        "industry": _optional(state.industry),
        "email": _optional(state.email),
        "phone": _optional(state.phone),
        "address": _optional(state.address),
        "primary_color": _normalize_str(state.primary_color) or DEFAULT_PRIMARY_COLOR,
        "secondary_color": _normalize_str(state.secondary_color) or DEFAULT_SECONDARY_COLOR,
        "resend_configured": bool(state.enable_email),
        "product_schema": state.product_schema_json() if state.product_schema else None,
        "setup_complete": False,
    }


def build_wizard_upsert(state: WizardState) -> Insert:
    """Insert or overwrite the pending row; a live row is left untouched."""
    values = wizard_values(state)
    stmt = insert(SiteConfig).values(id=SITE_CONFIG_ID, **values)
    return stmt.on_conflict_do_update(
        index_elements=[SiteConfig.id],
        set_={**values, "updated_at": func.now()},
        where=SiteConfig.setup_complete.is_(False),
    )


class SiteConfigRepository:
    """Access to the tenant's singleton ``site_config`` row."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def load(self) -> SiteConfig | None:
        return await self.session.get(SiteConfig, SITE_CONFIG_ID)

    async def save_wizard_state(self, state: WizardState) -> None:
        try:
            await self.session.execute(build_wizard_upsert(state))
            await self.session.flush()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            raise PersistenceError(str(exc)) from exc

    async def update_branding(self, payload: dict[str, Any]) -> SiteConfig:
        """Apply admin edits, creating the row if the wizard never ran."""
        row = await self.load()
        if row is None:
            row = SiteConfig(
                id=SITE_CONFIG_ID,
                business_name=DEFAULT_BUSINESS_NAME,
                primary_color=DEFAULT_PRIMARY_COLOR,
                secondary_color=DEFAULT_SECONDARY_COLOR,
                setup_complete=False,
            )
            self.session.add(row)
        for key in ADMIN_EDITABLE_FIELDS:
            if key not in payload:
                continue
            value = payload[key]
            if key == "business_name":
                row.business_name = _normalize_str(value) or DEFAULT_BUSINESS_NAME
            elif key == "primary_color":
                row.primary_color = _normalize_str(value) or DEFAULT_PRIMARY_COLOR
            else:
                setattr(row, key, _optional(value))
        row.updated_at = datetime.now(UTC)
        await self.session.flush()
        await self.session.refresh(row)
        return row

    async def confirm_provisioning(self) -> SiteConfig | None:
        """Mark the site live. There is no way back to pending."""
        row = await self.load()
        if row is None:
            return None
        if not row.setup_complete:
            row.setup_complete = True
            row.updated_at = datetime.now(UTC)
            await self.session.flush()
            await self.session.refresh(row)
            logger.info("Site %r confirmed as live", row.business_name)
        return row


def parse_product_schema(raw: str | None) -> list[dict[str, Any]]:
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except ValueError:
        logger.warning("Stored product schema is not valid JSON")
        return []
    return value if isinstance(value, list) else []


def public_site_config(row: SiteConfig | None) -> dict[str, Any]:
    """Branding payload for the public site; defaults when nothing is stored."""
    if row is None:
        return {
            "business_name": DEFAULT_BUSINESS_NAME,
            "tagline": None,
            "description": None,
            "industry": None,
            "template_id": "modern",
            "hero_headline": None,
            "hero_subheadline": None,
            "logo_url": None,
            "favicon_url": None,
            "primary_color": DEFAULT_PRIMARY_COLOR,
            "secondary_color": DEFAULT_SECONDARY_COLOR,
            "contact": {"email": None, "phone": None, "address": None},
            "social": {"twitter": None, "linkedin": None, "facebook": None, "instagram": None},
            "seo": {"description": None, "keywords": None},
            "product_schema": [],
        }
    return {
        "business_name": row.business_name,
        "tagline": row.tagline,
        "description": row.description,
        "industry": row.industry,
        "template_id": row.template_id,
        "hero_headline": row.hero_headline,
        "hero_subheadline": row.hero_subheadline,
        "logo_url": row.logo_url,
        "favicon_url": row.favicon_url,
        "primary_color": row.primary_color,
        "secondary_color": row.secondary_color,
        "contact": {"email": row.email, "phone": row.phone, "address": row.address},
        "social": {
            "twitter": row.twitter_url,
            "linkedin": row.linkedin_url,
            "facebook": row.facebook_url,
            "instagram": row.instagram_url,
        },
        "seo": {"description": row.seo_description, "keywords": row.seo_keywords},
        "product_schema": parse_product_schema(row.product_schema),
    }


def admin_config_payload(row: SiteConfig | None) -> dict[str, Any]:
    if row is None:
        return {
            "exists": False,
            "business_name": DEFAULT_BUSINESS_NAME,
            "tagline": None,
            "email": None,
            "phone": None,
            "address": None,
            "primary_color": DEFAULT_PRIMARY_COLOR,
            "seo_description": None,
            "setup_complete": False,
        }
    return {
        "exists": True,
        **{key: getattr(row, key) for key in ADMIN_EDITABLE_FIELDS},
        "setup_complete": row.setup_complete,
    }


def provisioning_status(row: SiteConfig | None) -> dict[str, Any]:
    if row is None:
        return {"status": "no_config"}
    if row.setup_complete:
        return {"status": "live", "business_name": row.business_name}
    return {"status": "pending", "business_name": row.business_name, "email": row.email}

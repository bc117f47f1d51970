"""Site configuration model - the tenant's single branding/contact record."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from sitekit.models.base import Base

DEFAULT_BUSINESS_NAME = "My Business"
DEFAULT_PRIMARY_COLOR = "#0ea5e9"
DEFAULT_SECONDARY_COLOR = "#1e293b"


class SiteConfig(Base):
    __tablename__ = "site_config"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, server_default=text("1"))
    business_name: Mapped[str] = mapped_column(
        Text, nullable=False, server_default=text(f"'{DEFAULT_BUSINESS_NAME}'")
    )
    tagline: Mapped[str | None] = mapped_column(Text)
    description: Mapped[str | None] = mapped_column(Text)
    industry: Mapped[str | None] = mapped_column(Text)
    template_id: Mapped[str] = mapped_column(
        Text, nullable=False, server_default=text("'modern'")
    )
    hero_headline: Mapped[str | None] = mapped_column(Text)
    hero_subheadline: Mapped[str | None] = mapped_column(Text)
    logo_url: Mapped[str | None] = mapped_column(Text)
    favicon_url: Mapped[str | None] = mapped_column(Text)
    primary_color: Mapped[str] = mapped_column(
        Text, nullable=False, server_default=text(f"'{DEFAULT_PRIMARY_COLOR}'")
    )
    secondary_color: Mapped[str] = mapped_column(
        Text, nullable=False, server_default=text(f"'{DEFAULT_SECONDARY_COLOR}'")
    )
    email: Mapped[str | None] = mapped_column(Text)
    phone: Mapped[str | None] = mapped_column(Text)
    address: Mapped[str | None] = mapped_column(Text)
    twitter_url: Mapped[str | None] = mapped_column(Text)
    linkedin_url: Mapped[str | None] = mapped_column(Text)
    facebook_url: Mapped[str | None] = mapped_column(Text)
    instagram_url: Mapped[str | None] = mapped_column(Text)
    seo_description: Mapped[str | None] = mapped_column(Text)
    seo_keywords: Mapped[str | None] = mapped_column(Text)
    resend_configured: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("FALSE")
    )
    notification_email: Mapped[str | None] = mapped_column(Text)
    # JSON-encoded list of {name, type, required} product attribute definitions.
    product_schema: Mapped[str | None] = mapped_column(Text)
    setup_complete: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("FALSE")
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=text("NOW()")
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=text("NOW()")
    )

    __table_args__ = (CheckConstraint("id = 1", name="ck_site_config_singleton"),)

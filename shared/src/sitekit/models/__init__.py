"""SQLAlchemy ORM models for sitekit."""

from sitekit.models.base import Base
from sitekit.models.lead import LEAD_STATUSES, Lead
from sitekit.models.menu_item import MenuItem
from sitekit.models.site_config import SiteConfig
from sitekit.models.site_setting import SiteSetting

__all__ = [
    "Base",
    "LEAD_STATUSES",
    "Lead",
    "MenuItem",
    "SiteConfig",
    "SiteSetting",
]

"""Seed a tenant database with a demo configuration, services and leads."""

from __future__ import annotations

import argparse
import asyncio
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sitekit.database import close_engine, get_session_factory
from sitekit.models import Lead, MenuItem, SiteConfig

DEMO_CONFIG: dict[str, Any] = {
    "business_name": "Demo Business",
    "tagline": "Your success is our mission",
    "description": "We provide professional services to help your business grow.",
    "industry": "consulting",
    "template_id": "modern",
    "hero_headline": "Transform Your Business Today",
    "hero_subheadline": "We deliver results that matter. Professional solutions tailored to your needs.",
    "primary_color": "#0ea5e9",
    "secondary_color": "#1e293b",
    "email": "hello@demo.com",
    "phone": "(555) 123-4567",
    "address": "123 Main Street, City, ST 12345",
    "twitter_url": "https://twitter.com",
    "linkedin_url": "https://linkedin.com",
    "seo_description": "Professional business services tailored to your needs. Contact us today.",
    "resend_configured": False,
    "setup_complete": True,
}

DEMO_MENU_ITEMS: list[dict[str, Any]] = [
    {
        "title": "Web Development",
        "description": "Custom websites and web applications built with modern technology.",
        "category": "Development",
        "sort_order": 1,
    },
    {
        "title": "Cloud Solutions",
        "description": "Scalable cloud infrastructure that grows with your business.",
        "category": "Infrastructure",
        "sort_order": 2,
    },
    {
        "title": "Consulting",
        "description": "Expert guidance to help you make the right technology decisions.",
        "category": "Advisory",
        "sort_order": 3,
    },
]

DEMO_LEADS: list[dict[str, Any]] = [
    {
        "name": "John Doe",
        "email": "john@example.com",
        "phone": "(555) 111-2222",
        "message": "I'm interested in learning more about your services.",
        "status": "new",
    },
    {
        "name": "Jane Smith",
        "email": "jane@example.com",
        "phone": None,
        "message": "Please contact me about a custom project.",
        "status": "contacted",
    },
]


async def _count(db: AsyncSession, model) -> int:
    return int((await db.execute(select(func.count()).select_from(model))).scalar_one())


async def seed_demo(db: AsyncSession, *, reset_config: bool = False) -> dict[str, int]:
    """Insert demo rows into empty tables; ``reset_config`` removes the config row instead."""
    stats = {"config": 0, "menu_items": 0, "leads": 0, "config_removed": 0}
    if reset_config:
        result = await db.execute(delete(SiteConfig))
        stats["config_removed"] = int(result.rowcount or 0)
        return stats

    if await db.get(SiteConfig, 1) is None:
        db.add(SiteConfig(id=1, **DEMO_CONFIG))
        stats["config"] = 1
    if await _count(db, MenuItem) == 0:
        db.add_all(MenuItem(is_active=True, **item) for item in DEMO_MENU_ITEMS)
        stats["menu_items"] = len(DEMO_MENU_ITEMS)
    if await _count(db, Lead) == 0:
        db.add_all(Lead(**lead) for lead in DEMO_LEADS)
        stats["leads"] = len(DEMO_LEADS)
    await db.flush()
    return stats


async def _run(*, reset_config: bool) -> dict[str, int]:
    factory = get_session_factory()
    try:
        async with factory() as db:
            stats = await seed_demo(db, reset_config=reset_config)
            await db.commit()
    finally:
        await close_engine()
    return stats


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Seed demo site data.")
    parser.add_argument(
        "--reset-config",
        action="store_true",
        help="Delete the site configuration so the setup wizard runs again.",
    )
    return parser


def main() -> None:
    args = _parser().parse_args()
    stats = asyncio.run(_run(reset_config=bool(args.reset_config)))
    print(
        "seed-demo:",
        f"config={stats['config']}",
        f"menu_items={stats['menu_items']}",
        f"leads={stats['leads']}",
        f"config_removed={stats['config_removed']}",
    )


if __name__ == "__main__":
    main()

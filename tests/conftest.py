"""Integration test configuration."""

import pytest
from api.services.site_config import SITE_CONFIG_ID, wizard_values
from sitekit.wizard import PersistenceError


class InMemoryConfigStore:
    """Keeps site_config rows in a dict, upserting the pending singleton like the database does."""

    def __init__(self):
        self.rows: dict[int, dict] = {}
        self.writes = 0
        self.fail = False

    async def save_wizard_state(self, state):
        if self.fail:
            raise PersistenceError('relation "site_config" does not exist')
        self.writes += 1
        row = self.rows.setdefault(SITE_CONFIG_ID, {"id": SITE_CONFIG_ID})
        if row.get("setup_complete"):
            return
        row.update(wizard_values(state))


@pytest.fixture
def config_store():
    return InMemoryConfigStore()


@pytest.fixture
def retail_answers():
    return {
        "business_name": "  Acme Goods ",
        "description": "Handmade homewares shipped across the country",
        "industry": "retail",
        "email": "owner@acme.test",
        "phone": "555-0100",
        "address": "1 Main St",
    }

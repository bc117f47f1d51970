"""Admin API tests (dashboard, leads, site config, provisioning, menu)."""

from datetime import UTC, datetime
from types import SimpleNamespace
from unittest.mock import MagicMock

from api.middleware.auth import create_access_token
from sitekit.models import MenuItem, SiteConfig


def _lead(**overrides):
    data = {
        "id": 7,
        "name": "Jo",
        "email": "jo@example.com",
        "phone": None,
        "message": "Please call me back.",
        "status": "new",
        "created_at": datetime(2026, 10, 1, tzinfo=UTC),
        "updated_at": datetime(2026, 10, 1, tzinfo=UTC),
    }
    data.update(overrides)
    return SimpleNamespace(**data)


async def test_dashboard_stats_and_recent(client, mock_db):
    stats_result = MagicMock()
    stats_result.one.return_value = (3, 1, 1, 1)
    recent_result = MagicMock()
    recent_result.scalars.return_value.all.return_value = [_lead()]
    mock_db.execute.side_effect = [stats_result, recent_result]

    response = await client.get("/admin/")
    assert response.status_code == 200
    payload = response.json()
    assert payload["stats"] == {"total": 3, "new": 1, "contacted": 1, "converted": 1}
    assert payload["recent_leads"][0]["email"] == "jo@example.com"
    assert payload["site"] == {"status": "no_config"}


async def test_dashboard_stats_empty_table(client):
    response = await client.get("/admin/")
    assert response.json()["stats"] == {"total": 0, "new": 0, "contacted": 0, "converted": 0}


async def test_update_lead_status(client, mock_db):
    lead = _lead()
    mock_db.get.return_value = lead
    response = await client.post("/admin/leads/7/status", json={"status": "contacted"})
    assert response.status_code == 200
    assert lead.status == "contacted"


async def test_update_lead_status_unknown_lead(client):
    response = await client.post("/admin/leads/99/status", json={"status": "contacted"})
    assert response.status_code == 404


async def test_update_lead_status_invalid_status(client):
    response = await client.post("/admin/leads/7/status", json={"status": "won"})
    assert response.status_code == 422


async def test_provision_status_pending(client, mock_db):
    mock_db.get.return_value = SimpleNamespace(
        business_name="Acme", email="o@acme.test", setup_complete=False
    )
    response = await client.get("/admin/provision")
    assert response.json() == {"status": "pending", "business_name": "Acme", "email": "o@acme.test"}


async def test_confirm_provision_goes_live(app, client, mock_db):
    row = SimpleNamespace(business_name="Acme", email=None, setup_complete=False, updated_at=None)
    mock_db.get.return_value = row
    app.state._setup_complete = None
    response = await client.post("/admin/provision/confirm")
    assert response.status_code == 200
    assert response.json()["status"] == "live"
    assert row.setup_complete is True
    assert app.state._setup_complete is True


async def test_confirm_provision_is_idempotent(client, mock_db):
    row = SimpleNamespace(business_name="Acme", email=None, setup_complete=True)
    mock_db.get.return_value = row
    response = await client.post("/admin/provision/confirm")
    assert response.status_code == 200
    assert row.setup_complete is True
    mock_db.flush.assert_not_awaited()


async def test_confirm_provision_without_config(client):
    response = await client.post("/admin/provision/confirm")
    assert response.status_code == 404


async def test_admin_config_creates_row_when_missing(client, mock_db):
    response = await client.put(
        "/admin/config",
        json={"business_name": "Acme", "primary_color": "", "phone": "555-0100"},
    )
    assert response.status_code == 200
    row = mock_db.add.call_args.args[0]
    assert isinstance(row, SiteConfig)
    assert row.id == 1
    assert row.setup_complete is False
    payload = response.json()
    assert payload["business_name"] == "Acme"
    assert payload["primary_color"] == "#0ea5e9"
    assert payload["phone"] == "555-0100"


async def test_admin_config_update_leaves_setup_state(client, mock_db):
    row = SiteConfig(
        id=1,
        business_name="Old",
        primary_color="#0ea5e9",
        secondary_color="#1e293b",
        setup_complete=True,
    )
    mock_db.get.return_value = row
    response = await client.put("/admin/config", json={"seo_description": "New words"})
    assert response.status_code == 200
    assert row.business_name == "Old"
    assert row.seo_description == "New words"
    assert row.setup_complete is True
    mock_db.add.assert_not_called()


async def test_menu_create_and_missing_update(client, mock_db):
    response = await client.post(
        "/admin/menu", json={"title": "Espresso", "price": 3.5, "metadata": {"size": "S"}}
    )
    assert response.status_code == 201
    item = mock_db.add.call_args.args[0]
    assert isinstance(item, MenuItem)
    assert item.metadata_ == {"size": "S"}
    assert response.json()["title"] == "Espresso"

    missing = await client.put("/admin/menu/42", json={"title": "Latte"})
    assert missing.status_code == 404


async def test_menu_delete(client, mock_db):
    item = MenuItem(id=3, title="Tea")
    mock_db.get.return_value = item
    response = await client.delete("/admin/menu/3")
    assert response.status_code == 200
    mock_db.delete.assert_awaited_once_with(item)


async def test_admin_requires_token_when_bypass_off(unauthenticated_client):
    response = await unauthenticated_client.get("/admin/leads")
    assert response.status_code == 401


async def test_admin_accepts_admin_token(unauthenticated_client):
    token = create_access_token("owner@acme.test")
    response = await unauthenticated_client.get(
        "/admin/leads", headers={"Authorization": f"Bearer {token}"}
    )
    assert response.status_code == 200
    assert response.json() == {"leads": []}


async def test_admin_rejects_other_token_types(unauthenticated_client):
    token = create_access_token("someone", token_type="preview")
    response = await unauthenticated_client.get(
        "/admin/leads", headers={"Authorization": f"Bearer {token}"}
    )
    assert response.status_code == 401

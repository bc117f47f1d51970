"""Setup wizard endpoint tests."""

import json
from types import SimpleNamespace
from urllib.parse import parse_qs, unquote, urlparse

from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import OperationalError


def _form(**overrides):
    data = {
        "businessName": "Acme Consulting",
        "tagline": "",
        "description": "We advise small firms",
        "industry": "consulting",
        "email": "owner@acme.test",
        "phone": "",
        "address": "",
        "primaryColor": "#10b981",
        "secondaryColor": "#1e293b",
    }
    data.update(overrides)
    return data


def _compiled_upsert(mock_db):
    stmt = mock_db.execute.await_args.args[0]
    compiled = stmt.compile(dialect=postgresql.dialect())
    return str(compiled), compiled.params


async def test_get_wizard_returns_bootstrap(client):
    response = await client.get("/setup")
    assert response.status_code == 200
    payload = response.json()
    assert [s["step"] for s in payload["steps"]] == [1, 2, 3, 4, 5]
    assert payload["steps"][4]["only_for_industry"] == "retail"
    assert {"value": "retail", "label": "Retail / E-commerce"} in payload["industries"]
    assert len(payload["color_presets"]) == 6
    assert payload["defaults"]["primary_color"] == "#0ea5e9"
    assert payload["defaults"]["product_schema"] == []


async def test_get_wizard_redirects_when_live(client, mock_db):
    mock_db.get.return_value = SimpleNamespace(setup_complete=True)
    response = await client.get("/setup")
    assert response.status_code == 302
    assert response.headers["location"] == "/"


async def test_submit_leaves_live_site_untouched(app, client, mock_db):
    mock_db.get.return_value = SimpleNamespace(setup_complete=True)
    response = await client.post("/setup", data=_form(businessName="Other Co"))
    assert response.status_code == 302
    assert response.headers["location"] == "/"
    mock_db.execute.assert_not_awaited()
    assert app.state._setup_complete is True


async def test_submit_redirects_to_pending(client, mock_db):
    response = await client.post("/setup", data=_form())
    assert response.status_code == 303
    location = urlparse(response.headers["location"])
    assert location.path == "/setup/pending"
    assert parse_qs(location.query) == {"name": ["Acme Consulting"], "email": ["owner@acme.test"]}


async def test_submit_upserts_singleton_row_as_pending(client, mock_db):
    await client.post("/setup", data=_form(enableEmail="on"))
    sql, params = _compiled_upsert(mock_db)
    assert "INSERT INTO site_config" in sql
    assert "ON CONFLICT (id) DO UPDATE" in sql
    assert "where site_config.setup_complete is false" in sql.lower()
    assert params["id"] == 1
    assert params["business_name"] == "Acme Consulting"
    assert params["setup_complete"] is False
    assert params["resend_configured"] is True
    assert params["tagline"] is None
    assert params["phone"] is None
    assert params["product_schema"] is None
    assert params["primary_color"] == "#10b981"


async def test_submit_blank_colours_fall_back_to_defaults(client, mock_db):
    await client.post("/setup", data=_form(primaryColor="", secondaryColor=""))
    _, params = _compiled_upsert(mock_db)
    assert params["primary_color"] == "#0ea5e9"
    assert params["secondary_color"] == "#1e293b"
    assert params["resend_configured"] is False


async def test_submit_retail_stores_product_schema_json(client, mock_db):
    schema = [{"name": "Size", "type": "text", "required": True}]
    await client.post("/setup", data=_form(industry="retail", productSchema=json.dumps(schema)))
    _, params = _compiled_upsert(mock_db)
    assert json.loads(params["product_schema"]) == schema


async def test_submit_short_name_rejected_without_write(client, mock_db):
    response = await client.post("/setup", data=_form(businessName=" A "))
    assert response.status_code == 400
    assert response.json() == {
        "error": "Business name must be at least 2 characters",
        "step": 1,
    }
    mock_db.execute.assert_not_awaited()


async def test_submit_missing_name_rejected(client, mock_db):
    form = _form()
    del form["businessName"]
    response = await client.post("/setup", data=form)
    assert response.status_code == 400
    assert response.json()["error"] == "Business name is required"
    mock_db.execute.assert_not_awaited()


async def test_submit_invalid_product_schema(client, mock_db):
    response = await client.post("/setup", data=_form(industry="retail", productSchema="{nope"))
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid product schema", "step": 5}
    mock_db.execute.assert_not_awaited()


async def test_submit_persistence_failure(client, mock_db):
    mock_db.execute.side_effect = OperationalError("INSERT", {}, Exception("no such table"))
    response = await client.post("/setup", data=_form())
    assert response.status_code == 500
    assert response.json()["error"] == (
        "Failed to save configuration. Make sure the database tables exist."
    )
    mock_db.rollback.assert_awaited()


async def test_pending_page_builds_operator_mailto(client):
    response = await client.get("/setup/pending", params={"name": "Acme", "email": "o@acme.test"})
    assert response.status_code == 200
    payload = response.json()
    assert payload["business_name"] == "Acme"
    mailto = payload["mailto_url"]
    assert mailto.startswith("mailto:admin@example.com?subject=")
    decoded = unquote(mailto)
    assert "Provisioning Request: Acme" in decoded
    assert "Email: o@acme.test" in decoded
    assert "/admin/provision" in decoded


async def test_pending_page_defaults(client):
    payload = (await client.get("/setup/pending")).json()
    assert payload["business_name"] == "New Business"
    assert "Email: Not provided" in unquote(payload["mailto_url"])

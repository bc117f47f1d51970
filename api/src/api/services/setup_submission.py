"""Form decoding for wizard submissions and the pending-activation request."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

from sitekit.config import get_settings
from sitekit.wizard import FormStateStore, WizardState, WizardStep

# Form field name -> WizardState field
FORM_FIELDS: dict[str, str] = {
    "businessName": "business_name",
    "tagline": "tagline",
    "description": "description",
    "industry": "industry",
    "email": "email",
    "phone": "phone",
    "address": "address",
    "primaryColor": "primary_color",
    "secondaryColor": "secondary_color",
}
_FALSE_VALUES = {"", "0", "false", "off", "no"}


class FormDecodeError(ValueError):
    def __init__(self, message: str, step: int) -> None:
        super().__init__(message)
        self.message = message
        self.step = step


def _checkbox(value: Any) -> bool:
    if value is None:
        return False
    return str(value).strip().lower() not in _FALSE_VALUES


def state_from_form(form: Mapping[str, Any]) -> WizardState:
    """Build a WizardState from the wizard's form-encoded field set.

    Missing colour fields keep their defaults; ``productSchema`` is a JSON list.
    """
    store = FormStateStore()
    for form_name, field_name in FORM_FIELDS.items():
        value = form.get(form_name)
        if value is None:
            continue
        if field_name in ("primary_color", "secondary_color") and not str(value).strip():
            continue
        store.set_field(field_name, value)
    store.set_field("enable_email", _checkbox(form.get("enableEmail")))

    raw_schema = form.get("productSchema")
    if raw_schema:
        try:
            store.set_field("product_schema", str(raw_schema))
        except (ValueError, TypeError, AttributeError) as exc:
            raise FormDecodeError(
                "Invalid product schema", int(WizardStep.PRODUCT_SCHEMA)
            ) from exc
    return store.state


def provisioning_request(business_name: str, customer_email: str) -> dict[str, Any]:
    """Pending-page data with a ``mailto:`` link asking the operator to provision."""
    settings = get_settings()
    business_name = business_name.strip() or "New Business"
    customer_email = customer_email.strip()
    subject = f"Provisioning Request: {business_name}"
    body = "\n".join(
        [
            "Hi,",
            "",
            "A new site setup has been submitted and is waiting for provisioning.",
            "",
            "BUSINESS DETAILS",
            "----------------",
            f"Name: {business_name}",
            f"Email: {customer_email or 'Not provided'}",
            "",
            "REQUIRED ACTIONS",
            "----------------",
            "1. Create the tenant database and run migrations:",
            "   alembic upgrade head",
            "",
            "2. (Optional) Set the Resend API key in the admin email settings",
            "   or RESEND_API_KEY.",
            "",
            "3. Confirm provisioning at:",
            f"   {settings.admin_url.rstrip('/')}/provision",
            "",
            "Thanks!",
        ]
    )
    mailto = (
        f"mailto:{settings.operator_email}"
        f"?subject={quote(subject, safe='')}&body={quote(body, safe='')}"
    )
    return {
        "business_name": business_name,
        "customer_email": customer_email,
        "operator_email": settings.operator_email,
        "subject": subject,
        "mailto_url": mailto,
    }

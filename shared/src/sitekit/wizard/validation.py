"""Step gating rules shared by the wizard UI and the submission endpoint."""

from __future__ import annotations

from sitekit.wizard.state import WizardState
from sitekit.wizard.steps import WizardStep

BUSINESS_NAME_MIN_LENGTH = 2


def business_name_error(name: str | None) -> str | None:
    """Return the error for an unusable business name, or None if it is fine."""
    cleaned = (name or "").strip()
    if not cleaned:
        return "Business name is required"
    if len(cleaned) < BUSINESS_NAME_MIN_LENGTH:
        return f"Business name must be at least {BUSINESS_NAME_MIN_LENGTH} characters"
    return None


def can_advance(step: int, state: WizardState) -> bool:
    """Whether "Next" is enabled on ``step``.

    Only the business-info step has a requirement; contact, branding, email
    and product-schema steps are always passable.
    """
    if step == WizardStep.BUSINESS_INFO:
        return business_name_error(state.business_name) is None
    return True

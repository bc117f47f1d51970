"""Final wizard submission: validate, persist the configuration, redirect."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol
from urllib.parse import urlencode

from sitekit.wizard.state import WizardState
from sitekit.wizard.steps import WizardStep
from sitekit.wizard.validation import business_name_error

logger = logging.getLogger(__name__)

PENDING_PATH = "/setup/pending"
PERSISTENCE_FAILED_MESSAGE = (
    "Failed to save configuration. Make sure the database tables exist."
)


class PersistenceError(Exception):
    """Raised by a configuration store when a write could not be applied."""


class ConfigurationStore(Protocol):
    async def save_wizard_state(self, state: WizardState) -> None: ...


@dataclass(frozen=True)
class SubmissionRedirect:
    location: str
    status_code: int = 303


@dataclass(frozen=True)
class SubmissionRejected:
    message: str
    step: int | None = None
    status_code: int = 400


SubmissionResult = SubmissionRedirect | SubmissionRejected


def pending_location(business_name: str, email: str) -> str:
    return f"{PENDING_PATH}?{urlencode({'name': business_name, 'email': email})}"


class SubmissionHandler:
    def __init__(self, store: ConfigurationStore) -> None:
        self._store = store

    async def submit(self, state: WizardState) -> SubmissionResult:
        error = business_name_error(state.business_name)
        if error:
            return SubmissionRejected(error, step=int(WizardStep.BUSINESS_INFO))

        try:
            await self._store.save_wizard_state(state)
        except PersistenceError:
            logger.exception("Setup submission for %r could not be saved", state.business_name)
            return SubmissionRejected(PERSISTENCE_FAILED_MESSAGE, status_code=500)

        logger.info("Setup submitted for %r, awaiting provisioning", state.business_name)
        return SubmissionRedirect(pending_location(state.business_name.strip(), state.email))

"""One user's run through the setup wizard.

Ties the field store, step navigation, copy assistance and submission
together. Failures never clear field values; the user can fix and retry.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from sitekit.services.copy_assist import CopyAssist, CopyAssistError, CopyAssistResult
from sitekit.wizard.state import FormStateStore, WizardState
from sitekit.wizard.steps import NavigationOutcome, StepSequencer, WizardStep
from sitekit.wizard.submission import SubmissionRedirect, SubmissionRejected, SubmissionResult
from sitekit.wizard.validation import can_advance

logger = logging.getLogger(__name__)


class Submitter(Protocol):
    async def submit(self, state: WizardState) -> SubmissionResult: ...


class WizardSession:
    def __init__(
        self,
        submitter: Submitter,
        copy_assist: CopyAssist | None = None,
        store: FormStateStore | None = None,
    ) -> None:
        self._submitter = submitter
        self._copy_assist = copy_assist
        self._store = store or FormStateStore()
        self._sequencer = StepSequencer(can_advance)
        self.is_generating = False
        self.is_submitting = False
        self.ai_error: str | None = None
        self.submit_error: str | None = None
        self.redirect: SubmissionRedirect | None = None

    @property
    def state(self) -> WizardState:
        return self._store.state

    @property
    def current_step(self) -> WizardStep:
        return self._sequencer.current

    @property
    def steps(self) -> tuple[WizardStep, ...]:
        return self._sequencer.steps(self.state.industry)

    @property
    def completed(self) -> bool:
        return self.redirect is not None

    def can_advance(self) -> bool:
        return can_advance(self.current_step, self.state)

    # Field updates; each one re-clamps the step since industry may change.

    def _changed(self, state: WizardState) -> WizardState:
        self._sequencer.clamp(state.industry)
        return state

    def set_field(self, name: str, value: Any) -> WizardState:
        return self._changed(self._store.set_field(name, value))

    def apply_preset(self, preset_name: str) -> WizardState:
        return self._changed(self._store.apply_preset(preset_name))

    def add_product_field(self) -> WizardState:
        return self._changed(self._store.add_product_field())

    def update_product_field(self, index: int, **changes: Any) -> WizardState:
        return self._changed(self._store.update_product_field(index, **changes))

    def remove_product_field(self, index: int) -> WizardState:
        return self._changed(self._store.remove_product_field(index))

    # Navigation

    async def next(self) -> NavigationOutcome:
        """Advance, submitting when already on the last step.

        Raises ``StepBlockedError`` when the current step is incomplete.
        """
        outcome = self._sequencer.next(self.state)
        if outcome is NavigationOutcome.SUBMIT:
            await self.submit()
        return outcome

    def back(self) -> WizardStep:
        return self._sequencer.back(self.state)

    # Copy assistance

    async def generate_copy(self) -> CopyAssistResult | None:
        """Ask for AI copy; returns None if a request is already running."""
        if self._copy_assist is None or self.is_generating:
            return None
        self.is_generating = True
        self.ai_error = None
        store = self._store
        state = store.state
        try:
            result = await self._copy_assist.generate(
                state.description,
                industry=state.industry or None,
                business_name=state.business_name or None,
            )
        finally:
            self.is_generating = False

        if isinstance(result, CopyAssistError):
            self.ai_error = result.message
        elif result.content.tagline and self._store is store:
            # A submission that finished meanwhile has discarded these answers.
            self.set_field("tagline", result.content.tagline)
        return result

    def dismiss_ai_error(self) -> None:
        self.ai_error = None

    # Submission

    async def submit(self) -> SubmissionResult | None:
        """Submit the current state; returns None if a submission is in flight."""
        if self.is_submitting or self.completed:
            return None
        self.is_submitting = True
        self.submit_error = None
        try:
            result = await self._submitter.submit(self.state)
        finally:
            self.is_submitting = False

        if isinstance(result, SubmissionRejected):
            self.submit_error = result.message
            logger.info("Wizard submission rejected: %s", result.message)
        else:
            self.redirect = result
            self._store = FormStateStore()
        return result

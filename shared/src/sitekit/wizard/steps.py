"""Active step list and forward/back navigation for the setup wizard."""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum, IntEnum


class WizardStep(IntEnum):
    BUSINESS_INFO = 1
    CONTACT = 2
    BRANDING = 3
    EMAIL = 4
    PRODUCT_SCHEMA = 5


STEP_TITLES: dict[WizardStep, str] = {
    WizardStep.BUSINESS_INFO: "Business Info",
    WizardStep.CONTACT: "Contact",
    WizardStep.BRANDING: "Branding",
    WizardStep.EMAIL: "Email",
    WizardStep.PRODUCT_SCHEMA: "Schema",
}

BASE_STEPS: tuple[WizardStep, ...] = (
    WizardStep.BUSINESS_INFO,
    WizardStep.CONTACT,
    WizardStep.BRANDING,
    WizardStep.EMAIL,
)
PRODUCT_SCHEMA_INDUSTRY = "retail"


class NavigationError(Exception):
    """Base class for rejected wizard navigation."""


class StepBlockedError(NavigationError):
    """Raised when "Next" is pressed on a step whose requirements are unmet."""


class FirstStepError(NavigationError):
    """Raised when "Back" is pressed on the first step."""


class NavigationOutcome(str, Enum):
    MOVED = "moved"
    SUBMIT = "submit"


def active_steps(industry: str | None) -> tuple[WizardStep, ...]:
    if industry == PRODUCT_SCHEMA_INDUSTRY:
        return (*BASE_STEPS, WizardStep.PRODUCT_SCHEMA)
    return BASE_STEPS


class StepSequencer:
    """Tracks the current step within the active step list.

    ``gate`` decides whether the current step may be left forwards; it is
    passed in so the sequencer stays independent of field-level rules.
    """

    def __init__(
        self,
        gate: Callable[[int, object], bool],
        current: WizardStep = WizardStep.BUSINESS_INFO,
    ) -> None:
        self._gate = gate
        self._current = WizardStep(current)

    @property
    def current(self) -> WizardStep:
        return self._current

    def steps(self, industry: str | None) -> tuple[WizardStep, ...]:
        return active_steps(industry)

    def is_last(self, industry: str | None) -> bool:
        return self._current == self.steps(industry)[-1]

    def clamp(self, industry: str | None) -> WizardStep:
        """Move back onto the active list if the current step was removed."""
        steps = self.steps(industry)
        if self._current not in steps:
            earlier = [step for step in steps if step < self._current]
            self._current = earlier[-1] if earlier else steps[0]
        return self._current

    def next(self, state) -> NavigationOutcome:
        """Advance one step, or report that the wizard should submit."""
        self.clamp(state.industry)
        if not self._gate(self._current, state):
            raise StepBlockedError(f"Step {int(self._current)} is not complete")
        steps = self.steps(state.industry)
        position = steps.index(self._current)
        if position == len(steps) - 1:
            return NavigationOutcome.SUBMIT
        self._current = steps[position + 1]
        return NavigationOutcome.MOVED

    def back(self, state) -> WizardStep:
        self.clamp(state.industry)
        steps = self.steps(state.industry)
        position = steps.index(self._current)
        if position == 0:
            raise FirstStepError("Already on the first step")
        self._current = steps[position - 1]
        return self._current

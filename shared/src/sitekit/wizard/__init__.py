"""Setup wizard: field state, step navigation, validation and submission."""

from sitekit.wizard.session import WizardSession
from sitekit.wizard.state import (
    COLOR_PRESETS,
    INDUSTRIES,
    FormStateStore,
    ProductField,
    UnknownFieldError,
    WizardState,
)
from sitekit.wizard.steps import (
    FirstStepError,
    NavigationError,
    NavigationOutcome,
    StepBlockedError,
    StepSequencer,
    WizardStep,
    active_steps,
)
from sitekit.wizard.submission import (
    PersistenceError,
    SubmissionHandler,
    SubmissionRedirect,
    SubmissionRejected,
)
from sitekit.wizard.validation import business_name_error, can_advance

__all__ = [
    "COLOR_PRESETS",
    "INDUSTRIES",
    "FirstStepError",
    "FormStateStore",
    "NavigationError",
    "NavigationOutcome",
    "PersistenceError",
    "ProductField",
    "StepBlockedError",
    "StepSequencer",
    "SubmissionHandler",
    "SubmissionRedirect",
    "SubmissionRejected",
    "UnknownFieldError",
    "WizardSession",
    "WizardState",
    "WizardStep",
    "active_steps",
    "business_name_error",
    "can_advance",
]

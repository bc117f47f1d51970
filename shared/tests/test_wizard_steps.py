"""Tests for step sequencing and the step-1 gate."""

import pytest
from sitekit.wizard.state import WizardState
from sitekit.wizard.steps import (
    FirstStepError,
    NavigationOutcome,
    StepBlockedError,
    StepSequencer,
    WizardStep,
    active_steps,
)
from sitekit.wizard.validation import business_name_error, can_advance

INDUSTRIES = ["", "consulting", "agency", "restaurant", "retail", "healthcare", "technology", "other"]


@pytest.mark.parametrize("industry", INDUSTRIES)
def test_active_step_count_depends_only_on_retail(industry):
    expected = 5 if industry == "retail" else 4
    assert len(active_steps(industry)) == expected


def test_business_name_rule():
    assert business_name_error("") == "Business name is required"
    assert business_name_error("   ") == "Business name is required"
    assert business_name_error(" A ") is not None
    assert business_name_error("Ab") is None
    assert business_name_error(None) is not None


@pytest.mark.parametrize(
    "name, expected",
    [("", False), ("A", False), ("  A  ", False), ("Ab", True), ("Acme Ltd", True)],
)
def test_can_advance_step_one(name, expected):
    assert can_advance(WizardStep.BUSINESS_INFO, WizardState(business_name=name)) is expected


@pytest.mark.parametrize("step", [2, 3, 4, 5])
def test_later_steps_always_passable(step):
    assert can_advance(step, WizardState()) is True


def test_next_rejected_when_gate_fails():
    sequencer = StepSequencer(can_advance)
    with pytest.raises(StepBlockedError):
        sequencer.next(WizardState(business_name="A"))
    assert sequencer.current == WizardStep.BUSINESS_INFO


def test_back_rejected_on_first_step():
    sequencer = StepSequencer(can_advance)
    with pytest.raises(FirstStepError):
        sequencer.back(WizardState())


def test_walk_forward_and_signal_submit_on_last_step():
    state = WizardState(business_name="Acme", industry="consulting")
    sequencer = StepSequencer(can_advance)
    outcomes = [sequencer.next(state) for _ in range(3)]
    assert outcomes == [NavigationOutcome.MOVED] * 3
    assert sequencer.current == WizardStep.EMAIL
    assert sequencer.next(state) is NavigationOutcome.SUBMIT
    assert sequencer.current == WizardStep.EMAIL


def test_retail_reaches_product_schema_step():
    state = WizardState(business_name="Shop", industry="retail")
    sequencer = StepSequencer(can_advance)
    for _ in range(4):
        sequencer.next(state)
    assert sequencer.current == WizardStep.PRODUCT_SCHEMA
    assert sequencer.is_last("retail")


def test_clamp_after_industry_change():
    sequencer = StepSequencer(can_advance, current=WizardStep.PRODUCT_SCHEMA)
    assert sequencer.clamp("retail") == WizardStep.PRODUCT_SCHEMA
    assert sequencer.clamp("agency") == WizardStep.EMAIL
    assert sequencer.current in active_steps("agency")


def test_back_moves_one_step():
    state = WizardState(business_name="Acme")
    sequencer = StepSequencer(can_advance)
    sequencer.next(state)
    sequencer.next(state)
    assert sequencer.back(state) == WizardStep.CONTACT

"""
Step gate: pure checks deciding whether the wizard may move past a step.

Each rule only looks at the fields its own step collects, so a step is never
blocked by something another step asks for.
"""

from __future__ import annotations

import re

from booking_intake.application.use_cases.branch_policy import policy_for
from booking_intake.domain.entities.intake_state import IntakeState
from booking_intake.domain.entities.wizard_step import WizardStep

MISSING_NAME = "Please enter your name"
MISSING_EMAIL = "Please enter your email"
INVALID_EMAIL = "Please enter a valid email"
MISSING_COMPANY = "Please enter your company name"
MISSING_DATE = "Please select a date"
MISSING_TIME = "Please select a time"
MISSING_FOCUS_AREA = "Please select at least one focus area"
MISSING_CONSULTATION_TYPE = "Please choose a consultation type"
MISSING_OBJECTIVES = "Please describe your objectives"

_EMAIL_SHAPE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

_REQUIRED_DETAIL_MESSAGES = {
    "specific_areas": MISSING_FOCUS_AREA,
    "consultation_type": MISSING_CONSULTATION_TYPE,
    "objectives": MISSING_OBJECTIVES,
}


def _blank(value: str | None) -> bool:
    return not value or not value.strip()


def _contact_problem(state: IntakeState, validate_email_format: bool) -> str | None:
    contact = state.contact
    if _blank(contact.client_name):
        return MISSING_NAME
    if _blank(contact.client_email):
        return MISSING_EMAIL
    if validate_email_format and not _EMAIL_SHAPE.match(contact.client_email.strip()):
        return INVALID_EMAIL
    if _blank(contact.company):
        return MISSING_COMPANY
    return None


def _schedule_problem(state: IntakeState) -> str | None:
    if state.schedule.selected_date is None:
        return MISSING_DATE
    if _blank(state.schedule.selected_time):
        return MISSING_TIME
    return None


def _details_problem(state: IntakeState) -> str | None:
    for name in policy_for(state.booking_type).required_fields:
        value = getattr(state.details, name, None)
        if not value or (isinstance(value, str) and _blank(value)):
            return _REQUIRED_DETAIL_MESSAGES[name]
    return None


def missing_requirement(
    step: WizardStep,
    state: IntakeState,
    validate_email_format: bool = False,
) -> str | None:
    """The first unmet requirement of `step`, or None when the step is satisfied."""
    if step is WizardStep.CONTACT:
        return _contact_problem(state, validate_email_format)
    if step is WizardStep.SCHEDULE:
        return _schedule_problem(state)
    if step is WizardStep.DETAILS:
        return _details_problem(state)
    return None


def can_advance(step: WizardStep, state: IntakeState, validate_email_format: bool = False) -> bool:
    return missing_requirement(step, state, validate_email_format) is None


def validation_message(step: WizardStep, state: IntakeState, validate_email_format: bool = False) -> str:
    return missing_requirement(step, state, validate_email_format) or ""


def first_blocking_step(state: IntakeState, validate_email_format: bool = False) -> WizardStep | None:
    for step in WizardStep:
        if not can_advance(step, state, validate_email_format):
            return step
    return None

from __future__ import annotations

from dataclasses import dataclass

from booking_intake.application.use_cases.branch_policy import consultation_option, policy_for, session_label
from booking_intake.application.utils.date_rules import format_long_date
from booking_intake.domain.entities.catalog import BUDGET_RANGES, TIMELINES, choice_label
from booking_intake.domain.entities.intake_state import IntakeState

NEXT_STEPS = (
    "You'll receive a confirmation email with meeting details",
    "A calendar invite will be sent to you",
    "We'll send a reminder 24 hours before the meeting",
)


@dataclass(frozen=True)
class ReviewItem:
    label: str
    value: str | int | tuple[str, ...]  # exactly what was entered
    display: str


@dataclass(frozen=True)
class ReviewSummary:
    heading: str
    session_label: str
    duration_label: str
    date_label: str
    meeting_type_label: str
    contact_label: str
    items: tuple[ReviewItem, ...]
    next_steps: tuple[str, ...]
    confirm_label: str


def _text_item(label: str, value: str | None) -> ReviewItem | None:
    if not value:
        return None
    return ReviewItem(label=label, value=value, display=value)


def _detail_items(state: IntakeState) -> list[ReviewItem | None]:
    audit = state.audit
    if audit is not None:
        return [
            ReviewItem("Focus Areas", audit.specific_areas, ", ".join(audit.specific_areas))
            if audit.specific_areas
            else None,
            ReviewItem("Current Tools & Systems", audit.current_systems, ", ".join(audit.current_systems))
            if audit.current_systems
            else None,
            _text_item("Revenue Goals & Objectives", audit.revenue_goals),
            _text_item("Current Challenges", audit.pain_points),
        ]

    consultation = state.consultation
    if consultation is None:
        return []
    option = consultation_option(consultation.consultation_type)
    return [
        ReviewItem("Consultation Type", option.value.value, option.label) if option else None,
        _text_item("Objectives", consultation.objectives),
        _text_item("Current Situation", consultation.current_situation),
        ReviewItem("Budget Range", consultation.budget, choice_label(BUDGET_RANGES, consultation.budget) or "")
        if consultation.budget
        else None,
        ReviewItem("Timeline", consultation.timeline, choice_label(TIMELINES, consultation.timeline) or "")
        if consultation.timeline
        else None,
        _text_item("Specific Questions", consultation.specific_questions),
    ]


def build_review(state: IntakeState) -> ReviewSummary:
    """Step-4 summary. Values entered in steps 1-3 are carried through untouched."""
    policy = policy_for(state.booking_type)
    contact = state.contact
    schedule = state.schedule

    date_part = format_long_date(schedule.selected_date) if schedule.selected_date else ""
    date_label = f"{date_part} at {schedule.selected_time or ''}".strip()

    items: list[ReviewItem | None] = [
        _text_item("Name", contact.client_name),
        _text_item("Email", contact.client_email),
        _text_item("Phone", contact.client_phone),
        _text_item("Company", contact.company),
        _text_item("Industry", contact.industry),
        ReviewItem("Team Size", contact.team_size, str(contact.team_size)) if contact.team_size else None,
    ]
    items.extend(_detail_items(state))

    return ReviewSummary(
        heading=policy.label,
        session_label=session_label(state),
        duration_label=f"{schedule.duration} minutes",
        date_label=date_label,
        meeting_type_label=schedule.meeting_type.display_name,
        contact_label=f"{contact.client_name} — {contact.client_email}",
        items=tuple(item for item in items if item is not None),
        next_steps=NEXT_STEPS + (policy.preparation_hint,),
        confirm_label=f"Confirm {policy.short_label}",
    )

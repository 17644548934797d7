from __future__ import annotations

from dataclasses import dataclass

from booking_intake.domain.entities.booking_type import BookingType, ConsultationType
from booking_intake.domain.entities.catalog import CONSULTATION_OPTIONS, ConsultationOption
from booking_intake.domain.entities.intake_state import (
    AuditDetails,
    BookingDetails,
    ConsultationDetails,
    IntakeState,
)


@dataclass(frozen=True)
class BranchPolicy:
    """Static per-type lookup: step-3 fields, default duration and copy."""

    booking_type: BookingType
    label: str
    short_label: str
    summary: str
    default_duration: int
    required_fields: tuple[str, ...]
    preparation_hint: str


_POLICIES: dict[BookingType, BranchPolicy] = {
    BookingType.REVENUE_AUDIT: BranchPolicy(
        booking_type=BookingType.REVENUE_AUDIT,
        label="Revenue Operations Audit",
        short_label="Audit",
        summary="Comprehensive 60-minute analysis of your revenue processes and optimization opportunities",
        default_duration=60,
        required_fields=("specific_areas",),
        preparation_hint="Prepare any revenue-related questions",
    ),
    BookingType.CONSULTATION: BranchPolicy(
        booking_type=BookingType.CONSULTATION,
        label="Strategy Consultation",
        short_label="Consultation",
        summary="Focused consultation session to address specific business challenges",
        default_duration=30,
        required_fields=("consultation_type", "objectives"),
        preparation_hint="Come prepared with your questions",
    ),
}

_CONSULTATION_OPTIONS: dict[ConsultationType, ConsultationOption] = {
    option.value: option for option in CONSULTATION_OPTIONS
}


def policy_for(booking_type: BookingType) -> BranchPolicy:
    return _POLICIES[booking_type]


def consultation_option(consultation_type: ConsultationType | None) -> ConsultationOption | None:
    if consultation_type is None:
        return None
    return _CONSULTATION_OPTIONS.get(consultation_type)


def duration_for(booking_type: BookingType, consultation_type: ConsultationType | None = None) -> int:
    """Duration in minutes for a type and, for consultations, an optional subtype."""
    if booking_type is BookingType.CONSULTATION:
        option = consultation_option(consultation_type)
        if option:
            return option.duration
    return policy_for(booking_type).default_duration


def empty_details(booking_type: BookingType) -> BookingDetails:
    if booking_type is BookingType.REVENUE_AUDIT:
        return AuditDetails()
    return ConsultationDetails()


def session_label(state: IntakeState) -> str:
    """Heading for what is being booked: the subtype label for consultations when chosen."""
    consultation = state.consultation
    if consultation is not None:
        option = consultation_option(consultation.consultation_type)
        return option.label if option else "Consultation"
    return policy_for(state.booking_type).label


def build_title(state: IntakeState) -> str:
    who = state.contact.company or state.contact.client_name
    return f"{session_label(state)} - {who}"

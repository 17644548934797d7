from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from booking_intake.application.dto.wizard_session import WizardSession
from booking_intake.application.use_cases.review import ReviewSummary
from booking_intake.domain.entities.booking_type import BookingType, ConsultationType, MeetingType
from booking_intake.domain.entities.intake_state import IntakeState
from booking_intake.domain.entities.notification import Notification


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# -- requests ---------------------------------------------------------------


class StartWizardRequestSchema(CamelModel):
    type: BookingType | None = None
    time_zone: str | None = None


class ContactPatchSchema(CamelModel):
    client_name: str | None = None
    client_email: str | None = None
    client_phone: str | None = None
    company: str | None = None
    industry: str | None = None
    team_size: int | None = Field(default=None, ge=1)


class BookingTypeRequestSchema(CamelModel):
    type: BookingType


class DateRequestSchema(CamelModel):
    selected_date: date | None = None


class TimeRequestSchema(CamelModel):
    selected_time: str | None = None


class MeetingTypeRequestSchema(CamelModel):
    meeting_type: MeetingType


class AuditPatchSchema(CamelModel):
    specific_areas: list[str] | None = None
    current_systems: list[str] | str | None = None
    revenue_goals: str | None = None
    pain_points: str | None = None


class ConsultationPatchSchema(CamelModel):
    consultation_type: ConsultationType | None = None
    objectives: str | None = None
    current_situation: str | None = None
    budget: str | None = None
    timeline: str | None = None
    specific_questions: str | None = None


# -- responses --------------------------------------------------------------


class NotificationSchema(CamelModel):
    level: str
    title: str
    message: str

    @classmethod
    def from_entity(cls, notification: Notification) -> "NotificationSchema":
        return cls(level=notification.level.value, title=notification.title, message=notification.message)


class AvailabilitySchema(CamelModel):
    status: str
    slots: list[str] = Field(default_factory=list)
    headline: str | None = None
    hint: str | None = None


class IntakeStateSchema(CamelModel):
    type: BookingType
    client_name: str
    client_email: str
    client_phone: str | None = None
    company: str
    industry: str | None = None
    team_size: int | None = None
    selected_date: date | None = None
    selected_time: str | None = None
    duration: int
    time_zone: str
    meeting_type: MeetingType
    specific_areas: list[str] | None = None
    current_systems: list[str] | None = None
    revenue_goals: str | None = None
    pain_points: str | None = None
    consultation_type: ConsultationType | None = None
    objectives: str | None = None
    current_situation: str | None = None
    budget: str | None = None
    timeline: str | None = None
    specific_questions: str | None = None

    @classmethod
    def from_state(cls, state: IntakeState) -> "IntakeStateSchema":
        contact = state.contact
        schedule = state.schedule
        fields: dict[str, Any] = {
            "type": state.booking_type,
            "client_name": contact.client_name,
            "client_email": contact.client_email,
            "client_phone": contact.client_phone,
            "company": contact.company,
            "industry": contact.industry,
            "team_size": contact.team_size,
            "selected_date": schedule.selected_date,
            "selected_time": schedule.selected_time,
            "duration": schedule.duration,
            "time_zone": schedule.time_zone,
            "meeting_type": schedule.meeting_type,
        }
        if state.audit is not None:
            fields.update(
                specific_areas=list(state.audit.specific_areas),
                current_systems=list(state.audit.current_systems),
                revenue_goals=state.audit.revenue_goals,
                pain_points=state.audit.pain_points,
            )
        if state.consultation is not None:
            fields.update(
                consultation_type=state.consultation.consultation_type,
                objectives=state.consultation.objectives,
                current_situation=state.consultation.current_situation,
                budget=state.consultation.budget,
                timeline=state.consultation.timeline,
                specific_questions=state.consultation.specific_questions,
            )
        return cls(**fields)


class WizardSnapshotSchema(CamelModel):
    session_id: str
    step: int
    step_name: str
    can_advance: bool
    validation_message: str
    is_submitting: bool
    state: IntakeStateSchema
    availability: AvailabilitySchema
    notifications: list[NotificationSchema] = Field(default_factory=list)

    @classmethod
    def from_session(cls, session_id: str, session: WizardSession) -> "WizardSnapshotSchema":
        wizard = session.wizard
        view = wizard.availability()
        return cls(
            session_id=session_id,
            step=int(wizard.step),
            step_name=wizard.step.name.lower(),
            can_advance=wizard.can_advance,
            validation_message=wizard.validation_message,
            is_submitting=wizard.is_submitting,
            state=IntakeStateSchema.from_state(wizard.state),
            availability=AvailabilitySchema(
                status=view.status, slots=list(view.slots), headline=view.headline, hint=view.hint
            ),
            notifications=[NotificationSchema.from_entity(n) for n in session.notifier.drain()],
        )


class ReviewItemSchema(CamelModel):
    label: str
    value: Any
    display: str


class ReviewSchema(CamelModel):
    heading: str
    session_label: str
    duration_label: str
    date_label: str
    meeting_type_label: str
    contact_label: str
    items: list[ReviewItemSchema]
    next_steps: list[str]
    confirm_label: str

    @classmethod
    def from_summary(cls, summary: ReviewSummary) -> "ReviewSchema":
        return cls(
            heading=summary.heading,
            session_label=summary.session_label,
            duration_label=summary.duration_label,
            date_label=summary.date_label,
            meeting_type_label=summary.meeting_type_label,
            contact_label=summary.contact_label,
            items=[
                ReviewItemSchema(
                    label=item.label,
                    value=list(item.value) if isinstance(item.value, tuple) else item.value,
                    display=item.display,
                )
                for item in summary.items
            ],
            next_steps=list(summary.next_steps),
            confirm_label=summary.confirm_label,
        )


class SubmitResponseSchema(CamelModel):
    action: str
    booking: dict[str, Any] | None = None
    error: str | None = None
    notifications: list[NotificationSchema] = Field(default_factory=list)


class OptionSchema(CamelModel):
    value: str
    label: str
    duration: int | None = None
    description: str | None = None


class CatalogResponseSchema(CamelModel):
    booking_types: list[OptionSchema]
    consultation_types: list[OptionSchema]
    focus_areas: list[str]
    industries: list[str]
    budget_ranges: list[OptionSchema]
    timelines: list[OptionSchema]
    meeting_types: list[OptionSchema]
    time_slots: list[str]
    selectable_dates: list[date]

from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import date, datetime, timezone
from typing import Any, Callable

from booking_intake.application.exceptions import SlotUnavailableError, StepGateError
from booking_intake.application.ports.booking_api import BookingApiPort
from booking_intake.application.ports.notifier import NotifierPort
from booking_intake.application.use_cases.availability import AvailabilityResolver, AvailabilityView
from booking_intake.application.use_cases.branch_policy import duration_for, empty_details
from booking_intake.application.use_cases.review import ReviewSummary, build_review
from booking_intake.application.use_cases.step_gate import first_blocking_step, missing_requirement
from booking_intake.application.use_cases.submission import (
    BookingCompleteCallback,
    SubmissionPipeline,
    SubmissionResult,
)
from booking_intake.application.utils.date_rules import is_date_selectable, today_in
from booking_intake.domain.entities.availability import AvailabilityKey
from booking_intake.domain.entities.booking_type import BookingType, ConsultationType, MeetingType
from booking_intake.domain.entities.intake_state import (
    AuditDetails,
    ConsultationDetails,
    ContactInfo,
    IntakeState,
    Schedule,
)
from booking_intake.domain.entities.wizard_step import WizardStep

_CONTACT_FIELDS = {"client_name", "client_email", "client_phone", "company", "industry", "team_size"}
_AUDIT_TEXT_FIELDS = {"revenue_goals", "pain_points"}
_CONSULTATION_TEXT_FIELDS = {"objectives", "current_situation", "budget", "timeline", "specific_questions"}


def split_systems(text: str) -> tuple[str, ...]:
    """Split comma-separated input, dropping blank entries."""
    return tuple(part.strip() for part in text.split(",") if part.strip())


class IntakeWizard:
    """
    One booking session: the intake state, the current step and the two
    network-backed collaborators (availability and submission).

    Field edits are allowed on any step. Moving forward goes through the step
    gate; moving back is always allowed.
    """

    def __init__(
        self,
        api: BookingApiPort,
        notifier: NotifierPort,
        booking_type: BookingType = BookingType.REVENUE_AUDIT,
        time_zone: str = "UTC",
        on_booking_complete: BookingCompleteCallback | None = None,
        validate_email_format: bool = False,
        clear_stale_time: bool = False,
        send_idempotency_key: bool = False,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._state = IntakeState(
            booking_type=booking_type,
            schedule=Schedule(duration=duration_for(booking_type), time_zone=time_zone),
            details=empty_details(booking_type),
        )
        self._step = WizardStep.CONTACT
        self._availability = AvailabilityResolver(api=api, notifier=notifier)
        self._pipeline = SubmissionPipeline(api=api, notifier=notifier, on_booking_complete=on_booking_complete)
        self._requested_key: AvailabilityKey | None = None
        self._submitting = False
        self._completed = False
        self._validate_email_format = validate_email_format
        self._clear_stale_time = clear_stale_time
        self._idempotency_key = uuid.uuid4().hex if send_idempotency_key else None
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._logger = logging.getLogger(__name__)

    @property
    def state(self) -> IntakeState:
        return self._state

    @property
    def step(self) -> WizardStep:
        return self._step

    @property
    def is_submitting(self) -> bool:
        return self._submitting

    @property
    def is_completed(self) -> bool:
        return self._completed

    @property
    def can_advance(self) -> bool:
        return self.validation_message == ""

    @property
    def validation_message(self) -> str:
        return missing_requirement(self._step, self._state, self._validate_email_format) or ""

    def availability(self) -> AvailabilityView:
        return self._availability.view()

    def today(self) -> date:
        return today_in(self._state.schedule.time_zone, self._clock())

    def is_date_selectable(self, candidate: date) -> bool:
        return is_date_selectable(candidate, self.today())

    # -- step 1 -------------------------------------------------------------

    def update_contact(self, **changes: Any) -> IntakeState:
        unknown = set(changes) - _CONTACT_FIELDS
        if unknown:
            raise ValueError(f"Unknown contact fields: {sorted(unknown)}")
        team_size = changes.get("team_size")
        if team_size is not None and (not isinstance(team_size, int) or team_size < 1):
            raise ValueError("Team size must be a positive number")
        contact: ContactInfo = replace(self._state.contact, **changes)
        self._state = replace(self._state, contact=contact)
        return self._state

    async def set_booking_type(self, booking_type: BookingType) -> IntakeState:
        """Only allowed on step 1. Always resets the duration to the type default."""
        if self._step is not WizardStep.CONTACT:
            raise StepGateError("Booking type can only be changed in the first step")

        details = self._state.details
        if booking_type is not self._state.booking_type:
            details = empty_details(booking_type)
        schedule = replace(self._state.schedule, duration=duration_for(booking_type))
        self._state = replace(self._state, booking_type=booking_type, schedule=schedule, details=details)
        await self._on_schedule_inputs_changed()
        return self._state

    # -- step 2 -------------------------------------------------------------

    async def select_date(self, selected_date: date | None) -> IntakeState:
        if selected_date is not None and not self.is_date_selectable(selected_date):
            raise SlotUnavailableError(f"{selected_date.isoformat()} is not available for booking")
        schedule = replace(self._state.schedule, selected_date=selected_date)
        self._state = replace(self._state, schedule=schedule)
        await self._on_schedule_inputs_changed()
        return self._state

    def select_time(self, selected_time: str | None) -> IntakeState:
        schedule = self._state.schedule
        if selected_time is not None:
            key = self._current_key()
            if key is None or not self._availability.offers(key, selected_time):
                raise SlotUnavailableError(f"{selected_time} is not an available slot")
        self._state = replace(self._state, schedule=replace(schedule, selected_time=selected_time))
        return self._state

    def set_meeting_type(self, meeting_type: MeetingType) -> IntakeState:
        self._state = replace(self._state, schedule=replace(self._state.schedule, meeting_type=meeting_type))
        return self._state

    async def refresh_availability(self) -> AvailabilityView:
        """Fetch slots for the current (date, type) even if they were fetched before."""
        key = self._current_key()
        if key is None:
            self._requested_key = None
            self._availability.reset()
            return self._availability.view()
        self._requested_key = key
        await self._availability.resolve(key.selected_date, key.booking_type)
        return self._availability.view()

    async def _on_schedule_inputs_changed(self) -> None:
        key = self._current_key()
        if key == self._requested_key:
            return
        if self._clear_stale_time and self._state.schedule.selected_time is not None:
            self._state = replace(self._state, schedule=replace(self._state.schedule, selected_time=None))
        await self.refresh_availability()

    def _current_key(self) -> AvailabilityKey | None:
        selected_date = self._state.schedule.selected_date
        if selected_date is None:
            return None
        return AvailabilityKey(selected_date=selected_date, booking_type=self._state.booking_type)

    # -- step 3 -------------------------------------------------------------

    def _audit_details(self) -> AuditDetails:
        audit = self._state.audit
        if audit is None:
            raise ValueError("Audit details only apply to revenue audit bookings")
        return audit

    def _consultation_details(self) -> ConsultationDetails:
        consultation = self._state.consultation
        if consultation is None:
            raise ValueError("Consultation details only apply to consultation bookings")
        return consultation

    def toggle_focus_area(self, area: str, selected: bool | None = None) -> IntakeState:
        audit = self._audit_details()
        area = area.strip()
        if not area:
            raise ValueError("Focus area must not be empty")
        present = area in audit.specific_areas
        want = (not present) if selected is None else selected
        if want and not present:
            areas = audit.specific_areas + (area,)
        elif not want and present:
            areas = tuple(a for a in audit.specific_areas if a != area)
        else:
            areas = audit.specific_areas
        self._state = replace(self._state, details=replace(audit, specific_areas=areas))
        return self._state

    def set_focus_areas(self, areas: list[str]) -> IntakeState:
        audit = self._audit_details()
        unique: list[str] = []
        for area in areas:
            area = area.strip()
            if area and area not in unique:
                unique.append(area)
        self._state = replace(self._state, details=replace(audit, specific_areas=tuple(unique)))
        return self._state

    def set_current_systems(self, systems: list[str] | str) -> IntakeState:
        audit = self._audit_details()
        if isinstance(systems, str):
            parsed = split_systems(systems)
        else:
            parsed = tuple(s.strip() for s in systems if s.strip())
        self._state = replace(self._state, details=replace(audit, current_systems=parsed))
        return self._state

    def update_audit(self, **changes: Any) -> IntakeState:
        unknown = set(changes) - _AUDIT_TEXT_FIELDS
        if unknown:
            raise ValueError(f"Unknown audit fields: {sorted(unknown)}")
        self._state = replace(self._state, details=replace(self._audit_details(), **changes))
        return self._state

    def set_consultation_type(self, consultation_type: ConsultationType) -> IntakeState:
        """Overwrites the duration with the subtype's fixed length."""
        consultation = self._consultation_details()
        schedule = replace(
            self._state.schedule,
            duration=duration_for(BookingType.CONSULTATION, consultation_type),
        )
        self._state = replace(
            self._state,
            schedule=schedule,
            details=replace(consultation, consultation_type=consultation_type),
        )
        return self._state

    def update_consultation(self, **changes: Any) -> IntakeState:
        unknown = set(changes) - _CONSULTATION_TEXT_FIELDS
        if unknown:
            raise ValueError(f"Unknown consultation fields: {sorted(unknown)}")
        self._state = replace(self._state, details=replace(self._consultation_details(), **changes))
        return self._state

    # -- navigation ---------------------------------------------------------

    def advance(self) -> WizardStep:
        message = self.validation_message
        if message:
            raise StepGateError(message)
        self._step = self._step.next()
        self._logger.info("Wizard advanced", extra={"step": int(self._step)})
        return self._step

    def retreat(self) -> WizardStep:
        self._step = self._step.previous()
        return self._step

    # -- step 4 -------------------------------------------------------------

    def review(self) -> ReviewSummary:
        if self._step is not WizardStep.REVIEW:
            raise StepGateError("Review is only available on the last step")
        return build_review(self._state)

    async def submit(self) -> SubmissionResult:
        if self._submitting:
            return SubmissionResult(action="in_progress")
        if self._step is not WizardStep.REVIEW:
            raise StepGateError("Bookings can only be submitted from the review step")
        blocking = first_blocking_step(self._state, self._validate_email_format)
        if blocking is not None:
            raise StepGateError(missing_requirement(blocking, self._state, self._validate_email_format))

        self._submitting = True
        try:
            result = await self._pipeline.submit(self._state, self._step, idempotency_key=self._idempotency_key)
        finally:
            self._submitting = False

        if result.ok:
            self._completed = True
        return result

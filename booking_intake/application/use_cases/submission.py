from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable

from booking_intake.application.exceptions import BookingApiError
from booking_intake.application.ports.booking_api import BookingApiPort
from booking_intake.application.ports.notifier import NotifierPort
from booking_intake.application.use_cases.branch_policy import build_title
from booking_intake.application.use_cases.step_gate import can_advance
from booking_intake.application.utils.date_rules import compose_scheduled_at, to_iso_instant
from booking_intake.domain.entities.intake_state import IntakeState
from booking_intake.domain.entities.notification import Notification, NotificationLevel
from booking_intake.domain.entities.wizard_step import WizardStep

SUCCESS_TITLE = "Booking Confirmed!"
FAILURE_TITLE = "Booking Failed"
GENERIC_FAILURE_MESSAGE = "There was an error creating your booking."

BookingCompleteCallback = Callable[[dict[str, Any]], None]


@dataclass(frozen=True)
class SubmissionResult:
    action: str  # "booked", "failed", "skipped", "in_progress"
    booking: dict[str, Any] | None = None
    error: str | None = None
    payload: dict[str, Any] | None = None

    @property
    def ok(self) -> bool:
        return self.action == "booked"


def build_booking_payload(state: IntakeState, scheduled_at: datetime, title: str) -> dict[str, Any]:
    """Request body for the booking endpoint. Keys match the backend's camelCase schema."""
    contact = state.contact
    schedule = state.schedule
    payload: dict[str, Any] = {
        "type": state.booking_type.value,
        "clientName": contact.client_name,
        "clientEmail": contact.client_email,
        "clientPhone": contact.client_phone,
        "company": contact.company,
        "industry": contact.industry,
        "teamSize": contact.team_size,
        "selectedDate": schedule.selected_date.isoformat() if schedule.selected_date else None,
        "selectedTime": schedule.selected_time,
        "duration": schedule.duration,
        "timeZone": schedule.time_zone,
        "meetingType": schedule.meeting_type.value,
    }

    audit = state.audit
    consultation = state.consultation
    if audit is not None:
        payload.update(
            {
                "specificAreas": list(audit.specific_areas),
                "currentSystems": list(audit.current_systems),
                "revenueGoals": audit.revenue_goals,
                "painPoints": audit.pain_points,
            }
        )
    elif consultation is not None:
        payload.update(
            {
                "consultationType": consultation.consultation_type.value if consultation.consultation_type else None,
                "objectives": consultation.objectives,
                "currentSituation": consultation.current_situation,
                "budget": consultation.budget,
                "timeline": consultation.timeline,
                "specificQuestions": consultation.specific_questions,
            }
        )

    payload["scheduledAt"] = to_iso_instant(scheduled_at)
    payload["title"] = title
    return {k: v for k, v in payload.items() if v is not None}


class SubmissionPipeline:
    def __init__(
        self,
        api: BookingApiPort,
        notifier: NotifierPort,
        on_booking_complete: BookingCompleteCallback | None = None,
    ) -> None:
        self._api = api
        self._notifier = notifier
        self._on_booking_complete = on_booking_complete
        self._logger = logging.getLogger(__name__)

    async def submit(
        self,
        state: IntakeState,
        step: WizardStep,
        idempotency_key: str | None = None,
    ) -> SubmissionResult:
        if step is not WizardStep.REVIEW or not can_advance(step, state):
            self._logger.warning("Submission attempted outside review step", extra={"step": int(step)})
            return SubmissionResult(action="skipped")

        try:
            scheduled_at = compose_scheduled_at(
                state.schedule.selected_date,
                state.schedule.selected_time,
                state.schedule.time_zone,
            )
        except ValueError as e:
            self._logger.error(
                "Could not compose booking time",
                extra={"booking_type": state.booking_type.value, "error": str(e)},
            )
            self._notifier.notify(
                Notification(level=NotificationLevel.ERROR, title=FAILURE_TITLE, message=GENERIC_FAILURE_MESSAGE)
            )
            return SubmissionResult(action="failed", error=GENERIC_FAILURE_MESSAGE)
        if scheduled_at is None:
            self._logger.warning("Submission without date/time, ignoring", extra={"step": int(step)})
            return SubmissionResult(action="skipped")

        payload = build_booking_payload(state, scheduled_at, build_title(state))

        try:
            booking = await self._api.create_booking(state.booking_type, payload, idempotency_key=idempotency_key)
        except BookingApiError as e:
            message = e.detail or GENERIC_FAILURE_MESSAGE
            self._logger.error(
                "Error creating booking",
                extra={"booking_type": state.booking_type.value, "status": e.status_code, "error": str(e)},
            )
            self._notifier.notify(Notification(level=NotificationLevel.ERROR, title=FAILURE_TITLE, message=message))
            return SubmissionResult(action="failed", error=message, payload=payload)

        kind = "revenue audit" if state.is_audit else "consultation"
        self._notifier.notify(
            Notification(
                level=NotificationLevel.SUCCESS,
                title=SUCCESS_TITLE,
                message=f"Your {kind} has been scheduled successfully.",
            )
        )
        self._logger.info(
            "Booking created",
            extra={"booking_type": state.booking_type.value, "status": "booked"},
        )
        if self._on_booking_complete is not None:
            self._on_booking_complete(booking)
        return SubmissionResult(action="booked", booking=booking, payload=payload)

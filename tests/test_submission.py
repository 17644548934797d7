"""Tests for payload assembly and the submission pipeline."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from booking_intake.application.exceptions import BookingApiError
from booking_intake.application.use_cases.submission import (
    FAILURE_TITLE,
    GENERIC_FAILURE_MESSAGE,
    SUCCESS_TITLE,
    SubmissionPipeline,
    build_booking_payload,
)
from booking_intake.domain.entities.booking_type import BookingType, ConsultationType, MeetingType
from booking_intake.domain.entities.intake_state import (
    AuditDetails,
    ConsultationDetails,
    ContactInfo,
    IntakeState,
    Schedule,
)
from booking_intake.domain.entities.notification import NotificationLevel
from booking_intake.domain.entities.wizard_step import WizardStep
from conftest import TIME_ZONE, TUESDAY


def _audit_state(**schedule_changes) -> IntakeState:
    schedule = dict(selected_date=TUESDAY, selected_time="10:00", duration=60, time_zone=TIME_ZONE)
    schedule.update(schedule_changes)
    return IntakeState(
        booking_type=BookingType.REVENUE_AUDIT,
        contact=ContactInfo(
            client_name="Jane Doe",
            client_email="jane@x.com",
            client_phone="+1 555 0100",
            company="Acme",
            team_size=12,
        ),
        schedule=Schedule(**schedule),
        details=AuditDetails(
            specific_areas=("Sales Process", "Pricing Strategy"),
            current_systems=("Salesforce", "HubSpot"),
            revenue_goals="Double ARR",
        ),
    )


@pytest.fixture
def pipeline(api, notifier, completed) -> SubmissionPipeline:
    return SubmissionPipeline(api=api, notifier=notifier, on_booking_complete=completed.append)


def test_audit_payload_shape():
    state = _audit_state()
    payload = build_booking_payload(state, datetime(2026, 10, 20, 14, tzinfo=timezone.utc), "t")
    assert payload["type"] == "revenue-audit"
    assert payload["specificAreas"] == ["Sales Process", "Pricing Strategy"]
    assert payload["currentSystems"] == ["Salesforce", "HubSpot"]
    assert payload["revenueGoals"] == "Double ARR"
    assert payload["teamSize"] == 12
    assert payload["selectedDate"] == "2026-10-20"
    assert payload["scheduledAt"] == "2026-10-20T14:00:00.000Z"
    assert payload["meetingType"] == "VIDEO_CALL"
    assert "painPoints" not in payload
    assert "objectives" not in payload
    assert "consultationType" not in payload


def test_consultation_payload_has_no_audit_fields():
    state = IntakeState(
        booking_type=BookingType.CONSULTATION,
        contact=ContactInfo(client_name="Jane Doe", client_email="jane@x.com", company="Acme"),
        schedule=Schedule(selected_date=TUESDAY, selected_time="10:00", duration=45, time_zone=TIME_ZONE,
                          meeting_type=MeetingType.PHONE_CALL),
        details=ConsultationDetails(consultation_type=ConsultationType.STRATEGY, objectives="Grow", budget="discuss"),
    )
    payload = build_booking_payload(state, datetime(2026, 10, 20, 14, tzinfo=timezone.utc), "t")
    assert payload["consultationType"] == "STRATEGY"
    assert payload["budget"] == "discuss"
    assert payload["meetingType"] == "PHONE_CALL"
    assert "specificAreas" not in payload
    assert "currentSystems" not in payload


@pytest.mark.asyncio
async def test_successful_submission(pipeline, api, notifier, completed):
    result = await pipeline.submit(_audit_state(), WizardStep.REVIEW)

    assert result.ok
    assert result.action == "booked"
    booking_type, payload, key = api.booking_calls[0]
    assert booking_type is BookingType.REVENUE_AUDIT
    assert payload["title"] == "Revenue Operations Audit - Acme"
    assert payload["scheduledAt"] == "2026-10-20T14:00:00.000Z"
    assert key is None
    assert completed == [result.booking]
    assert notifier.notifications[0].level is NotificationLevel.SUCCESS
    assert notifier.notifications[0].title == SUCCESS_TITLE
    assert notifier.notifications[0].message == "Your revenue audit has been scheduled successfully."


@pytest.mark.asyncio
async def test_backend_error_message_is_surfaced(pipeline, api, notifier, completed):
    api.booking_error = BookingApiError("booking_error_409", status_code=409, detail="Slot already taken")
    result = await pipeline.submit(_audit_state(), WizardStep.REVIEW)

    assert result.action == "failed"
    assert result.error == "Slot already taken"
    assert notifier.notifications[0].title == FAILURE_TITLE
    assert notifier.notifications[0].message == "Slot already taken"
    assert completed == []


@pytest.mark.asyncio
async def test_generic_message_without_backend_detail(pipeline, api):
    api.booking_error = BookingApiError("booking_api_connection_failed")
    result = await pipeline.submit(_audit_state(), WizardStep.REVIEW)
    assert result.error == GENERIC_FAILURE_MESSAGE


@pytest.mark.asyncio
async def test_missing_time_is_a_silent_no_op(pipeline, api, notifier):
    result = await pipeline.submit(_audit_state(selected_time=None), WizardStep.REVIEW)
    assert result.action == "skipped"
    assert api.booking_calls == []
    assert notifier.notifications == []


@pytest.mark.asyncio
async def test_only_submits_from_review(pipeline, api):
    result = await pipeline.submit(_audit_state(), WizardStep.DETAILS)
    assert result.action == "skipped"
    assert api.booking_calls == []


@pytest.mark.asyncio
async def test_idempotency_key_is_forwarded(pipeline, api):
    await pipeline.submit(_audit_state(), WizardStep.REVIEW, idempotency_key="abc123")
    assert api.booking_calls[0][2] == "abc123"


@pytest.mark.asyncio
async def test_unparseable_slot_label_fails_with_notification(pipeline, api, notifier, completed):
    result = await pipeline.submit(_audit_state(selected_time="9:00"), WizardStep.REVIEW)

    assert result.action == "failed"
    assert result.error == GENERIC_FAILURE_MESSAGE
    assert api.booking_calls == []
    assert completed == []
    assert notifier.notifications[0].level is NotificationLevel.ERROR
    assert notifier.notifications[0].title == FAILURE_TITLE
    assert notifier.notifications[0].message == GENERIC_FAILURE_MESSAGE

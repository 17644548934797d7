"""Tests for the wizard session: edits, navigation, availability effect and submission."""

from __future__ import annotations

import asyncio

import pytest

from booking_intake.application.exceptions import BookingApiError, SlotUnavailableError, StepGateError
from booking_intake.domain.entities.booking_type import BookingType, ConsultationType, MeetingType
from booking_intake.domain.entities.wizard_step import WizardStep
from conftest import MONDAY, SATURDAY, TODAY, TUESDAY, WEDNESDAY


async def _fill_audit(wizard):
    wizard.update_contact(client_name="Jane Doe", client_email="jane@x.com", company="Acme")
    wizard.advance()
    await wizard.select_date(TUESDAY)
    wizard.select_time("10:00")
    wizard.advance()
    wizard.toggle_focus_area("Sales Process")
    wizard.advance()


class TestDefaults:
    def test_audit_defaults(self, make_wizard):
        wizard = make_wizard()
        assert wizard.step is WizardStep.CONTACT
        assert wizard.state.schedule.duration == 60
        assert wizard.state.schedule.meeting_type is MeetingType.VIDEO_CALL
        assert wizard.state.schedule.time_zone == "America/New_York"
        assert wizard.state.audit is not None
        assert wizard.state.consultation is None

    def test_consultation_defaults(self, make_wizard):
        wizard = make_wizard(BookingType.CONSULTATION)
        assert wizard.state.schedule.duration == 30
        assert wizard.state.consultation is not None
        assert wizard.state.audit is None


class TestBranchSelection:
    @pytest.mark.asyncio
    async def test_type_change_resets_duration(self, make_wizard):
        wizard = make_wizard(BookingType.CONSULTATION)
        wizard.set_consultation_type(ConsultationType.TECHNICAL)
        assert wizard.state.schedule.duration == 60

        await wizard.set_booking_type(BookingType.CONSULTATION)
        assert wizard.state.schedule.duration == 30

        await wizard.set_booking_type(BookingType.REVENUE_AUDIT)
        assert wizard.state.schedule.duration == 60
        assert wizard.state.audit is not None

    def test_subtype_overwrites_duration(self, make_wizard):
        wizard = make_wizard(BookingType.CONSULTATION)
        wizard.set_consultation_type(ConsultationType.STRATEGY)
        assert wizard.state.schedule.duration == 45
        wizard.set_consultation_type(ConsultationType.TECHNICAL)
        assert wizard.state.schedule.duration == 60

    @pytest.mark.asyncio
    async def test_type_locked_after_first_step(self, make_wizard):
        wizard = make_wizard()
        wizard.update_contact(client_name="Jane", client_email="j@x.com", company="Acme")
        wizard.advance()
        with pytest.raises(StepGateError):
            await wizard.set_booking_type(BookingType.CONSULTATION)
        wizard.retreat()
        await wizard.set_booking_type(BookingType.CONSULTATION)
        assert wizard.state.booking_type is BookingType.CONSULTATION

    def test_variant_fields_rejected_for_other_type(self, make_wizard):
        wizard = make_wizard()
        with pytest.raises(ValueError):
            wizard.update_consultation(objectives="x")
        with pytest.raises(ValueError):
            wizard.set_consultation_type(ConsultationType.GENERAL)


class TestNavigation:
    def test_cannot_advance_past_unsatisfied_step(self, make_wizard):
        wizard = make_wizard()
        assert wizard.can_advance is False
        assert wizard.validation_message == "Please enter your name"
        with pytest.raises(StepGateError, match="Please enter your name"):
            wizard.advance()
        assert wizard.step is WizardStep.CONTACT

    def test_retreat_is_never_gated(self, make_wizard):
        wizard = make_wizard()
        assert wizard.retreat() is WizardStep.CONTACT
        wizard.update_contact(client_name="Jane", client_email="j@x.com", company="Acme")
        wizard.advance()
        assert wizard.can_advance is False
        assert wizard.retreat() is WizardStep.CONTACT

    @pytest.mark.asyncio
    async def test_review_is_terminal(self, make_wizard):
        wizard = make_wizard()
        await _fill_audit(wizard)
        assert wizard.step is WizardStep.REVIEW
        assert wizard.advance() is WizardStep.REVIEW


class TestScheduling:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("blocked", [TODAY, SATURDAY])
    async def test_pre_filter_rejects_dates(self, make_wizard, api, blocked):
        wizard = make_wizard()
        with pytest.raises(SlotUnavailableError):
            await wizard.select_date(blocked)
        assert api.availability_calls == []

    @pytest.mark.asyncio
    async def test_fetch_once_per_date_and_type(self, make_wizard, api):
        wizard = make_wizard()
        await wizard.select_date(TUESDAY)
        await wizard.select_date(TUESDAY)
        assert api.availability_calls == [(BookingType.REVENUE_AUDIT, TUESDAY)]

        await wizard.set_booking_type(BookingType.CONSULTATION)
        assert api.availability_calls[-1] == (BookingType.CONSULTATION, TUESDAY)

        await wizard.select_date(WEDNESDAY)
        assert api.availability_calls[-1] == (BookingType.CONSULTATION, WEDNESDAY)
        assert len(api.availability_calls) == 3

    @pytest.mark.asyncio
    async def test_clearing_date_returns_to_idle(self, make_wizard):
        wizard = make_wizard()
        await wizard.select_date(TUESDAY)
        await wizard.select_date(None)
        assert wizard.availability().status == "idle"

    @pytest.mark.asyncio
    async def test_time_must_come_from_resolved_slots(self, make_wizard):
        wizard = make_wizard()
        with pytest.raises(SlotUnavailableError):
            wizard.select_time("10:00")
        await wizard.select_date(TUESDAY)
        with pytest.raises(SlotUnavailableError):
            wizard.select_time("11:00")
        wizard.select_time("10:00")
        assert wizard.state.schedule.selected_time == "10:00"

    @pytest.mark.asyncio
    async def test_empty_slots_keep_step_blocked(self, make_wizard, api):
        api.slots = []
        wizard = make_wizard()
        wizard.update_contact(client_name="Jane", client_email="j@x.com", company="Acme")
        wizard.advance()
        await wizard.select_date(TUESDAY)
        view = wizard.availability()
        assert view.status == "empty"
        assert view.headline == "No available slots"
        with pytest.raises(SlotUnavailableError):
            wizard.select_time("09:00")
        assert wizard.can_advance is False
        assert wizard.validation_message == "Please select a time"

    @pytest.mark.asyncio
    async def test_stale_time_kept_by_default(self, make_wizard):
        wizard = make_wizard()
        await wizard.select_date(TUESDAY)
        wizard.select_time("10:00")
        await wizard.select_date(WEDNESDAY)
        assert wizard.state.schedule.selected_time == "10:00"

    @pytest.mark.asyncio
    async def test_stale_time_cleared_when_configured(self, make_wizard):
        wizard = make_wizard(clear_stale_time=True)
        await wizard.select_date(TUESDAY)
        wizard.select_time("10:00")
        await wizard.select_date(WEDNESDAY)
        assert wizard.state.schedule.selected_time is None

    @pytest.mark.asyncio
    async def test_availability_failure_keeps_step_usable(self, make_wizard, api, notifier):
        api.availability_error = BookingApiError("availability_error_503", status_code=503)
        wizard = make_wizard()
        await wizard.select_date(TUESDAY)
        assert wizard.availability().slots == ()
        assert notifier.notifications[-1].message == "Failed to load available time slots."

        api.availability_error = None
        await wizard.select_date(MONDAY)
        wizard.select_time("09:00")
        assert wizard.state.schedule.selected_date == MONDAY


class TestAuditDetails:
    def test_focus_area_toggle(self, make_wizard):
        wizard = make_wizard()
        wizard.toggle_focus_area("Sales Process")
        wizard.toggle_focus_area("Data Analytics")
        assert wizard.state.audit.specific_areas == ("Sales Process", "Data Analytics")
        wizard.toggle_focus_area("Sales Process")
        assert wizard.state.audit.specific_areas == ("Data Analytics",)
        wizard.toggle_focus_area("Data Analytics", selected=True)
        assert wizard.state.audit.specific_areas == ("Data Analytics",)

    def test_current_systems_from_text(self, make_wizard):
        wizard = make_wizard()
        wizard.set_current_systems("Salesforce, HubSpot,, Stripe ,")
        assert wizard.state.audit.current_systems == ("Salesforce", "HubSpot", "Stripe")

    def test_team_size_must_be_positive(self, make_wizard):
        wizard = make_wizard()
        with pytest.raises(ValueError):
            wizard.update_contact(team_size=0)


@pytest.mark.asyncio
async def test_consultation_walkthrough(make_wizard, api, completed):
    wizard = make_wizard(BookingType.CONSULTATION)
    wizard.update_contact(client_name="Jane Doe", client_email="jane@x.com", company="Acme")
    wizard.advance()
    await wizard.select_date(TUESDAY)
    wizard.select_time("10:00")
    wizard.set_meeting_type(MeetingType.VIDEO_CALL)
    wizard.advance()
    wizard.set_consultation_type(ConsultationType.STRATEGY)
    wizard.update_consultation(objectives="Grow pipeline")
    wizard.advance()

    review = wizard.review()
    assert review.heading == "Strategy Consultation"
    assert review.session_label == "Business Strategy"
    assert review.duration_label == "45 minutes"
    assert review.date_label == "Tuesday, October 20, 2026 at 10:00"
    assert review.meeting_type_label == "Video Call"
    assert review.contact_label == "Jane Doe — jane@x.com"
    assert review.confirm_label == "Confirm Consultation"
    values = {item.label: item.value for item in review.items}
    assert values["Objectives"] == "Grow pipeline"
    assert values["Company"] == "Acme"
    assert values["Consultation Type"] == "STRATEGY"

    result = await wizard.submit()
    assert result.ok
    _, payload, _ = api.booking_calls[0]
    assert payload["duration"] == 45
    assert payload["consultationType"] == "STRATEGY"
    assert payload["title"] == "Business Strategy - Acme"
    assert payload["scheduledAt"] == "2026-10-20T14:00:00.000Z"
    assert completed == [result.booking]
    assert wizard.is_completed


@pytest.mark.asyncio
async def test_review_round_trips_audit_fields(make_wizard):
    wizard = make_wizard()
    wizard.update_contact(client_phone="+1 555 0100", industry="Finance", team_size=12)
    await _fill_audit(wizard)
    wizard.set_current_systems(["Salesforce", "Stripe"])
    wizard.update_audit(revenue_goals="Double ARR", pain_points="Churn")

    values = {item.label: item.value for item in wizard.review().items}
    assert values == {
        "Name": "Jane Doe",
        "Email": "jane@x.com",
        "Phone": "+1 555 0100",
        "Company": "Acme",
        "Industry": "Finance",
        "Team Size": 12,
        "Focus Areas": ("Sales Process",),
        "Current Tools & Systems": ("Salesforce", "Stripe"),
        "Revenue Goals & Objectives": "Double ARR",
        "Current Challenges": "Churn",
    }


@pytest.mark.asyncio
async def test_submit_rechecks_every_gate(make_wizard, api):
    wizard = make_wizard()
    await _fill_audit(wizard)
    wizard.toggle_focus_area("Sales Process")
    assert wizard.state.audit.specific_areas == ()
    with pytest.raises(StepGateError, match="focus area"):
        await wizard.submit()
    assert api.booking_calls == []


@pytest.mark.asyncio
async def test_submit_requires_review_step(make_wizard):
    wizard = make_wizard()
    with pytest.raises(StepGateError):
        await wizard.submit()


@pytest.mark.asyncio
async def test_failed_submission_keeps_data_for_retry(make_wizard, api):
    wizard = make_wizard()
    await _fill_audit(wizard)
    api.booking_error = BookingApiError("booking_error_500", status_code=500)

    result = await wizard.submit()
    assert result.action == "failed"
    assert wizard.step is WizardStep.REVIEW
    assert wizard.state.contact.client_name == "Jane Doe"
    assert not wizard.is_completed

    api.booking_error = None
    retry = await wizard.submit()
    assert retry.ok
    assert len(api.booking_calls) == 2


@pytest.mark.asyncio
async def test_duplicate_submit_while_in_flight(make_wizard, api):
    wizard = make_wizard()
    await _fill_audit(wizard)
    api.booking_gate = asyncio.Event()

    first = asyncio.create_task(wizard.submit())
    await asyncio.sleep(0)
    assert wizard.is_submitting
    second = await wizard.submit()
    assert second.action == "in_progress"

    api.booking_gate.set()
    assert (await first).ok
    assert len(api.booking_calls) == 1
    assert not wizard.is_submitting


@pytest.mark.asyncio
async def test_idempotency_key_stable_across_retries(make_wizard, api):
    wizard = make_wizard(send_idempotency_key=True)
    await _fill_audit(wizard)
    api.booking_error = BookingApiError("booking_error_502", status_code=502)
    await wizard.submit()
    api.booking_error = None
    await wizard.submit()
    keys = [call[2] for call in api.booking_calls]
    assert keys[0] is not None
    assert keys[0] == keys[1]

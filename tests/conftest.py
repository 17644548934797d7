"""Shared fixtures for booking intake tests."""
from __future__ import annotations

import asyncio
from datetime import date, datetime, timezone
from typing import Any

import pytest

from booking_intake.application.exceptions import BookingApiError
from booking_intake.application.ports.booking_api import BookingApiPort
from booking_intake.application.ports.notifier import NotifierPort
from booking_intake.application.use_cases.intake_wizard import IntakeWizard
from booking_intake.domain.entities.booking_type import BookingType
from booking_intake.domain.entities.notification import Notification

# Sunday 2026-10-18, noon UTC
NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)
TODAY = date(2026, 10, 18)
MONDAY = date(2026, 10, 19)
TUESDAY = date(2026, 10, 20)
WEDNESDAY = date(2026, 10, 21)
SATURDAY = date(2026, 10, 24)
TIME_ZONE = "America/New_York"


class FakeNotifier(NotifierPort):
    def __init__(self) -> None:
        self.notifications: list[Notification] = []

    def notify(self, notification: Notification) -> None:
        self.notifications.append(notification)


class FakeBookingApi(BookingApiPort):
    """Scriptable backend. Availability calls can be held open per date with `hold()`."""

    def __init__(self, slots: list[str] | None = None) -> None:
        self.slots = ["09:00", "10:00", "14:00"] if slots is None else slots
        self.slots_by_date: dict[date, list[str]] = {}
        self.availability_error: BookingApiError | None = None
        self.booking_error: BookingApiError | None = None
        self.availability_calls: list[tuple[BookingType, date]] = []
        self.booking_calls: list[tuple[BookingType, dict[str, Any], str | None]] = []
        self._gates: dict[date, asyncio.Event] = {}
        self.booking_gate: asyncio.Event | None = None

    def hold(self, selected_date: date) -> asyncio.Event:
        gate = asyncio.Event()
        self._gates[selected_date] = gate
        return gate

    async def fetch_availability(self, booking_type: BookingType, selected_date: date) -> list[str]:
        self.availability_calls.append((booking_type, selected_date))
        gate = self._gates.get(selected_date)
        if gate is not None:
            await gate.wait()
        if self.availability_error is not None:
            raise self.availability_error
        return list(self.slots_by_date.get(selected_date, self.slots))

    async def create_booking(
        self,
        booking_type: BookingType,
        payload: dict[str, Any],
        idempotency_key: str | None = None,
    ) -> dict[str, Any]:
        self.booking_calls.append((booking_type, payload, idempotency_key))
        if self.booking_gate is not None:
            await self.booking_gate.wait()
        if self.booking_error is not None:
            raise self.booking_error
        return {"id": f"bk_{len(self.booking_calls)}", **payload}


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def api() -> FakeBookingApi:
    return FakeBookingApi()


@pytest.fixture
def completed() -> list[dict[str, Any]]:
    return []


@pytest.fixture
def make_wizard(api, notifier, completed):
    def _make(booking_type: BookingType = BookingType.REVENUE_AUDIT, **kwargs: Any) -> IntakeWizard:
        return IntakeWizard(
            api=api,
            notifier=notifier,
            booking_type=booking_type,
            time_zone=kwargs.pop("time_zone", TIME_ZONE),
            on_booking_complete=completed.append,
            clock=lambda: NOW,
            **kwargs,
        )

    return _make

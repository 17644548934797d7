from __future__ import annotations

import logging
from datetime import date
from typing import Any

from booking_intake.application.ports.booking_api import BookingApiPort
from booking_intake.domain.entities.booking_type import BookingType
from booking_intake.domain.entities.catalog import DAILY_TIME_SLOTS


class MockBookingApi(BookingApiPort):
    """In-process booking backend: every daily slot is free until it is booked."""

    def __init__(self) -> None:
        self._bookings: dict[str, dict[str, Any]] = {}
        self._taken: set[tuple[BookingType, str, str]] = set()
        self._idempotency: dict[str, str] = {}
        self._logger = logging.getLogger(__name__)

    @property
    def bookings(self) -> list[dict[str, Any]]:
        return list(self._bookings.values())

    async def fetch_availability(self, booking_type: BookingType, selected_date: date) -> list[str]:
        day = selected_date.isoformat()
        return [slot for slot in DAILY_TIME_SLOTS if (booking_type, day, slot) not in self._taken]

    async def create_booking(
        self,
        booking_type: BookingType,
        payload: dict[str, Any],
        idempotency_key: str | None = None,
    ) -> dict[str, Any]:
        if idempotency_key and idempotency_key in self._idempotency:
            return self._bookings[self._idempotency[idempotency_key]]

        booking_id = f"mock_booking_{len(self._bookings) + 1}"
        record = {"id": booking_id, "status": "SCHEDULED", **payload}
        self._bookings[booking_id] = record
        self._taken.add((booking_type, str(payload.get("selectedDate")), str(payload.get("selectedTime"))))
        if idempotency_key:
            self._idempotency[idempotency_key] = booking_id

        self._logger.info(
            "Mock booking created",
            extra={"booking_type": booking_type.value, "date": payload.get("selectedDate"), "booking_id": booking_id},
        )
        return record

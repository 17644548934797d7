from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Any

from booking_intake.domain.entities.booking_type import BookingType


class BookingApiPort(ABC):
    @abstractmethod
    async def fetch_availability(self, booking_type: BookingType, selected_date: date) -> list[str]:
        """Return the free time-of-day slots ("09:00", ...) for a date. Raises BookingApiError."""
        raise NotImplementedError

    @abstractmethod
    async def create_booking(
        self,
        booking_type: BookingType,
        payload: dict[str, Any],
        idempotency_key: str | None = None,
    ) -> dict[str, Any]:
        """Create a booking. Returns the persisted record. Raises BookingApiError."""
        raise NotImplementedError

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

from booking_intake.application.exceptions import BookingApiError
from booking_intake.application.ports.booking_api import BookingApiPort
from booking_intake.application.ports.notifier import NotifierPort
from booking_intake.domain.entities.availability import (
    AvailabilityKey,
    AvailabilityState,
    AvailabilityStatus,
)
from booking_intake.domain.entities.booking_type import BookingType
from booking_intake.domain.entities.notification import Notification, NotificationLevel

AVAILABILITY_ERROR_TITLE = "Error"
AVAILABILITY_ERROR_MESSAGE = "Failed to load available time slots."


@dataclass(frozen=True)
class AvailabilityView:
    """What the time-slot panel should render."""

    status: str
    slots: tuple[str, ...]
    headline: str | None
    hint: str | None


class AvailabilityResolver:
    """
    Tracks free slots for the currently selected (date, booking type).

    Every request is tagged with its key and a sequence number. A response is
    applied only while it is still the latest request, so a slow answer for an
    earlier date never overwrites the current one.
    """

    def __init__(self, api: BookingApiPort, notifier: NotifierPort) -> None:
        self._api = api
        self._notifier = notifier
        self._state = AvailabilityState()
        self._sequence = 0
        self._logger = logging.getLogger(__name__)

    @property
    def state(self) -> AvailabilityState:
        return self._state

    def reset(self) -> None:
        self._sequence += 1
        self._state = AvailabilityState()

    def offers(self, key: AvailabilityKey, slot: str) -> bool:
        state = self._state
        return state.status is AvailabilityStatus.LOADED and state.key == key and slot in state.slots

    async def resolve(self, selected_date: date, booking_type: BookingType) -> AvailabilityState:
        key = AvailabilityKey(selected_date=selected_date, booking_type=booking_type)
        self._sequence += 1
        ticket = self._sequence
        self._state = AvailabilityState(status=AvailabilityStatus.LOADING, key=key)

        try:
            slots = await self._api.fetch_availability(booking_type, selected_date)
        except BookingApiError as e:
            if ticket != self._sequence:
                self._discard(key)
                return self._state
            self._logger.error(
                "Error loading availability",
                extra={"date": selected_date.isoformat(), "booking_type": booking_type.value, "error": str(e)},
            )
            self._notifier.notify(
                Notification(
                    level=NotificationLevel.ERROR,
                    title=AVAILABILITY_ERROR_TITLE,
                    message=AVAILABILITY_ERROR_MESSAGE,
                )
            )
            self._state = AvailabilityState(status=AvailabilityStatus.FAILED, key=key, error=str(e))
            return self._state

        if ticket != self._sequence:
            self._discard(key)
            return self._state

        self._state = AvailabilityState(status=AvailabilityStatus.LOADED, key=key, slots=tuple(slots))
        self._logger.info(
            "Availability loaded",
            extra={"date": selected_date.isoformat(), "booking_type": booking_type.value, "slot_count": len(slots)},
        )
        return self._state

    def view(self) -> AvailabilityView:
        state = self._state
        if state.status is AvailabilityStatus.IDLE:
            return AvailabilityView(status=state.status.value, slots=(), headline=None, hint="Please select a date first")
        if state.status is AvailabilityStatus.LOADING:
            return AvailabilityView(
                status=state.status.value, slots=(), headline=None, hint="Loading available times..."
            )
        if not state.slots:
            return AvailabilityView(
                status="failed" if state.status is AvailabilityStatus.FAILED else "empty",
                slots=(),
                headline="No available slots",
                hint="Please choose a different date",
            )
        return AvailabilityView(status=state.status.value, slots=state.slots, headline=None, hint=None)

    def _discard(self, key: AvailabilityKey) -> None:
        self._logger.debug(
            "Discarding stale availability response",
            extra={"date": key.selected_date.isoformat(), "booking_type": key.booking_type.value},
        )

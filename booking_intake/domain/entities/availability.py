from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

from booking_intake.domain.entities.booking_type import BookingType


class AvailabilityStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True)
class AvailabilityKey:
    selected_date: date
    booking_type: BookingType


@dataclass(frozen=True)
class AvailabilityState:
    status: AvailabilityStatus = AvailabilityStatus.IDLE
    key: AvailabilityKey | None = None
    slots: tuple[str, ...] = ()
    error: str | None = None

    @property
    def is_empty(self) -> bool:
        return self.status is AvailabilityStatus.LOADED and not self.slots

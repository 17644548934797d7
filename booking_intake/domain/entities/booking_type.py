from __future__ import annotations

from enum import Enum


class BookingType(str, Enum):
    REVENUE_AUDIT = "revenue-audit"
    CONSULTATION = "consultation"


class MeetingType(str, Enum):
    VIDEO_CALL = "VIDEO_CALL"
    PHONE_CALL = "PHONE_CALL"
    IN_PERSON = "IN_PERSON"

    @property
    def display_name(self) -> str:
        # VIDEO_CALL -> "Video Call"
        return self.value.replace("_", " ").title()


class ConsultationType(str, Enum):
    STRATEGY = "STRATEGY"
    TECHNICAL = "TECHNICAL"
    IMPLEMENTATION = "IMPLEMENTATION"
    OPTIMIZATION = "OPTIMIZATION"
    TRAINING = "TRAINING"
    GENERAL = "GENERAL"

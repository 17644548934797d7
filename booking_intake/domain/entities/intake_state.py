from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from booking_intake.domain.entities.booking_type import BookingType, ConsultationType, MeetingType


@dataclass(frozen=True)
class ContactInfo:
    client_name: str = ""
    client_email: str = ""
    client_phone: str | None = None
    company: str = ""
    industry: str | None = None
    team_size: int | None = None


@dataclass(frozen=True)
class Schedule:
    selected_date: date | None = None
    selected_time: str | None = None  # "HH:MM", one of the resolved slots
    duration: int = 60  # minutes
    time_zone: str = "UTC"  # IANA name, fixed at session start
    meeting_type: MeetingType = MeetingType.VIDEO_CALL


@dataclass(frozen=True)
class AuditDetails:
    specific_areas: tuple[str, ...] = ()  # unique, in selection order
    current_systems: tuple[str, ...] = ()
    revenue_goals: str | None = None
    pain_points: str | None = None


@dataclass(frozen=True)
class ConsultationDetails:
    consultation_type: ConsultationType | None = None
    objectives: str = ""
    current_situation: str | None = None
    budget: str | None = None
    timeline: str | None = None
    specific_questions: str | None = None


BookingDetails = AuditDetails | ConsultationDetails


@dataclass(frozen=True)
class IntakeState:
    """
    Everything collected for one in-progress booking.

    `details` is the variant for `booking_type`: AuditDetails for revenue audits,
    ConsultationDetails for consultations. The two never coexist.
    """

    booking_type: BookingType
    contact: ContactInfo = field(default_factory=ContactInfo)
    schedule: Schedule = field(default_factory=Schedule)
    details: BookingDetails = field(default_factory=AuditDetails)

    @property
    def is_audit(self) -> bool:
        return self.booking_type is BookingType.REVENUE_AUDIT

    @property
    def audit(self) -> AuditDetails | None:
        return self.details if isinstance(self.details, AuditDetails) else None

    @property
    def consultation(self) -> ConsultationDetails | None:
        return self.details if isinstance(self.details, ConsultationDetails) else None

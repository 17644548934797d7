from __future__ import annotations

from fastapi import APIRouter, Query

from booking_intake.api.v1.schemas import CatalogResponseSchema, OptionSchema
from booking_intake.application.use_cases.branch_policy import policy_for
from booking_intake.application.utils.date_rules import resolve_timezone, selectable_dates, today_in
from booking_intake.core.config import settings
from booking_intake.domain.entities.booking_type import BookingType, MeetingType
from booking_intake.domain.entities.catalog import (
    BUDGET_RANGES,
    CONSULTATION_OPTIONS,
    DAILY_TIME_SLOTS,
    INDUSTRIES,
    REVENUE_AUDIT_AREAS,
    TIMELINES,
)

router = APIRouter()


@router.get("/catalog", response_model=CatalogResponseSchema)
def catalog(
    time_zone: str | None = Query(None, alias="timeZone"),
    days: int | None = Query(None, ge=1, le=366),
):
    tz_name = resolve_timezone(time_zone, settings.DEFAULT_TIMEZONE)
    window = days or settings.CALENDAR_WINDOW_DAYS
    return CatalogResponseSchema(
        booking_types=[
            OptionSchema(
                value=bt.value,
                label=policy_for(bt).label,
                duration=policy_for(bt).default_duration,
                description=policy_for(bt).summary,
            )
            for bt in BookingType
        ],
        consultation_types=[
            OptionSchema(value=o.value.value, label=o.label, duration=o.duration) for o in CONSULTATION_OPTIONS
        ],
        focus_areas=list(REVENUE_AUDIT_AREAS),
        industries=list(INDUSTRIES),
        budget_ranges=[OptionSchema(value=o.value, label=o.label) for o in BUDGET_RANGES],
        timelines=[OptionSchema(value=o.value, label=o.label) for o in TIMELINES],
        meeting_types=[OptionSchema(value=m.value, label=m.display_name) for m in MeetingType],
        time_slots=list(DAILY_TIME_SLOTS),
        selectable_dates=selectable_dates(today_in(tz_name), window),
    )

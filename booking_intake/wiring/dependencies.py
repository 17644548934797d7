from functools import lru_cache
import logging
from typing import Any

from booking_intake.core.config import settings
from booking_intake.application.dto.wizard_session import WizardSession
from booking_intake.application.ports.booking_api import BookingApiPort
from booking_intake.application.use_cases.intake_wizard import IntakeWizard
from booking_intake.application.utils.date_rules import resolve_timezone
from booking_intake.domain.entities.booking_type import BookingType
from booking_intake.infrastructure.booking_api.http_booking_api import HttpBookingApi
from booking_intake.infrastructure.booking_api.mock_booking_api import MockBookingApi
from booking_intake.infrastructure.notifications.queue_notifier import QueueNotifier
from booking_intake.infrastructure.store.memory_store import MemoryWizardSessionStore


logger = logging.getLogger(__name__)

_session_store: MemoryWizardSessionStore | None = None


@lru_cache
def get_booking_api() -> BookingApiPort:
    if settings.ENV.lower() in {"dev", "local"}:
        logger.info("Using MockBookingApi (ENV=%s)", settings.ENV)
        return MockBookingApi()
    return HttpBookingApi()


def get_session_store() -> MemoryWizardSessionStore:
    global _session_store
    if _session_store is None:
        _session_store = MemoryWizardSessionStore(
            ttl_seconds=settings.SESSION_TTL_SECONDS,
            max_sessions=settings.MAX_SESSIONS,
        )
    return _session_store


def default_booking_type() -> BookingType:
    try:
        return BookingType(settings.DEFAULT_BOOKING_TYPE)
    except ValueError:
        logger.warning("Unknown DEFAULT_BOOKING_TYPE, using revenue audit", extra={"booking_type": settings.DEFAULT_BOOKING_TYPE})
        return BookingType.REVENUE_AUDIT


def start_wizard_session(
    booking_type: BookingType | None = None,
    time_zone: str | None = None,
    store: MemoryWizardSessionStore | None = None,
    api: BookingApiPort | None = None,
) -> tuple[str, WizardSession]:
    if store is None:
        store = get_session_store()
    notifier = QueueNotifier(max_notifications=settings.MAX_NOTIFICATIONS)
    resolved_type = booking_type or default_booking_type()
    session_id = ""

    def on_booking_complete(booking: dict[str, Any]) -> None:
        logger.info(
            "booking_completed",
            extra={
                "session_id": session_id,
                "booking_type": session.wizard.state.booking_type.value,
                "booking_id": booking.get("id"),
            },
        )

    wizard = IntakeWizard(
        api=api or get_booking_api(),
        notifier=notifier,
        booking_type=resolved_type,
        time_zone=resolve_timezone(time_zone, settings.DEFAULT_TIMEZONE),
        on_booking_complete=on_booking_complete,
        validate_email_format=settings.VALIDATE_EMAIL_FORMAT,
        clear_stale_time=settings.CLEAR_STALE_TIME_ON_DATE_CHANGE,
        send_idempotency_key=settings.SEND_IDEMPOTENCY_KEY,
    )
    session = WizardSession(wizard=wizard, notifier=notifier)
    session_id = store.create(session)
    logger.info("Wizard session started", extra={"session_id": session_id, "booking_type": resolved_type.value})
    return session_id, session

#!/usr/bin/env python3
"""
Interactive local booking harness (no HTTP server, no real backend).

Usage:
  python3 scripts/book_local.py [--type consultation] [--tz Europe/Berlin]

What it does:
- Runs one IntakeWizard against the in-process MockBookingApi
- Prints the current step, the gate message and the slot panel after every command
- Notifications are printed through the logging notifier
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from datetime import date
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from dotenv import load_dotenv

from booking_intake.application.use_cases.intake_wizard import IntakeWizard
from booking_intake.application.utils.date_rules import resolve_timezone
from booking_intake.core.config import settings
from booking_intake.domain.entities.booking_type import BookingType, ConsultationType, MeetingType
from booking_intake.infrastructure.booking_api.mock_booking_api import MockBookingApi
from booking_intake.infrastructure.notifications.logging_notifier import LoggingNotifier

HELP = """Commands:
  name <text> | email <text> | phone <text> | company <text> | industry <text> | team <n>
  type audit|consultation
  date YYYY-MM-DD | time HH:MM | meeting video|phone|in-person
  area <text>            toggle an audit focus area
  systems a, b, c        audit tools & systems
  goals <text> | pains <text>
  ctype STRATEGY|TECHNICAL|IMPLEMENTATION|OPTIMIZATION|TRAINING|GENERAL
  objectives <text> | situation <text> | budget <value> | timeline <value> | questions <text>
  next | back | review | submit | /quit | /help"""

_MEETING = {"video": MeetingType.VIDEO_CALL, "phone": MeetingType.PHONE_CALL, "in-person": MeetingType.IN_PERSON}
_CONTACT = {
    "name": "client_name",
    "email": "client_email",
    "phone": "client_phone",
    "company": "company",
    "industry": "industry",
}
_CONSULTATION_TEXT = {
    "objectives": "objectives",
    "situation": "current_situation",
    "budget": "budget",
    "timeline": "timeline",
    "questions": "specific_questions",
}


def _print_status(wizard: IntakeWizard) -> None:
    print(f"\n[step {int(wizard.step)}: {wizard.step.name.lower()}]", end=" ")
    message = wizard.validation_message
    print(f"-> {message}" if message else "-> ready to continue")
    view = wizard.availability()
    if wizard.state.schedule.selected_date is not None:
        print(f"slots: {', '.join(view.slots) if view.slots else (view.headline or view.hint)}")


async def _dispatch(wizard: IntakeWizard, command: str, arg: str) -> None:
    if command in _CONTACT:
        wizard.update_contact(**{_CONTACT[command]: arg})
    elif command == "team":
        wizard.update_contact(team_size=int(arg) if arg else None)
    elif command == "type":
        await wizard.set_booking_type(BookingType.REVENUE_AUDIT if arg == "audit" else BookingType.CONSULTATION)
    elif command == "date":
        await wizard.select_date(date.fromisoformat(arg))
    elif command == "time":
        wizard.select_time(arg)
    elif command == "meeting":
        wizard.set_meeting_type(_MEETING[arg])
    elif command == "area":
        wizard.toggle_focus_area(arg)
    elif command == "systems":
        wizard.set_current_systems(arg)
    elif command == "goals":
        wizard.update_audit(revenue_goals=arg)
    elif command == "pains":
        wizard.update_audit(pain_points=arg)
    elif command == "ctype":
        wizard.set_consultation_type(ConsultationType(arg.upper()))
    elif command in _CONSULTATION_TEXT:
        wizard.update_consultation(**{_CONSULTATION_TEXT[command]: arg})
    elif command == "next":
        wizard.advance()
    elif command == "back":
        wizard.retreat()
    elif command == "review":
        summary = wizard.review()
        print(f"\n{summary.heading} ({summary.session_label}) - {summary.duration_label}")
        print(f"{summary.date_label} | {summary.meeting_type_label}")
        print(summary.contact_label)
        for item in summary.items:
            print(f"  {item.label}: {item.display}")
    elif command == "submit":
        result = await wizard.submit()
        print(f"submission: {result.action}")
        if result.booking:
            print(f"booking id: {result.booking.get('id')}")
    else:
        print(f"Unknown command: {command} (try /help)")


async def main() -> None:
    load_dotenv()
    parser = argparse.ArgumentParser(description="Drive the booking wizard from a terminal.")
    parser.add_argument("--type", choices=[t.value for t in BookingType], default=settings.DEFAULT_BOOKING_TYPE)
    parser.add_argument("--tz", default=None)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(name)s:%(message)s")

    wizard = IntakeWizard(
        api=MockBookingApi(),
        notifier=LoggingNotifier(),
        booking_type=BookingType(args.type),
        time_zone=resolve_timezone(args.tz, settings.DEFAULT_TIMEZONE),
        validate_email_format=settings.VALIDATE_EMAIL_FORMAT,
        clear_stale_time=settings.CLEAR_STALE_TIME_ON_DATE_CHANGE,
    )
    print("\nLocal Booking Harness")
    print("-" * 60)
    print(HELP)
    print("-" * 60)
    _print_status(wizard)

    while True:
        try:
            line = input("\n> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return
        if not line:
            continue
        if line in ("/quit", "/exit"):
            print("Bye!")
            return
        if line == "/help":
            print(HELP)
            continue

        command, _, arg = line.partition(" ")
        try:
            await _dispatch(wizard, command.lower(), arg.strip())
        except (ValueError, KeyError) as e:
            print(f"! {e}")
        if wizard.is_completed:
            print("Booking complete. Bye!")
            return
        _print_status(wizard)


if __name__ == "__main__":
    asyncio.run(main())

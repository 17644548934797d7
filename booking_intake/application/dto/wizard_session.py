from __future__ import annotations

from dataclasses import dataclass

from booking_intake.application.use_cases.intake_wizard import IntakeWizard
from booking_intake.infrastructure.notifications.queue_notifier import QueueNotifier


@dataclass
class WizardSession:
    wizard: IntakeWizard
    notifier: QueueNotifier

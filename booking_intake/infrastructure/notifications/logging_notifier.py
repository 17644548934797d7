from __future__ import annotations

import logging

from booking_intake.application.ports.notifier import NotifierPort
from booking_intake.domain.entities.notification import Notification, NotificationLevel

_LEVELS = {
    NotificationLevel.INFO: logging.INFO,
    NotificationLevel.SUCCESS: logging.INFO,
    NotificationLevel.WARNING: logging.WARNING,
    NotificationLevel.ERROR: logging.ERROR,
}


class LoggingNotifier(NotifierPort):
    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def notify(self, notification: Notification) -> None:
        self._logger.log(
            _LEVELS[notification.level],
            "%s: %s",
            notification.title,
            notification.message,
        )

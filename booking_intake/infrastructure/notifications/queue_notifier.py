from __future__ import annotations

from collections import deque

from booking_intake.application.ports.notifier import NotifierPort
from booking_intake.domain.entities.notification import Notification


class QueueNotifier(NotifierPort):
    """Bounded FIFO of pending notifications; the oldest is dropped when full."""

    def __init__(self, max_notifications: int = 5) -> None:
        self._queue: deque[Notification] = deque(maxlen=max_notifications)

    def notify(self, notification: Notification) -> None:
        self._queue.append(notification)

    def drain(self) -> list[Notification]:
        items = list(self._queue)
        self._queue.clear()
        return items

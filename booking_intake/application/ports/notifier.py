from abc import ABC, abstractmethod

from booking_intake.domain.entities.notification import Notification


class NotifierPort(ABC):
    @abstractmethod
    def notify(self, notification: Notification) -> None:
        raise NotImplementedError

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from booking_intake.application.dto.wizard_session import WizardSession


class WizardSessionStorePort(ABC):
    @abstractmethod
    def create(self, session: "WizardSession") -> str:
        """Store a new session and return its id."""
        raise NotImplementedError

    @abstractmethod
    def get(self, session_id: str) -> "WizardSession":
        """Raises WizardSessionNotFound for unknown ids."""
        raise NotImplementedError

    @abstractmethod
    def discard(self, session_id: str) -> bool:
        raise NotImplementedError

from __future__ import annotations

from enum import IntEnum


class WizardStep(IntEnum):
    """The four wizard pages. Movement is one step at a time in either direction."""

    CONTACT = 1
    SCHEDULE = 2
    DETAILS = 3
    REVIEW = 4

    @property
    def is_first(self) -> bool:
        return self is WizardStep.CONTACT

    @property
    def is_last(self) -> bool:
        return self is WizardStep.REVIEW

    def next(self) -> "WizardStep":
        if self.is_last:
            return self
        return WizardStep(self.value + 1)

    def previous(self) -> "WizardStep":
        if self.is_first:
            return self
        return WizardStep(self.value - 1)

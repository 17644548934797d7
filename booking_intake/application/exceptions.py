class BookingApiError(RuntimeError):
    """Raised when the booking backend fails (transport errors, non-2xx responses, bad bodies)."""

    def __init__(self, message: str, status_code: int | None = None, detail: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class StepGateError(ValueError):
    """Raised when a wizard transition is attempted while its gate is closed."""
    pass


class SlotUnavailableError(ValueError):
    """Raised when a date or time is chosen outside what the calendar allows."""
    pass


class WizardSessionNotFound(KeyError):
    """Raised when a wizard session id is unknown to the store."""
    pass

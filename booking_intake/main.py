import logging

from fastapi import FastAPI

from booking_intake.api.v1.catalog import router as catalog_router
from booking_intake.api.v1.wizards import router as wizards_router
from booking_intake.core.config import settings


class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in (
            "session_id",
            "booking_type",
            "booking_id",
            "step",
            "date",
            "slot_count",
            "status",
            "error",
        ):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


def configure_logging(level: str) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)


configure_logging(settings.LOG_LEVEL)

app = FastAPI(title="Booking Intake", version="1.0.0")

app.include_router(wizards_router, prefix="/api/v1/wizards", tags=["wizards"])
app.include_router(catalog_router, prefix="/api/v1", tags=["catalog"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}

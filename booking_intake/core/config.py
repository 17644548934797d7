from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    BOOKING_API_BASE_URL: str = "http://localhost:3000"
    REVENUE_AUDIT_PATH: str = "/api/revenue-audits"
    CONSULTATION_PATH: str = "/api/consultations"
    BOOKING_API_TIMEOUT_SECONDS: float = 10.0

    DEFAULT_BOOKING_TYPE: str = "revenue-audit"
    DEFAULT_TIMEZONE: str = "America/Los_Angeles"

    VALIDATE_EMAIL_FORMAT: bool = False
    CLEAR_STALE_TIME_ON_DATE_CHANGE: bool = False
    SEND_IDEMPOTENCY_KEY: bool = False

    MAX_NOTIFICATIONS: int = 5
    CALENDAR_WINDOW_DAYS: int = 60

    SESSION_TTL_SECONDS: float = 1800.0
    MAX_SESSIONS: int = 10000


settings = Settings()

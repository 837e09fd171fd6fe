from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Upstream event source
    EVENT_SOURCE_URL: str = "https://us-central1-ameelio-emerge.cloudfunctions.net/fetchFakeStudentEventLogs"
    EVENT_SOURCE_API_KEY: str = ""
    EVENT_SOURCE_TIMEOUT_SECONDS: float = 10.0

    # Outreach generation (fallback message is used when no key is set)
    ANTHROPIC_API_KEY: Optional[str] = None
    OUTREACH_MODEL: str = "claude-sonnet-4-5"
    OUTREACH_MAX_TOKENS: int = 500

    # Fetch and ingest once when the API starts
    SYNC_ON_STARTUP: bool = True

    class Config:
        env_file = ".env"


settings = Settings()

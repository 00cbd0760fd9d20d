from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from typing import Optional, Union

class Settings(BaseSettings):
    """Application settings"""

    # Logging
    LOG_LEVEL: str = "INFO"

    # Webflow API
    WEBFLOW_API_KEY: str = ""
    WEBFLOW_API_URL: str = "https://api.webflow.com"
    WEBFLOW_API_VERSION: str = "1.0.0"
    REQUEST_TIMEOUT: float = 30.0  # seconds

    # Pacing - Webflow allows 60 requests/minute on most plans
    REQUEST_INTERVAL_SECONDS: float = 1.0
    PUBLISH_INTERVAL_SECONDS: float = 60.0  # Publish endpoint has a 1 minute rate limit

    # Rate limit (HTTP 429) recovery
    RATE_LIMIT_RETRY_SECONDS: float = 30.0
    RATE_LIMIT_MAX_RETRIES: Optional[int] = None  # None = retry forever

    # Pagination
    PAGE_SIZE: int = 100

    @field_validator('RATE_LIMIT_MAX_RETRIES', mode='before')
    @classmethod
    def parse_optional_int(cls, v: Union[str, int, None]) -> Optional[int]:
        """Treat an empty env value as 'unbounded'"""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

settings = Settings()

"""
Service Settings

Environment-driven settings for the grader API (pydantic-settings).
Values may also come from a local .env file.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Grader API settings."""

    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    PORT: int = 3001

    # Browser origins allowed to call the API
    ALLOWED_ORIGINS: str = "https://maver-app.vercel.app,http://localhost:3000"
    ALLOWED_ORIGIN_REGEX: Optional[str] = r"https://.*\.vercel\.app"

    # Firm website fetching
    PAGE_TIMEOUT: float = 10.0
    MAX_INTERNAL_PAGES: int = 5

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"
        case_sensitive = False

    @property
    def allowed_origins(self) -> List[str]:
        """ALLOWED_ORIGINS split on commas, blanks dropped."""
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()

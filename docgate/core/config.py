"""
Configuration Management
Loads settings from environment variables with type validation
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from sqlalchemy.engine import make_url


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application
    APP_NAME: str = "DocGate"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Security
    SECRET_KEY: str = Field("docgate-development-secret-key-change-me", min_length=32)
    ADMIN_PASSWORD: str = ""
    ADMIN_COOKIE_NAME: str = "admin-auth"
    ADMIN_SESSION_EXPIRE_MINUTES: int = 60 * 12

    # CORS
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
    ]

    # Permission/document store
    STORE_URL: str = "sqlite+aiosqlite:///./docgate.db"
    STORE_KEY: Optional[str] = None
    STORE_TIMEOUT_SECONDS: float = 5.0

    @property
    def DATABASE_URL(self) -> str:
        """STORE_URL with STORE_KEY applied as the database password"""
        if not self.STORE_KEY:
            return self.STORE_URL
        url = make_url(self.STORE_URL).set(password=self.STORE_KEY)
        return url.render_as_string(hide_password=False)

    # Email (Resend HTTP API)
    EMAIL_API_KEY: Optional[str] = None
    EMAIL_API_URL: str = "https://api.resend.com/emails"
    EMAIL_FROM: str = "onboarding@resend.dev"
    EMAIL_SUBJECT_TEMPLATE: str = "Welcome aboard | Your document: {title}"
    EMAIL_TIMEOUT_SECONDS: float = 5.0

    # Access rules
    EXPIRING_SOON_DAYS: int = Field(7, ge=1)

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        valid = ["development", "staging", "production"]
        if v not in valid:
            raise ValueError(f"ENVIRONMENT must be one of {valid}")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid:
            raise ValueError(f"LOG_LEVEL must be one of {valid}")
        return v_upper

    @field_validator("STORE_TIMEOUT_SECONDS", "EMAIL_TIMEOUT_SECONDS")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeouts must be positive")
        return v

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "allow"


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance"""
    return Settings()


# Global settings instance
settings = get_settings()

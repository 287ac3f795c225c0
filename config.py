"""Application settings from environment variables (and an optional .env file)."""

from typing import Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class ConfigurationError(RuntimeError):
    """Required configuration is missing; the application cannot start."""


class Settings(BaseSettings):
    """Application settings from environment variables."""
    gemini_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("GEMINI_API_KEY", "API_KEY"),
    )
    gemini_model: str = "gemini-2.5-flash"
    gemini_timeout_ms: Optional[int] = None

    default_font: str = "Montserrat"
    prefers_color_scheme: str = "light"  # light | dark
    copy_ack_seconds: float = 2.0

    cors_allowed_origins: str = "http://localhost:3000,http://127.0.0.1:3000"
    rate_limit_per_minute: int = 30
    rate_limit_burst: int = 10
    trust_forwarded_for: bool = False

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"
        populate_by_name = True

    @field_validator("prefers_color_scheme")
    @classmethod
    def validate_color_scheme(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in ("light", "dark"):
            raise ValueError("PREFERS_COLOR_SCHEME must be 'light' or 'dark'")
        return v

    @property
    def prefers_dark(self) -> bool:
        return self.prefers_color_scheme == "dark"

    @property
    def allowed_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]

    def require_api_key(self) -> str:
        """Return the Gemini API key or raise ConfigurationError when it is not set."""
        key = self.gemini_api_key.strip()
        if not key:
            raise ConfigurationError(
                "GEMINI_API_KEY environment variable not set"
            )
        return key

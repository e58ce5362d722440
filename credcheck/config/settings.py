"""Application settings using Pydantic BaseSettings."""

import logging
from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Credcheck"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        upper = v.upper()
        if upper not in _VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {_VALID_LOG_LEVELS}, got '{v}'")
        return upper

    @model_validator(mode="after")
    def validate_positive(self) -> "Settings":
        for field_name in (
            "link_verify_timeout",
            "link_verify_max_urls",
            "link_verify_batch_size",
            "outbound_fetch_timeout",
            "outbound_max_bytes",
            "outbound_max_links",
            "outbound_max_reasons",
            "translation_timeout",
            "translation_max_retries",
        ):
            value = getattr(self, field_name)
            if value <= 0:
                raise ValueError(f"{field_name} must be positive, got {value}")
        return self

    @model_validator(mode="after")
    def validate_thresholds(self) -> "Settings":
        pairs = (
            ("risk_unknown_threshold", "risk_suspicious_threshold"),
            ("coverage_moderate_min", "coverage_extensive_min"),
            ("diversity_medium_min", "diversity_high_min"),
        )
        for low_name, high_name in pairs:
            low, high = getattr(self, low_name), getattr(self, high_name)
            if low > high:
                raise ValueError(f"{low_name} ({low}) must not exceed {high_name} ({high})")
        return self

    @model_validator(mode="after")
    def warn_wildcard_origins(self) -> "Settings":
        if self.allowed_origins == ["*"]:
            logging.getLogger(__name__).warning(
                "allowed_origins is set to ['*'], consider restricting in production"
            )
        return self

    # CORS
    allowed_origins: list[str] = ["*"]

    # Link verification
    link_verify_max_urls: int = 20
    link_verify_batch_size: int = 5
    link_verify_timeout: float = 5.0

    # Outbound link risk check
    outbound_fetch_timeout: float = 10.0
    outbound_max_bytes: int = 500_000
    outbound_max_links: int = 10
    outbound_max_reasons: int = 4
    risk_unknown_threshold: int = 10
    risk_suspicious_threshold: int = 30

    # Source coverage
    coverage_extensive_min: int = 6
    coverage_moderate_min: int = 3
    diversity_high_min: int = 5
    diversity_medium_min: int = 3

    # Translation (OpenAI-compatible chat completions gateway)
    translation_api_key: str | None = None
    translation_base_url: str | None = None
    translation_model: str = "gpt-4o-mini"
    translation_temperature: float = 0.1
    translation_timeout: float = 60.0
    translation_max_retries: int = 3
    translation_retry_delay: float = 1.0
    retry_backoff_factor: float = 2.0


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

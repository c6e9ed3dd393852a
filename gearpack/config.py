"""Configuration management using pydantic-settings."""
import logging
import sys

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, model_validator
import structlog


class MatchingSettings(BaseSettings):
    """Catalog matching configuration loaded from environment variables.

    All settings prefixed with MATCH_ (e.g., MATCH_HIGH_THRESHOLD=0.85)

    Thresholds are similarity scores in the 0-1 range. They are empirical
    tuning knobs rather than derived constants.
    """

    # Confidence tiers
    high_threshold: float = Field(
        default=0.80,
        ge=0,
        le=1,
        description="Score >= this links the catalog item automatically"
    )
    medium_threshold: float = Field(
        default=0.60,
        ge=0,
        le=1,
        description="Score >= this asks the user to pick from candidates"
    )
    max_candidates: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Maximum candidates offered for manual review"
    )

    # Scoring cascade
    substring_score: float = Field(
        default=0.87,
        ge=0,
        le=1,
        description="Fixed score for substring containment in either direction"
    )
    token_overlap_threshold: float = Field(
        default=0.75,
        ge=0,
        le=1,
        description="Dice coefficient at or above this is returned as the score"
    )
    min_token_length: int = Field(
        default=2,
        ge=1,
        le=10,
        description="Shorter tokens are ignored by token overlap"
    )

    model_config = SettingsConfigDict(
        env_prefix="MATCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @model_validator(mode="after")
    def check_threshold_order(self) -> "MatchingSettings":
        """Ensure the medium tier sits below the high tier."""
        if self.medium_threshold > self.high_threshold:
            raise ValueError(
                "medium_threshold must not exceed high_threshold "
                f"({self.medium_threshold} > {self.high_threshold})"
            )
        return self


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    log_level: str = "INFO"
    environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# Global settings instances
settings = Settings()
matching_settings = MatchingSettings()


def configure_logging(log_level: str = "INFO") -> None:
    """Configure structlog for JSON logging."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper(), logging.INFO),
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


# Initialize logging on module import (after settings are loaded)
configure_logging(settings.log_level)

"""Application configuration using Pydantic Settings."""

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CuratioSettings(BaseSettings):
    """Application configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="CURATIO_",
    )

    # Database
    database_url: str = Field(
        default="sqlite:///curatio.db",
        description="SQLAlchemy database URL",
    )

    # App settings
    debug: bool = Field(
        default=False,
        description="Enable debug mode (echoes SQL)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    # Reference data
    ror_affiliations_path: Path | None = Field(
        default=None,
        description="JSON file with [{prefLabel, rorId}] entries for ROR label lookup",
    )

    # Publisher used when neither the resource nor the reference data has one
    fallback_publisher_name: str = Field(default="GFZ Data Services")
    fallback_publisher_identifier: str = Field(default="https://doi.org/10.17616/R3VQ0S")
    fallback_publisher_identifier_scheme: str = Field(default="re3data")
    fallback_publisher_scheme_uri: str = Field(default="https://re3data.org/")
    fallback_publisher_language: str = Field(default="en")

    # Physical samples
    igsn_default_language: str = Field(
        default="en",
        description="Language exported for physical-sample resources without one",
    )

    # DOI suggestion
    doi_suggestion_max_attempts: int = Field(
        default=100,
        ge=1,
        description="Maximum number of candidates tried when skipping taken DOIs",
    )

    # Validation
    validation_max_errors: int = Field(
        default=50,
        ge=1,
        description="Maximum number of schema violations reported per document",
    )

    # Deduplication settings
    name_match_normalized: bool = Field(
        default=False,
        description="Compare person names accent- and case-folded instead of exactly",
    )


@lru_cache
def get_settings() -> CuratioSettings:
    """Get cached settings instance."""
    return CuratioSettings()


def configure_logging(settings: CuratioSettings | None = None) -> None:
    """Apply the configured log level to the package logger."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("curatio").setLevel(settings.log_level.upper())

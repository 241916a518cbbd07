"""
KStem Service - Application Configuration

Patterns Applied:
- Pydantic Settings with SettingsConfigDict
- Environment variable prefix KSTEM_ for the stemming service

Anti-Patterns Avoided:
- Hard-coded lexicon paths: the data directory can be overridden per deployment
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be overridden via environment variables with KSTEM_ prefix.
    Example: KSTEM_PORT=8090, KSTEM_LEXICON_DIR=/srv/lexicon
    """

    # Server configuration
    host: str = "0.0.0.0"
    port: int = 8090

    # Application metadata
    service_name: str = "kstem-service"
    version: str = "0.1.0"
    environment: str = "development"

    # Logging configuration
    log_level: str = "INFO"
    log_json: bool = True

    # Lexicon / stemmer configuration
    lexicon_dir: Path | None = None  # None -> bundled kstem/lexicon/data
    stem_cache_size: int = Field(default=20000, ge=0)
    max_batch_terms: int = Field(default=1000, ge=1)

    # Tracing configuration
    tracing_enabled: bool = True
    tracing_console_export: bool = False

    model_config = SettingsConfigDict(
        env_prefix="KSTEM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


def get_settings() -> Settings:
    """Get application settings instance.

    Returns:
        Settings instance with values from environment
    """
    return Settings()

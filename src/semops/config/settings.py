"""
Application configuration using Pydantic Settings.
Loads from environment variables with .env file support.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SEMOPS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Domain namespace
    domain_prefix: str = Field(default="ff", description="Prefix of the domain namespace")
    domain_namespace: str = Field(
        default="https://foerderfunke.org/default#",
        description="Base IRI of the domain namespace",
    )

    # Prefix table
    extended_prefixes: bool = Field(
        default=False,
        description="Also register the rdfs and schema.org namespaces",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_json: bool = Field(default=False, description="Render log lines as JSON")


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()

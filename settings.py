"""
Application settings loaded from environment variables.
Uses Pydantic Settings for type-safe configuration with validation.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Languages
    default_language: str = Field(
        default="en",
        description="Fallback language code for dictionary lookups and detection"
    )
    supported_languages: str = Field(
        default="en,hi,te,ta,kn,ml,mr,gu,bn,pa,ur",
        description="Comma-separated, ordered list of supported language codes"
    )

    # Persistence
    storage_path: str = Field(
        default=".urbanpulse/storage.json",
        description="Path of the JSON key-value store"
    )
    language_storage_key: str = Field(
        default="@urbanpulse_language",
        description="Store key holding the active language code"
    )
    translation_cache_key: str = Field(
        default="@urbanpulse_translation_cache",
        description="Store key holding the free-text translation cache"
    )
    cache_ttl_days: int = Field(
        default=7,
        ge=1,
        description="Days a cached translation stays valid"
    )

    # Remote translation provider
    translation_provider: str = Field(
        default="mymemory",
        description="Translation backend: 'mymemory' or 'llm'"
    )
    mymemory_url: str = Field(
        default="https://api.mymemory.translated.net/get",
        description="MyMemory translation endpoint"
    )
    mymemory_email: Optional[str] = Field(
        default=None,
        description="Contact e-mail sent to MyMemory for a larger daily quota"
    )
    request_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Timeout in seconds for provider requests"
    )

    # LLM Connection
    llm_base_url: str = Field(
        default="http://localhost:1234/v1",
        description="Base URL for OpenAI-compatible LLM API"
    )
    llm_api_key: str = Field(
        default="lm-studio",
        description="API key for LLM service"
    )
    llm_model: str = Field(
        default="llama-3-8b-instruct",
        description="Model identifier to use for translation"
    )

    # System
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    max_retries: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Maximum retry attempts for provider calls"
    )
    max_concurrent_translations: int = Field(
        default=4,
        ge=1,
        le=32,
        description="Parallel provider calls during a language change"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return upper_v

    @field_validator("translation_provider")
    @classmethod
    def validate_translation_provider(cls, v: str) -> str:
        lower_v = v.strip().lower()
        if lower_v not in {"mymemory", "llm"}:
            raise ValueError("translation_provider must be 'mymemory' or 'llm'")
        return lower_v

    @model_validator(mode="after")
    def validate_default_language(self) -> "Settings":
        if self.default_language not in self.supported_language_list:
            raise ValueError(
                f"default_language '{self.default_language}' is not in supported_languages"
            )
        return self

    @property
    def supported_language_list(self) -> list[str]:
        return [
            code.strip().lower()
            for code in self.supported_languages.split(",")
            if code.strip()
        ]

    @property
    def cache_ttl_seconds(self) -> float:
        return self.cache_ttl_days * 24 * 60 * 60


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Convenience singleton
settings = get_settings()

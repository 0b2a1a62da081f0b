"""Environment-backed client configuration."""
import logging
from functools import lru_cache
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_TIMEOUT = 60.0
DEFAULT_MODEL = "gpt-4"


class Settings(BaseSettings):
    """Client settings.

    Only used by ``OpenAIClient.from_settings``; the client constructor never
    reads the environment itself.
    """

    OPENAI_API_KEY: str = ""
    OPENAI_BASE_URL: str = DEFAULT_BASE_URL
    OPENAI_TIMEOUT: float = DEFAULT_TIMEOUT
    OPENAI_DEFAULT_MODEL: str = DEFAULT_MODEL

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore extra fields from .env that aren't in this model
    )

    @field_validator('OPENAI_BASE_URL')
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Validate base URL format."""
        if not v.startswith(('http://', 'https://')):
            raise ValueError('OPENAI_BASE_URL must start with http:// or https://')
        return v.rstrip('/')

    @field_validator('OPENAI_TIMEOUT')
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError('OPENAI_TIMEOUT must be positive')
        return v

    @field_validator('LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f'Unknown LOG_LEVEL: {v}')
        return level


@lru_cache()
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    settings = Settings()
    logger.debug(f"OPENAI_API_KEY configured: {'Yes' if settings.OPENAI_API_KEY else 'No'}")
    return settings

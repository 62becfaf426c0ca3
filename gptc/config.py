import logging
from dataclasses import dataclass
from typing import Optional

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from gptc.constants import (
    DEFAULT_PROVIDER,
    GEMINI_BASE_URL,
    MODE_COMMIT,
    OPENAI_BASE_URL,
)

logger = logging.getLogger(__name__)


class LLMSettings(BaseSettings):
    """
    Validates environment variables for LLM providers.
    """
    # Keys are optional because only the selected provider needs one
    openai_api_key: str | None = None
    gemini_api_key: str | None = None

    openai_base_url: str = OPENAI_BASE_URL
    gemini_base_url: str = GEMINI_BASE_URL

    log_level: str = "INFO"

    # We tell Pydantic to look for a .env file
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@dataclass(frozen=True)
class AppConfig:
    """What a single run does. Built once from the command line."""
    model: Optional[str] = None
    mode: str = MODE_COMMIT
    provider: str = DEFAULT_PROVIDER


def load_settings() -> LLMSettings:
    try:
        return LLMSettings()
    except ValidationError as e:
        logger.error(f"Configuration Error: {e}")
        # Fall back to defaults, ignoring the malformed .env file
        return LLMSettings(_env_file=None)

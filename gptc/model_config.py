import logging
from typing import Dict, TYPE_CHECKING, List, Optional
from dataclasses import dataclass

from gptc.constants import (
    DEFAULT_GEMINI_MODEL,
    DEFAULT_GPT_MODEL,
    DEFAULT_PROVIDER,
    GEMINI_API_KEY_ENV,
    OPENAI_API_KEY_ENV,
    PROVIDER_GOOGLE,
    PROVIDER_OPENAI,
)
from gptc.errors import ConfigurationError, MissingAPIKeyError

if TYPE_CHECKING:
    from .config import LLMSettings

logger = logging.getLogger(__name__)


@dataclass
class ProviderConfig:
    model_name: str
    description: str
    api_key_env: str
    api_key_field: str


class ModelConfigManager:
    _CONFIGS: Dict[str, ProviderConfig] = {
        PROVIDER_OPENAI: ProviderConfig(
            model_name=DEFAULT_GPT_MODEL,
            description="OpenAI API (default)",
            api_key_env=OPENAI_API_KEY_ENV,
            api_key_field="openai_api_key",
        ),
        PROVIDER_GOOGLE: ProviderConfig(
            model_name=DEFAULT_GEMINI_MODEL,
            description="Google Gemini",
            api_key_env=GEMINI_API_KEY_ENV,
            api_key_field="gemini_api_key",
        ),
    }

    @classmethod
    def providers(cls) -> List[str]:
        return list(cls._CONFIGS)

    @classmethod
    def get_config(cls, provider_name: str) -> ProviderConfig:
        if provider_name not in cls._CONFIGS:
            raise ConfigurationError(f"unsupported provider: {provider_name}")
        return cls._CONFIGS[provider_name]

    @classmethod
    def resolve_provider_name(cls, provider_name: str) -> tuple[str, Optional[str]]:
        """
        Maps a user supplied provider name onto a supported one.
        Returns the name and, when the input was not recognised, a warning.
        """
        if provider_name in cls._CONFIGS:
            return provider_name, None
        warning = (
            f"invalid provider: {provider_name}, "
            f"defaulting to provider: {DEFAULT_PROVIDER}"
        )
        logger.warning(warning)
        return DEFAULT_PROVIDER, warning

    @classmethod
    def get_model_name(cls, provider_name: str, requested: Optional[str] = None) -> str:
        if requested:
            return requested
        return cls.get_config(provider_name).model_name

    @classmethod
    def get_api_key(cls, provider_name: str, settings: "LLMSettings") -> Optional[str]:
        config = cls.get_config(provider_name)
        return getattr(settings, config.api_key_field, None)

    @classmethod
    def validate_provider_settings(cls, provider_name: str, settings: "LLMSettings") -> str:
        """Returns the API key of the provider, or raises when it is unset."""
        config = cls.get_config(provider_name)
        api_key = cls.get_api_key(provider_name, settings)
        if not api_key:
            raise MissingAPIKeyError(config.api_key_env, provider_name)
        return api_key

import logging
from abc import ABC, abstractmethod
from typing import Optional

import httpx
from openai import OpenAI, OpenAIError
from pydantic import ValidationError

from gptc.config import AppConfig, LLMSettings
from gptc.constants import (
    GEMINI_ACCEPTED_FINISH_REASONS,
    GEMINI_BASE_URL,
    OPENAI_BASE_URL,
    PROVIDER_GOOGLE,
    PROVIDER_OPENAI,
)
from gptc.errors import (
    ConfigurationError,
    ProviderError,
    ProviderResponseError,
    ProviderTransportError,
)
from gptc.model_config import ModelConfigManager
from gptc.schemas import (
    ChatMessage,
    GeminiContent,
    GeminiErrorResponse,
    GeminiPart,
    GeminiRequest,
    GeminiResponse,
)

logger = logging.getLogger(__name__)


class LLMProvider(ABC):
    """Abstract base class for all LLM providers."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        pass

    @abstractmethod
    def generate(self, prompt: str) -> str:
        """Sends the prompt in a single request and returns the generated text."""


class OpenAIProvider(LLMProvider):
    """
    Chat-completion provider. The prompt travels as the single user message,
    the key as a bearer token.
    """
    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str = OPENAI_BASE_URL,
        http_client: Optional[httpx.Client] = None,
    ):
        self.model = model
        self._api_key = api_key
        self._base_url = base_url
        self._http_client = http_client
        self._client: OpenAI | None = None

    def __enter__(self):
        self._client = OpenAI(
            api_key=self._api_key,
            base_url=self._base_url,
            max_retries=0,
            http_client=self._http_client,
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._client:
            self._client.close()
            self._client = None

    def generate(self, prompt: str) -> str:
        if not self._client:
            raise RuntimeError("Provider not properly initialized. Use context manager.")

        message = ChatMessage(role="user", content=prompt)
        try:
            completion = self._client.chat.completions.create(
                model=self.model,
                messages=[message.model_dump()],
            )
        except OpenAIError as e:
            logger.error(f"OpenAI request failed: {e}", exc_info=True)
            raise ProviderError(f"failed to make API request: {e}") from e

        choices = getattr(completion, "choices", None)
        if not choices:
            raise ProviderResponseError("no choices in API response")
        return choices[0].message.content or ""


class GeminiProvider(LLMProvider):
    """
    Generate-content provider for Google's Gemini models.
    The key is passed as the `key` query parameter.
    """
    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str = GEMINI_BASE_URL,
        http_client: Optional[httpx.Client] = None,
    ):
        self.model = model
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._http_client = http_client
        self._client: httpx.Client | None = None

    @property
    def url(self) -> str:
        return f"{self._base_url}/v1beta/models/{self.model}:generateContent"

    def __enter__(self):
        self._client = self._http_client or httpx.Client()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._client:
            self._client.close()
            self._client = None

    def generate(self, prompt: str) -> str:
        if not self._client:
            raise RuntimeError("Provider not properly initialized. Use context manager.")

        request = GeminiRequest(contents=[GeminiContent(parts=[GeminiPart(text=prompt)])])
        try:
            response = self._client.post(
                self.url,
                params={"key": self._api_key},
                json=request.model_dump(exclude_none=True),
            )
        except httpx.HTTPError as e:
            logger.error(f"Gemini request failed: {e}", exc_info=True)
            raise ProviderTransportError(f"failed to make gemini API request: {e}") from e

        if not response.is_success:
            raise self._status_error(response)

        try:
            body = GeminiResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise ProviderResponseError(
                f"failed to decode gemini response: {e}\nResponse body: {response.text}"
            ) from e

        return self._extract_text(body, response.text)

    @staticmethod
    def _status_error(response: httpx.Response) -> ProviderResponseError:
        try:
            detail = GeminiErrorResponse.model_validate_json(response.content).error
        except ValidationError:
            detail = None

        if detail and detail.message:
            return ProviderResponseError(
                f"gemini API error ({detail.code} {detail.status}): {detail.message}"
            )
        return ProviderResponseError(
            f"gemini API request failed with status {response.status_code}: {response.text}"
        )

    @staticmethod
    def _extract_text(body: GeminiResponse, raw: str) -> str:
        if body.prompt_feedback and body.prompt_feedback.block_reason:
            raise ProviderResponseError(
                f"gemini prompt blocked due to {body.prompt_feedback.block_reason}"
            )

        if not body.candidates:
            raise ProviderResponseError(f"no candidates in gemini API response. Body: {raw}")

        candidate = body.candidates[0]
        # Other reasons include SAFETY, RECITATION, OTHER
        if candidate.finish_reason not in GEMINI_ACCEPTED_FINISH_REASONS:
            raise ProviderResponseError(
                f"gemini generation finished due to {candidate.finish_reason}"
            )

        if candidate.content is None or not candidate.content.parts:
            raise ProviderResponseError(
                "gemini response candidate has no content parts. "
                f"FinishReason: {candidate.finish_reason}"
            )

        return "".join(part.text for part in candidate.content.parts)


# --- The Factory ---
def get_provider(
    config: AppConfig,
    settings: LLMSettings,
    http_client: Optional[httpx.Client] = None,
) -> LLMProvider:
    """
    Factory function to get an instance of the configured LLM provider.
    Raises MissingAPIKeyError before anything touches the network.
    """
    api_key = ModelConfigManager.validate_provider_settings(config.provider, settings)
    model_name = ModelConfigManager.get_model_name(config.provider, config.model)
    logger.info(f"Using provider '{config.provider}' with model '{model_name}'")

    if config.provider == PROVIDER_OPENAI:
        return OpenAIProvider(
            api_key, model_name, base_url=settings.openai_base_url, http_client=http_client
        )

    if config.provider == PROVIDER_GOOGLE:
        return GeminiProvider(
            api_key, model_name, base_url=settings.gemini_base_url, http_client=http_client
        )

    raise ConfigurationError(f"unsupported provider: {config.provider}")

"""Failure taxonomy shared by every stage of a run."""


class GptcError(Exception):
    """Base class for every failure that ends a run."""


class DiffSourceError(GptcError):
    """The diff could not be read from stdin or git, or it was empty."""


class ConfigurationError(GptcError):
    """Flags, settings or provider selection are unusable."""


class InvalidModeError(ConfigurationError):
    """The requested mode has no prompt template."""


class MissingAPIKeyError(ConfigurationError):
    def __init__(self, env_var: str, provider: str):
        self.env_var = env_var
        self.provider = provider
        super().__init__(
            f"API key not set. Please set the {env_var} environment variable "
            f"(required for the provider: {provider})."
        )


class ProviderError(GptcError):
    """A provider call failed."""


class ProviderTransportError(ProviderError):
    """The request never produced an HTTP response."""


class ProviderResponseError(ProviderError):
    """The API answered, but not with usable text."""

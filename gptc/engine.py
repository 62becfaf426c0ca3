import logging
import sys
from typing import Callable, Optional, TextIO

from rich.console import Console

# Internal Imports
from gptc.config import AppConfig, LLMSettings, load_settings
from gptc.core import fetch_staged_diff, read_diff
from gptc.providers import LLMProvider, get_provider
from gptc.services.prompt_builder import build_prompt
from gptc.utils import print_warning

logger = logging.getLogger(__name__)


class MessageEngine:
    """
    Orchestrates Diff Reading -> Prompt Building -> Generation.
    Collaborators are injected so tests can replace stdin, git and HTTP.
    """

    def __init__(
        self,
        config: AppConfig,
        console: Console,
        settings: Optional[LLMSettings] = None,
        stdin: Optional[TextIO] = None,
        repo_path: str = ".",
        fetch_staged: Callable[[str], str] = fetch_staged_diff,
        provider_factory: Callable[[AppConfig, LLMSettings], LLMProvider] = get_provider,
    ):
        self.config = config
        self.console = console
        self.settings = settings if settings is not None else load_settings()
        self.stdin = stdin if stdin is not None else sys.stdin
        self.repo_path = repo_path
        self.fetch_staged = fetch_staged
        self.provider_factory = provider_factory

    def fetch_diff(self) -> str:
        return read_diff(
            self.stdin,
            repo_path=self.repo_path,
            fetch_staged=self.fetch_staged,
            on_fallback=self._warn_fallback,
        )

    def build_prompt(self, diff: str) -> str:
        return build_prompt(self.config.mode, diff)

    def generate(self, prompt: str) -> str:
        """Workflow: Build Provider -> One Request -> Text."""
        provider = self.provider_factory(self.config, self.settings)
        with provider:
            message = provider.generate(prompt)
        logger.info(f"Generated {self.config.mode} text: {len(message)} characters")
        return message

    def _warn_fallback(self):
        logger.warning("No input from stdin, checking for staged changes...")
        print_warning(self.console, "No input from stdin, checking for staged changes...")

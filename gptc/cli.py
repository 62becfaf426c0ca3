import argparse
import logging
import sys
from typing import Callable, List, Optional, TextIO

from rich.console import Console

from gptc.config import AppConfig, LLMSettings, load_settings
from gptc.constants import APP_NAME, DEFAULT_PROVIDER, MODE_COMMIT, MODE_PR
from gptc.core import fetch_staged_diff
from gptc.engine import MessageEngine
from gptc.errors import GptcError
from gptc.model_config import ModelConfigManager
from gptc.providers import LLMProvider, get_provider
from gptc.usage import print_usage
from gptc.utils import print_error, print_warning, setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    # --help is ours: the usage screen reports which API keys are set
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Generate commit messages or PR descriptions from a git diff",
        add_help=False,
    )
    parser.add_argument("-h", "--help", action="store_true", help="Display usage information")
    parser.add_argument("--model", type=str, default=None, metavar="NAME", help="AI model to use")
    parser.add_argument(
        "-p", "--provider", type=str, default=DEFAULT_PROVIDER, metavar="NAME",
        help="AI provider to use (openai, google)",
    )
    parser.add_argument("--cm", action="store_true", help="Generate a commit message (default mode)")
    parser.add_argument("--pr", action="store_true", help="Generate a pull request description")
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def resolve_config(args: argparse.Namespace, err_console: Console) -> AppConfig:
    """Turns parsed flags into the run configuration, warning about conflicts."""
    if args.pr and args.cm:
        logger.warning("Both --pr and --cm flags specified. Using --cm mode.")
        print_warning(err_console, "Both --pr and --cm flags specified. Using --cm mode.")
        mode = MODE_COMMIT
    elif args.pr:
        mode = MODE_PR
    else:
        mode = MODE_COMMIT

    provider, warning = ModelConfigManager.resolve_provider_name(args.provider)
    if warning:
        print_warning(err_console, warning)

    return AppConfig(model=args.model or None, mode=mode, provider=provider)


class App:
    def __init__(
        self,
        console: Optional[Console] = None,
        err_console: Optional[Console] = None,
        settings: Optional[LLMSettings] = None,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        repo_path: str = ".",
        fetch_staged: Callable[[str], str] = fetch_staged_diff,
        provider_factory: Callable[[AppConfig, LLMSettings], LLMProvider] = get_provider,
    ):
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)
        self.settings = settings if settings is not None else load_settings()
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.repo_path = repo_path
        self.fetch_staged = fetch_staged
        self.provider_factory = provider_factory

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Runs one generation. Returns the process exit code."""
        args = parse_args(argv)
        if args.help:
            print_usage(self.console, self.settings, prog=APP_NAME)
            return 0

        config = resolve_config(args, self.err_console)
        logger.info(f"Session started: mode={config.mode} provider={config.provider}")

        engine = MessageEngine(
            config,
            self.err_console,
            settings=self.settings,
            stdin=self.stdin,
            repo_path=self.repo_path,
            fetch_staged=self.fetch_staged,
            provider_factory=self.provider_factory,
        )

        try:
            diff = engine.fetch_diff()
        except GptcError as e:
            return self._fail("Error getting git diff:", e)

        try:
            message = engine.generate(engine.build_prompt(diff))
        except GptcError as e:
            return self._fail("Error generating message:", e)

        print(message, file=self.stdout)
        return 0

    def _fail(self, stage: str, error: GptcError) -> int:
        logger.error(f"{stage} {error}", exc_info=True)
        print_error(self.err_console, f"{stage} {error}")
        return 1


def main():
    settings = load_settings()
    setup_logging(settings.log_level)
    try:
        sys.exit(App(settings=settings).run())
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()

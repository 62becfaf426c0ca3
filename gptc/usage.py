# gptc/usage.py

"""
Help text for the command line, rendered with rich.
"""

from rich.console import Console
from rich.rule import Rule

from gptc.config import LLMSettings
from gptc.model_config import ModelConfigManager

OPTIONS = [
    ("-h, --help", "Display usage information"),
    ("--model <name>", "AI model to use for generating messages (default: per provider)"),
    ("-p, --provider <name>", "AI provider to use (openai, google)"),
]

MODES = [
    ("--cm", "Generate a commit message (default mode)"),
    ("--pr", "Generate a pull request description"),
]


def _rows(console: Console, rows):
    for flag, text in rows:
        console.print(f"  {flag:<24} {text}", markup=False, highlight=False)


def print_usage(console: Console, settings: LLMSettings, prog: str = "gptc"):
    """Displays detailed help information, including which API keys are set."""
    console.print("AI-Powered Git Commit and PR Message Generator", style="bold blue")
    console.print(Rule(style="blue"))

    console.print("\n[bold]DESCRIPTION:[/]")
    console.print("  This tool generates conventional commit messages or PR descriptions using AI providers.")
    console.print("  It can read diffs from stdin or use staged git changes.")

    console.print("\n[bold]USAGE:[/]")
    console.print(f"  {prog} \\[options]", highlight=False)

    console.print("\n[bold]MODES:[/]")
    _rows(console, MODES)

    console.print("\n[bold]OPTIONS:[/]")
    _rows(console, OPTIONS)

    console.print("\n[bold]SUPPORTED PROVIDERS:[/]")
    _rows(
        console,
        [
            (name, ModelConfigManager.get_config(name).description)
            for name in ModelConfigManager.providers()
        ],
    )

    console.print("\n[bold]EXAMPLES:[/]")
    _rows(
        console,
        [
            (f"{prog}", "# Generate commit message from staged changes"),
            (f"{prog} --pr", "# Generate PR description from staged changes"),
            (f"git diff | {prog}", "# Generate commit message from piped git diff"),
            (f"git diff | {prog} --pr", "# Generate PR description from piped git diff"),
            (f'{prog} --model="o4-mini"', "# Use a specific AI model"),
            (f'{prog} --provider="google"', "# Use a specific AI provider"),
            (f"{prog} --help", "# Show this help message"),
        ],
    )

    console.print("\n[bold]ENVIRONMENT VARIABLES:[/]")
    for name in ModelConfigManager.providers():
        config = ModelConfigManager.get_config(name)
        key_set = "set" if ModelConfigManager.get_api_key(name, settings) else "unset"
        console.print(
            f"  {config.api_key_env}: <{key_set}> (required for the provider: {name})",
            markup=False,
            highlight=False,
        )

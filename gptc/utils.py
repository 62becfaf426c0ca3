import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from appdirs import AppDirs
from rich.console import Console
from rich.text import Text

from gptc.constants import APP_AUTHOR, APP_NAME, LOG_FILE_NAME

# Initialize AppDirs
dirs = AppDirs(APP_NAME, APP_AUTHOR)
LOG_DIR = Path(dirs.user_log_dir)
LOG_FILE = LOG_DIR / LOG_FILE_NAME


def setup_logging(level: str = "INFO"):
    """Configures application-wide logging with rotation and UTF-8 support."""
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    log_handler = RotatingFileHandler(
        LOG_FILE, maxBytes=5 * 1024 * 1024, backupCount=1, encoding="utf-8"  # 5 MB
    )
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[log_handler],
    )
    # httpx logs request URLs at INFO, and the Gemini URL carries the API key
    logging.getLogger("httpx").setLevel(logging.WARNING)
    return logging.getLogger(APP_NAME)


def print_warning(console: Console, message: str):
    """Prints a `[WARN]` line; the message is never parsed as markup."""
    console.print(Text.assemble(("[WARN] ", "bold yellow"), message))


def print_error(console: Console, message: str):
    console.print(Text.assemble(("[ERROR] ", "bold red"), message))

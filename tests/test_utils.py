import io

from unittest.mock import patch
from rich.console import Console

from gptc.utils import print_error, print_warning, setup_logging

# --- setup_logging ---


@patch("gptc.utils.LOG_DIR")
@patch("gptc.utils.RotatingFileHandler")
@patch("gptc.utils.logging")
def test_setup_logging(mock_logging, mock_handler, mock_log_dir):
    """Test that logging is configured correctly."""
    mock_logging.DEBUG = 10
    mock_logging.INFO = 20

    logger = setup_logging("debug")

    mock_log_dir.mkdir.assert_called_once_with(parents=True, exist_ok=True)
    mock_handler.assert_called_once()
    _, kwargs = mock_logging.basicConfig.call_args
    assert kwargs["level"] == 10
    assert kwargs["handlers"] == [mock_handler.return_value]
    mock_logging.getLogger.assert_called_with("gptc")
    assert logger == mock_logging.getLogger.return_value


@patch("gptc.utils.LOG_DIR")
@patch("gptc.utils.RotatingFileHandler")
@patch("gptc.utils.logging")
def test_setup_logging_unknown_level_defaults_to_info(mock_logging, mock_handler, mock_log_dir):
    mock_logging.INFO = 20
    del mock_logging.LOUD

    setup_logging("loud")

    _, kwargs = mock_logging.basicConfig.call_args
    assert kwargs["level"] == 20


# --- console helpers ---


def test_print_warning_does_not_parse_markup():
    console = Console(file=io.StringIO(), width=200)

    print_warning(console, "invalid provider: [bold]x[/bold]")

    assert console.file.getvalue() == "[WARN] invalid provider: [bold]x[/bold]\n"


def test_print_error_prefix():
    console = Console(file=io.StringIO(), width=200)

    print_error(console, "Error generating message: no choices in API response")

    assert console.file.getvalue() == "[ERROR] Error generating message: no choices in API response\n"

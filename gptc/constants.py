# gptc/constants.py

"""
Central configuration for application constants, defaults, and UI strings.
Avoids circular imports between the CLI, the registry and the providers.
"""

APP_NAME = "gptc"
APP_AUTHOR = "gptc"

# --- File System Constants ---
LOG_FILE_NAME = "gptc.log"

# --- Modes ---
MODE_COMMIT = "commit"
MODE_PR = "pr"

# --- Providers ---
PROVIDER_OPENAI = "openai"
PROVIDER_GOOGLE = "google"
DEFAULT_PROVIDER = PROVIDER_OPENAI

# --- Models ---
DEFAULT_GPT_MODEL = "o4-mini"
DEFAULT_GEMINI_MODEL = "gemini-2.5-pro-exp-03-25"

# --- Endpoints ---
OPENAI_BASE_URL = "https://api.openai.com/v1"
GEMINI_BASE_URL = "https://generativelanguage.googleapis.com"

# --- Environment Variables ---
OPENAI_API_KEY_ENV = "OPENAI_API_KEY"
GEMINI_API_KEY_ENV = "GEMINI_API_KEY"

# Finish reasons the generate-content API reports for a usable answer.
GEMINI_ACCEPTED_FINISH_REASONS = ("STOP", "MAX_TOKENS")

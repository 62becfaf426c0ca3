import logging

from gptc.constants import MODE_COMMIT, MODE_PR
from gptc.errors import InvalidModeError

logger = logging.getLogger(__name__)

COMMIT_PROMPT_TEMPLATE = (
    "Do not use ```.\n"
    " Create a CONVENTIONAL commit message for this git diff with the structure: "
    "<type>[optional scope]: <description>\n"
    "Ignore formatting and whitespace changes and focus on the big picture.\n"
    "{DIFF_CONTENT}"
)

PR_PROMPT_TEMPLATE = (
    "Do not use ```.\n"
    "Create a pull request description for these changes.\n"
    "Include: 1) A clear title, 2) What changes were made, "
    "3) Why these changes were necessary,\n"
    "and 4) Any testing considerations.\n"
    "Ignore formatting and whitespace changes and focus on the big picture.\n"
    "Write the description in GERMAN!!!\n"
    "Format with markdown:\n"
    "{DIFF_CONTENT}"
)

TEMPLATES = {
    MODE_COMMIT: COMMIT_PROMPT_TEMPLATE,
    MODE_PR: PR_PROMPT_TEMPLATE,
}


def build_prompt(mode: str, diff: str) -> str:
    template = TEMPLATES.get(mode)
    if template is None:
        raise InvalidModeError(f"invalid mode: {mode}")

    # str.replace, not format(): diffs are full of braces
    prompt = template.replace("{DIFF_CONTENT}", diff)
    logger.debug(f"Built {mode} prompt: {len(prompt)} characters")
    return prompt

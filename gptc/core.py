import git
import logging
from typing import Callable, Optional, TextIO

from gptc.errors import DiffSourceError

# Initialize module-level logger
logger = logging.getLogger(__name__)


class GitRepositoryContext:
    def __init__(self, repo_path: str):
        self.repo_path = repo_path
        self._repo: git.Repo | None = None

    def __enter__(self) -> git.Repo:
        try:
            self._repo = git.Repo(self.repo_path, search_parent_directories=True)
            return self._repo
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError):
            raise DiffSourceError(f"'{self.repo_path}' is not a valid Git repository.")

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._repo:
            self._repo.close()


def fetch_staged_diff(repo_path: str = ".") -> str:
    """Runs `git diff --staged` in the repository containing repo_path."""
    with GitRepositoryContext(repo_path) as repo:
        logger.info("Fetching Staged Changes...")
        try:
            raw = repo.git.diff("--staged", stdout_as_string=False)
        except git.exc.GitCommandError as e:
            logger.error(f"git diff --staged failed in '{repo_path}': {e}", exc_info=True)
            raise DiffSourceError(f"failed to get git diff: {e}") from e
        # Staged files need not be UTF-8
        return raw.decode("utf-8", "replace")


def read_piped_diff(stdin: TextIO) -> Optional[str]:
    """
    Returns the trimmed piped input, or None when stdin is a terminal or
    carried nothing but whitespace.
    """
    if stdin is None or stdin.isatty():
        return None
    try:
        buffer = getattr(stdin, "buffer", None)
        if buffer is not None:
            diff = buffer.read().decode("utf-8", "replace").strip()
        else:
            diff = stdin.read().strip()
    except (OSError, UnicodeDecodeError) as e:
        raise DiffSourceError(f"failed to read from stdin: {e}") from e
    return diff or None


def read_diff(
    stdin: TextIO,
    repo_path: str = ".",
    fetch_staged: Callable[[str], str] = fetch_staged_diff,
    on_fallback: Optional[Callable[[], None]] = None,
) -> str:
    """
    Produces the diff to summarise.
    Input: stdin stream and the repository to fall back on.
    Output: non-empty, trimmed diff text.
    """
    diff = read_piped_diff(stdin)
    if diff:
        logger.info(f"Read {len(diff)} characters of diff from stdin")
        return diff

    if on_fallback:
        on_fallback()
    diff = (fetch_staged(repo_path) or "").strip()
    if not diff:
        raise DiffSourceError("no staged changes found")
    return diff

import io
import json

import httpx
import pytest
from unittest.mock import MagicMock, patch
import git

from gptc.core import (
    GitRepositoryContext,
    fetch_staged_diff,
    read_diff,
    read_piped_diff,
)
from gptc.errors import DiffSourceError
from gptc.providers import GeminiProvider


class TTYInput(io.StringIO):
    """A stdin stand-in that claims to be an interactive terminal."""

    def isatty(self):
        return True


# --- read_piped_diff ---


def test_read_piped_diff_trims():
    assert read_piped_diff(io.StringIO("\n  diff --git a/x b/x\n\n")) == "diff --git a/x b/x"


def test_read_piped_diff_whitespace_only():
    assert read_piped_diff(io.StringIO(" \n\t\n")) is None


def test_read_piped_diff_terminal_is_not_read():
    stdin = TTYInput("should not be read")
    assert read_piped_diff(stdin) is None
    assert stdin.tell() == 0


def test_read_piped_diff_read_failure():
    stdin = MagicMock(spec=["isatty", "read"])
    stdin.isatty.return_value = False
    stdin.read.side_effect = OSError("broken pipe")

    with pytest.raises(DiffSourceError, match="failed to read from stdin"):
        read_piped_diff(stdin)


def test_read_piped_diff_decodes_bytes_leniently():
    stdin = io.TextIOWrapper(io.BytesIO(b"diff --git a/x b/x\n+caf\xe9\n"))

    assert read_piped_diff(stdin) == "diff --git a/x b/x\n+caf\ufffd"


# --- read_diff ---


def test_read_diff_prefers_piped_input():
    """Non-empty piped input wins and git is never consulted."""
    fetch_staged = MagicMock(return_value="staged diff")
    on_fallback = MagicMock()

    diff = read_diff(
        io.StringIO("  piped diff  \n"), fetch_staged=fetch_staged, on_fallback=on_fallback
    )

    assert diff == "piped diff"
    fetch_staged.assert_not_called()
    on_fallback.assert_not_called()


def test_read_diff_falls_back_on_empty_pipe():
    fetch_staged = MagicMock(return_value="\nstaged diff\n")
    on_fallback = MagicMock()

    diff = read_diff(
        io.StringIO("   "), repo_path="/repo", fetch_staged=fetch_staged, on_fallback=on_fallback
    )

    assert diff == "staged diff"
    fetch_staged.assert_called_once_with("/repo")
    on_fallback.assert_called_once()


def test_read_diff_falls_back_on_terminal():
    fetch_staged = MagicMock(return_value="staged diff")

    assert read_diff(TTYInput(), fetch_staged=fetch_staged) == "staged diff"
    fetch_staged.assert_called_once_with(".")


def test_read_diff_no_staged_changes():
    fetch_staged = MagicMock(return_value="  \n")

    with pytest.raises(DiffSourceError, match="no staged changes"):
        read_diff(io.StringIO(""), fetch_staged=fetch_staged)


def test_read_diff_propagates_fetch_errors():
    fetch_staged = MagicMock(side_effect=DiffSourceError("failed to get git diff: boom"))

    with pytest.raises(DiffSourceError, match="boom"):
        read_diff(io.StringIO(""), fetch_staged=fetch_staged)


# --- fetch_staged_diff (real repository) ---


def test_fetch_staged_diff_returns_staged_changes(temp_git_repo):
    repo = git.Repo(temp_git_repo)
    (temp_git_repo / "hello.py").write_text("print('Hello Staged World')\n")
    repo.index.add(["hello.py"])
    repo.close()

    diff = fetch_staged_diff(str(temp_git_repo))

    assert "hello.py" in diff
    assert "+print('Hello Staged World')" in diff


def test_fetch_staged_diff_ignores_unstaged_changes(temp_git_repo):
    (temp_git_repo / "hello.py").write_text("print('not staged')\n")

    assert fetch_staged_diff(str(temp_git_repo)).strip() == ""


def test_read_diff_without_staged_changes_in_repo(temp_git_repo):
    with pytest.raises(DiffSourceError, match="no staged changes found"):
        read_diff(io.StringIO(""), repo_path=str(temp_git_repo))


def test_fetch_staged_diff_from_subdirectory(temp_git_repo):
    subdir = temp_git_repo / "pkg"
    subdir.mkdir()
    (subdir / "mod.py").write_text("VALUE = 1\n")
    repo = git.Repo(temp_git_repo)
    repo.index.add(["pkg/mod.py"])
    repo.close()

    assert "pkg/mod.py" in fetch_staged_diff(str(subdir))


# --- GitRepositoryContext ---


def test_repository_context_invalid_repo(tmp_path):
    with patch("gptc.core.git.Repo", side_effect=git.exc.InvalidGitRepositoryError):
        with pytest.raises(DiffSourceError, match="not a valid Git repository"):
            with GitRepositoryContext(str(tmp_path)):
                pass


@patch("gptc.core.git.Repo")
def test_repository_context_closes_repo(mock_repo_cls):
    mock_repo = MagicMock(spec=git.Repo)
    mock_repo_cls.return_value = mock_repo

    with GitRepositoryContext("/repo") as repo:
        assert repo is mock_repo

    mock_repo_cls.assert_called_once_with("/repo", search_parent_directories=True)
    mock_repo.close.assert_called_once()


@patch("gptc.core.git.Repo")
def test_fetch_staged_diff_git_failure(mock_repo_cls):
    mock_repo = MagicMock()
    mock_repo.git.diff.side_effect = git.exc.GitCommandError("diff", 128)
    mock_repo_cls.return_value = mock_repo

    with pytest.raises(DiffSourceError, match="failed to get git diff"):
        fetch_staged_diff("/repo")
    mock_repo.git.diff.assert_called_once_with("--staged", stdout_as_string=False)


def test_latin1_staged_file_reaches_provider(temp_git_repo):
    (temp_git_repo / "legacy.txt").write_bytes(b"caf\xe9 na\xefve\n")
    repo = git.Repo(temp_git_repo)
    repo.index.add(["legacy.txt"])
    repo.close()

    diff = read_diff(io.StringIO(""), repo_path=str(temp_git_repo))
    assert "+caf\ufffd na\ufffdve" in diff

    seen = []

    def handler(request):
        seen.append(json.loads(request.content))
        return httpx.Response(
            200, json={"candidates": [{"content": {"parts": [{"text": "chore: add legacy file"}]}, "finishReason": "STOP"}]}
        )

    provider = GeminiProvider("key", "gemini-test", http_client=httpx.Client(transport=httpx.MockTransport(handler)))
    with provider:
        assert provider.generate(diff) == "chore: add legacy file"

    assert seen[0]["contents"][0]["parts"][0]["text"] == diff

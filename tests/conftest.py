import io

import pytest
import git
from rich.console import Console

from gptc.config import LLMSettings


@pytest.fixture
def temp_git_repo(tmp_path):
    """
    Creates a temporary git repo with one commit.
    returns the path to the repo.
    """
    repo_dir = tmp_path / "test_repo"
    repo_dir.mkdir()

    repo = git.Repo.init(repo_dir)

    # Configure author (required for commits)
    repo.config_writer().set_value("user", "name", "Test Bot").release()
    repo.config_writer().set_value("user", "email", "test@bot.com").release()

    # Create a file and commit it (History)
    file_path = repo_dir / "hello.py"
    file_path.write_text("print('Hello World')\n")
    repo.index.add([str(file_path)])
    repo.index.commit("Initial commit")
    repo.close()

    return repo_dir


@pytest.fixture
def settings():
    """Settings with both keys set, isolated from the environment and .env."""
    return LLMSettings(
        _env_file=None,
        openai_api_key="sk-test",
        gemini_api_key="gemini-test",
        openai_base_url="https://api.openai.com/v1",
        gemini_base_url="https://generativelanguage.googleapis.com",
    )


@pytest.fixture
def empty_settings():
    return LLMSettings(_env_file=None, openai_api_key=None, gemini_api_key=None)


@pytest.fixture
def console():
    """A rich console writing into a buffer; read it back with console.file.getvalue()."""
    return Console(file=io.StringIO(), width=200)


@pytest.fixture
def err_console():
    return Console(file=io.StringIO(), width=200)

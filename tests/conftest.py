import subprocess
import time
import types
from collections.abc import Generator
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_config(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> Generator[Path, None, None]:
    # Keep the persisted record and credential env vars out of every test
    config_home = tmp_path / ".git-auto-commit"
    monkeypatch.setenv("GIT_AUTO_COMMIT_CONFIG_HOME", str(config_home))
    for name in (
        "SILICONFLOW_API_KEY",
        "GIT_AUTO_COMMIT_LANGUAGE",
        "GIT_AUTO_COMMIT_MODEL",
        "GIT_AUTO_COMMIT_ENDPOINT",
        "GIT_AUTO_COMMIT_TIMEOUT",
        "NO_COLOR",
    ):
        monkeypatch.delenv(name, raising=False)
    yield config_home


def run_git(repo: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args],
        cwd=repo,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """Empty repository with a committer identity configured."""
    repo = tmp_path / "repo"
    repo.mkdir()
    run_git(repo, "init", "-q")
    run_git(repo, "config", "user.name", "tester")
    run_git(repo, "config", "user.email", "tester@example.com")
    run_git(repo, "config", "commit.gpgsign", "false")
    return repo


@pytest.fixture
def seeded_repo(git_repo: Path) -> Path:
    """Repository with one committed file and a clean tree."""
    (git_repo / "README.md").write_text("hello\n")
    run_git(git_repo, "add", "README.md")
    run_git(git_repo, "commit", "-q", "-m", "chore: seed")
    return git_repo


@pytest.fixture
def make_openai():
    """Factory for stand-ins of ``openai.OpenAI`` exposing chat completions."""

    def factory(content=None, choices=None, error=None, delay=0.0):
        calls = []

        def create(**kwargs):
            calls.append(kwargs)
            if delay:
                time.sleep(delay)
            if error is not None:
                raise error
            if choices is not None:
                return types.SimpleNamespace(choices=choices)
            message = types.SimpleNamespace(content=content)
            return types.SimpleNamespace(
                choices=[types.SimpleNamespace(message=message, finish_reason="stop")]
            )

        completions = types.SimpleNamespace(create=create)
        return types.SimpleNamespace(
            chat=types.SimpleNamespace(completions=completions), calls=calls
        )

    return factory


@pytest.fixture
def git():
    """Run a git command in a repository and return its stdout."""
    return run_git


@pytest.fixture
def last_subject():
    """Return the subject line of HEAD in a repository."""
    return lambda repo: run_git(repo, "log", "-1", "--pretty=%s").strip()

"""git-auto-commit - AI generated commit messages for pending Git changes."""

from importlib import import_module
from typing import TYPE_CHECKING

__version__ = "0.1.0"

# Public API (lazy-exported to avoid importing the OpenAI SDK at import time)
__all__ = [
    # Config
    "Config", "load_config",
    # Git
    "GitRepo", "RepositoryStatus",
    # Pipeline
    "ChangeSetReader", "build_prompt", "CompletionClient",
    "CommitMessageGenerator", "validate_commit_message",
    # Core workflow
    "AutoCommitWorkflow", "ConfirmationMode", "InvocationResult", "WorkflowState",
    # Exceptions
    "AutoCommitError", "GitError", "LLMError", "ConfigError", "ValidationError",
]


def __getattr__(name: str):
    """Lazy attribute loader for the public API."""
    mapping = {
        "Config": ("git_auto_commit.config", "Config"),
        "load_config": ("git_auto_commit.config", "load_config"),
        "GitRepo": ("git_auto_commit.git", "GitRepo"),
        "RepositoryStatus": ("git_auto_commit.git", "RepositoryStatus"),
        "ChangeSetReader": ("git_auto_commit.changeset", "ChangeSetReader"),
        "build_prompt": ("git_auto_commit.prompts", "build_prompt"),
        "CompletionClient": ("git_auto_commit.llm", "CompletionClient"),
        "CommitMessageGenerator": ("git_auto_commit.commit", "CommitMessageGenerator"),
        "validate_commit_message": ("git_auto_commit.commit", "validate_commit_message"),
        "AutoCommitWorkflow": ("git_auto_commit.core", "AutoCommitWorkflow"),
        "ConfirmationMode": ("git_auto_commit.core", "ConfirmationMode"),
        "InvocationResult": ("git_auto_commit.core", "InvocationResult"),
        "WorkflowState": ("git_auto_commit.core", "WorkflowState"),
        "AutoCommitError": ("git_auto_commit.exceptions", "AutoCommitError"),
        "GitError": ("git_auto_commit.exceptions", "GitError"),
        "LLMError": ("git_auto_commit.exceptions", "LLMError"),
        "ConfigError": ("git_auto_commit.exceptions", "ConfigError"),
        "ValidationError": ("git_auto_commit.exceptions", "ValidationError"),
    }
    if name in mapping:
        mod_name, attr = mapping[name]
        mod = import_module(mod_name)
        value = getattr(mod, attr)
        globals()[name] = value  # cache for future access
        return value
    raise AttributeError(f"module 'git_auto_commit' has no attribute {name!r}")


if TYPE_CHECKING:
    from .changeset import ChangeSetReader
    from .commit import CommitMessageGenerator, validate_commit_message
    from .config import Config, load_config
    from .core import (
        AutoCommitWorkflow,
        ConfirmationMode,
        InvocationResult,
        WorkflowState,
    )
    from .exceptions import (
        AutoCommitError,
        ConfigError,
        GitError,
        LLMError,
        ValidationError,
    )
    from .git import GitRepo, RepositoryStatus
    from .llm import CompletionClient
    from .prompts import build_prompt

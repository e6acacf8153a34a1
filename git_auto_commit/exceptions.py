"""Exception hierarchy for git-auto-commit.

Every error is terminal for the current invocation. Messages are already
localized when the exception is raised; callers print them verbatim.
"""


class AutoCommitError(Exception):
    """Base exception for all git-auto-commit failures."""


class GitError(AutoCommitError):
    """A Git command failed or the path is not usable."""


class NotARepositoryError(GitError):
    """The target path is not inside a Git work tree."""


class CommitFailureError(GitError):
    """Staging or committing the generated message failed."""


class ValidationError(AutoCommitError):
    """The change set or generated message is not acceptable."""


class NoPendingChangesError(ValidationError):
    """The working tree is clean."""


class NoFilesToCommitError(ValidationError):
    """The working tree is dirty but nothing can be staged."""


class InvalidFormatError(ValidationError):
    """The completion is not a ``feat: ...`` / ``fix: ...`` line."""


class LLMError(AutoCommitError):
    """The remote completion service did not produce usable output."""


class CompletionTimeoutError(LLMError):
    """The completion deadline expired before a response arrived."""


class PayloadTooLargeError(LLMError):
    """The service rejected the request as too large."""


class RemoteServiceError(LLMError):
    """Any other failure reported by the completion service."""


class EmptyCompletionError(LLMError):
    """The service answered with zero choices."""


class ConfigError(AutoCommitError):
    """Configuration is missing, invalid or misused."""


class MissingCredentialError(ConfigError):
    """No API key has been configured."""


class UnknownSubcommandError(ConfigError):
    """An unrecognised ``config`` subcommand was requested."""

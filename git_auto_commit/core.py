"""Core workflow logic for git-auto-commit."""

from __future__ import annotations

import enum
import logging
import sys
from dataclasses import dataclass, field
from typing import Callable, List, Optional, TextIO

from .changeset import ChangeSetReader
from .commit import CommitMessageGenerator
from .config import Config
from .exceptions import AutoCommitError, CommitFailureError, GitError, NoFilesToCommitError
from .git import GitRepo, RepositoryStatus
from .llm import CompletionClient
from .messages import Messages

logger = logging.getLogger(__name__)

RESET = "\033[0m"
CYAN = "\033[96m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
DIM = "\033[2m"
RED = "\033[91m"


class ConfirmationMode(enum.Enum):
    INTERACTIVE = "interactive"
    AUTO_CONFIRM = "auto_confirm"


class WorkflowState(enum.Enum):
    IDLE = "idle"
    ANALYZING = "analyzing"
    GENERATING = "generating"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    COMMITTING = "committing"
    DONE = "done"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass
class InvocationResult:
    """Outcome of one workflow run."""

    exit_code: int
    message: str
    state: WorkflowState
    files: List[str] = field(default_factory=list)
    commit_message: Optional[str] = None
    error: Optional[AutoCommitError] = None

    @property
    def success(self) -> bool:
        return self.exit_code == 0


class AutoCommitWorkflow:
    """Analyze → generate → confirm → stage and commit, once."""

    def __init__(
        self,
        config: Config,
        repo_path: Optional[str] = None,
        confirmation: ConfirmationMode = ConfirmationMode.INTERACTIVE,
        completion_client: Optional[CompletionClient] = None,
        input_fn: Callable[[str], str] = input,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
        color: bool = False,
    ) -> None:
        self._config = config
        self.repo_path = repo_path
        self.confirmation = confirmation
        self.messages = Messages(config.language)
        self._completion_client = completion_client
        self._input = input_fn
        self._stdout = stdout or sys.stdout
        self._stderr = stderr or sys.stderr
        self._color = color
        self.state = WorkflowState.IDLE

    # ------------------------------------------------------------------
    # Output helpers
    # ------------------------------------------------------------------
    def _paint(self, text: str, colour: str) -> str:
        return f"{colour}{text}{RESET}" if self._color else text

    def _print(self, text: str, colour: str = "") -> None:
        print(self._paint(text, colour) if colour else text, file=self._stdout, flush=True)

    def _notify(self, message_id: str) -> None:
        self._print(self.messages(message_id), DIM)

    def _transition(self, state: WorkflowState) -> None:
        logger.debug("workflow %s -> %s", self.state.value, state.value)
        self.state = state

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def execute(self) -> InvocationResult:
        """Run the workflow; failures are reported, never raised."""
        files: List[str] = []
        commit_message: Optional[str] = None
        try:
            self._transition(WorkflowState.ANALYZING)
            git_repo = GitRepo(self.repo_path, messages=self.messages)
            status, diff = self._analyze(git_repo)
            files = self._files_to_commit(status)

            self._transition(WorkflowState.GENERATING)
            generator = CommitMessageGenerator(
                self._config,
                completion_client=self._completion_client,
                messages=self.messages,
                notify=self._notify,
            )
            commit_message = generator.generate(status, diff)
            self._print_plan(status, commit_message)

            if not self._confirm():
                self._transition(WorkflowState.CANCELLED)
                text = self.messages("commit_cancelled")
                self._print(text, YELLOW)
                return InvocationResult(
                    0, text, self.state, commit_message=commit_message
                )

            self._transition(WorkflowState.COMMITTING)
            self._commit(git_repo, files, commit_message)
        except AutoCommitError as exc:
            self._transition(WorkflowState.FAILED)
            text = self.messages("error_prefix") + str(exc)
            print(self._paint(text, RED), file=self._stderr, flush=True)
            return InvocationResult(
                1, text, self.state, commit_message=commit_message, error=exc
            )

        self._transition(WorkflowState.DONE)
        text = self.messages("commit_success")
        self._print(text, GREEN)
        return InvocationResult(0, text, self.state, files, commit_message)

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------
    def _analyze(self, git_repo: GitRepo) -> tuple[RepositoryStatus, str]:
        reader = ChangeSetReader(git_repo, self.messages, notify=self._notify)
        return reader.read()

    def _files_to_commit(self, status: RepositoryStatus) -> List[str]:
        files = status.files_to_commit()
        if not files:
            # e.g. only conflicted paths
            raise NoFilesToCommitError(self.messages("no_files"))
        return files

    def _print_plan(self, status: RepositoryStatus, commit_message: str) -> None:
        self._print(self.messages("files_header"))
        groups = (
            ("staged_files", status.staged),
            ("modified_files", status.modified),
            ("deleted_files", status.deleted),
            ("untracked_files", status.not_added),
        )
        for label, paths in groups:
            if not paths:
                continue
            self._print(self.messages(label), CYAN)
            for path in paths:
                self._print(f"  {path}")
        self._print(self.messages("generated_message", message=commit_message), GREEN)

    def _confirm(self) -> bool:
        if self.confirmation is ConfirmationMode.AUTO_CONFIRM:
            return True
        self._transition(WorkflowState.AWAITING_CONFIRMATION)
        try:
            answer = self._input(self.messages("confirm_prompt"))
        except EOFError:
            return False
        # Anything but an explicit "n" proceeds, including an empty line.
        return answer.strip().lower() != "n"

    def _commit(
        self, git_repo: GitRepo, files: List[str], commit_message: str
    ) -> None:
        try:
            git_repo.stage_files(files)
            git_repo.commit(commit_message)
        except GitError as exc:
            raise CommitFailureError(
                self.messages("commit_failed", detail=str(exc))
            ) from exc
        logger.debug("Committed %d file(s): %s", len(files), commit_message)

"""Read the pending change set from a repository."""

from __future__ import annotations

import logging
from typing import Callable, Optional, Tuple

from .exceptions import NoPendingChangesError
from .git import GitRepo, RepositoryStatus
from .messages import Messages

logger = logging.getLogger(__name__)

Notify = Callable[[str], None]


def _silent(_message_id: str) -> None:
    return None


class ChangeSetReader:
    """Queries status and raw diff text. Never mutates the repository."""

    def __init__(
        self,
        git_repo: GitRepo,
        messages: Optional[Messages] = None,
        notify: Optional[Notify] = None,
    ) -> None:
        self.git_repo = git_repo
        self._messages = messages or Messages()
        self._notify = notify or _silent

    def read(self) -> Tuple[RepositoryStatus, str]:
        """Return ``(status, diff)``.

        Raises:
            NoPendingChangesError: If every status category is empty.
        """
        self._notify("fetching_status")
        status = self.git_repo.status()
        if status.is_clean:
            raise NoPendingChangesError(self._messages("no_changes"))

        self._notify("fetching_diff")
        diff = self.git_repo.diff()
        logger.debug(
            "Change set: %d staged, %d modified, %d deleted, %d untracked, "
            "%d conflicted; diff length %d",
            len(status.staged),
            len(status.modified),
            len(status.deleted),
            len(status.not_added),
            len(status.conflicted),
            len(diff),
        )
        return status, diff

"""Commit message generation and validation for git-auto-commit."""

from __future__ import annotations

import logging
import re
from typing import Callable, Optional

from .config import Config
from .exceptions import InvalidFormatError
from .git import RepositoryStatus
from .llm import CompletionClient
from .messages import Messages
from .prompts import COMMIT_TYPES, build_prompt

logger = logging.getLogger(__name__)

COMMIT_MESSAGE_PATTERN = re.compile(r"({}): .+".format("|".join(COMMIT_TYPES)))

Notify = Callable[[str], None]


def _silent(_message_id: str) -> None:
    return None


def validate_commit_message(raw: Optional[str], messages: Optional[Messages] = None) -> str:
    """Return the trimmed message if it is a single ``feat|fix: ...`` line.

    Raises:
        InvalidFormatError: If the text is empty or malformed.
    """
    messages = messages or Messages()
    text = (raw or "").strip()
    if not text:
        raise InvalidFormatError(messages("empty_completion"))
    if not COMMIT_MESSAGE_PATTERN.fullmatch(text):
        first_line = text.splitlines()[0][:120]
        raise InvalidFormatError(messages("invalid_format", message=first_line))
    return text


class CommitMessageGenerator:
    """Prompt → completion → validation for an already-read change set."""

    def __init__(
        self,
        config: Config,
        completion_client: Optional[CompletionClient] = None,
        messages: Optional[Messages] = None,
        notify: Optional[Notify] = None,
    ) -> None:
        self._config = config
        self._messages = messages or Messages(config.language)
        self._notify = notify or _silent
        self._completion_client = completion_client

    @property
    def completion_client(self) -> CompletionClient:
        # Built on first use so a missing key surfaces after the repo checks.
        if self._completion_client is None:
            self._completion_client = CompletionClient.from_config(
                self._config, messages=self._messages, notify=self._notify
            )
        return self._completion_client

    def generate(self, status: RepositoryStatus, diff: str) -> str:
        """Return a validated commit message for ``status`` and ``diff``."""
        client = self.completion_client
        self._notify("building_prompt")
        system, user = build_prompt(status, diff, self._messages.language)
        raw = client.complete(system, user)
        logger.debug("Raw completion: %r", raw[:200])
        return validate_commit_message(raw, self._messages)

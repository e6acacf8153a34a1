"""Git operations for git-auto-commit."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Tuple

from .exceptions import GitError, NotARepositoryError
from .messages import Messages

logger = logging.getLogger(__name__)

CONFLICT_CODES = frozenset({"DD", "AU", "UD", "UA", "DU", "AA", "UU"})


@dataclass(frozen=True)
class RepositoryStatus:
    """Snapshot of pending changes, partitioned by category."""

    staged: Tuple[str, ...] = ()
    modified: Tuple[str, ...] = ()
    deleted: Tuple[str, ...] = ()
    created: Tuple[str, ...] = ()
    renamed: Tuple[Tuple[str, str], ...] = ()
    not_added: Tuple[str, ...] = ()
    conflicted: Tuple[str, ...] = ()

    @property
    def is_clean(self) -> bool:
        return not any(
            (
                self.staged,
                self.modified,
                self.deleted,
                self.created,
                self.renamed,
                self.not_added,
                self.conflicted,
            )
        )

    def files_to_commit(self) -> list[str]:
        """Ordered union of staged, modified, deleted and untracked paths."""
        seen: dict[str, None] = {}
        for group in (self.staged, self.modified, self.deleted, self.not_added):
            for path in group:
                seen.setdefault(path, None)
        return list(seen)


def parse_porcelain_status(output: str) -> RepositoryStatus:
    """Parse ``git status --porcelain=v1 -z`` output.

    Entries are NUL separated. A rename or copy entry is followed by an
    extra field holding the original path.
    """
    staged: list[str] = []
    modified: list[str] = []
    deleted: list[str] = []
    created: list[str] = []
    renamed: list[Tuple[str, str]] = []
    not_added: list[str] = []
    conflicted: list[str] = []

    fields = output.split("\0")
    index = 0
    while index < len(fields):
        entry = fields[index]
        index += 1
        if len(entry) < 4:
            continue
        code, path = entry[:2], entry[3:]
        x, y = code[0], code[1]
        if code == "??":
            not_added.append(path)
            continue
        if code == "!!":
            continue
        if code in CONFLICT_CODES:
            conflicted.append(path)
            continue
        if x in "RC":
            origin = fields[index] if index < len(fields) else ""
            index += 1
            if x == "R":
                renamed.append((origin, path))
            else:
                created.append(path)
        if x in "MADRC":
            staged.append(path)
        if x == "A":
            created.append(path)
        if "M" in (x, y):
            modified.append(path)
        if "D" in (x, y):
            deleted.append(path)

    return RepositoryStatus(
        staged=tuple(staged),
        modified=tuple(modified),
        deleted=tuple(deleted),
        created=tuple(created),
        renamed=tuple(renamed),
        not_added=tuple(not_added),
        conflicted=tuple(conflicted),
    )


class GitRepo:
    """Handles Git repository operations."""

    def __init__(
        self,
        repo_path: Optional[str] = None,
        messages: Optional[Messages] = None,
    ) -> None:
        """Open the work tree at ``repo_path`` (default: current directory).

        Raises:
            NotARepositoryError: If the path is not inside a Git work tree.
        """
        self._messages = messages or Messages()
        self.repo_path = Path(repo_path or Path.cwd()).expanduser()
        if not self._is_git_repo():
            raise NotARepositoryError(self._messages("not_a_repo"))
        # Porcelain paths are relative to the top level, so run everything there.
        self.repo_path = Path(self._run_git_command(["rev-parse", "--show-toplevel"]))

    def _is_git_repo(self) -> bool:
        """Check if ``repo_path`` lies inside a Git work tree."""
        if not self.repo_path.is_dir():
            return False
        try:
            output = self._run_git_command(["rev-parse", "--is-inside-work-tree"])
        except GitError:
            return False
        return output == "true"

    def _run_git_command(self, args: list[str], strip: bool = True) -> str:
        """Run a Git command and return its output."""
        logger.debug("git %s (cwd=%s)", " ".join(args), self.repo_path)
        try:
            result = subprocess.run(
                ["git"] + args,
                cwd=self.repo_path,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=True,
            )
        except subprocess.CalledProcessError as e:
            cmd = " ".join(args)
            raise GitError(f"Git command failed: {cmd}\n{(e.stderr or '').strip()}") from e
        except FileNotFoundError as exc:
            raise GitError("Git command not found. Please install Git.") from exc
        return result.stdout.strip() if strip else result.stdout

    def status(self) -> RepositoryStatus:
        """Return the current working tree status."""
        output = self._run_git_command(
            ["status", "--porcelain=v1", "-z", "--untracked-files=all"],
            strip=False,
        )
        return parse_porcelain_status(output)

    def get_working_diff(self) -> str:
        """Get the diff of working directory changes."""
        return self._run_git_command(["diff"], strip=False)

    def get_staged_diff(self) -> str:
        """Get the diff of staged changes."""
        return self._run_git_command(["diff", "--cached"], strip=False)

    def diff(self) -> str:
        """Working tree diff followed by the index diff."""
        parts = [part.rstrip("\n") for part in (self.get_working_diff(), self.get_staged_diff())]
        return "\n\n".join(part for part in parts if part)

    def stage_files(self, paths: Iterable[str]) -> None:
        """Stage paths, including deletions."""
        paths = list(paths)
        if not paths:
            return
        self._run_git_command(["add", "-A", "--"] + paths)

    def commit(self, message: str) -> None:
        """Create a commit with the given message."""
        self._run_git_command(["commit", "-m", message])

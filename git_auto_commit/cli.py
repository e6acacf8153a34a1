"""Command line interface for git-auto-commit."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Optional

from . import __version__
from .config import load_config, get_api_key, resolve_language, set_api_key
from .core import AutoCommitWorkflow, ConfirmationMode
from .exceptions import AutoCommitError, ConfigError, UnknownSubcommandError
from .messages import Messages

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(debug: bool = False) -> None:
    """Route library logging to stderr; DEBUG only when requested."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


class CLI:
    """Parses arguments, dispatches, and maps outcomes to exit codes."""

    def __init__(self) -> None:
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        # Shared flags accepted both before and after the "config" subcommand.
        common = argparse.ArgumentParser(add_help=False)
        common.add_argument(
            "--en",
            action="store_true",
            default=argparse.SUPPRESS,
            help="Use English for the prompt and all output",
        )
        common.add_argument(
            "--debug",
            action="store_true",
            default=argparse.SUPPRESS,
            help="Enable debug logging on stderr",
        )

        parser = argparse.ArgumentParser(
            prog="git-auto-commit",
            description=(
                "Generate a commit message for pending changes with an AI "
                "model and commit them."
            ),
            parents=[common],
        )
        parser.add_argument(
            "--auto-confirm",
            "-y",
            dest="auto_confirm",
            action="store_true",
            help="Commit without asking for confirmation",
        )
        parser.add_argument(
            "--repo-path",
            default=None,
            help="Path to the Git working tree (default: current directory)",
        )
        parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

        subparsers = parser.add_subparsers(dest="command")
        config_parser = subparsers.add_parser(
            "config", parents=[common], help="Manage the stored API key"
        )
        config_parser.add_argument("action", nargs="?", help="set-api-key | get-api-key")
        config_parser.add_argument("value", nargs="?", help="API key for set-api-key")
        return parser

    def run(self, args: Optional[list[str]] = None) -> int:
        try:
            parsed = self.parser.parse_args(args)
        except SystemExit as exc:
            return exc.code if isinstance(exc.code, int) else 0

        setup_logging(getattr(parsed, "debug", False))
        explicit_language = "en" if getattr(parsed, "en", False) else None
        try:
            language = resolve_language(explicit_language)
        except ConfigError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
        messages = Messages(language)

        try:
            if parsed.command == "config":
                return self._run_config(parsed.action, parsed.value, messages)
            return self._run_commit(parsed, language)
        except AutoCommitError as exc:
            print(messages("error_prefix") + str(exc), file=sys.stderr)
            return 1

    def _run_config(
        self, action: Optional[str], value: Optional[str], messages: Messages
    ) -> int:
        if action is None:
            print(messages("config_usage"))
            return 0
        if action == "set-api-key":
            if not value:
                print(messages("error_prefix") + messages("api_key_required"), file=sys.stderr)
                return 1
            set_api_key(value)
            print(messages("api_key_saved"))
            return 0
        if action == "get-api-key":
            api_key = get_api_key()
            if api_key:
                print(messages("api_key_current", api_key=api_key))
            else:
                print(messages("api_key_unset"))
            return 0
        raise UnknownSubcommandError(messages("unknown_subcommand", name=action))

    def _run_commit(self, parsed: argparse.Namespace, language: str) -> int:
        config = load_config(overrides={"language": language})
        mode = (
            ConfirmationMode.AUTO_CONFIRM
            if parsed.auto_confirm
            else ConfirmationMode.INTERACTIVE
        )
        workflow = AutoCommitWorkflow(
            config,
            repo_path=parsed.repo_path,
            confirmation=mode,
            color=sys.stdout.isatty() and not os.environ.get("NO_COLOR"),
        )
        result = workflow.execute()
        logger.debug("Workflow finished in state %s", result.state.value)
        return result.exit_code


def main(argv: Optional[list[str]] = None) -> int:
    return CLI().run(argv)


if __name__ == "__main__":
    sys.exit(main())

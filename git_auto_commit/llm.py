"""Remote completion calls for git-auto-commit.

The request runs on a single worker thread and the caller waits on it for
a fixed deadline. On expiry the wait is abandoned; the underlying HTTP
request is bounded by the same timeout so the worker also finishes.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any, Callable, Optional

import httpx
import openai

from .config import (
    DEFAULT_ENDPOINT,
    DEFAULT_MAX_TOKENS,
    DEFAULT_MODEL,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_TEMPERATURE,
    Config,
)
from .exceptions import (
    AutoCommitError,
    CompletionTimeoutError,
    EmptyCompletionError,
    MissingCredentialError,
    PayloadTooLargeError,
    RemoteServiceError,
)
from .messages import Messages

logger = logging.getLogger(__name__)

# Statuses the service uses to reject oversized prompts.
PAYLOAD_TOO_LARGE_STATUSES = frozenset(
    {httpx.codes.BAD_REQUEST, httpx.codes.REQUEST_ENTITY_TOO_LARGE}
)

# Upper bound for opening the connection; reads use the full deadline.
CONNECT_TIMEOUT = 10.0

Notify = Callable[[str], None]


def _silent(_message_id: str) -> None:
    return None


def _status_code(exc: BaseException) -> Optional[int]:
    status = getattr(exc, "status_code", None)
    if status is None:
        response = getattr(exc, "response", None)
        status = getattr(response, "status_code", None)
    return status if isinstance(status, int) else None


def _error_detail(exc: BaseException) -> str:
    """Prefer the service's structured ``error.message`` over ``str(exc)``."""
    body = getattr(exc, "body", None)
    if isinstance(body, dict):
        error = body.get("error", body)
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return getattr(exc, "message", None) or str(exc) or exc.__class__.__name__


class CompletionClient:
    """Sends one system/user prompt pair and returns the raw completion text."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_ENDPOINT,
        model: str = DEFAULT_MODEL,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        deadline: float = DEFAULT_REQUEST_TIMEOUT,
        messages: Optional[Messages] = None,
        notify: Optional[Notify] = None,
        client: Any = None,
    ) -> None:
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.deadline = deadline
        self._messages = messages or Messages()
        self._notify = notify or _silent
        if client is None:
            client = openai.OpenAI(
                api_key=api_key,
                base_url=base_url,
                timeout=httpx.Timeout(deadline, connect=min(deadline, CONNECT_TIMEOUT)),
                max_retries=0,
            )
        self._client = client

    @classmethod
    def from_config(
        cls,
        config: Config,
        messages: Optional[Messages] = None,
        notify: Optional[Notify] = None,
    ) -> "CompletionClient":
        """Build a client from ``config``; the API key must be set."""
        messages = messages or Messages(config.language)
        if not config.api_key:
            raise MissingCredentialError(messages("missing_api_key"))
        return cls(
            api_key=config.api_key,
            base_url=config.llm_endpoint,
            model=config.model,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
            deadline=config.request_timeout,
            messages=messages,
            notify=notify,
        )

    def _request(self, system: str, user: str) -> Any:
        return self._client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )

    def complete(self, system: str, user: str) -> str:
        """Return the first choice's text.

        Raises:
            CompletionTimeoutError: The deadline expired first.
            PayloadTooLargeError: The service rejected the request size.
            RemoteServiceError: Any other remote or transport failure.
            EmptyCompletionError: The response carried no choices.
        """
        self._notify("waiting_response")
        logger.debug(
            "Requesting completion model=%s prompt_chars=%d deadline=%.1fs",
            self.model,
            len(system) + len(user),
            self.deadline,
        )
        started = time.perf_counter()
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="completion")
        future = executor.submit(self._request, system, user)
        try:
            response = future.result(timeout=self.deadline)
        except FutureTimeoutError:
            future.cancel()
            logger.debug("Completion deadline of %.1fs expired", self.deadline)
            raise CompletionTimeoutError(
                self._messages("timeout", seconds=self.deadline)
            ) from None
        except AutoCommitError:
            raise
        except Exception as exc:  # noqa: BLE001 - SDK, transport and stub errors
            raise self._translate_error(exc) from exc
        finally:
            executor.shutdown(wait=False, cancel_futures=True)
        logger.debug("Completion received in %.2fs", time.perf_counter() - started)
        return self._extract_text(response)

    def _translate_error(self, exc: Exception) -> AutoCommitError:
        detail = _error_detail(exc)
        status = _status_code(exc)
        logger.debug("Completion failed status=%s detail=%s", status, detail)
        if status in PAYLOAD_TOO_LARGE_STATUSES:
            return PayloadTooLargeError(
                self._messages("payload_too_large", detail=detail)
            )
        return RemoteServiceError(self._messages("remote_error", detail=detail))

    def _extract_text(self, response: Any) -> str:
        choices = getattr(response, "choices", None) or []
        if not choices:
            raise EmptyCompletionError(self._messages("empty_completion"))
        choice = choices[0]
        message = getattr(choice, "message", None)
        content = getattr(message, "content", None)
        if content is None:
            # legacy completions shape: choices[0].text
            content = getattr(choice, "text", None)
        return content if isinstance(content, str) else ""

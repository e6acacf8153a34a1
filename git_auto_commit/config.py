"""Configuration management for git-auto-commit."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from .exceptions import ConfigError
from .messages import DEFAULT_LANGUAGE, SUPPORTED_LANGUAGES

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".git-auto-commit"
CONFIG_FILE_NAME = "config.json"
CONFIG_HOME_ENV = "GIT_AUTO_COMMIT_CONFIG_HOME"

DEFAULT_MODEL = "deepseek-ai/DeepSeek-V3"
DEFAULT_ENDPOINT = "https://api.siliconflow.cn/v1"
DEFAULT_TEMPERATURE = 0.3
DEFAULT_MAX_TOKENS = 100
DEFAULT_REQUEST_TIMEOUT = 120.0

API_KEY_ENV = "SILICONFLOW_API_KEY"


@dataclass(frozen=True)
class Config:
    """Runtime configuration for one invocation."""

    api_key: Optional[str] = None
    language: str = DEFAULT_LANGUAGE
    model: str = DEFAULT_MODEL
    llm_endpoint: str = DEFAULT_ENDPOINT
    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int = DEFAULT_MAX_TOKENS
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    def to_dict(self) -> Dict[str, Any]:
        """Serialise configuration to a dict (the key is masked)."""
        data = asdict(self)
        if data["api_key"]:
            data["api_key"] = "***"
        return data


def config_dir() -> Path:
    """Directory holding the persisted record (user scoped)."""
    override = os.environ.get(CONFIG_HOME_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / CONFIG_DIR_NAME


def config_file_path() -> Path:
    return config_dir() / CONFIG_FILE_NAME


def read_config_record() -> Dict[str, Any]:
    """Return the persisted record, or an empty dict if none exists yet."""
    path = config_file_path()
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8") or "{}")
    except (OSError, ValueError) as exc:
        raise ConfigError(f"Cannot read configuration file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file {path} must contain a JSON object")
    return data


def write_config_record(record: Dict[str, Any]) -> None:
    """Persist the whole record, replacing the previous file."""
    path = config_file_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(record, indent=2, ensure_ascii=False), encoding="utf-8")
    logger.debug("Wrote configuration to %s", path)


def get_api_key() -> Optional[str]:
    return read_config_record().get("api_key") or None


def set_api_key(api_key: str) -> None:
    record = read_config_record()
    record["api_key"] = api_key
    write_config_record(record)


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name)
    try:
        value = float(raw) if raw else default
    except ValueError:
        logger.debug("Ignoring invalid %s=%r", name, raw)
        return default
    return value if value > 0 else default


def resolve_language(explicit: Optional[str] = None, record: Optional[Dict[str, Any]] = None) -> str:
    """Pick the language: explicit flag, env var, persisted record, default."""
    if record is None:
        record = read_config_record()
    language = (
        explicit
        or os.environ.get("GIT_AUTO_COMMIT_LANGUAGE")
        or record.get("language")
        or DEFAULT_LANGUAGE
    )
    if language not in SUPPORTED_LANGUAGES:
        raise ConfigError(
            "Unsupported language {!r}; expected one of: {}".format(
                language, ", ".join(SUPPORTED_LANGUAGES)
            )
        )
    return language


def load_config(overrides: Optional[Dict[str, Any]] = None) -> Config:
    """Build configuration from the config file, environment and overrides."""

    overrides = overrides or {}
    record = read_config_record()

    api_key = (
        overrides.get("api_key")
        or record.get("api_key")
        or os.environ.get(API_KEY_ENV)
        or None
    )
    language = resolve_language(overrides.get("language"), record)
    model = (
        overrides.get("model")
        or os.environ.get("GIT_AUTO_COMMIT_MODEL")
        or record.get("model")
        or DEFAULT_MODEL
    )
    endpoint = (
        overrides.get("endpoint")
        or os.environ.get("GIT_AUTO_COMMIT_ENDPOINT")
        or record.get("endpoint")
        or DEFAULT_ENDPOINT
    )
    request_timeout = overrides.get("request_timeout") or _float_env(
        "GIT_AUTO_COMMIT_TIMEOUT", DEFAULT_REQUEST_TIMEOUT
    )

    config = Config(
        api_key=api_key,
        language=language,
        model=model,
        llm_endpoint=endpoint,
        request_timeout=float(request_timeout),
    )
    logger.debug("Loaded configuration: %s", config.to_dict())
    return config

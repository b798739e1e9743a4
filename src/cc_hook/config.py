"""Per-process hook configuration read from the environment."""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from pydantic import PositiveInt, TypeAdapter, ValidationError

DEFAULT_MAX_INPUT_BYTES = 10 * 1024 * 1024
DEFAULT_LOG_MAX_BYTES = 5 * 1024 * 1024
DEFAULT_LOG_BACKUP_COUNT = 3
DEFAULT_OTEL_ENDPOINT = "http://localhost:4317"

_positive_int = TypeAdapter(PositiveInt)


def _as_positive_int(environ: Mapping[str, str], variable: str, default: int) -> int:
    """Coerce an environment variable to a positive int, falling back to ``default``."""
    value = environ.get(variable)
    if value is None:
        return default
    try:
        return _positive_int.validate_python(value.strip())
    except ValidationError:
        # Logging isn't configured yet when this runs.
        print(f'Invalid {variable}: "{value}". Using default {default}.', file=sys.stderr)
        return default


def _as_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes")


def default_log_file(environ: Mapping[str, str]) -> Path:
    """Return ~/.claude/hooks.log, or /tmp/claude/hooks.log when HOME is unset."""
    home = environ.get("HOME")
    if home:
        return Path(home) / ".claude" / "hooks.log"
    return Path("/tmp") / "claude" / "hooks.log"


@dataclass(frozen=True)
class HookConfig:
    """Everything a hook process reads from its environment, resolved once."""

    max_input_bytes: int = DEFAULT_MAX_INPUT_BYTES
    env_file: Path | None = None
    log_file: Path | None = None
    log_level: str = "INFO"
    log_max_bytes: int = DEFAULT_LOG_MAX_BYTES
    log_backup_count: int = DEFAULT_LOG_BACKUP_COUNT
    log_to_stderr: bool = True
    otel_enabled: bool = False
    otel_endpoint: str = DEFAULT_OTEL_ENDPOINT

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> HookConfig:
        """Build the configuration from ``environ`` (default: ``os.environ``)."""
        if environ is None:
            environ = os.environ

        env_file = environ.get("CLAUDE_ENV_FILE")
        log_file = environ.get("CLAUDE_CODE_HOOK_LOG_FILE")
        log_level = environ.get("CLAUDE_CODE_HOOK_LOG_LEVEL", "INFO").strip().upper()
        if log_level not in logging.getLevelNamesMapping():
            print(f'Invalid CLAUDE_CODE_HOOK_LOG_LEVEL: "{log_level}". Using INFO.', file=sys.stderr)
            log_level = "INFO"

        return cls(
            max_input_bytes=_as_positive_int(
                environ, "CLAUDE_CODE_HOOK_STDIN_MAX_BUF_LEN", DEFAULT_MAX_INPUT_BYTES
            ),
            env_file=Path(env_file) if env_file else None,
            log_file=Path(log_file) if log_file else default_log_file(environ),
            log_level=log_level,
            log_max_bytes=_as_positive_int(
                environ, "CLAUDE_CODE_HOOK_LOG_MAX_BYTES", DEFAULT_LOG_MAX_BYTES
            ),
            log_backup_count=_as_positive_int(
                environ, "CLAUDE_CODE_HOOK_LOG_BACKUPS", DEFAULT_LOG_BACKUP_COUNT
            ),
            log_to_stderr=_as_bool(environ.get("CLAUDE_CODE_HOOK_LOG_STDERR"), True),
            otel_enabled=_as_bool(environ.get("CLAUDE_CODE_HOOK_OTEL_ENABLED"), False),
            otel_endpoint=environ.get("OTEL_EXPORTER_ENDPOINT", DEFAULT_OTEL_ENDPOINT),
        )

"""Logging setup for hook processes.

Records go to a rotating log file (every level) and to stderr (configured
level). stdout is never used: it's reserved for the hook's JSON output.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler

from cc_hook.config import HookConfig

ROOT_LOGGER = "cc_hook"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_handlers: list[logging.Handler] = []


def get_logger(*names: str) -> logging.Logger:
    """Get a logger under the library namespace, e.g. ``get_logger("handler")``."""
    return logging.getLogger(".".join((ROOT_LOGGER, *names)))


def configure_logging(config: HookConfig) -> None:
    """Attach stderr and file sinks to the library logger. Runs once per process."""
    if _handlers:
        return

    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(logging.DEBUG)
    formatter = logging.Formatter(LOG_FORMAT)

    if config.log_to_stderr:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setLevel(config.log_level)
        stderr_handler.setFormatter(formatter)
        _handlers.append(stderr_handler)

    if config.log_file is not None:
        try:
            config.log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                config.log_file,
                maxBytes=config.log_max_bytes,
                backupCount=config.log_backup_count,
                encoding="utf-8",
            )
        except OSError as e:
            print(f"Could not open hook log file {config.log_file}: {e}", file=sys.stderr)
        else:
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            _handlers.append(file_handler)

    for handler in _handlers:
        root.addHandler(handler)


def reset_logging() -> None:
    """Detach and close the sinks added by configure_logging()."""
    root = logging.getLogger(ROOT_LOGGER)
    while _handlers:
        handler = _handlers.pop()
        root.removeHandler(handler)
        handler.close()


def is_logging_to_stderr() -> bool:
    return any(
        isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
        for h in _handlers
    )

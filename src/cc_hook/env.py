"""Persisting environment variables for later Bash commands in the session."""

from __future__ import annotations

import re

from cc_hook.config import HookConfig
from cc_hook.errors import CapabilityUnavailable, EnvVarNameInvalid
from cc_hook.log import get_logger

ENV_VAR_NAME_PATTERN = r"^[A-Za-z_][A-Za-z0-9_]*$"

_env_var_name = re.compile(ENV_VAR_NAME_PATTERN)


def quote(value: str) -> str:
    """Single-quote a value for POSIX shells, e.g. ``it's`` -> ``'it'\\''s'``."""
    return "'" + value.replace("'", "'\\''") + "'"


def persist_env_var(name: str, value: str, *, config: HookConfig | None = None) -> None:
    """
    Append ``export NAME='value'`` to the session's env file (``CLAUDE_ENV_FILE``).

    Claude Code sources that file before each Bash command, so the variable is
    visible for the rest of the session. Only available to SessionStart hooks.

    Raises:
        EnvVarNameInvalid: ``name`` is not a valid shell identifier (nothing is written)
        CapabilityUnavailable: CLAUDE_ENV_FILE is not set
    """
    if not _env_var_name.fullmatch(name):
        raise EnvVarNameInvalid(name, ENV_VAR_NAME_PATTERN)

    config = config or HookConfig.from_env()
    if config.env_file is None:
        raise CapabilityUnavailable(
            "CLAUDE_ENV_FILE is not set; environment variables can only be persisted "
            "from SessionStart hooks"
        )

    line = f"export {name}={quote(value)}\n"
    with open(config.env_file, "a", encoding="utf-8") as f:
        f.write(line)
    get_logger("env").debug("Persisted %s to %s", name, config.env_file)

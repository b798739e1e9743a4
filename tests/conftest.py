"""Shared fixtures: keep hook logs out of the user's ~/.claude."""

from collections.abc import Iterator
from pathlib import Path

import pytest

from cc_hook.log import reset_logging


@pytest.fixture(autouse=True)
def hook_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point the hook log file at tmp_path and clear settings from the outer environment."""
    log_file = tmp_path / "hooks.log"
    monkeypatch.setenv("CLAUDE_CODE_HOOK_LOG_FILE", str(log_file))
    for variable in (
        "CLAUDE_ENV_FILE",
        "CLAUDE_CODE_HOOK_STDIN_MAX_BUF_LEN",
        "CLAUDE_CODE_HOOK_LOG_LEVEL",
        "CLAUDE_CODE_HOOK_LOG_STDERR",
        "CLAUDE_CODE_HOOK_OTEL_ENABLED",
    ):
        monkeypatch.delenv(variable, raising=False)
    reset_logging()
    yield log_file
    reset_logging()

"""Helpers for testing hook scripts end-to-end in a subprocess."""

from __future__ import annotations

import json
import os
import subprocess
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass
class HookResult:
    """Outcome of one hook process. stdout/stderr are parsed when they hold JSON."""

    status: int
    stdout: Any
    stderr: Any


def _maybe_json(text: str) -> Any:
    stripped = text.strip()
    if stripped.startswith("{"):
        try:
            return json.loads(stripped)
        except json.JSONDecodeError:
            pass
    return text


def run_hook(
    hook_path: str | Path,
    payload: Any,
    *,
    env: Mapping[str, str] | None = None,
    timeout: float = 30,
) -> HookResult:
    """
    Run a hook script with ``payload`` as JSON on stdin.

    ``payload`` may also be a str or bytes, sent as-is (e.g. to test malformed
    input). ``env`` is layered over the current environment.
    """
    if isinstance(payload, bytes):
        data = payload
    elif isinstance(payload, str):
        data = payload.encode("utf-8")
    else:
        data = json.dumps(payload).encode("utf-8")

    proc = subprocess.run(
        [sys.executable, str(hook_path)],
        input=data,
        capture_output=True,
        timeout=timeout,
        env={**os.environ, **env} if env is not None else None,
    )
    return HookResult(
        status=proc.returncode,
        stdout=_maybe_json(proc.stdout.decode("utf-8", "replace")),
        stderr=_maybe_json(proc.stderr.decode("utf-8", "replace")),
    )


def check_hook(
    hook_path: str | Path,
    payload: Any,
    *,
    env: Mapping[str, str] | None = None,
    timeout: float = 30,
) -> Any:
    """
    Run a hook script, assert it exited 0, and return its parsed stdout.

    Returns None when the hook printed nothing.
    """
    result = run_hook(hook_path, payload, env=env, timeout=timeout)
    assert result.status == 0, (
        f"Hook exited with status {result.status}\nstderr:\n{result.stderr}"
    )
    if isinstance(result.stdout, str):
        assert not result.stdout.strip(), f"Hook printed non-JSON output: {result.stdout!r}"
        return None
    return result.stdout

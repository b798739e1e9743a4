"""Errors raised while running a hook process.

Every error here ends the hook process: the top-level handler in
``cc_hook.hook`` logs it and exits with a non-zero status.
"""

from __future__ import annotations

from typing import Any


class HookError(Exception):
    """Base class for all hook failures."""

    pass


class InputTooLarge(HookError):
    """Raised when stdin grows past the configured byte limit."""

    def __init__(self, limit: int):
        super().__init__(f"stdin exceeded maximum buffer size of {limit} bytes.")
        self.limit = limit


class EmptyInput(HookError):
    """Raised when stdin is empty or whitespace only."""

    def __init__(self) -> None:
        super().__init__("No data was sent over stdin")


class MalformedJson(HookError):
    """Raised when stdin is not a valid JSON document."""

    def __init__(self, message: str, raw: str):
        super().__init__(message)
        self.raw = raw


class InputSchemaViolation(HookError):
    """Raised when the decoded input doesn't match the event's input schema."""

    def __init__(self, errors: list[str], raw: str):
        super().__init__("Input validation failed:\n" + "\n".join(errors))
        self.errors = errors
        self.raw = raw


class OutputSchemaViolation(HookError):
    """Raised when user logic returns a value that doesn't match the output schema."""

    def __init__(self, errors: list[str], value: Any):
        super().__init__("Output validation failed:\n" + "\n".join(errors))
        self.errors = errors
        self.value = value


class UserLogicFailure(HookError):
    """Raised when the hook implementation itself raises.

    The original exception is kept as ``__cause__``.
    """

    pass


class EnvVarNameInvalid(HookError, ValueError):
    """Raised when persisting an environment variable with a non-POSIX name."""

    def __init__(self, name: str, pattern: str):
        super().__init__(f"Environment variable name {name!r} must match pattern {pattern}")
        self.name = name


class CapabilityUnavailable(HookError):
    """Raised when a capability needs host configuration that isn't present."""

    pass

"""
The request/response pipeline shared by every hook.

One hook process handles exactly one request:

1. Read all of stdin (bounded by ``HookConfig.max_input_bytes``)
2. Decode it as JSON and validate it against the event's input schema
3. Call the hook implementation with the validated event (awaiting it if async)
4. Validate the returned value against the event's output schema
5. Print it as one JSON line on stdout, or print nothing if it returned None

Any failure raises a ``HookError``; deciding the exit status is left to the
caller (see ``cc_hook.hook.Hook``). Diagnostics never go to stdout.
"""

from __future__ import annotations

import asyncio
import inspect
import json
import sys
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import IO, Any, BinaryIO

from pydantic import ValidationError

from cc_hook.config import DEFAULT_MAX_INPUT_BYTES, HookConfig
from cc_hook.errors import (
    EmptyInput,
    HookError,
    InputSchemaViolation,
    InputTooLarge,
    MalformedJson,
    OutputSchemaViolation,
    UserLogicFailure,
)
from cc_hook.log import configure_logging, get_logger
from cc_hook.schema import EventSchema, format_validation_errors
from cc_hook.tracing import create_span, flush_tracing, setup_tracing

READ_CHUNK_SIZE = 64 * 1024

HookFn = Callable[[Any], "Any | Awaitable[Any]"]


class Stage(Enum):
    """Where a pipeline run is. Only moves forward; FAILED is reachable from any running stage."""

    PENDING = "pending"
    VALIDATING_INPUT = "validating_input"
    RUNNING_USER_LOGIC = "running_user_logic"
    VALIDATING_OUTPUT = "validating_output"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


def read_stdin(stream: BinaryIO, max_bytes: int = DEFAULT_MAX_INPUT_BYTES) -> str:
    """
    Read a whole binary stream into a stripped UTF-8 string.

    Raises InputTooLarge as soon as more than ``max_bytes`` have arrived, without
    draining the rest of the stream, and EmptyInput when nothing but whitespace
    was sent.
    """
    logger = get_logger("read_stdin")
    logger.debug("Reading stdin (limit %d bytes)", max_bytes)

    chunks: list[bytes] = []
    total_bytes = 0
    while True:
        chunk = stream.read(READ_CHUNK_SIZE)
        if not chunk:
            break
        total_bytes += len(chunk)
        if total_bytes > max_bytes:
            raise InputTooLarge(max_bytes)
        chunks.append(chunk)

    data = b"".join(chunks)
    try:
        text = data.decode("utf-8").strip()
    except UnicodeDecodeError as e:
        raise MalformedJson(f"stdin was not valid UTF-8: {e}", data.decode("utf-8", "replace")) from e

    if not text:
        raise EmptyInput()

    logger.debug("stdin read: %d bytes", total_bytes)
    return text


def _resolve(result: Any) -> Any:
    """Wait for an awaitable returned by a hook implementation."""
    if not inspect.isawaitable(result):
        return result

    async def wait() -> Any:
        return await result

    return asyncio.run(wait())


class HookPipeline:
    """Runs one hook request against an event's input/output schema pair."""

    def __init__(
        self,
        schema: EventSchema,
        config: HookConfig | None = None,
        stdin: BinaryIO | None = None,
        stdout: IO[str] | None = None,
    ):
        self.schema = schema
        self.config = config or HookConfig.from_env()
        self._stdin = stdin
        self._stdout = stdout
        self.stage = Stage.PENDING
        # The stage that raised, kept after stage moves to FAILED.
        self.failed_stage: Stage | None = None
        self.logger = get_logger("main")

    @property
    def stdin(self) -> BinaryIO:
        return self._stdin if self._stdin is not None else sys.stdin.buffer

    @property
    def stdout(self) -> IO[str]:
        return self._stdout if self._stdout is not None else sys.stdout

    def run(self, fn: HookFn) -> Any:
        """
        Run the full pipeline once.

        Returns the validated output model, or None when ``fn`` returned None
        (nothing is printed in that case). Raises HookError on any failure.
        """
        configure_logging(self.config)
        setup_tracing(self.config)
        self.logger.info("Execution started: %s hook", self.schema.name)

        try:
            with create_span("hook.run", {"hook.event": self.schema.name}):
                self.stage = Stage.VALIDATING_INPUT
                event = self.read_input()

                self.stage = Stage.RUNNING_USER_LOGIC
                value = self.call(fn, event)

                self.stage = Stage.VALIDATING_OUTPUT
                output = self.validate_output(value)
                if output is None:
                    self.logger.info("Empty output from handler")
                else:
                    self.write_output(output)
        except Exception:
            self.failed_stage = self.stage
            self.stage = Stage.FAILED
            raise
        finally:
            flush_tracing()

        self.stage = Stage.SUCCEEDED
        self.logger.info("Execution complete.")
        return output

    def read_input(self) -> Any:
        """Read, decode and validate the request on stdin."""
        with create_span("hook.read_stdin", {"hook.max_input_bytes": self.config.max_input_bytes}) as span:
            raw = read_stdin(self.stdin, self.config.max_input_bytes)
            span.set_attribute("hook.input_length", len(raw))

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            self.logger.error("stdin was not valid JSON: %s", raw)
            raise MalformedJson(f"stdin was not valid JSON: {e}", raw) from e

        with create_span("hook.validate_input"):
            try:
                event = self.schema.input_adapter.validate_python(data)
            except ValidationError as e:
                errors = format_validation_errors(e)
                self.logger.error(
                    "Input validation failed:\n%s\n\nValue: %s", "\n".join(errors), raw
                )
                raise InputSchemaViolation(errors, raw) from e

        self.logger.debug("Input parsed successfully: %r", event)
        return event

    def call(self, fn: HookFn, event: Any) -> Any:
        """Invoke the hook implementation; its exceptions become UserLogicFailure."""
        with create_span("hook.handler"):
            try:
                return _resolve(fn(event))
            except HookError:
                raise
            except Exception as e:
                raise UserLogicFailure(f"Hook implementation raised {type(e).__name__}: {e}") from e

    def validate_output(self, value: Any) -> Any:
        """Validate the implementation's return value; None means "no output"."""
        if value is None:
            return None

        with create_span("hook.validate_output"):
            try:
                return self.schema.output_adapter.validate_python(value)
            except ValidationError as e:
                errors = format_validation_errors(e)
                self.logger.error(
                    "Output validation failed:\n%s\n\nValue: %r", "\n".join(errors), value
                )
                raise OutputSchemaViolation(errors, value) from e

    def write_output(self, output: Any) -> None:
        payload = output.to_output_json()
        self.logger.info("Sending output to Claude Code: %s", payload)
        self.stdout.write(payload + "\n")
        self.stdout.flush()

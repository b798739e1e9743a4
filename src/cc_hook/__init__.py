"""Typed, validated Claude Code hooks: read the event on stdin, answer on stdout."""

from cc_hook._version import __version__
from cc_hook.config import HookConfig
from cc_hook.env import persist_env_var
from cc_hook.errors import (
    CapabilityUnavailable,
    EmptyInput,
    EnvVarNameInvalid,
    HookError,
    InputSchemaViolation,
    InputTooLarge,
    MalformedJson,
    OutputSchemaViolation,
    UserLogicFailure,
)
from cc_hook.hook import (
    EVENTS,
    Hook,
    generic,
    notification,
    post_tool_use,
    pre_compact,
    pre_tool_use,
    session_end,
    session_start,
    stop,
    subagent_stop,
    user_prompt_submit,
)
from cc_hook.log import get_logger
from cc_hook.pipeline import HookPipeline, Stage, read_stdin
from cc_hook.schema import (
    EVENT_SCHEMAS,
    assert_valid_output,
    get_event_schema,
    get_schema_as_json,
    validate_output,
)
from cc_hook.tools import KNOWN_TOOLS, classify

__all__ = [
    "__version__",
    "HookConfig",
    "persist_env_var",
    "CapabilityUnavailable",
    "EmptyInput",
    "EnvVarNameInvalid",
    "HookError",
    "InputSchemaViolation",
    "InputTooLarge",
    "MalformedJson",
    "OutputSchemaViolation",
    "UserLogicFailure",
    "EVENTS",
    "Hook",
    "generic",
    "notification",
    "post_tool_use",
    "pre_compact",
    "pre_tool_use",
    "session_end",
    "session_start",
    "stop",
    "subagent_stop",
    "user_prompt_submit",
    "get_logger",
    "HookPipeline",
    "Stage",
    "read_stdin",
    "EVENT_SCHEMAS",
    "assert_valid_output",
    "get_event_schema",
    "get_schema_as_json",
    "validate_output",
    "KNOWN_TOOLS",
    "classify",
]

"""
Claude Code hook input and output schemas.

Every hook reads an event payload on stdin and may print one JSON object on
stdout. Inputs share an envelope:

```json
{"hook_event_name": "Stop", "session_id": "...", "transcript_path": "...", "cwd": "..."}
```

and outputs share these optional fields:

- continue: boolean (default true); false stops Claude after all hooks run
- stopReason: string, only with continue=false, shown to the user
- suppressOutput: boolean (default false), hides stdout from the transcript
- systemMessage: string, warning shown to the user

Events that can veto (PostToolUse, UserPromptSubmit, Stop, SubagentStop)
add ``decision`` ("allow" | "block"; leaving it out means "allow") with a
``reason`` that is required when blocking. PreToolUse, PostToolUse,
UserPromptSubmit and SessionStart can add a ``hookSpecificOutput`` object
tagged with ``hookEventName``.

See: https://code.claude.com/docs/en/hooks
"""

from __future__ import annotations

import json
import reprlib
from dataclasses import dataclass
from functools import cached_property
from typing import Any, Literal

from pydantic import (
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    create_model,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from cc_hook.errors import OutputSchemaViolation
from cc_hook.tools import (
    POST_TOOL_VARIANTS,
    PRE_TOOL_VARIANTS,
    HookModel,
    PreToolCall,
    ToolTag,
    tool_union,
)

PermissionMode = Literal["default", "plan", "acceptEdits", "bypassPermissions", "dontAsk"]

EventName = Literal[
    "PreToolUse",
    "PostToolUse",
    "Notification",
    "UserPromptSubmit",
    "Stop",
    "SubagentStop",
    "PreCompact",
    "SessionStart",
    "SessionEnd",
]


# --- Inputs ---


class HookInput(HookModel):
    """Attributes common to all input payloads; also the generic hook's input."""

    hook_event_name: str
    session_id: str
    transcript_path: str  # path to the conversation JSONL
    cwd: str


class PreToolUseFields(HookInput):
    hook_event_name: Literal["PreToolUse"]
    permission_mode: PermissionMode | None = None


class PostToolUseFields(HookInput):
    hook_event_name: Literal["PostToolUse"]
    permission_mode: PermissionMode | None = None


def _compose(
    fields: type[HookInput], variants: dict[ToolTag, type[PreToolCall]], suffix: str
) -> dict[ToolTag, type[HookInput]]:
    """Cross an event's fields with every tool variant, e.g. ReadPreToolUseInput."""
    return {
        tag: create_model(
            call.__name__.removesuffix("Call") + suffix,
            __base__=(fields, call),
            __module__=__name__,
        )
        for tag, call in variants.items()
    }


PRE_TOOL_USE_VARIANTS = _compose(PreToolUseFields, PRE_TOOL_VARIANTS, "UseInput")
POST_TOOL_USE_VARIANTS = _compose(PostToolUseFields, POST_TOOL_VARIANTS, "UseInput")

# Tagged unions over the variants above; narrow with isinstance(event, ReadPreToolCall) etc.
PreToolUseInput = tool_union(PRE_TOOL_USE_VARIANTS)
PostToolUseInput = tool_union(POST_TOOL_USE_VARIANTS)


class NotificationInput(HookInput):
    hook_event_name: Literal["Notification"]
    message: str
    notification_type: str | None = None


class UserPromptSubmitInput(HookInput):
    hook_event_name: Literal["UserPromptSubmit"]
    permission_mode: PermissionMode | None = None
    prompt: str


class StopInput(HookInput):
    hook_event_name: Literal["Stop"]
    permission_mode: PermissionMode | None = None
    # True when Claude is already continuing because of a stop hook; check it to avoid loops.
    stop_hook_active: bool


class SubagentStopInput(HookInput):
    hook_event_name: Literal["SubagentStop"]
    permission_mode: PermissionMode | None = None
    stop_hook_active: bool


class PreCompactInput(HookInput):
    hook_event_name: Literal["PreCompact"]
    trigger: Literal["auto", "manual"]
    custom_instructions: str | None = None

    @field_validator("custom_instructions")
    @classmethod
    def _empty_instructions_are_absent(cls, value: str | None) -> str | None:
        return value or None


class SessionStartInput(HookInput):
    hook_event_name: Literal["SessionStart"]
    source: Literal["startup", "resume", "clear", "compact"]
    model: str | None = None


class SessionEndInput(HookInput):
    hook_event_name: Literal["SessionEnd"]
    reason: Literal["clear", "logout", "prompt_input_exit", "other", "exit"]


# --- Outputs ---


class OutputModel(HookModel):
    """Base for hook stdout payloads: camelCase on the wire, unknown keys rejected."""

    model_config = ConfigDict(
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_output_json(self) -> str:
        """Serialize to the single JSON line written to stdout."""
        return self.model_dump_json(by_alias=True, exclude_none=True)


class HookOutput(OutputModel):
    """Attributes common to all output payloads; also the generic hook's output."""

    continue_: bool = Field(default=True, alias="continue")
    stop_reason: str | None = None
    suppress_output: bool = False
    system_message: str | None = None

    @model_validator(mode="after")
    def _stop_reason_requires_halt(self) -> HookOutput:
        if self.stop_reason is not None and self.continue_:
            raise ValueError("'stopReason' is only allowed when 'continue' is false")
        return self


class DecisionOutput(HookOutput):
    """Output of events whose hooks can block. No decision means "allow"."""

    decision: Literal["allow", "block"] | None = None
    reason: str | None = None

    @model_validator(mode="after")
    def _block_requires_reason(self) -> DecisionOutput:
        if self.decision == "block" and self.reason is None:
            raise ValueError("'reason' is required when decision is 'block'")
        return self

    @property
    def is_blocking(self) -> bool:
        return self.decision == "block"


class PreToolUseSpecificOutput(OutputModel):
    hook_event_name: Literal["PreToolUse"] = "PreToolUse"
    permission_decision: Literal["allow", "ask", "deny"]
    # Shown to the user; Claude only sees it when the decision is "deny".
    permission_decision_reason: str
    updated_input: dict[str, Any] | None = None

    @model_validator(mode="after")
    def _deny_cannot_update_input(self) -> PreToolUseSpecificOutput:
        if self.permission_decision == "deny" and self.updated_input is not None:
            raise ValueError("'updatedInput' is only allowed with 'allow' or 'ask'")
        return self


class PostToolUseSpecificOutput(OutputModel):
    hook_event_name: Literal["PostToolUse"] = "PostToolUse"
    additional_context: str


class UserPromptSubmitSpecificOutput(OutputModel):
    hook_event_name: Literal["UserPromptSubmit"] = "UserPromptSubmit"
    additional_context: str


class SessionStartSpecificOutput(OutputModel):
    hook_event_name: Literal["SessionStart"] = "SessionStart"
    # Multiple hooks' additionalContext values are concatenated by Claude Code.
    additional_context: str


class PreToolUseOutput(HookOutput):
    hook_specific_output: PreToolUseSpecificOutput | None = None


class PostToolUseOutput(DecisionOutput):
    hook_specific_output: PostToolUseSpecificOutput | None = None


class UserPromptSubmitOutput(DecisionOutput):
    hook_specific_output: UserPromptSubmitSpecificOutput | None = None


class StopOutput(DecisionOutput):
    pass


class SubagentStopOutput(DecisionOutput):
    pass


class SessionStartOutput(HookOutput):
    hook_specific_output: SessionStartSpecificOutput | None = None


class NotificationOutput(HookOutput):
    pass


class PreCompactOutput(HookOutput):
    pass


class SessionEndOutput(HookOutput):
    pass


# --- Registry ---


@dataclass
class EventSchema:
    """The input/output schema pair for one lifecycle event."""

    name: str
    input_type: Any
    output_type: type[HookOutput]

    @cached_property
    def input_adapter(self) -> TypeAdapter[Any]:
        return TypeAdapter(self.input_type)

    @cached_property
    def output_adapter(self) -> TypeAdapter[Any]:
        return TypeAdapter(self.output_type)


EVENT_SCHEMAS: dict[str, EventSchema] = {
    schema.name: schema
    for schema in (
        EventSchema("PreToolUse", PreToolUseInput, PreToolUseOutput),
        EventSchema("PostToolUse", PostToolUseInput, PostToolUseOutput),
        EventSchema("Notification", NotificationInput, NotificationOutput),
        EventSchema("UserPromptSubmit", UserPromptSubmitInput, UserPromptSubmitOutput),
        EventSchema("Stop", StopInput, StopOutput),
        EventSchema("SubagentStop", SubagentStopInput, SubagentStopOutput),
        EventSchema("PreCompact", PreCompactInput, PreCompactOutput),
        EventSchema("SessionStart", SessionStartInput, SessionStartOutput),
        EventSchema("SessionEnd", SessionEndInput, SessionEndOutput),
    )
}

# Catch-all pair usable for any event name.
GENERIC_SCHEMA = EventSchema("generic", HookInput, HookOutput)


def get_event_schema(event: str) -> EventSchema:
    """Look up an event's schema pair; "generic" returns the catch-all pair."""
    if event == GENERIC_SCHEMA.name:
        return GENERIC_SCHEMA
    try:
        return EVENT_SCHEMAS[event]
    except KeyError:
        raise KeyError(
            f"Unknown hook event '{event}'. Valid events: {sorted(EVENT_SCHEMAS)}"
        ) from None


# --- Validation helpers ---

_short_repr = reprlib.Repr()
_short_repr.maxstring = 60
_short_repr.maxother = 60


def format_validation_errors(exc: ValidationError) -> list[str]:
    """Describe each failure as "Field '<path>': <expected>, got <type> <value>"."""
    lines: list[str] = []
    for error in exc.errors(include_url=False):
        path = ".".join(str(part) for part in error["loc"]) or "(root)"
        value = error.get("input")
        lines.append(
            f"Field '{path}': {error['msg']}, got {type(value).__name__} {_short_repr.repr(value)}"
        )
    return lines


def validate_output(event: str, output: Any) -> list[str]:
    """
    Validate a hook output value against an event's output schema.

    ``None`` (the hook printed nothing) is always valid.
    Returns a list of validation errors (empty if valid).
    """
    if output is None:
        return []
    try:
        get_event_schema(event).output_adapter.validate_python(output)
    except ValidationError as e:
        return format_validation_errors(e)
    return []


def assert_valid_output(event: str, output: Any) -> None:
    """Assert that a hook output is valid, raising OutputSchemaViolation if not."""
    errors = validate_output(event, output)
    if errors:
        raise OutputSchemaViolation(errors, output)


def get_schema_as_json(event: str, output: bool = False) -> str:
    """Return an event's input (or output) JSON Schema as a formatted JSON string."""
    schema = get_event_schema(event)
    adapter = schema.output_adapter if output else schema.input_adapter
    return json.dumps(adapter.json_schema(by_alias=True), indent=2)

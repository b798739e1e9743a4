"""
Tool-specific models for PreToolUse and PostToolUse hook input.

Claude Code sends the tool call flattened into the event payload:

```json
{"hook_event_name": "PreToolUse", ..., "tool_name": "Read", "tool_input": {"file_path": "/x"}}
```

Each known tool gets its own variant with a typed ``tool_input`` (and, for
PostToolUse, ``tool_response``). Any other tool name, including MCP tools
named ``mcp__<server>__<tool>``, lands in the ``Other`` variant with open
mappings. The variant is picked by ``classify(tool_name)`` before matching,
so a new or third-party tool never fails discrimination by itself.

Narrow the variant with ``isinstance`` or by comparing ``event.tag``.
"""

from __future__ import annotations

from typing import Annotated, Any, ClassVar, Literal, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag

KNOWN_TOOLS: tuple[str, ...] = (
    "Read",
    "Write",
    "Edit",
    "Glob",
    "NotebookEdit",
    "Bash",
    "Grep",
    "Task",
    "TodoWrite",
    "WebFetch",
    "WebSearch",
    "SlashCommand",
    "BashOutput",
    "KillShell",
)

OTHER_TOOL = "Other"

ToolTag = Literal[
    "Read",
    "Write",
    "Edit",
    "Glob",
    "NotebookEdit",
    "Bash",
    "Grep",
    "Task",
    "TodoWrite",
    "WebFetch",
    "WebSearch",
    "SlashCommand",
    "BashOutput",
    "KillShell",
    "Other",
]

_KNOWN_TOOL_SET = frozenset(KNOWN_TOOLS)


def classify(tool_name: Any) -> ToolTag:
    """Map a raw tool name to its variant tag; anything unknown is "Other"."""
    if isinstance(tool_name, str) and tool_name in _KNOWN_TOOL_SET:
        return tool_name  # type: ignore[return-value]
    return OTHER_TOOL


def _tool_discriminator(value: Any) -> str:
    if isinstance(value, dict):
        return classify(value.get("tool_name"))
    return getattr(value, "tag", OTHER_TOOL)


class HookModel(BaseModel):
    """Base for everything parsed from hook stdin: strict and immutable."""

    model_config = ConfigDict(
        strict=True,  # no coercion: "1" is not an int
        frozen=True,
        extra="ignore",
    )


class ToolInput(HookModel):
    """Arguments of a known tool. Unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid")


class ToolResponse(HookModel):
    """Result of a known tool. Unknown keys are rejected, as for ToolInput."""

    model_config = ConfigDict(extra="forbid")


# --- Tool inputs ---


class ReadInput(ToolInput):
    file_path: str
    offset: int | None = None
    limit: int | None = None
    pages: str | None = None


class WriteInput(ToolInput):
    file_path: str
    content: str


class EditInput(ToolInput):
    file_path: str
    old_string: str
    new_string: str
    replace_all: bool | None = None


class GlobInput(ToolInput):
    pattern: str
    path: str | None = None


class NotebookEditInput(ToolInput):
    notebook_path: str
    new_source: str
    cell_id: str | None = None
    cell_type: Literal["code", "markdown"] | None = None
    edit_mode: Literal["replace", "insert", "delete"] | None = None


class BashInput(ToolInput):
    command: str
    description: str | None = None
    timeout: int | None = None
    run_in_background: bool | None = None
    dangerously_disable_sandbox: bool | None = Field(
        default=None, alias="dangerouslyDisableSandbox"
    )


class GrepInput(ToolInput):
    """Grep arguments. The ripgrep-style flags (``-i``, ``-A``...) are aliased."""

    pattern: str
    path: str | None = None
    glob: str | None = None
    type: str | None = None
    output_mode: Literal["content", "files_with_matches", "count"] | None = None
    case_insensitive: bool | None = Field(default=None, alias="-i")
    line_numbers: bool | None = Field(default=None, alias="-n")
    after_context: int | None = Field(default=None, alias="-A")
    before_context: int | None = Field(default=None, alias="-B")
    context: int | None = Field(default=None, alias="-C")
    multiline: bool | None = None
    head_limit: int | None = None
    offset: int | None = None


class TaskInput(ToolInput):
    description: str
    prompt: str
    subagent_type: str
    model: str | None = None
    resume: str | None = None
    run_in_background: bool | None = None


class TodoItem(ToolInput):
    content: str
    status: Literal["pending", "in_progress", "completed"]
    active_form: str = Field(alias="activeForm")


class TodoWriteInput(ToolInput):
    todos: list[TodoItem]


class WebFetchInput(ToolInput):
    url: str
    prompt: str


class WebSearchInput(ToolInput):
    query: str
    allowed_domains: list[str] | None = None
    blocked_domains: list[str] | None = None


class SlashCommandInput(ToolInput):
    command: str


class BashOutputInput(ToolInput):
    bash_id: str
    filter: str | None = None


class KillShellInput(ToolInput):
    shell_id: str


# --- Tool responses ---


class BashResponse(ToolResponse):
    stdout: str
    stderr: str
    interrupted: bool
    is_image: bool | None = Field(default=None, alias="isImage")


class GlobResponse(ToolResponse):
    filenames: list[str]
    num_files: int | None = Field(default=None, alias="numFiles")
    truncated: bool | None = None


class GrepResponse(ToolResponse):
    mode: Literal["content", "files_with_matches", "count"] | None = None
    filenames: list[str] | None = None
    num_files: int | None = Field(default=None, alias="numFiles")
    content: str | None = None


class BashOutputResponse(ToolResponse):
    status: str | None = None
    stdout: str | None = None
    stderr: str | None = None
    exit_code: int | None = Field(default=None, alias="exitCode")


Record = dict[str, Any]


# --- PreToolUse variants ---


class PreToolCall(HookModel):
    """Fields shared by every PreToolUse tool variant."""

    tag: ClassVar[ToolTag]

    tool_name: str
    tool_use_id: str | None = None


class ReadPreToolCall(PreToolCall):
    tag: ClassVar[ToolTag] = "Read"
    tool_name: Literal["Read"]
    tool_input: ReadInput


class WritePreToolCall(PreToolCall):
    tag: ClassVar[ToolTag] = "Write"
    tool_name: Literal["Write"]
    tool_input: WriteInput


class EditPreToolCall(PreToolCall):
    tag: ClassVar[ToolTag] = "Edit"
    tool_name: Literal["Edit"]
    tool_input: EditInput


class GlobPreToolCall(PreToolCall):
    tag: ClassVar[ToolTag] = "Glob"
    tool_name: Literal["Glob"]
    tool_input: GlobInput


class NotebookEditPreToolCall(PreToolCall):
    tag: ClassVar[ToolTag] = "NotebookEdit"
    tool_name: Literal["NotebookEdit"]
    tool_input: NotebookEditInput


class BashPreToolCall(PreToolCall):
    tag: ClassVar[ToolTag] = "Bash"
    tool_name: Literal["Bash"]
    tool_input: BashInput


class GrepPreToolCall(PreToolCall):
    tag: ClassVar[ToolTag] = "Grep"
    tool_name: Literal["Grep"]
    tool_input: GrepInput


class TaskPreToolCall(PreToolCall):
    tag: ClassVar[ToolTag] = "Task"
    tool_name: Literal["Task"]
    tool_input: TaskInput


class TodoWritePreToolCall(PreToolCall):
    tag: ClassVar[ToolTag] = "TodoWrite"
    tool_name: Literal["TodoWrite"]
    tool_input: TodoWriteInput


class WebFetchPreToolCall(PreToolCall):
    tag: ClassVar[ToolTag] = "WebFetch"
    tool_name: Literal["WebFetch"]
    tool_input: WebFetchInput


class WebSearchPreToolCall(PreToolCall):
    tag: ClassVar[ToolTag] = "WebSearch"
    tool_name: Literal["WebSearch"]
    tool_input: WebSearchInput


class SlashCommandPreToolCall(PreToolCall):
    tag: ClassVar[ToolTag] = "SlashCommand"
    tool_name: Literal["SlashCommand"]
    tool_input: SlashCommandInput


class BashOutputPreToolCall(PreToolCall):
    tag: ClassVar[ToolTag] = "BashOutput"
    tool_name: Literal["BashOutput"]
    tool_input: BashOutputInput


class KillShellPreToolCall(PreToolCall):
    tag: ClassVar[ToolTag] = "KillShell"
    tool_name: Literal["KillShell"]
    tool_input: KillShellInput


class OtherPreToolCall(PreToolCall):
    """Any tool outside KNOWN_TOOLS, e.g. ``mcp__github__search_repositories``."""

    tag: ClassVar[ToolTag] = "Other"
    tool_input: Record


# --- PostToolUse variants ---


class PostToolCall(PreToolCall):
    """Fields shared by every PostToolUse tool variant."""

    pass


class ReadPostToolCall(ReadPreToolCall, PostToolCall):
    tool_response: Record


class WritePostToolCall(WritePreToolCall, PostToolCall):
    tool_response: Record


class EditPostToolCall(EditPreToolCall, PostToolCall):
    tool_response: Record


class GlobPostToolCall(GlobPreToolCall, PostToolCall):
    tool_response: GlobResponse


class NotebookEditPostToolCall(NotebookEditPreToolCall, PostToolCall):
    tool_response: Record


class BashPostToolCall(BashPreToolCall, PostToolCall):
    tool_response: BashResponse


class GrepPostToolCall(GrepPreToolCall, PostToolCall):
    tool_response: GrepResponse


class TaskPostToolCall(TaskPreToolCall, PostToolCall):
    tool_response: Record


class TodoWritePostToolCall(TodoWritePreToolCall, PostToolCall):
    tool_response: Record


class WebFetchPostToolCall(WebFetchPreToolCall, PostToolCall):
    tool_response: Record


class WebSearchPostToolCall(WebSearchPreToolCall, PostToolCall):
    tool_response: Record


class SlashCommandPostToolCall(SlashCommandPreToolCall, PostToolCall):
    tool_response: Record


class BashOutputPostToolCall(BashOutputPreToolCall, PostToolCall):
    tool_response: BashOutputResponse


class KillShellPostToolCall(KillShellPreToolCall, PostToolCall):
    tool_response: Record


class OtherPostToolCall(OtherPreToolCall, PostToolCall):
    # Some MCP servers hand back a JSON-encoded string; it is kept opaque.
    tool_response: Record | str


PRE_TOOL_VARIANTS: dict[ToolTag, type[PreToolCall]] = {
    cls.tag: cls
    for cls in (
        ReadPreToolCall,
        WritePreToolCall,
        EditPreToolCall,
        GlobPreToolCall,
        NotebookEditPreToolCall,
        BashPreToolCall,
        GrepPreToolCall,
        TaskPreToolCall,
        TodoWritePreToolCall,
        WebFetchPreToolCall,
        WebSearchPreToolCall,
        SlashCommandPreToolCall,
        BashOutputPreToolCall,
        KillShellPreToolCall,
        OtherPreToolCall,
    )
}

POST_TOOL_VARIANTS: dict[ToolTag, type[PostToolCall]] = {
    cls.tag: cls
    for cls in (
        ReadPostToolCall,
        WritePostToolCall,
        EditPostToolCall,
        GlobPostToolCall,
        NotebookEditPostToolCall,
        BashPostToolCall,
        GrepPostToolCall,
        TaskPostToolCall,
        TodoWritePostToolCall,
        WebFetchPostToolCall,
        WebSearchPostToolCall,
        SlashCommandPostToolCall,
        BashOutputPostToolCall,
        KillShellPostToolCall,
        OtherPostToolCall,
    )
}


def tool_union(variants: dict[ToolTag, type[BaseModel]]) -> Any:
    """Build a union of ``variants`` discriminated by ``classify(tool_name)``."""
    members = tuple(Annotated[cls, Tag(tag)] for tag, cls in variants.items())
    return Annotated[Union[members], Discriminator(_tool_discriminator)]

"""
Entry points for writing Claude Code hooks.

A hook script calls the hook object for its event with its implementation:

```python
from cc_hook.hook import stop

def handle(event):
    if event.stop_hook_active:
        return {"decision": "allow"}
    return {"decision": "block", "reason": "Please verify the changes before stopping"}

stop(handle)
```

The implementation receives the validated input model and returns a mapping
(or output model) matching the event's output schema, or None to print
nothing. Any failure is logged and the process exits with status 1.
"""

from __future__ import annotations

import sys
from typing import IO, Any, BinaryIO

from cc_hook.config import HookConfig
from cc_hook.log import get_logger, is_logging_to_stderr
from cc_hook.pipeline import HookFn, HookPipeline
from cc_hook.schema import EVENT_SCHEMAS, GENERIC_SCHEMA, EventSchema


class Hook:
    """Top-level handler for one lifecycle event."""

    def __init__(self, schema: EventSchema):
        self.schema = schema

    @property
    def name(self) -> str:
        return self.schema.name

    def __repr__(self) -> str:
        return f"Hook({self.name!r})"

    def __call__(self, fn: HookFn) -> Any:
        return self.run(fn)

    def run(
        self,
        fn: HookFn,
        *,
        config: HookConfig | None = None,
        stdin: BinaryIO | None = None,
        stdout: IO[str] | None = None,
    ) -> Any:
        """
        Run ``fn`` against the request on stdin.

        Returns the validated output (None if ``fn`` returned None). On any
        error, logs it and raises SystemExit(1).
        """
        pipeline = HookPipeline(
            self.schema,
            config=config or HookConfig.from_env(),
            stdin=stdin,
            stdout=stdout,
        )
        try:
            return pipeline.run(fn)
        except Exception as e:
            stage = pipeline.failed_stage or pipeline.stage
            get_logger("main").error(
                "%s hook failed during %s: %s", self.name, stage.value, e, exc_info=True
            )
            if not is_logging_to_stderr():
                print(f"{type(e).__name__}: {e}", file=sys.stderr)
            sys.exit(1)


pre_tool_use = Hook(EVENT_SCHEMAS["PreToolUse"])
post_tool_use = Hook(EVENT_SCHEMAS["PostToolUse"])
notification = Hook(EVENT_SCHEMAS["Notification"])
user_prompt_submit = Hook(EVENT_SCHEMAS["UserPromptSubmit"])
stop = Hook(EVENT_SCHEMAS["Stop"])
subagent_stop = Hook(EVENT_SCHEMAS["SubagentStop"])
pre_compact = Hook(EVENT_SCHEMAS["PreCompact"])
session_start = Hook(EVENT_SCHEMAS["SessionStart"])
session_end = Hook(EVENT_SCHEMAS["SessionEnd"])

# Accepts any event; input and output are checked against the envelope only.
generic = Hook(GENERIC_SCHEMA)

EVENTS: dict[str, Hook] = {
    hook.name: hook
    for hook in (
        pre_tool_use,
        post_tool_use,
        notification,
        user_prompt_submit,
        stop,
        subagent_stop,
        pre_compact,
        session_start,
        session_end,
    )
}

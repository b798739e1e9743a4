"""PostToolUse hook: report which variant the tool call was parsed into."""

from cc_hook.hook import post_tool_use
from cc_hook.tools import BashPostToolCall


def handle(event):
    if isinstance(event, BashPostToolCall):
        context = f"Bash exited, {len(event.tool_response.stdout)} bytes of stdout"
    else:
        context = f"{event.tag} variant for {event.tool_name}"
    return {"hookSpecificOutput": {"hookEventName": "PostToolUse", "additionalContext": context}}


if __name__ == "__main__":
    post_tool_use(handle)

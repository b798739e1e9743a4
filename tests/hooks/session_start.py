"""SessionStart hook: add context for the session source and persist an env var."""

from cc_hook.env import persist_env_var
from cc_hook.hook import session_start
from cc_hook.schema import SessionStartInput

CONTEXT = {
    "startup": "Fresh session started",
    "resume": "Resuming previous session",
    "clear": "Session cleared, starting fresh",
    "compact": "Session restarted after compaction",
}


async def handle(event: SessionStartInput):
    persist_env_var("SESSION_SOURCE", event.source)
    return {
        "hookSpecificOutput": {
            "hookEventName": "SessionStart",
            "additionalContext": CONTEXT[event.source],
        }
    }


if __name__ == "__main__":
    session_start(handle)

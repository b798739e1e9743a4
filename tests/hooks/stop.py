"""Stop hook: ask Claude to keep going once, then let it stop."""

from cc_hook.hook import stop
from cc_hook.schema import StopInput


def handle(event: StopInput):
    if event.stop_hook_active:
        return {}
    return {"decision": "block", "reason": "wait"}


if __name__ == "__main__":
    stop(handle)

"""PreCompact hook that only logs."""

from cc_hook.hook import pre_compact
from cc_hook.log import get_logger

logger = get_logger("handler")


def handle(event):
    logger.info("Compacting (%s)", event.trigger)


if __name__ == "__main__":
    pre_compact(handle)

"""Hook whose implementation raises."""

from cc_hook.hook import generic


def handle(event):
    raise RuntimeError("boom")


if __name__ == "__main__":
    generic(handle)

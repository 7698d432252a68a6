"""
This script crashes while loading settings from a dict that is
missing a key. The `KeyError` is raised, not returned, and picks up
context from `contextualize` on the way out. Let it raise to see how
the traceback shows the original failure as the cause.
"""

from errctx.result import contextualize

SETTINGS = {"host": "localhost"}


@contextualize("while loading settings")
def load():
    with contextualize(lambda: f"while reading {sorted(SETTINGS)}"):
        # XXX: Error here
        return SETTINGS["port"]


if __name__ == "__main__":
    load()

"""Internal diagnostics for treebark itself.

Nothing is emitted until enable_debug_log() is called (the CLI does this for
--debug-log). Filter with grep: grep 'treebark.logger' /tmp/treebark-debug.log
"""

import logging
from os import PathLike
from pathlib import Path

_formatter = logging.Formatter("%(asctime)s %(name)s %(message)s", datefmt="%H:%M:%S")

_root = logging.getLogger("treebark")
_root.addHandler(logging.NullHandler())
_root.setLevel(logging.DEBUG)
# don't propagate to root logger (an application configuring logging shouldn't
# suddenly see our stream open/close chatter)
_root.propagate = False


def get_logger(name: str) -> logging.Logger:
    return _root.getChild(name)


def enable_debug_log(path: str | PathLike[str]) -> logging.Handler:
    """Send treebark diagnostics to `path`. Returns the handler so callers can detach it."""
    handler = logging.FileHandler(Path(path))
    handler.setFormatter(_formatter)
    _root.addHandler(handler)
    return handler


def disable_debug_log(handler: logging.Handler) -> None:
    _root.removeHandler(handler)
    handler.close()

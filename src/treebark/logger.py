"""The logger tree.

A root Logger owns the output file and the "last message" clock. Loggers made
with group() hold a reference to their parent and resolve the file, the clock
and the time format by walking up to the root at the moment they are needed,
so changes made on an ancestor show up in every descendant immediately.
Indentation is per node and adds up along the chain.
"""

from __future__ import annotations

import time
import weakref
from collections.abc import Iterator
from enum import Enum
from os import PathLike
from typing import Any, TextIO

from . import format as fmt
from .config import LoggerConfig
from .log import get_logger

log = get_logger("logger")

INDENT = "    "

_RED = "\x1b[31m"
_YELLOW = "\x1b[33m"
_RESET = "\x1b[0m"


def _now() -> float:
    return time.time()


class NodeKind(Enum):
    """Root or group node. The value is the node's default indentation depth."""

    ROOT = 0
    GROUP = 1

    @property
    def default_depth(self) -> int:
        return self.value


class Logger:
    """A node in a logger tree.

    Construct one directly to get a root; call group() on any node to get a
    child that shares its file, clock and time format.
    """

    def __init__(
        self,
        prefix: str | None = None,
        file: str | PathLike[str] | None = None,
        *,
        _parent: Logger | None = None,
    ) -> None:
        # _parent is only passed by group()
        self.kind = NodeKind.ROOT if _parent is None else NodeKind.GROUP
        self.parent = _parent
        self.depth = self.kind.default_depth
        self.prefix = ""
        self._indent_temp = False
        self._stream: TextIO | None = None
        self._finalizer: weakref.finalize | None = None
        self._last_message_time: float | None = None
        self._time_format: str | None = None

        self.set_prefix(prefix)
        self.set_log_file(file)

    @classmethod
    def from_config(cls, config: LoggerConfig) -> Logger:
        logger = cls(config.prefix, config.log_file)
        logger.set_time_format(config.time_format)
        return logger

    def __repr__(self) -> str:
        return f"<Logger {self.kind.name.lower()} depth={self.depth} prefix={self.prefix!r}>"

    def __enter__(self) -> Logger:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # -- tree resolution ------------------------------------------------

    def _ancestors(self) -> Iterator[Logger]:
        """Yield this node, then its parent, and so on up to the root."""
        node: Logger | None = self
        while node is not None:
            yield node
            node = node.parent

    def _root(self) -> Logger:
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    @property
    def default_depth(self) -> int:
        return self.kind.default_depth

    @property
    def last_message_time(self) -> float:
        """When anything in this tree last wrote a line (defaults to now)."""
        return self._last_message_time_or(_now())

    def _last_message_time_or(self, default: float) -> float:
        stored = self._root()._last_message_time
        return default if stored is None else stored

    @last_message_time.setter
    def last_message_time(self, value: float) -> None:
        self._root()._last_message_time = value

    @property
    def time_format(self) -> str | None:
        """The nearest strftime override up the chain, or None for elapsed time."""
        for node in self._ancestors():
            if node._time_format:
                return node._time_format
        return None

    @property
    def file_stream(self) -> TextIO | None:
        # Only the root's stream counts; see set_log_file().
        return self._root()._stream

    @property
    def indent_depth(self) -> int:
        return sum(node.depth for node in self._ancestors())

    # -- output ---------------------------------------------------------

    def write(self, message: Any, *args: Any) -> Logger:
        """Print a line to stdout and append it (uncolored) to the tree's file."""
        now = _now()
        time_format = self.time_format
        if time_format is not None:
            label = fmt.format_time(time_format, now)
        else:
            label = fmt.format_elapsed(now - self._last_message_time_or(now))

        padding = INDENT * self.indent_depth
        output = f"{label} {self.prefix}{padding}{fmt.interpolate(message, *args)}"

        try:
            print(output)
            stream = self.file_stream
            if stream is not None:
                stream.write(fmt.strip_ansi(output) + "\n")
                stream.flush()
        finally:
            # a failed write still counts as this line's turn
            self.last_message_time = now
            if self._indent_temp:
                self._indent_temp = False
                self.unindent()

        return self

    def error(self, message: Any, *args: Any) -> Logger:
        return self.write(f"{_RED}ERR{_RESET} {message}", *args)

    def warn(self, message: Any, *args: Any) -> Logger:
        return self.write(f"{_YELLOW}WARN{_RESET} {message}", *args)

    def dump(self, value: Any, depth: int = 50, color: bool = True) -> Logger:
        """Write a pretty-printed rendering of value."""
        return self.write(fmt.pretty(value, depth=depth, color=color))

    def blank(self, count: int = 1) -> Logger:
        for _ in range(count):
            self.write("")
        return self

    # -- indentation ----------------------------------------------------

    def indent(self) -> Logger:
        self.depth += 1
        return self

    def indent_next(self) -> Logger:
        """Indent for the next write only. Repeated calls before that write are no-ops."""
        if not self._indent_temp:
            self.indent()
            self._indent_temp = True
        return self

    def unindent(self) -> Logger:
        self.depth = max(0, self.depth - 1)
        return self

    def clear_indent(self) -> Logger:
        """Reset to this node's default depth (1 for a group, so it stays nested)."""
        self.depth = self.default_depth
        return self

    # -- grouping -------------------------------------------------------

    def group(self) -> Logger:
        return type(self)(_parent=self)

    def end(self) -> Logger:
        return self if self.parent is None else self.parent

    # -- configuration --------------------------------------------------

    def set_prefix(self, prefix: str | None = None) -> Logger:
        self.prefix = prefix.strip() + " " if isinstance(prefix, str) else ""
        return self

    def set_log_file(self, file: str | PathLike[str] | None = None) -> Logger:
        """Close this node's file, then open `file` for appending if given.

        Only a root's file is ever written to. A group node keeps whatever is
        set here in its own slot, but its lines still go to the root's file.
        """
        self.close()
        if file is not None:
            stream = open(file, "a", encoding="utf-8")
            self._stream = stream
            self._finalizer = weakref.finalize(self, stream.close)
            log.debug("opened %s", file)
        return self

    def set_time_format(self, time_format: str | None = None) -> Logger:
        self._time_format = time_format
        return self

    def close(self) -> None:
        """Release this node's own file, if any. Safe to call repeatedly."""
        if self._finalizer is not None:
            name = getattr(self._stream, "name", None)
            # runs stream.close() at most once
            self._finalizer()
            self._finalizer = None
            log.debug("closed %s", name)
        self._stream = None

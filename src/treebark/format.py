"""Text formatting helpers used when rendering log lines.

- interpolate: printf-style substitution of arguments into a message
- strip_ansi: drop color/control escape sequences before lines hit a file
- pretty: structural rendering of arbitrary values, optionally colored
- format_time / format_elapsed: the time label at the start of each line
"""

import json
import math
import re
from datetime import datetime
from typing import Any

from rich.console import Console
from rich.pretty import Pretty, pretty_repr

_PLACEHOLDER = re.compile(r"%[sdifjoO%]")

# CSI/OSC escape sequences, as matched by the strip-ansi family of tools
_ANSI = re.compile(
    r"[\x1b\x9b][[\]()#;?]*"
    r"(?:(?:(?:(?:;[-a-zA-Z\d/#&.:=?%@~_]+)*"
    r"|[a-zA-Z\d]+(?:;[-a-zA-Z\d/#&.:=?%@~_]*)*)?\x07)"
    r"|(?:(?:\d{1,4}(?:;\d{0,4})*)?[\dA-PR-TZcf-ntqry=><~]))"
)

# console width for pretty output
PRETTY_WIDTH = 100


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return pretty_repr(value, max_width=PRETTY_WIDTH)


def _number_text(number: float) -> str:
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "Infinity" if number > 0 else "-Infinity"
    if number.is_integer():
        return str(int(number))
    return repr(number)


def _to_number(value: Any, integer: bool) -> str:
    """Render value as a number; integer truncates toward zero. Non-numbers give NaN."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return "NaN"
    if integer:
        if not math.isfinite(number):
            return "NaN"
        return str(int(number))
    return _number_text(number)


def _convert(conversion: str, value: Any) -> str:
    if conversion == "s":
        return str(value)
    if conversion == "i":
        return _to_number(value, integer=True)
    if conversion in ("d", "f"):
        return _to_number(value, integer=False)
    if conversion == "j":
        try:
            return json.dumps(value, default=str)
        except ValueError:
            # circular structure
            return "[Circular]"
    return pretty_repr(value, max_width=PRETTY_WIDTH)


def interpolate(message: Any, *args: Any) -> str:
    """Substitute args into message, printf style.

    Supported placeholders: %s %d %i %f %j %o %O, plus %% for a literal percent.
    Placeholders without a matching argument are left untouched, and any
    arguments left over are appended, separated by spaces. With no arguments
    the message is returned as-is (%% included).
    """
    text = str(message)
    if not args:
        return text

    remaining = list(args)

    def replace(match: re.Match[str]) -> str:
        token = match.group(0)
        if token == "%%":
            return "%"
        if not remaining:
            return token
        return _convert(token[1], remaining.pop(0))

    text = _PLACEHOLDER.sub(replace, text)
    if remaining:
        text = " ".join([text, *(_stringify(arg) for arg in remaining)])
    return text


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences and leave every other character as it was."""
    return _ANSI.sub("", text)


def pretty(value: Any, depth: int = 50, color: bool = True) -> str:
    """Render value as a (possibly multi-line) string.

    Containers nested deeper than `depth` are elided. With color, the result
    carries ANSI highlighting suitable for a terminal.
    """
    if not color:
        return pretty_repr(value, max_width=PRETTY_WIDTH, max_depth=depth)

    console = Console(
        force_terminal=True,
        color_system="standard",
        width=PRETTY_WIDTH,
        soft_wrap=True,
    )
    with console.capture() as capture:
        console.print(Pretty(value, max_depth=depth), end="")
    return capture.get().rstrip("\n")


def format_time(fmt: str, when: float | None = None) -> str:
    """Format a timestamp (seconds since the epoch, default now) in local time."""
    moment = datetime.now() if when is None else datetime.fromtimestamp(when)
    return moment.strftime(fmt)


def format_elapsed(seconds: float) -> str:
    return f"+{seconds:.2f}"

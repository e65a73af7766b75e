"""CLI entry point for treebark.

- pipe: timestamp and indent lines read from stdin, optionally teeing to a file
- demo: show off grouping, indentation, dumping and prefixes
- config: inspect or create the config file
"""

import argparse
import sys
import time

from .config import LoggerConfig, ensure_config_exists, get_config_path, load_config
from .log import enable_debug_log
from .logger import Logger


def _resolve_config(args: argparse.Namespace) -> LoggerConfig:
    """Config file values, overridden by whatever was given on the command line."""
    return load_config().merged(
        prefix=getattr(args, "prefix", None),
        log_file=getattr(args, "log_file", None),
        time_format=getattr(args, "time_format", None),
    )


def _open_logger(config: LoggerConfig) -> Logger:
    try:
        return Logger.from_config(config)
    except OSError as e:
        print(f"Error: could not open log file: {e}", file=sys.stderr)
        sys.exit(1)


def cmd_pipe(args: argparse.Namespace) -> None:
    """Write each stdin line through a logger."""
    with _open_logger(_resolve_config(args)) as log:
        for _ in range(args.indent):
            log.indent()
        for line in sys.stdin:
            # pass the line as an argument so stray % signs aren't treated as placeholders
            log.write("%s", line.rstrip("\r\n"))


def cmd_demo(args: argparse.Namespace) -> None:
    """Run through the logger's features."""
    with _open_logger(_resolve_config(args)) as log:
        log.write("Normal message.")
        log.write("This is a %s message.", "formatted")

        log.dump({"hello": "world"})

        log.write("Indent #0")
        log.indent().write("Indent #1")
        log.indent().write("Indent #2")
        log.unindent().write("Indent #1")
        log.indent().write("Indent #2")
        log.clear_indent().write("Indent #0")

        group = log.group()
        group.write("Group #1 Indent #0")
        group.indent().write("Group #1 Indent #1")
        log.write("Indent #0")
        log.indent().write("Indent #1")
        group.write("Group #1 Indent #1")
        group.clear_indent().write("Group #1 Indent #0")

        log.clear_indent()
        log.write("My Object:").indent_next().dump([1, 5, 23, 6, 2, 6])
        log.write("Those were my objects.")

        log.warn("Something looks %s.", "odd")
        log.error("Something went wrong.")

        log.set_prefix("[Prefix]")
        log.write("This is prefixed!")
        log.set_prefix("[Different Prefix]")
        log.write("This is prefixed differently!")
        log.set_prefix(None)

        log.write("Hello...")
        log.blank(2)
        log.write("...world!")

        if args.delay > 0:
            time.sleep(args.delay)
            log.write("This is delayed.")


def cmd_config_init(args: argparse.Namespace) -> None:
    """Initialize config file with defaults."""
    config_path = ensure_config_exists()
    print(f"Config file at: {config_path}")


def cmd_config_path(args: argparse.Namespace) -> None:
    """Print config file path."""
    print(get_config_path())


def cmd_config_show(args: argparse.Namespace) -> None:
    """Show current config."""
    config_path = get_config_path()
    if config_path.exists():
        print(config_path.read_text())
    else:
        print(f"No config file at {config_path}")
        print("Run 'treebark config init' to create one.")


def _add_logger_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-p", "--prefix", help="Prefix for every line")
    parser.add_argument("-f", "--log-file", help="Also append lines (without colors) to this file")
    parser.add_argument(
        "-t",
        "--time-format",
        help="strftime pattern for timestamps (default: seconds since previous line)",
    )


def setup_pipe_parser(subparsers: argparse._SubParsersAction) -> None:
    """Set up the pipe subcommand."""
    pipe_parser = subparsers.add_parser(
        "pipe",
        help="Timestamp lines read from stdin",
    )
    _add_logger_options(pipe_parser)
    pipe_parser.add_argument(
        "-i", "--indent", type=int, default=0, help="Indentation levels for every line"
    )
    pipe_parser.set_defaults(func=cmd_pipe)


def setup_demo_parser(subparsers: argparse._SubParsersAction) -> None:
    """Set up the demo subcommand."""
    demo_parser = subparsers.add_parser(
        "demo",
        help="Print a demonstration of the logger tree",
    )
    _add_logger_options(demo_parser)
    demo_parser.add_argument(
        "--delay",
        type=float,
        default=2.5,
        help="Seconds to wait before the final message (0 to skip it)",
    )
    demo_parser.set_defaults(func=cmd_demo)


def setup_config_parser(subparsers: argparse._SubParsersAction) -> None:
    """Set up the config subcommand."""
    config_parser = subparsers.add_parser(
        "config",
        help="Manage treebark configuration",
    )
    config_subparsers = config_parser.add_subparsers(dest="config_command")

    # config init
    init_parser = config_subparsers.add_parser("init", help="Create default config file")
    init_parser.set_defaults(func=cmd_config_init)

    # config path
    path_parser = config_subparsers.add_parser("path", help="Print config file path")
    path_parser.set_defaults(func=cmd_config_path)

    # config show
    show_parser = config_subparsers.add_parser("show", help="Show current config")
    show_parser.set_defaults(func=cmd_config_show)

    config_parser.set_defaults(func=cmd_config_show, config_command=None)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="treebark",
        description="Hierarchical, indented console and file logging",
    )
    parser.add_argument("--debug-log", help="Write treebark's own diagnostics to this file")
    subparsers = parser.add_subparsers(dest="command")

    setup_pipe_parser(subparsers)
    setup_demo_parser(subparsers)
    setup_config_parser(subparsers)

    args = parser.parse_args(argv)

    if args.debug_log:
        enable_debug_log(args.debug_log)

    if args.command is None:
        parser.print_help()
    elif hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()

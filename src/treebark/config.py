"""Configuration management for treebark."""

import dataclasses
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any


def get_config_path() -> Path:
    """Get the path to the treebark config file.

    TREEBARK_CONFIG wins if set, otherwise ~/.config/treebark/config.toml.
    """
    override = os.environ.get("TREEBARK_CONFIG")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "treebark" / "config.toml"


def get_default_config() -> str:
    """Return the default config file contents."""
    return """\
# treebark configuration

[logger]
# Text placed before every line written by the root logger
# prefix = "[app]"

# Append every line (without color codes) to this file
# log_file = "~/treebark.log"

# strftime pattern for an absolute timestamp. When unset each line instead
# shows the seconds elapsed since the previous line, e.g. "+0.25"
# time_format = "%H:%M:%S"
"""


@dataclass
class LoggerConfig:
    """Settings for a root logger."""

    prefix: str | None = None
    log_file: str | None = None
    time_format: str | None = None

    def merged(self, **overrides: Any) -> "LoggerConfig":
        """Return a copy with every non-None override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return dataclasses.replace(self, **changes)


def load_config(config_path: Path | None = None) -> LoggerConfig:
    """Load configuration from file, or return defaults."""
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        return LoggerConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        # Warn but return defaults
        print(f"Warning: Could not load config from {config_path}: {e}")
        return LoggerConfig()

    return _parse_config(data)


def _parse_config(data: dict[str, Any]) -> LoggerConfig:
    """Parse config dict into LoggerConfig object."""
    logger_data = data.get("logger", {})

    log_file = logger_data.get("log_file")
    if log_file:
        log_file = str(Path(log_file).expanduser())

    return LoggerConfig(
        prefix=logger_data.get("prefix"),
        log_file=log_file or None,
        time_format=logger_data.get("time_format") or None,
    )


def ensure_config_exists() -> Path:
    """Ensure the config file exists, creating with defaults if needed."""
    config_path = get_config_path()

    if not config_path.exists():
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(get_default_config())

    return config_path

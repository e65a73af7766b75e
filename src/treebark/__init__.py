"""Hierarchical console and file logging with indented groups."""

from .config import LoggerConfig, load_config
from .logger import Logger, NodeKind

__all__ = [
    "Logger",
    "LoggerConfig",
    "NodeKind",
    "load_config",
]

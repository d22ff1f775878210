"""CLI commands for zerodeploy."""

from . import (
    detect,
    node_version,
    config_cmd,
)

__all__ = [
    "detect",
    "node_version",
    "config_cmd",
]

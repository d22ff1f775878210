"""Runtime version selection."""

from .node_version import (
    DEFAULT_SELECTION,
    SUPPORTED_NODE_VERSIONS,
    NodeVersion,
    UnsupportedNodeVersionError,
    get_supported_node_version,
    resolve_manifest_node_version,
)

__all__ = [
    "DEFAULT_SELECTION",
    "SUPPORTED_NODE_VERSIONS",
    "NodeVersion",
    "UnsupportedNodeVersionError",
    "get_supported_node_version",
    "resolve_manifest_node_version",
]

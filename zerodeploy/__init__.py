"""zerodeploy: zero-configuration builder and route detection.

Given a project's file list and its package manifest, infer which builders a
serverless deployment needs and the default routing table that dispatches
requests to the resulting functions and static assets.

Usage:
    >>> from zerodeploy import detect_builders, detect_routes
    >>> files = ["api/users.js", "index.html"]
    >>> result = detect_builders(files)
    >>> [b.use for b in result.builders]
    ['@now/node', '@now/static']
    >>> routes = detect_routes(files, result.builders)
"""

__version__ = "0.1.0"

from .core.models import (
    BuilderSpec,
    BuildersResult,
    DeploymentConfig,
    DetectionOutcome,
    DetectOptions,
    Diagnostic,
    Manifest,
    RouteRule,
    RoutesResult,
)
from .detection import detect_builders, detect_framework, detect_routes
from .runtime import (
    NodeVersion,
    UnsupportedNodeVersionError,
    get_supported_node_version,
)

__all__ = [
    "__version__",
    "BuilderSpec",
    "BuildersResult",
    "DeploymentConfig",
    "DetectionOutcome",
    "DetectOptions",
    "Diagnostic",
    "Manifest",
    "RouteRule",
    "RoutesResult",
    "detect_builders",
    "detect_framework",
    "detect_routes",
    "NodeVersion",
    "UnsupportedNodeVersionError",
    "get_supported_node_version",
]

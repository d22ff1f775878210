"""Zero-config detection engines.

Pipeline:
    detect_framework() - Pick a framework preset from the manifest
    detect_builders() - Classify files into API, framework and static builders
    detect_routes() - Derive the default routing table from the builders

Usage:
    >>> from zerodeploy.detection import detect_builders, detect_routes
    >>> files = ["api/users.js", "public/index.html"]
    >>> builders = detect_builders(files).builders
    >>> [r.src for r in detect_routes(files, builders).default_routes]
    ['^/api/(users|users\\\\.js)$', '^/api(\\\\/.*)?$', '/(.*)']
"""

from .builders import (
    API_BUILDERS,
    PUBLIC_GLOB,
    STATIC_BUILDER,
    api_builder_for,
    detect_builders,
    is_api_source,
)
from .frameworks import (
    FRAMEWORK_PRESETS,
    GENERIC_STATIC_BUILD,
    FrameworkPreset,
    detect_framework,
)
from .paths import RouteShape
from .routes import detect_routes, find_conflict, route_for_path

__all__ = [
    "API_BUILDERS",
    "PUBLIC_GLOB",
    "STATIC_BUILDER",
    "api_builder_for",
    "detect_builders",
    "is_api_source",
    "FRAMEWORK_PRESETS",
    "GENERIC_STATIC_BUILD",
    "FrameworkPreset",
    "detect_framework",
    "RouteShape",
    "detect_routes",
    "find_conflict",
    "route_for_path",
]

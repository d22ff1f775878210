"""All Pydantic models for zerodeploy, organized by concern.

- manifest.py: the package manifest consumed by detection
- build.py: builder specs, detection options, builder detection results
- routing.py: route rules, route detection results, deployment documents
- diagnostics.py: diagnostic model and stable error codes
"""

from .manifest import MANIFEST_FILE, Manifest

from .diagnostics import (
    CONFLICTING_FILE_PATH,
    CONFLICTING_PATH_SEGMENT,
    MISSING_BUILD_SCRIPT,
    MISSING_FRAMEWORK_DEPENDENCY,
    UNSUPPORTED_NODE_VERSION,
    Diagnostic,
)

from .build import (
    BuilderSpec,
    BuildersResult,
    DetectionOutcome,
    DetectOptions,
)

from .routing import (
    DeploymentConfig,
    RouteRule,
    RoutesResult,
)

__all__ = [
    # Manifest
    "MANIFEST_FILE",
    "Manifest",
    # Diagnostics
    "CONFLICTING_FILE_PATH",
    "CONFLICTING_PATH_SEGMENT",
    "MISSING_BUILD_SCRIPT",
    "MISSING_FRAMEWORK_DEPENDENCY",
    "UNSUPPORTED_NODE_VERSION",
    "Diagnostic",
    # Builders
    "BuilderSpec",
    "BuildersResult",
    "DetectionOutcome",
    "DetectOptions",
    # Routing
    "DeploymentConfig",
    "RouteRule",
    "RoutesResult",
]

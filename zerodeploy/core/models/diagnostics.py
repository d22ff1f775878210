"""Diagnostics returned by the detection engines."""

from pydantic import BaseModel, ConfigDict, Field

# Builder detection
MISSING_BUILD_SCRIPT = "missing_build_script"
MISSING_FRAMEWORK_DEPENDENCY = "missing_framework_dependency"

# Route detection
CONFLICTING_FILE_PATH = "conflicting_file_path"
CONFLICTING_PATH_SEGMENT = "conflicting_path_segment"

# Runtime resolution
UNSUPPORTED_NODE_VERSION = "unsupported_node_version"


class Diagnostic(BaseModel):
    """A stable error code plus a human-readable message."""

    model_config = ConfigDict(frozen=True)

    code: str = Field(description="Stable identifier, e.g. 'conflicting_file_path'")
    message: str = Field(description="Explanation shown to the user verbatim")

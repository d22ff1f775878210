"""Node.js runtime selection from a manifest's ``engines.node`` range."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator

from pydantic import BaseModel, ConfigDict
from semantic_version import NpmSpec, Version

from ..core.models import UNSUPPORTED_NODE_VERSION, Diagnostic, Manifest

logger = logging.getLogger(__name__)


class NodeVersion(BaseModel):
    """A Node.js major version the platform can run."""

    model_config = ConfigDict(frozen=True)

    major: int
    range: str
    runtime: str


# Newest first: the first intersecting option is selected.
SUPPORTED_NODE_VERSIONS: tuple[NodeVersion, ...] = (
    NodeVersion(major=10, range="10.x", runtime="nodejs10.x"),
    NodeVersion(major=8, range="8.10.x", runtime="nodejs8.10"),
)

DEFAULT_SELECTION = next(v for v in SUPPORTED_NODE_VERSIONS if v.major == 8)

_VERSION_LITERAL = re.compile(r"(\d+)(?:\.(\d+|[xX*]))?(?:\.(\d+|[xX*]))?")


class UnsupportedNodeVersionError(ValueError):
    """Raised when an engine range excludes every supported Node.js version."""

    code = UNSUPPORTED_NODE_VERSION

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_diagnostic(self) -> Diagnostic:
        return Diagnostic(code=self.code, message=self.message)


def _number(part: str | None) -> int:
    return int(part) if part and part.isdigit() else 0


def _boundary_versions(*ranges: str) -> Iterator[Version]:
    """Versions at or just past every bound written in the given ranges.

    Two npm ranges overlap iff the larger of their lower bounds satisfies
    both, and every lower bound is one of these candidates.
    """
    for text in ranges:
        for match in _VERSION_LITERAL.finditer(text):
            major = int(match.group(1))
            minor = _number(match.group(2))
            patch = _number(match.group(3))
            yield Version(major=major, minor=minor, patch=patch)
            yield Version(major=major, minor=minor, patch=patch + 1)
            yield Version(major=major, minor=minor + 1, patch=0)
            yield Version(major=major + 1, minor=0, patch=0)


def ranges_intersect(supported_range: str, engine_range: str) -> bool:
    """Whether some version satisfies both npm ranges.

    Raises:
        ValueError: If either range is not valid npm range syntax.
    """
    supported = NpmSpec(supported_range)
    wanted = NpmSpec(engine_range)
    return any(
        version in supported and version in wanted
        for version in _boundary_versions(supported_range, engine_range)
    )


def _unsupported(engine_range: str) -> UnsupportedNodeVersionError:
    choices = " or ".join(f"`{v.range}`" for v in SUPPORTED_NODE_VERSIONS)
    return UnsupportedNodeVersionError(
        "Found `engines` in `package.json` with an unsupported Node.js range: "
        f"{engine_range}\nPlease use {choices} instead."
    )


def get_supported_node_version(
    engine_range: str | None, *, silent: bool = False
) -> NodeVersion:
    """Select the newest supported Node.js version allowed by ``engine_range``.

    An empty or missing range selects ``DEFAULT_SELECTION``.

    Raises:
        UnsupportedNodeVersionError: If no supported version satisfies the
            range, or the range cannot be parsed.
    """
    if not engine_range or not engine_range.strip():
        if not silent:
            logger.info(
                "Missing `engines` in `package.json`, using default range: %s",
                DEFAULT_SELECTION.range,
            )
        return DEFAULT_SELECTION

    for option in SUPPORTED_NODE_VERSIONS:
        try:
            matched = ranges_intersect(option.range, engine_range)
        except ValueError as exc:
            raise _unsupported(engine_range) from exc
        if matched:
            if not silent:
                logger.info(
                    "Found `engines` in `package.json`, selecting range: %s",
                    option.range,
                )
            return option

    raise _unsupported(engine_range)


def resolve_manifest_node_version(
    manifest: Manifest | None, *, silent: bool = False
) -> NodeVersion:
    """Apply :func:`get_supported_node_version` to ``engines.node``."""
    engine_range = manifest.node_engine if manifest is not None else None
    return get_supported_node_version(engine_range, silent=silent)

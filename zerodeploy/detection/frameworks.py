"""Framework presets recognized from a package manifest.

A preset matches only when the manifest's ``build`` script runs the
framework's CLI *and* the framework package is a (dev-)dependency. Partial
signals are reported through :func:`implied_framework` and
:func:`declared_framework` so that the builder detector can flag them instead
of guessing.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from ..core.models import MANIFEST_FILE, Manifest

logger = logging.getLogger(__name__)

NEXT_BUILDER = "@now/next"
STATIC_BUILD_BUILDER = "@now/static-build"

_COMMAND_SEPARATORS = re.compile(r"&&|\|\||;|\|")
_ENV_ASSIGNMENT = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*=")
_RUNNERS = {"npx", "yarn", "pnpx"}


def invoked_commands(script: str) -> list[str]:
    """Program names run by a shell-like npm script.

    ``"NODE_ENV=production npx next build && cp -r out dist"``
    gives ``["next", "cp"]``.
    """
    commands: list[str] = []
    for chunk in _COMMAND_SEPARATORS.split(script):
        tokens = chunk.split()
        while tokens and _ENV_ASSIGNMENT.match(tokens[0]):
            tokens.pop(0)
        if tokens and tokens[0] in _RUNNERS:
            tokens.pop(0)
        if tokens:
            commands.append(tokens[0])
    return commands


@dataclass(frozen=True)
class FrameworkPreset:
    """A known framework and the builder that deploys it."""

    name: str
    package: str
    command: str
    builder_use: str
    entry_file: str = MANIFEST_FILE

    def runs_cli(self, manifest: Manifest) -> bool:
        script = manifest.build_script
        return bool(script) and self.command in invoked_commands(script)

    def is_declared(self, manifest: Manifest) -> bool:
        return manifest.has_dependency(self.package)

    def matches(self, manifest: Manifest) -> bool:
        return self.runs_cli(manifest) and self.is_declared(manifest)


# Priority order: the first matching preset wins.
FRAMEWORK_PRESETS: tuple[FrameworkPreset, ...] = (
    FrameworkPreset("next", "next", "next", NEXT_BUILDER),
    FrameworkPreset("nuxt", "nuxt", "nuxt", STATIC_BUILD_BUILDER),
    FrameworkPreset("gatsby", "gatsby", "gatsby", STATIC_BUILD_BUILDER),
    FrameworkPreset(
        "create-react-app", "react-scripts", "react-scripts", STATIC_BUILD_BUILDER
    ),
    FrameworkPreset(
        "vue-cli", "@vue/cli-service", "vue-cli-service", STATIC_BUILD_BUILDER
    ),
)

# Used when a build script exists but names no known framework.
GENERIC_STATIC_BUILD = FrameworkPreset(
    "static-build", "", "", STATIC_BUILD_BUILDER
)


def detect_framework(manifest: Manifest | None) -> FrameworkPreset | None:
    """Return the first preset whose build script and dependency both match."""
    if manifest is None:
        return None
    for preset in FRAMEWORK_PRESETS:
        if preset.matches(manifest):
            logger.debug("Detected framework preset %r", preset.name)
            return preset
    return None


def implied_framework(manifest: Manifest | None) -> FrameworkPreset | None:
    """First preset whose CLI the build script runs, dependency ignored."""
    if manifest is None:
        return None
    for preset in FRAMEWORK_PRESETS:
        if preset.runs_cli(manifest):
            return preset
    return None


def declared_framework(manifest: Manifest | None) -> FrameworkPreset | None:
    """First preset whose package is declared, build script ignored."""
    if manifest is None:
        return None
    for preset in FRAMEWORK_PRESETS:
        if preset.is_declared(manifest):
            return preset
    return None

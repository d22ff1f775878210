"""Builder detection.

Classifies a project's files into serverless API sources, a framework entry
point and static assets, and turns them into an ordered builder list:

1. API builders, one per source under ``api/``, sorted by path
2. the framework builder, when the manifest names a buildable framework
3. static builders: the whole ``public/`` directory, or loose files

The order matters: route detection derives route precedence from it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from ..core.models import (
    MANIFEST_FILE,
    MISSING_BUILD_SCRIPT,
    MISSING_FRAMEWORK_DEPENDENCY,
    BuilderSpec,
    BuildersResult,
    DetectOptions,
    Diagnostic,
    Manifest,
)
from .frameworks import (
    GENERIC_STATIC_BUILD,
    FrameworkPreset,
    declared_framework,
    detect_framework,
    implied_framework,
)
from .paths import is_private_segment, split_extension, split_path

logger = logging.getLogger(__name__)

API_DIR = "api"
PUBLIC_DIR = "public"
PUBLIC_GLOB = "public/**/*"
STATIC_BUILDER = "@now/static"

# Extension -> builder for sources under api/
API_BUILDERS: dict[str, str] = {
    ".js": "@now/node",
    ".ts": "@now/node",
    ".go": "@now/go",
    ".py": "@now/python",
    ".rb": "@now/ruby",
}

# Type declarations and Go tests are never deployed as functions.
EXCLUDED_API_SUFFIXES = (".d.ts", "_test.go")


def _zero_config() -> dict[str, Any]:
    return {"zeroConfig": True}


def api_builder_for(path: str) -> str | None:
    """Return the builder for an API source file, or None if not routable."""
    parts = split_path(path)
    if len(parts) < 2 or parts[0] != API_DIR:
        return None
    if any(is_private_segment(part) for part in parts[1:]):
        return None
    filename = parts[-1]
    if filename.endswith(EXCLUDED_API_SUFFIXES):
        return None
    _, ext = split_extension(filename)
    return API_BUILDERS.get(ext)


def is_api_source(path: str) -> bool:
    return api_builder_for(path) is not None


def is_static_builder(builder: BuilderSpec) -> bool:
    return builder.use == STATIC_BUILDER or builder.use.startswith(
        STATIC_BUILDER + "@"
    )


def is_public_builder(builder: BuilderSpec) -> bool:
    return is_static_builder(builder) and builder.src == PUBLIC_GLOB


def with_tag(use: str, tag: str | None) -> str:
    """Append a release tag, except to the static builder which has none."""
    if not tag or use == STATIC_BUILDER:
        return use
    return f"{use}@{tag}"


def _missing_build_script(manifest: Manifest) -> Diagnostic:
    message = (
        f"Your `{MANIFEST_FILE}` file is missing a `build` property inside "
        "the `scripts` property."
    )
    framework = declared_framework(manifest)
    if framework is not None:
        message += (
            f" It depends on `{framework.package}`; add a build script such as "
            f'"build": "{framework.command} build".'
        )
    return Diagnostic(code=MISSING_BUILD_SCRIPT, message=message)


def _missing_framework_dependency(preset: FrameworkPreset) -> Diagnostic:
    return Diagnostic(
        code=MISSING_FRAMEWORK_DEPENDENCY,
        message=(
            f"The `build` script in `{MANIFEST_FILE}` runs `{preset.command}`, "
            f"but `{preset.package}` is not listed in `dependencies` or "
            "`devDependencies`."
        ),
    )


def _resolve_framework(
    manifest: Manifest, has_api: bool
) -> tuple[FrameworkPreset | None, Diagnostic | None]:
    """Pick the framework builder for a manifest, or the reason there is none.

    Ambiguous manifests are only fatal when no API source exists, since the
    manifest's dependencies may simply serve the functions.
    """
    if manifest.build_script is None:
        if has_api:
            return None, None
        return None, _missing_build_script(manifest)

    preset = detect_framework(manifest)
    if preset is not None:
        return preset, None

    implied = implied_framework(manifest)
    if implied is None:
        return GENERIC_STATIC_BUILD, None
    if has_api:
        logger.debug(
            "Build script runs %r without its package; skipping framework builder",
            implied.command,
        )
        return None, None
    return None, _missing_framework_dependency(implied)


def _static_builders(paths: list[str], has_api: bool) -> list[BuilderSpec]:
    if any(path.startswith(PUBLIC_DIR + "/") for path in paths):
        return [BuilderSpec(src=PUBLIC_GLOB, use=STATIC_BUILDER, config=_zero_config())]
    if not has_api:
        # A bare static site needs no builders at all.
        return []
    return [
        BuilderSpec(src=path, use=STATIC_BUILDER, config=_zero_config())
        for path in paths
        if not path.startswith(API_DIR + "/") and path != MANIFEST_FILE
    ]


def detect_builders(
    files: Iterable[str],
    manifest: Manifest | Mapping[str, Any] | None = None,
    options: DetectOptions | None = None,
) -> BuildersResult:
    """Infer the builders a project needs.

    Args:
        files: Project file paths, POSIX style, relative to the root
        manifest: Parsed ``package.json``; malformed values count as absent
        options: Detection options, e.g. a release ``tag``

    Returns:
        BuildersResult holding the ordered builders, a single ambiguity
        diagnostic, or neither when there is nothing to build
    """
    parsed = Manifest.from_raw(manifest)
    tag = options.tag if options else None
    paths = sorted({path for path in files if split_path(path)})

    builders = [
        BuilderSpec(src=path, use=use, config=_zero_config())
        for path in paths
        if (use := api_builder_for(path)) is not None
    ]
    has_api = bool(builders)

    framework: FrameworkPreset | None = None
    if parsed is not None:
        framework, error = _resolve_framework(parsed, has_api)
        if error is not None:
            logger.debug("Builder detection failed: %s", error.code)
            return BuildersResult.failure([error])

    if framework is not None:
        builders.append(
            BuilderSpec(
                src=framework.entry_file,
                use=framework.builder_use,
                config=_zero_config(),
            )
        )
    else:
        builders.extend(_static_builders(paths, has_api))

    if not builders:
        logger.debug("Nothing to build among %d files", len(paths))
        return BuildersResult.noop()

    for builder in builders:
        builder.use = with_tag(builder.use, tag)

    logger.debug(
        "Detected %d builders (%d api, framework=%s)",
        len(builders),
        sum(1 for b in builders if is_api_source(b.src)),
        framework.name if framework else None,
    )
    return BuildersResult.success(builders)

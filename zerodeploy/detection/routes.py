"""Default route detection.

Turns the API sources of a builder list into an ordered routing table:

1. one rule per API source, deepest paths first, static paths before dynamic
2. a 404 rule for anything else under ``/api``
3. a catch-all rule for the static builder, when there is one

Sources that would answer the same request are reported as a conflict and no
table is produced at all.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable, Iterator

from ..core.models import (
    CONFLICTING_FILE_PATH,
    CONFLICTING_PATH_SEGMENT,
    BuilderSpec,
    Diagnostic,
    RouteRule,
    RoutesResult,
)
from .builders import is_api_source, is_public_builder, is_static_builder
from .paths import (
    INDEX_NAME,
    RouteShape,
    escape_regex,
    find_repeated_segment,
    join_paths_readable,
    segment_name,
    split_extension,
    split_path,
)

logger = logging.getLogger(__name__)

DYNAMIC_CAPTURE = r"([^\/]+)"
API_NOT_FOUND_SRC = r"^/api(\/.*)?$"
CATCH_ALL_SRC = "/(.*)"
PUBLIC_CATCH_ALL_DEST = "/public/$1"
ROOT_CATCH_ALL_DEST = "/$1"


def route_for_path(path: str) -> RouteRule:
    """Build the rule that serves one API source.

    ``api/date.js`` answers ``/api/date`` and ``/api/date.js``; an ``index``
    file also answers its directory with or without a trailing slash. Each
    dynamic segment becomes a capture passed on as a query parameter.
    """
    parts = split_path(path)
    query: list[str] = []
    src_parts: list[str] = []
    is_index = False

    for position, part in enumerate(parts):
        name = segment_name(part)
        if name is not None:
            query.append(f"{name}=${len(query) + 1}")
            src_parts.append(DYNAMIC_CAPTURE)
        elif position == len(parts) - 1:
            stem, ext = split_extension(part)
            stem_re = escape_regex(stem)
            full_re = stem_re + escape_regex(ext)
            if stem == INDEX_NAME:
                is_index = True
                src_parts.append(rf"(\/|\/{stem_re}|\/{full_re})?")
            else:
                src_parts.append(f"({stem_re}|{full_re})")
        else:
            src_parts.append(escape_regex(part))

    if is_index:
        src = "^/" + "/".join(src_parts[:-1]) + src_parts[-1] + "$"
    else:
        src = "^/" + "/".join(src_parts) + "$"

    dest = "/" + path
    if query:
        dest += "?" + "&".join(query)
    return RouteRule(src=src, dest=dest)


def route_order(path: str) -> tuple[int, int, str]:
    """Sort key: deeper paths, then fewer dynamic segments, then by path.

    Depth outranks dynamism so that a directory route wins over a sibling file
    of the same name (``api/date/index.js`` before ``api/date.js``). The
    cost: ``api/[id]/index.js`` also precedes ``api/users.js`` and answers
    ``/api/users``, leaving the file unreachable.
    """
    depth = len(split_path(path))
    return (-depth, RouteShape.from_path(path).dynamic_count, path)


def _dynamic_positions(path: str) -> Iterator[tuple[tuple[str, ...], str]]:
    """Yield (prefix, name) for each dynamic segment of ``path``.

    The prefix holds the preceding segments with dynamic ones abstracted, so
    two files share a key when they branch on a placeholder at the same spot.
    """
    parts = split_path(path)
    for position, part in enumerate(parts):
        name = segment_name(part)
        if name is None:
            continue
        prefix = tuple(
            "*" if segment_name(seg) is not None else seg for seg in parts[:position]
        )
        yield prefix, name


def find_conflict(sources: list[str]) -> Diagnostic | None:
    """Return the first conflict among ``sources`` in path order, if any."""
    ordered = sorted(sources)
    shapes = {path: RouteShape.from_path(path) for path in ordered}

    by_shape: dict[RouteShape, list[str]] = defaultdict(list)
    for path in ordered:
        by_shape[shapes[path]].append(path)

    by_position: dict[tuple[str, ...], dict[str, list[str]]] = defaultdict(
        lambda: defaultdict(list)
    )
    for path in ordered:
        for prefix, name in _dynamic_positions(path):
            by_position[prefix][name].append(path)

    for path in ordered:
        repeated = find_repeated_segment(path)
        if repeated is not None:
            logger.debug("Repeated segment %r in %s", repeated, path)
            return Diagnostic(
                code=CONFLICTING_PATH_SEGMENT,
                message=(
                    f'The segment "{repeated}" occurs more than once in your '
                    f'path "{path}". Please make sure that every segment in a '
                    "path is unique."
                ),
            )

        conflicts = {other for other in by_shape[shapes[path]] if other != path}
        for prefix, name in _dynamic_positions(path):
            for other_name, others in by_position[prefix].items():
                if other_name != name:
                    conflicts.update(others)

        if conflicts:
            logger.debug("Route conflict: %s vs %s", path, sorted(conflicts))
            return Diagnostic(
                code=CONFLICTING_FILE_PATH,
                message=(
                    "Two or more files have conflicting paths or names. Please "
                    "make sure path segments and filenames, without their "
                    f'extension, are unique. The path "{path}" has conflicts '
                    f"with {join_paths_readable(sorted(conflicts))}."
                ),
            )
    return None


def _catch_all(builders: list[BuilderSpec]) -> RouteRule | None:
    static = next((b for b in builders if is_static_builder(b)), None)
    if static is None:
        return None
    dest = PUBLIC_CATCH_ALL_DEST if is_public_builder(static) else ROOT_CATCH_ALL_DEST
    return RouteRule(src=CATCH_ALL_SRC, dest=dest)


def detect_routes(
    files: Iterable[str],
    builders: Iterable[BuilderSpec] | None,
) -> RoutesResult:
    """Build the default routing table for a detected builder list.

    Args:
        files: Project file paths, POSIX style, relative to the root
        builders: Output of builder detection (may be None)

    Returns:
        RoutesResult holding the ordered table, or the first conflict found
    """
    builder_list = list(builders or [])
    if not builder_list:
        return RoutesResult.noop()

    builder_srcs = {builder.src for builder in builder_list}
    sources = sorted(
        {path for path in files if path in builder_srcs and is_api_source(path)}
    )

    conflict = find_conflict(sources)
    if conflict is not None:
        return RoutesResult.failure(conflict)

    routes = [route_for_path(path) for path in sorted(sources, key=route_order)]
    if routes:
        routes.append(RouteRule(src=API_NOT_FOUND_SRC, status=404))

    catch_all = _catch_all(builder_list)
    if catch_all is not None:
        routes.append(catch_all)

    logger.debug("Detected %d routes for %d api sources", len(routes), len(sources))
    return RoutesResult.success(routes)

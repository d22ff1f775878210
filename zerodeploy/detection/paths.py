"""Path helpers shared by builder and route detection.

File paths are POSIX style and relative to the project root. A path segment
written as ``[name]`` (optionally followed by an extension on the last
segment) is a dynamic segment bound to a request-path capture.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field

INDEX_NAME = "index"

# Characters escaped when a literal path piece is embedded in a route regex.
_REGEX_SPECIAL = "\\[]{}^$.|?*+()"


def split_path(path: str) -> list[str]:
    """Split a relative path into segments, ignoring empty ones."""
    return [part for part in path.split("/") if part]


def split_extension(segment: str) -> tuple[str, str]:
    """Split ``name.ext`` into ``("name", ".ext")``. Dotfiles keep their name."""
    return posixpath.splitext(segment)


def segment_name(segment: str) -> str | None:
    """Return the placeholder name of a dynamic segment, or None.

    >>> segment_name("[id].js")
    'id'
    >>> segment_name("users") is None
    True
    """
    stem, _ = split_extension(segment)
    if len(stem) > 2 and stem.startswith("[") and stem.endswith("]"):
        return stem[1:-1]
    return None


def is_private_segment(segment: str) -> bool:
    """Segments starting with ``.`` or ``_`` are helpers, never routes."""
    return segment.startswith(".") or segment.startswith("_")


def escape_regex(text: str) -> str:
    """Escape regex metacharacters, leaving ``-`` and ``/`` readable."""
    return "".join(f"\\{ch}" if ch in _REGEX_SPECIAL else ch for ch in text)


def find_repeated_segment(path: str) -> str | None:
    """Return the first dynamic name that occurs twice in ``path``."""
    seen: set[str] = set()
    for segment in split_path(path):
        name = segment_name(segment)
        if name is None:
            continue
        if name in seen:
            return name
        seen.add(name)
    return None


def join_paths_readable(paths: list[str]) -> str:
    """Join quoted paths as ``"a"``, ``"a" and "b"`` or ``"a", "b", and "c"``."""
    quoted = [f'"{p}"' for p in paths]
    if len(quoted) <= 2:
        return " and ".join(quoted)
    return ", ".join(quoted[:-1]) + ", and " + quoted[-1]


# =============================================================================
# Canonical route shape
# =============================================================================


@dataclass(frozen=True)
class LiteralSegment:
    value: str


@dataclass(frozen=True)
class DynamicSegment:
    # Names do not take part in equality: [id] and [slug] route the same way.
    name: str = field(compare=False)


Segment = LiteralSegment | DynamicSegment


@dataclass(frozen=True)
class RouteShape:
    """The routing identity of a source file.

    The extension is dropped, a trailing ``index`` is folded into its parent
    (remembered by ``is_index``) and dynamic segments compare equal whatever
    their name. Two files with equal shapes would answer the same requests.
    """

    segments: tuple[Segment, ...]
    is_index: bool = False

    @classmethod
    def from_path(cls, path: str) -> RouteShape:
        parts = split_path(path)
        segments: list[Segment] = []
        is_index = False
        for position, part in enumerate(parts):
            is_last = position == len(parts) - 1
            name = segment_name(part)
            if name is not None:
                segments.append(DynamicSegment(name))
                continue
            if is_last:
                stem, _ = split_extension(part)
                if stem == INDEX_NAME:
                    is_index = True
                    continue
                segments.append(LiteralSegment(stem))
            else:
                segments.append(LiteralSegment(part))
        return cls(segments=tuple(segments), is_index=is_index)

    @property
    def names(self) -> tuple[str, ...]:
        """Dynamic segment names, left to right."""
        return tuple(s.name for s in self.segments if isinstance(s, DynamicSegment))

    @property
    def dynamic_count(self) -> int:
        return len(self.names)

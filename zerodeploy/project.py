"""Read a project directory into the inputs detection expects."""

import json
import logging
import os
from pathlib import Path

from .core.models import MANIFEST_FILE, Manifest

logger = logging.getLogger(__name__)

EXCLUDE_DIRS = {".git", "node_modules", ".now", ".vercel", "__pycache__"}


def list_project_files(root: Path | str) -> list[str]:
    """List every file under ``root`` as a sorted POSIX relative path.

    Dependency and VCS directories are skipped, as are symlinked directories.
    Symlinked files are kept: a deployment preserves them as links.

    Raises:
        FileNotFoundError: If ``root`` is not a directory
    """
    root = Path(root)
    if not root.is_dir():
        raise FileNotFoundError(f"Project directory not found: {root}")

    files: list[str] = []
    for current, dirs, filenames in os.walk(root):
        dirs[:] = [
            d
            for d in dirs
            if d not in EXCLUDE_DIRS and not (Path(current) / d).is_symlink()
        ]
        for filename in filenames:
            rel = (Path(current) / filename).relative_to(root).as_posix()
            files.append(rel)

    files.sort()
    logger.debug("Listed %d files under %s", len(files), root)
    return files


def load_manifest(root: Path | str) -> Manifest | None:
    """Load ``package.json`` from ``root``.

    A missing file gives None. So does unreadable JSON or an unrecognizable
    structure, with a warning: detection then runs as if there were no
    manifest.
    """
    path = Path(root) / MANIFEST_FILE
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.warning("Ignoring unreadable %s: %s", path, exc)
        return None
    return Manifest.from_raw(data)

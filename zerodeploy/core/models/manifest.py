"""Package manifest model.

Only the fields that zero-config detection consumes are modelled. Every field
is optional and defaults to an empty mapping, so an absent key and an empty
section look the same to callers.
"""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

MANIFEST_FILE = "package.json"

# JSON key -> field name for the sections detection reads
SECTIONS = {
    "scripts": "scripts",
    "dependencies": "dependencies",
    "devDependencies": "dev_dependencies",
    "engines": "engines",
}


def _clean_section(key: str, value: Any) -> dict[str, str]:
    """Keep the string entries of one manifest section, warning about the rest."""
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        logger.warning(
            "Ignoring manifest `%s`: expected an object, got %s",
            key,
            type(value).__name__,
        )
        return {}
    cleaned: dict[str, str] = {}
    for name, entry in value.items():
        if isinstance(name, str) and isinstance(entry, str):
            cleaned[name] = entry
        else:
            logger.warning(
                "Ignoring manifest entry `%s.%s`: expected a string, got %s",
                key,
                name,
                type(entry).__name__,
            )
    return cleaned


class Manifest(BaseModel):
    """The subset of ``package.json`` used for builder detection."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    scripts: dict[str, str] = Field(
        default_factory=dict, description="npm scripts, e.g. {'build': 'next build'}"
    )
    dependencies: dict[str, str] = Field(
        default_factory=dict, description="Runtime dependencies (name -> range)"
    )
    dev_dependencies: dict[str, str] = Field(
        default_factory=dict,
        alias="devDependencies",
        description="Development dependencies (name -> range)",
    )
    engines: dict[str, str] = Field(
        default_factory=dict, description="Engine ranges, e.g. {'node': '10.x'}"
    )

    @classmethod
    def from_raw(cls, value: Any) -> "Manifest | None":
        """Build a manifest from decoded JSON.

        A value that is not an object yields ``None``, so a broken
        ``package.json`` behaves like a missing one. Inside an object, a
        wrongly typed section or entry is dropped on its own and the rest of
        the manifest is kept.
        """
        if value is None:
            return None
        if isinstance(value, Manifest):
            return value
        if not isinstance(value, Mapping):
            logger.warning(
                "Ignoring manifest: expected an object, got %s", type(value).__name__
            )
            return None
        return cls(
            **{
                field: _clean_section(key, value.get(key))
                for key, field in SECTIONS.items()
            }
        )

    @property
    def build_script(self) -> str | None:
        """The ``scripts.build`` command, or None when missing or blank."""
        script = self.scripts.get("build")
        if script and script.strip():
            return script
        return None

    @property
    def node_engine(self) -> str | None:
        """The ``engines.node`` range, or None when missing or blank."""
        value = self.engines.get("node")
        return value if value and value.strip() else None

    def has_dependency(self, name: str) -> bool:
        return bool(self.dependencies.get(name) or self.dev_dependencies.get(name))

"""Route rules, route detection results and the deployment document."""

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .build import BuilderSpec, DetectionOutcome
from .diagnostics import Diagnostic


class RouteRule(BaseModel):
    """One entry of a routing table. The first matching rule wins."""

    src: str = Field(description="Anchored regular expression matched on the path")
    dest: str | None = Field(
        default=None, description="Rewrite target, may use $1..$n back-references"
    )
    status: int | None = Field(default=None, description="Fixed response status")
    headers: dict[str, str] | None = Field(
        default=None, description="Extra response headers"
    )

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class RoutesResult(BaseModel):
    """Outcome of route detection: a table or a single conflict diagnostic."""

    model_config = ConfigDict(populate_by_name=True)

    default_routes: list[RouteRule] | None = Field(default=None, alias="defaultRoutes")
    error: Diagnostic | None = None

    @model_validator(mode="after")
    def _check_exclusive(self) -> "RoutesResult":
        if self.default_routes is not None and self.error is not None:
            raise ValueError("default_routes and error are mutually exclusive")
        return self

    @classmethod
    def success(cls, routes: list[RouteRule]) -> "RoutesResult":
        return cls(default_routes=routes)

    @classmethod
    def failure(cls, error: Diagnostic) -> "RoutesResult":
        return cls(error=error)

    @classmethod
    def noop(cls) -> "RoutesResult":
        return cls()

    @property
    def outcome(self) -> DetectionOutcome:
        if self.error is not None:
            return DetectionOutcome.FAILURE
        if self.default_routes is not None:
            return DetectionOutcome.SUCCESS
        return DetectionOutcome.NOOP


class DeploymentConfig(BaseModel):
    """The ``{builds, routes}`` document handed to a deployment tool."""

    builds: list[BuilderSpec] = Field(default_factory=list)
    routes: list[RouteRule] = Field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "builds": [b.to_dict() for b in self.builds],
            "routes": [r.to_dict() for r in self.routes],
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def to_yaml(self, path: Path | str) -> None:
        """Save the document to a YAML file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            yaml.dump(
                self.to_dict(),
                f,
                default_flow_style=False,
                sort_keys=False,
                allow_unicode=True,
            )

    @classmethod
    def from_yaml(cls, path: Path | str) -> "DeploymentConfig":
        """Load a document from a YAML (or JSON) file."""
        path = Path(path)

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.model_validate(data or {})

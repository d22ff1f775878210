"""Builder specifications and the result of builder detection."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .diagnostics import Diagnostic


class DetectionOutcome(str, Enum):
    """Which side of a detection result is populated."""

    SUCCESS = "success"
    FAILURE = "failure"
    NOOP = "noop"


class DetectOptions(BaseModel):
    """Caller options for builder detection."""

    model_config = ConfigDict(frozen=True)

    tag: str | None = Field(
        default=None,
        description="Release channel appended to builder identifiers (e.g. 'canary')",
    )


class BuilderSpec(BaseModel):
    """One build step: a builder identifier and the sources it consumes."""

    src: str = Field(description="Literal path or glob, e.g. 'api/users.js'")
    use: str = Field(description="Builder identifier, optionally '@tag' suffixed")
    config: dict[str, Any] | None = Field(
        default=None, description="Opaque builder configuration"
    )

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class BuildersResult(BaseModel):
    """Outcome of builder detection.

    Exactly one of ``builders`` and ``errors`` is set, except for the no-op
    outcome where the project has nothing to build and both are None.
    """

    builders: list[BuilderSpec] | None = None
    errors: list[Diagnostic] | None = None

    @model_validator(mode="after")
    def _check_exclusive(self) -> "BuildersResult":
        if self.builders and self.errors:
            raise ValueError("builders and errors are mutually exclusive")
        if self.builders == []:
            self.builders = None
        if self.errors == []:
            self.errors = None
        return self

    @classmethod
    def success(cls, builders: list[BuilderSpec]) -> "BuildersResult":
        return cls(builders=builders)

    @classmethod
    def failure(cls, errors: list[Diagnostic]) -> "BuildersResult":
        return cls(errors=errors)

    @classmethod
    def noop(cls) -> "BuildersResult":
        return cls()

    @property
    def outcome(self) -> DetectionOutcome:
        if self.errors:
            return DetectionOutcome.FAILURE
        if self.builders:
            return DetectionOutcome.SUCCESS
        return DetectionOutcome.NOOP

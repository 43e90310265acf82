"""
Configuration models and loaders for framecheck.
Uses Pydantic for validation and TOML for file format.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Literal

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from pydantic import BaseModel, Field, field_validator, model_validator

from .patterns.actions import Action, RangeZone, SquareZone, Stick
from .patterns.library import default_templates, default_zones
from .patterns.template import SequenceTemplate, TemplateBuilder


class ProfileError(ValueError):
    """Raised when a trainer profile file cannot be parsed."""


class TimingSettings(BaseModel):
    """Frame clock and matcher tolerances."""
    frame_rate: float = Field(default=60.0, gt=0)
    timeout_tolerance_frames: float = Field(default=5.0, ge=0)
    soft_margin_frames: float = Field(default=1.0, ge=0)


class ZoneConfig(BaseModel):
    """A named analog zone."""
    name: str
    stick: Literal["main", "c", "l", "r"] = "main"
    kind: Literal["square", "range"] = "square"
    bounds: list[int]

    @model_validator(mode="after")
    def validate_bounds(self) -> ZoneConfig:
        expected = 4 if self.kind == "square" else 2
        if len(self.bounds) != expected:
            raise ValueError(
                f"{self.kind} zone bounds must have exactly {expected} values"
            )
        return self

    def to_zone(self) -> tuple[Stick, SquareZone | RangeZone]:
        """Build the zone and the input it is read from."""
        if self.kind == "square":
            zone = SquareZone(self.name, *self.bounds)
        else:
            zone = RangeZone(self.name, *self.bounds)
        return Stick(self.stick), zone


class StepConfig(BaseModel):
    """One template step: acceptable action tokens and a frame window."""
    actions: list[str]
    window: int | list[int] = 0
    from_step: int | None = None

    @field_validator("actions")
    @classmethod
    def validate_actions(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("A step must accept at least one action")
        for token in v:
            Action.parse(token)
        return v

    @field_validator("window")
    @classmethod
    def validate_window(cls, v: int | list[int]) -> int | list[int]:
        if isinstance(v, list) and len(v) != 2:
            raise ValueError("Window must be a frame count or [min, max]")
        return v


class TemplateConfig(BaseModel):
    """A technique template definition."""
    name: str
    steps: list[StepConfig]

    def to_template(self) -> SequenceTemplate:
        """
        Build the immutable template.

        Raises:
            TemplateError: If the steps do not form a valid template.
        """
        builder = TemplateBuilder(self.name)
        for step in self.steps:
            window = step.window if isinstance(step.window, int) else tuple(step.window)
            if step.from_step is None:
                builder.add(step.actions, window)
            else:
                builder.add_from(step.actions, window, step.from_step)
        return builder.build()


class DebugConfig(BaseModel):
    """Debug and diagnostic settings."""
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_file: str = ""
    trace_path: str = ""


class TrainerProfile(BaseModel):
    """Complete trainer configuration."""
    timing: TimingSettings = Field(default_factory=TimingSettings)
    include_defaults: bool = True
    zones: list[ZoneConfig] = Field(default_factory=list)
    templates: list[TemplateConfig] = Field(default_factory=list)
    debug: DebugConfig = Field(default_factory=DebugConfig)

    @classmethod
    def from_toml(cls, path: str | Path) -> TrainerProfile:
        """
        Load trainer profile from TOML file.

        Raises:
            ProfileError: If the file is not valid TOML.
            ValidationError: If the settings are out of range.
        """
        path = Path(path)
        with path.open("rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ProfileError(f"{path}: invalid TOML ({e})") from e
        return cls.model_validate(data)

    def to_dict(self) -> dict[str, Any]:
        """Export profile as dictionary."""
        return self.model_dump()

    def build_templates(self) -> list[SequenceTemplate]:
        """Built-in templates (if enabled) followed by configured ones."""
        templates = default_templates() if self.include_defaults else []
        templates.extend(t.to_template() for t in self.templates)
        return templates

    def build_zones(self) -> list[tuple[Stick, SquareZone | RangeZone]]:
        """Built-in zones (if enabled) followed by configured ones."""
        zones = default_zones() if self.include_defaults else []
        zones.extend(z.to_zone() for z in self.zones)
        return zones

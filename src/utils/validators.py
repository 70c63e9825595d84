"""YAML schema validation and config loading.

Provides validation for the flow renderer config (flow.v1.yaml) using pydantic:
    - Grid: output resolution and coordinate bounds
    - Field: named analytic field and integration step
    - Seeding: border inset, particle count, rewind limits
    - Animation: frame count, respawn policy, log cadence
    - Logging: kwargs forwarded to logging_config.setup_logging()

Configs are checked at load time so that bad ranges fail fast with the
offending key in the message, before any grid or field is built.

Usage:
    from src.utils import validators

    cfg = validators.load_flow_config("configs/flow_v1.yaml")
    grid_kwargs = cfg.grid.model_dump()
"""

from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator


class ConfigError(ValueError):
    """Raised when a config file fails validation."""

    pass


# ============================================================================
# FLOW SCHEMA V1
# ============================================================================

class GridV1(BaseModel):
    """Raster size and coordinate-space bounds."""
    resolution: Tuple[int, int] = Field((1024, 1024), description="(width_px, height_px)")
    xrange: Tuple[float, float] = Field((-6.1, 6.1), description="Inclusive x bounds")
    yrange: Tuple[float, float] = Field((-6.1, 6.1), description="Inclusive y bounds")

    @field_validator('resolution')
    @classmethod
    def validate_resolution(cls, v: Tuple[int, int]) -> Tuple[int, int]:
        if v[0] < 1 or v[1] < 1:
            raise ValueError(f"Resolution must be at least 1x1, got {v}")
        return v

    @field_validator('xrange', 'yrange')
    @classmethod
    def validate_range(cls, v: Tuple[float, float]) -> Tuple[float, float]:
        if not v[0] < v[1]:
            raise ValueError(f"Range must be strictly increasing, got {v}")
        return v


class FieldV1(BaseModel):
    """Which registered field to integrate, and the step length."""
    name: str = Field("saddle_spiral", description="Registered field name")
    nudge: float = Field(0.02, gt=0.0, description="Step length (coordinate units)")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Field name must be non-empty")
        return v.strip()


class SeedingV1(BaseModel):
    """Particle seeding along the inset border, then rewound onto streamlines."""
    border_dist: float = Field(0.1, ge=0.0, description="Inset from each edge")
    points_per_border: int = Field(24, ge=1, description="Particles per edge")
    rewind_iterations: int = Field(1000, ge=0, description="Max reverse steps")
    norm_threshold: float = Field(0.5, ge=0.0, description="Stationary-point magnitude")


class AnimationV1(BaseModel):
    """Frame loop settings."""
    frames: int = Field(1200, ge=1, description="Number of frames to render")
    respawn: bool = Field(True, description="Reseed stalled/escaped particles")
    log_every: int = Field(60, ge=1, description="Log coverage every N frames")


class LoggingV1(BaseModel):
    """Subset of setup_logging() kwargs settable from YAML."""
    log_level: str = Field("INFO", description="Root log level")
    log_file: Optional[str] = Field(None, description="Optional log file path")
    json_format: bool = Field(False, alias="json", description="JSON log lines")
    color: bool = Field(True, description="ANSI colors on console")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator('log_level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in levels:
            raise ValueError(f"log_level must be one of {sorted(levels)}, got '{v}'")
        return v.upper()


class FlowConfigV1(BaseModel):
    """Complete flow renderer config (flow.v1.yaml schema)."""
    schema_version: str = Field("flow.v1", alias="schema", description="Schema version")
    grid: GridV1 = Field(default_factory=GridV1)
    field: FieldV1 = Field(default_factory=FieldV1)
    seeding: SeedingV1 = Field(default_factory=SeedingV1)
    animation: AnimationV1 = Field(default_factory=AnimationV1)
    logging: LoggingV1 = Field(default_factory=LoggingV1)

    model_config = ConfigDict(populate_by_name=True)

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != "flow.v1":
            raise ValueError(f"Expected schema 'flow.v1', got '{v}'")
        return v

    @model_validator(mode='after')
    def validate_border_inset(self) -> 'FlowConfigV1':
        """Border inset must leave a non-empty rectangle to seed on."""
        inset = 2.0 * self.seeding.border_dist
        for axis, (lo, hi) in (('x', self.grid.xrange), ('y', self.grid.yrange)):
            if inset >= hi - lo:
                raise ValueError(
                    f"seeding.border_dist={self.seeding.border_dist} collapses "
                    f"{axis} range [{lo}, {hi}]"
                )
        return self


# ============================================================================
# PUBLIC API
# ============================================================================

def load_flow_config(path: Union[str, Path]) -> FlowConfigV1:
    """Load and validate flow config from YAML.

    Parameters
    ----------
    path : Union[str, Path]
        Path to flow.v1.yaml file

    Returns
    -------
    FlowConfigV1
        Validated flow configuration

    Raises
    ------
    FileNotFoundError
        If path doesn't exist
    ConfigError
        If the file is not valid YAML or validation fails (with actionable
        error message)
    """
    from . import fs

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Flow config not found: {path}")

    try:
        data = fs.load_yaml(path) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Flow config at {path} is not valid YAML: {e}") from e
    return parse_flow_config(data, source=str(path))


def parse_flow_config(data: Dict[str, Any], source: str = "<dict>") -> FlowConfigV1:
    """Validate an already-parsed config mapping.

    Raises
    ------
    ConfigError
        If validation fails
    """
    if not isinstance(data, dict):
        raise ConfigError(f"Flow config at {source} must be a mapping, got {type(data).__name__}")
    try:
        return FlowConfigV1(**data)
    except ValidationError as e:
        raise ConfigError(f"Flow config validation failed at {source}: {e}") from e

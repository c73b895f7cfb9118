"""Configuration management with pydantic and YAML support."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from .errors import ConfigurationError


class OptimizationConfig(BaseModel):
    """NSGA-II run settings."""

    pop_size: int = Field(default=50, ge=10, le=10000)
    n_gen: int = Field(default=20, ge=1, le=100000)
    duration_s: float = Field(default=10.0, gt=0)
    load_factor: float = Field(default=1.0, ge=0.5, le=2.0)
    seed: int | None = Field(default=None, ge=0)
    n_workers: int = Field(default=1, ge=1, le=256)
    crossover_alpha: float = Field(default=0.5, ge=0.0, le=2.0)
    mutation_prob: float = Field(default=0.1, ge=0.0, le=1.0)
    eta_m: float = Field(default=20.0, gt=0)


class MaintenanceConfig(BaseModel):
    """k-NN maintenance classifier settings."""

    k: int = Field(default=3, ge=1)
    n_synthetic: int = Field(default=100, ge=1, le=1_000_000)
    seed: int | None = Field(default=None, ge=0)


class LoggingConfig(BaseModel):
    """Structured logger settings."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARN|ERROR)$")


class SpindleConfig(BaseModel):
    """Root configuration object."""

    optimization: OptimizationConfig = Field(default_factory=OptimizationConfig)
    maintenance: MaintenanceConfig = Field(default_factory=MaintenanceConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def _as_configuration_error(exc: PydanticValidationError) -> ConfigurationError:
    err = exc.errors()[0]
    field = ".".join(str(p) for p in err.get("loc", ())) or "config"
    return ConfigurationError(field, err.get("input"), message=f"{field}: {err.get('msg')}")


def make_optimization_config(**values: Any) -> OptimizationConfig:
    """Build an OptimizationConfig, reporting the first violation as ConfigurationError.

    Raises:
        ConfigurationError: duration <= 0, load factor outside [0.5, 2.0],
            population < 10, generations < 1, or any other field out of range.
    """
    try:
        return OptimizationConfig.model_validate(values)
    except PydanticValidationError as exc:
        raise _as_configuration_error(exc) from exc


def load_config(path: str | Path) -> SpindleConfig:
    """Load configuration from YAML file.

    Args:
        path: Path to YAML config file.

    Returns:
        Parsed SpindleConfig object.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f)

    try:
        return SpindleConfig.model_validate(data or {})
    except PydanticValidationError as exc:
        raise _as_configuration_error(exc) from exc


def save_config(config: SpindleConfig, path: str | Path) -> None:
    """Save configuration to YAML file.

    Args:
        config: Configuration to save.
        path: Output path.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        yaml.safe_dump(config.model_dump(), f, default_flow_style=False)


def default_config() -> SpindleConfig:
    """Return default configuration."""
    return SpindleConfig()


def merge_config(base: SpindleConfig, overrides: dict[str, Any]) -> SpindleConfig:
    """Merge overrides into base configuration.

    Args:
        base: Base configuration.
        overrides: Dictionary of override values.

    Returns:
        New configuration with overrides applied.
    """
    base_dict = base.model_dump()

    def deep_merge(d1: dict, d2: dict) -> dict:
        result = d1.copy()
        for k, v in d2.items():
            if k in result and isinstance(result[k], dict) and isinstance(v, dict):
                result[k] = deep_merge(result[k], v)
            else:
                result[k] = v
        return result

    merged = deep_merge(base_dict, overrides)
    try:
        return SpindleConfig.model_validate(merged)
    except PydanticValidationError as exc:
        raise _as_configuration_error(exc) from exc

# src/proptrial/core/config.py
"""
Configuration schema and loading for check runs.

Uses Pydantic for validation and PyYAML for file loading.
Settings are frozen (immutable) after construction; per-call overrides
produce a new validated instance.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from proptrial.contracts.enums import SizeCurve
from proptrial.contracts.errors import InvalidConfigurationError

DEFAULT_MAX_TRIALS = 500


class CheckSettings(BaseModel):
    """Settings for one check run.

    Example YAML:
        max_trials: 1000
        max_size: 50
        size_curve: quadratic
        max_skip_ratio: 5
        seed: 1234
    """

    model_config = {"frozen": True, "extra": "forbid"}

    max_trials: int = Field(
        default=DEFAULT_MAX_TRIALS,
        gt=0,
        description="Number of non-skipped trials to run (the trial cap)",
    )
    max_size: int = Field(
        default=100,
        ge=0,
        description="Largest size bound handed to generators",
    )
    size_curve: SizeCurve = Field(
        default=SizeCurve.LINEAR,
        description="How size grows across trial indices",
    )
    max_skip_ratio: float = Field(
        default=10.0,
        ge=0.0,
        description="Abort once skipped trials exceed max_skip_ratio * max_trials",
    )
    seed: int | None = Field(
        default=None,
        description="Seed for the run's RandomSource (drawn from the OS when unset)",
    )
    report: bool = Field(
        default=True,
        description="Print the failure report to the engine's output stream",
    )

    @property
    def max_skips(self) -> int:
        """Total number of skips tolerated before the run gives up."""
        return int(self.max_skip_ratio * self.max_trials)

    def with_overrides(self, **overrides: Any) -> CheckSettings:
        """Return a validated copy with overrides applied.

        None values are ignored so callers can forward optional keyword
        arguments unchanged. seed=None is therefore "keep current seed".

        Raises:
            InvalidConfigurationError: If the merged settings fail validation.
        """
        updates = {k: v for k, v in overrides.items() if v is not None}
        if not updates:
            return self
        try:
            return CheckSettings.model_validate({**self.model_dump(), **updates})
        except ValidationError as e:
            raise InvalidConfigurationError(_format_validation_error(e)) from e


def _format_validation_error(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        loc = ".".join(str(x) for x in item["loc"])
        parts.append(f"{loc}: {item['msg']}")
    return "Invalid check settings: " + "; ".join(parts)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dicts, with override taking precedence.

    Returns a new dict; neither input is mutated.
    """
    result = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _read_yaml_mapping(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with path.open() as f:
        loaded = yaml.safe_load(f)
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ValueError(f"Config file {path} must be a YAML mapping, got {type(loaded).__name__}")
    return loaded


def load_settings(config_path: Path) -> CheckSettings:
    """Load settings from a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If the YAML is malformed.
        ValueError: If the document is not a mapping.
        pydantic.ValidationError: If a value is invalid.
    """
    return CheckSettings(**_read_yaml_mapping(config_path))


def load_config(
    *,
    config_file: Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> CheckSettings:
    """Load settings with precedence handling.

    Precedence (highest to lowest):
    1. overrides - Direct overrides (CLI flags); None values are dropped
    2. config_file - User's YAML configuration file
    3. defaults - Built-in Pydantic defaults

    Raises:
        FileNotFoundError: If config_file not found.
        yaml.YAMLError: If YAML is malformed.
        pydantic.ValidationError: If final config fails validation.
    """
    config_dict: dict[str, Any] = {}

    if config_file is not None:
        config_dict = _read_yaml_mapping(config_file)

    if overrides is not None:
        config_dict = deep_merge(config_dict, {k: v for k, v in overrides.items() if v is not None})

    return CheckSettings(**config_dict)

"""Core infrastructure: random source, generator registry, settings, logging."""

from proptrial.core.config import CheckSettings, load_config, load_settings
from proptrial.core.random_source import RandomSource
from proptrial.core.registry import GeneratorRegistry

__all__ = [
    "CheckSettings",
    "GeneratorRegistry",
    "RandomSource",
    "load_config",
    "load_settings",
]

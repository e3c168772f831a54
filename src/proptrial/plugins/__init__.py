"""Plugin hooks through which domain adapters contribute generators."""

from proptrial.plugins.hookspecs import PROJECT_NAME, ProptrialGeneratorSpec, hookimpl, hookspec

__all__ = ["PROJECT_NAME", "ProptrialGeneratorSpec", "hookimpl", "hookspec"]

# src/proptrial/core/registry.py
"""Generator registry: type tag -> generator.

Entries are added only by explicit registration, either one at a time
(register) or in bulk from pluggy plugins. Re-registering a tag replaces
the previous binding (last write wins). There is no unregistration.

A registry is owned by an Engine. The process-wide default engine owns the
process-wide registry; other engines get their own.
"""

from __future__ import annotations

from typing import Any

import pluggy

from proptrial.contracts.errors import InvalidConfigurationError, UnknownTypeError
from proptrial.contracts.generators import Generator
from proptrial.core.logging import get_logger
from proptrial.plugins.hookspecs import PROJECT_NAME, ProptrialGeneratorSpec

logger = get_logger(__name__)


class GeneratorRegistry:
    """Mapping from type tag to generator function.

    Usage:
        registry = GeneratorRegistry()
        registry.register("even", lambda source, size: 2 * source.next_int(-size, size))

        generator = registry.resolve("even")
    """

    def __init__(self) -> None:
        self._generators: dict[str, Generator] = {}
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(ProptrialGeneratorSpec)
        # Plugins whose generators were already copied into _generators
        self._harvested: list[Any] = []

    def register(self, tag: str, generator: Generator) -> None:
        """Bind a type tag to a generator, replacing any previous binding.

        Raises:
            InvalidConfigurationError: If tag is not a non-empty string or
                generator is not callable.
        """
        if not isinstance(tag, str) or not tag:
            raise InvalidConfigurationError(f"Type tag must be a non-empty string, got {tag!r}")
        if not callable(generator):
            raise InvalidConfigurationError(f"Generator for {tag!r} must be callable, got {type(generator).__name__}")
        if tag in self._generators:
            logger.debug("generator_replaced", tag=tag)
        self._generators[tag] = generator

    def resolve(self, tag: str) -> Generator:
        """Return the generator bound to tag.

        Raises:
            UnknownTypeError: If nothing is registered under tag.
        """
        try:
            return self._generators[tag]
        except KeyError:
            raise UnknownTypeError(tag, list(self._generators)) from None

    def tags(self) -> list[str]:
        """Registered tags, sorted."""
        return sorted(self._generators)

    def __contains__(self, tag: object) -> bool:
        return tag in self._generators

    def __len__(self) -> int:
        return len(self._generators)

    def register_plugin(self, plugin: Any) -> list[str]:
        """Register a pluggy plugin and copy its generators into the registry.

        Args:
            plugin: Object implementing proptrial_get_generators

        Returns:
            Tags contributed by this plugin
        """
        self._pm.register(plugin)
        return self._harvest_new_plugins()

    def load_entrypoint_plugins(self, group: str = PROJECT_NAME) -> list[str]:
        """Load plugins advertised under an entry point group and register their generators.

        Returns:
            Tags contributed by the newly loaded plugins
        """
        self._pm.load_setuptools_entrypoints(group)
        return self._harvest_new_plugins()

    def _harvest_new_plugins(self) -> list[str]:
        new_plugins = [p for p in self._pm.get_plugins() if not any(p is seen for seen in self._harvested)]
        if not new_plugins:
            return []

        others = [p for p in self._pm.get_plugins() if not any(p is new for new in new_plugins)]
        caller = self._pm.subset_hook_caller("proptrial_get_generators", remove_plugins=others)

        contributed: list[str] = []
        # pluggy calls hookimpls in LIFO registration order; reverse so the
        # most recently registered plugin wins ties, matching register().
        for generators in reversed(caller()):
            for tag, generator in generators.items():
                self.register(tag, generator)
                contributed.append(tag)

        self._harvested.extend(new_plugins)
        logger.debug("generator_plugins_loaded", plugins=len(new_plugins), tags=contributed)
        return contributed

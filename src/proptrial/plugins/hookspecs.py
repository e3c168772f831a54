# src/proptrial/plugins/hookspecs.py
"""pluggy hook specifications for generator plugins.

Domain adapters implement these hooks to contribute type tags and their
generators. A plugin is only consulted when it is registered explicitly
(GeneratorRegistry.register_plugin) or through the "proptrial" entry point
group (GeneratorRegistry.load_entrypoint_plugins).

Usage (implementing a plugin):
    from proptrial.plugins.hookspecs import hookimpl

    class MatrixGenerators:
        @hookimpl  # NOT @hookspec - that's for defining specs
        def proptrial_get_generators(self):
            return {"matrix": random_matrix}
"""

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from proptrial.contracts.generators import Generator

# Project name for pluggy
PROJECT_NAME = "proptrial"

# Hook specification marker
hookspec = pluggy.HookspecMarker(PROJECT_NAME)

# Hook implementation marker (for plugins to use)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class ProptrialGeneratorSpec:
    """Hook specifications for generator plugins."""

    @hookspec
    def proptrial_get_generators(self) -> dict[str, "Generator"]:  # type: ignore[empty-body]
        """Return generators keyed by type tag.

        Returns:
            Mapping of type tag to generator callable (source, size) -> value | SKIP
        """

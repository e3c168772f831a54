# src/proptrial/generators/typespec.py
"""TypeSpec compilation.

A TypeSpec is one of:
- a registered type tag (str), resolved through a GeneratorRegistry
- a generator callable (source, size) -> value | SKIP, used as is
- a Combinator built from other TypeSpecs

compile_spec() resolves every tag in the tree up front, so an unknown tag is
reported before the first trial runs. Later re-registrations do not affect an
already compiled generator.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from proptrial.contracts.errors import InvalidConfigurationError
from proptrial.contracts.generators import Generator
from proptrial.generators.combinators import Combinator

if TYPE_CHECKING:
    from proptrial.core.registry import GeneratorRegistry

TypeSpec = str | Combinator | Generator


def compile_spec(spec: Any, registry: GeneratorRegistry) -> Generator:
    """Turn one TypeSpec into a generator callable.

    Raises:
        UnknownTypeError: If a tag anywhere in the spec is unregistered.
        InvalidConfigurationError: If spec is not a tag, combinator or callable.
    """
    if isinstance(spec, str):
        return registry.resolve(spec)
    if isinstance(spec, Combinator):
        return spec.compile(lambda inner: compile_spec(inner, registry))
    if callable(spec):
        return spec
    raise InvalidConfigurationError(
        f"Invalid TypeSpec {spec!r}: expected a type tag, a combinator or a generator callable"
    )


def compile_specs(specs: Sequence[Any], registry: GeneratorRegistry) -> list[Generator]:
    """Compile the argument TypeSpecs of a check, preserving declared order.

    Raises:
        InvalidConfigurationError: If specs is a bare string/combinator instead of a sequence.
    """
    if isinstance(specs, str | Combinator) or not isinstance(specs, Sequence):
        raise InvalidConfigurationError(
            f"TypeSpecs must be a list or tuple with one entry per argument, got {type(specs).__name__}"
        )
    return [compile_spec(spec, registry) for spec in specs]

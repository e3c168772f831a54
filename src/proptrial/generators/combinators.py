# src/proptrial/generators/combinators.py
"""Higher-order generators built from other TypeSpecs.

Combinators are immutable descriptions. They validate their own arguments at
construction time (a negative fixed length is rejected before any trial runs)
and are turned into plain generator callables by compile_spec(), which
resolves every nested type tag against a registry first.

Every compiled combinator follows the same contract as any generator:

    (source, size) -> value | SKIP

and returns SKIP as soon as any nested draw returns SKIP. A partially built
value is never returned with a default substituted in.

Size handling:
- ListOf / SetOf draw a length in [0, size] and draw every element with
  size // 2. The bound halves at each nesting level, so
  ListOf(ListOf(ListOf(x))) at size 100 holds at most 100 * 50 * 25 leaves
  rather than 100**3.
- PairOf, FixedLengthListOf and TupleOf pass the size through unchanged.
- ElementOf ignores size entirely; it does not take part in size growth.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from proptrial.contracts.errors import InvalidConfigurationError
from proptrial.contracts.generators import SKIP, Generator

if TYPE_CHECKING:
    from proptrial.core.random_source import RandomSource

# A resolver turns a nested TypeSpec into a compiled generator.
Resolver = Callable[[Any], Generator]


class Combinator(ABC):
    """Base class for generator expressions built from other TypeSpecs."""

    @abstractmethod
    def compile(self, resolve: Resolver) -> Generator:
        """Return a generator, resolving nested TypeSpecs through resolve."""


def _draw_many(generator: Generator, source: RandomSource, size: int, count: int) -> list[Any] | None:
    """Draw count values, or return None as soon as one of them is SKIP."""
    values = []
    for _ in range(count):
        value = generator(source, size)
        if value is SKIP:
            return None
        values.append(value)
    return values


@dataclass(frozen=True)
class ElementOf(Combinator):
    """Uniform choice from a fixed, finite, non-empty collection.

    The size bound is ignored. Sets are sorted when their elements allow it,
    so the draw sequence does not depend on hash ordering.
    """

    items: tuple[Any, ...]

    def __init__(self, collection: Iterable[Any]) -> None:
        if isinstance(collection, set | frozenset):
            try:
                items = tuple(sorted(collection))
            except TypeError:
                items = tuple(collection)
        else:
            items = tuple(collection)
        if not items:
            raise InvalidConfigurationError("ElementOf requires a non-empty collection")
        object.__setattr__(self, "items", items)

    def compile(self, resolve: Resolver) -> Generator:
        items = self.items

        def element_of(source: RandomSource, size: int) -> Any:
            return source.choice(items)

        return element_of


@dataclass(frozen=True)
class ListOf(Combinator):
    """List of length in [0, size]; elements drawn independently with size // 2."""

    inner: Any

    def compile(self, resolve: Resolver) -> Generator:
        inner = resolve(self.inner)

        def list_of(source: RandomSource, size: int) -> Any:
            length = source.next_uint(size + 1)
            values = _draw_many(inner, source, size // 2, length)
            return SKIP if values is None else values

        return list_of


@dataclass(frozen=True)
class SetOf(Combinator):
    """Like ListOf, with duplicate elements removed after generation.

    Duplicates are judged by ==, so unhashable domain values work. The result
    is a list of distinct values in the order they were first drawn, and may be
    shorter than the drawn length.
    """

    inner: Any

    def compile(self, resolve: Resolver) -> Generator:
        inner = resolve(self.inner)

        def set_of(source: RandomSource, size: int) -> Any:
            length = source.next_uint(size + 1)
            values = _draw_many(inner, source, size // 2, length)
            if values is None:
                return SKIP
            distinct: list[Any] = []
            for value in values:
                if value not in distinct:
                    distinct.append(value)
            return distinct

        return set_of


@dataclass(frozen=True)
class PairOf(Combinator):
    """Two independent values from the same TypeSpec, as a tuple."""

    inner: Any

    def compile(self, resolve: Resolver) -> Generator:
        inner = resolve(self.inner)

        def pair_of(source: RandomSource, size: int) -> Any:
            values = _draw_many(inner, source, size, 2)
            return SKIP if values is None else (values[0], values[1])

        return pair_of


@dataclass(frozen=True)
class FixedLengthListOf(Combinator):
    """Exactly `length` independent values, whatever the size bound."""

    inner: Any
    length: int

    def __post_init__(self) -> None:
        if isinstance(self.length, bool) or not isinstance(self.length, int):
            raise InvalidConfigurationError(f"FixedLengthListOf length must be an int, got {type(self.length).__name__}")
        if self.length < 0:
            raise InvalidConfigurationError(f"FixedLengthListOf length must be >= 0, got {self.length}")

    def compile(self, resolve: Resolver) -> Generator:
        inner = resolve(self.inner)
        length = self.length

        def fixed_length_list_of(source: RandomSource, size: int) -> Any:
            values = _draw_many(inner, source, size, length)
            return SKIP if values is None else values

        return fixed_length_list_of


@dataclass(frozen=True)
class TupleOf(Combinator):
    """Heterogeneous tuple: one value from each TypeSpec, in order."""

    specs: tuple[Any, ...]

    def __init__(self, *specs: Any) -> None:
        object.__setattr__(self, "specs", specs)

    def compile(self, resolve: Resolver) -> Generator:
        generators = [resolve(spec) for spec in self.specs]

        def tuple_of(source: RandomSource, size: int) -> Any:
            values = []
            for generator in generators:
                value = generator(source, size)
                if value is SKIP:
                    return SKIP
                values.append(value)
            return tuple(values)

        return tuple_of


@dataclass(frozen=True)
class OneOf(Combinator):
    """Value from a uniformly chosen one of several TypeSpecs."""

    specs: tuple[Any, ...]

    def __init__(self, *specs: Any) -> None:
        if not specs:
            raise InvalidConfigurationError("OneOf requires at least one TypeSpec")
        object.__setattr__(self, "specs", specs)

    def compile(self, resolve: Resolver) -> Generator:
        generators = [resolve(spec) for spec in self.specs]

        def one_of(source: RandomSource, size: int) -> Any:
            return source.choice(generators)(source, size)

        return one_of

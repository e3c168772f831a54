"""The generator calling convention and the skip sentinel.

Every generator, built-in, registered or composed, has the same shape:

    generator(source: RandomSource, size: int) -> value | SKIP

A generator that cannot produce a value for this trial returns SKIP. Any
combinator that sees SKIP from a nested generator returns SKIP itself, so a
single skip anywhere invalidates the whole argument tuple.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Literal, Protocol

if TYPE_CHECKING:
    from proptrial.core.random_source import RandomSource


class SkipSignal(Enum):
    """Single-member enum used as the skip sentinel.

    An enum member survives copy/deepcopy/pickle as the same object, so
    identity checks (`value is SKIP`) stay valid everywhere.
    """

    SKIP = "skip"

    def __repr__(self) -> str:
        return "SKIP"


SKIP: Literal[SkipSignal.SKIP] = SkipSignal.SKIP


def is_skip(value: Any) -> bool:
    """Return True if value is the skip sentinel."""
    return value is SKIP


class Generator(Protocol):
    """Callable producing one random value of a domain."""

    def __call__(self, source: RandomSource, size: int) -> Any:
        """Draw one value (or SKIP) using source, scaled by size."""
        ...

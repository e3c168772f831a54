# src/proptrial/generators/permutation.py
"""Permutations of {0, 1, 2, ...} with finite support.

A small value type so the built-in "perm" generator has a non-commutative
domain to draw from. Points are 0-based internally; repr uses 1-based cycle
notation, e.g. (1,2,3)(4,5).

Composition follows the "apply left, then right" convention:
(p * q)(i) == q(p(i)).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from proptrial.core.random_source import RandomSource


@dataclass(frozen=True, slots=True)
class Permutation:
    """Permutation stored as its image list, with trailing fixed points trimmed.

    Trimming makes equality independent of the degree a permutation was built
    with: Permutation((1, 0)) == Permutation((1, 0, 2)).
    """

    images: tuple[int, ...]

    def __post_init__(self) -> None:
        images = tuple(self.images)
        if sorted(images) != list(range(len(images))):
            raise ValueError(f"Not a permutation of 0..{len(images) - 1}: {images}")
        end = len(images)
        while end > 0 and images[end - 1] == end - 1:
            end -= 1
        object.__setattr__(self, "images", images[:end])

    @classmethod
    def identity(cls) -> Permutation:
        return cls(())

    @classmethod
    def random(cls, source: RandomSource, degree: int) -> Permutation:
        """Uniformly random permutation of 0..degree-1."""
        return cls(tuple(source.shuffled(range(degree))))

    @property
    def degree(self) -> int:
        """Largest moved point + 1 (0 for the identity)."""
        return len(self.images)

    def __call__(self, point: int) -> int:
        if point < len(self.images):
            return self.images[point]
        return point

    def __mul__(self, other: object) -> Permutation:
        if not isinstance(other, Permutation):
            return NotImplemented
        degree = max(self.degree, other.degree)
        return Permutation(tuple(other(self(i)) for i in range(degree)))

    def inverse(self) -> Permutation:
        inverse = [0] * self.degree
        for i, image in enumerate(self.images):
            inverse[image] = i
        return Permutation(tuple(inverse))

    def cycles(self) -> list[tuple[int, ...]]:
        """Non-trivial cycles, each starting at its smallest point."""
        seen: set[int] = set()
        cycles = []
        for start in range(self.degree):
            if start in seen or self(start) == start:
                continue
            cycle = [start]
            seen.add(start)
            point = self(start)
            while point != start:
                cycle.append(point)
                seen.add(point)
                point = self(point)
            cycles.append(tuple(cycle))
        return cycles

    def __repr__(self) -> str:
        cycles = self.cycles()
        if not cycles:
            return "()"
        return "".join("(" + ",".join(str(p + 1) for p in cycle) + ")" for cycle in cycles)

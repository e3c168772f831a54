# src/proptrial/generators/builtin.py
"""Built-in generator catalogue.

Registered on every Engine created with load_builtins=True (the default
engine included) through the same pluggy hook that domain adapters use.

Tag      Values
-------  ---------------------------------------------------------
int      integer in [-size, size]
nat      integer in [0, size]
pos_int  integer in [1, size + 1]
bool     True or False (size ignored)
float    float in [-size, size)
char     ASCII letter or digit (size ignored)
str      string of 0..size chars
perm     Permutation of degree 1..size + 1
"""

from __future__ import annotations

import string
from typing import TYPE_CHECKING

from proptrial.generators.permutation import Permutation
from proptrial.plugins.hookspecs import hookimpl

if TYPE_CHECKING:
    from proptrial.contracts.generators import Generator
    from proptrial.core.random_source import RandomSource

_CHARS = string.ascii_letters + string.digits


def integers(source: RandomSource, size: int) -> int:
    return source.next_int(-size, size)


def naturals(source: RandomSource, size: int) -> int:
    return source.next_int(0, size)


def positive_integers(source: RandomSource, size: int) -> int:
    return source.next_int(1, size + 1)


def booleans(source: RandomSource, size: int) -> bool:
    return source.next_bool()


def floats(source: RandomSource, size: int) -> float:
    return (source.next_float() * 2.0 - 1.0) * size


def chars(source: RandomSource, size: int) -> str:
    return source.choice(_CHARS)


def strings(source: RandomSource, size: int) -> str:
    length = source.next_uint(size + 1)
    return "".join(chars(source, size) for _ in range(length))


def permutations(source: RandomSource, size: int) -> Permutation:
    return Permutation.random(source, source.next_int(1, size + 1))


BUILTIN_GENERATORS: dict[str, Generator] = {
    "int": integers,
    "nat": naturals,
    "pos_int": positive_integers,
    "bool": booleans,
    "float": floats,
    "char": chars,
    "str": strings,
    "perm": permutations,
}


class BuiltinGenerators:
    """pluggy plugin contributing the built-in catalogue."""

    @hookimpl
    def proptrial_get_generators(self) -> dict[str, Generator]:
        return dict(BUILTIN_GENERATORS)

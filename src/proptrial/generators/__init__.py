"""Generator combinators, TypeSpec compilation and the built-in catalogue."""

from proptrial.generators.builtin import BUILTIN_GENERATORS, BuiltinGenerators
from proptrial.generators.combinators import (
    Combinator,
    ElementOf,
    FixedLengthListOf,
    ListOf,
    OneOf,
    PairOf,
    SetOf,
    TupleOf,
)
from proptrial.generators.expression import TypeExpressionError, parse_type_expression
from proptrial.generators.permutation import Permutation
from proptrial.generators.typespec import TypeSpec, compile_spec, compile_specs

__all__ = [
    "BUILTIN_GENERATORS",
    "BuiltinGenerators",
    "Combinator",
    "ElementOf",
    "FixedLengthListOf",
    "ListOf",
    "OneOf",
    "PairOf",
    "Permutation",
    "SetOf",
    "TupleOf",
    "TypeExpressionError",
    "TypeSpec",
    "compile_spec",
    "compile_specs",
    "parse_type_expression",
]

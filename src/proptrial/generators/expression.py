# src/proptrial/generators/expression.py
"""Type expression parser for TypeSpecs written as text.

Uses Python's ast module to parse a restricted expression language. This is
NOT eval(): only the constructs below are accepted, everything else is
rejected before any TypeSpec is built.

Grammar (by example):
    int                              registered tag
    "my-tag"                         tag that is not a Python identifier
    list_of(int)                     ListOf
    set_of(perm)                     SetOf
    pair_of(int)                     PairOf
    fixed_length_list_of(int, 3)     FixedLengthListOf
    element_of([1, 2, 3])            ElementOf (literal constants only)
    tuple_of(int, bool)              TupleOf
    one_of(int, str)                 OneOf

CamelCase names (ListOf, PairOf, ...) are accepted as aliases.
"""

from __future__ import annotations

import ast
from collections.abc import Callable
from typing import Any

from proptrial.contracts.errors import InvalidConfigurationError
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


class TypeExpressionError(InvalidConfigurationError):
    """Raised when a type expression is malformed or uses forbidden constructs."""


def _single(name: str, factory: Callable[[Any], Combinator]) -> Callable[[list[Any]], Combinator]:
    def build(args: list[Any]) -> Combinator:
        if len(args) != 1:
            raise TypeExpressionError(f"{name}() takes exactly one TypeSpec, got {len(args)}")
        return factory(args[0])

    return build


def _fixed_length(args: list[Any]) -> Combinator:
    if len(args) != 2:
        raise TypeExpressionError(f"fixed_length_list_of() takes a TypeSpec and a length, got {len(args)} arguments")
    return FixedLengthListOf(args[0], args[1])


def _element_of(args: list[Any]) -> Combinator:
    if len(args) != 1:
        raise TypeExpressionError(f"element_of() takes one collection literal, got {len(args)} arguments")
    return ElementOf(args[0])


_COMBINATORS: dict[str, Callable[[list[Any]], Combinator]] = {
    "list_of": _single("list_of", ListOf),
    "set_of": _single("set_of", SetOf),
    "pair_of": _single("pair_of", PairOf),
    "fixed_length_list_of": _fixed_length,
    "element_of": _element_of,
    "tuple_of": lambda args: TupleOf(*args),
    "one_of": lambda args: OneOf(*args),
}

_ALIASES = {
    "ListOf": "list_of",
    "SetOf": "set_of",
    "PairOf": "pair_of",
    "FixedLengthListOf": "fixed_length_list_of",
    "ElementOf": "element_of",
    "TupleOf": "tuple_of",
    "OneOf": "one_of",
}

# Arguments that are literal values rather than TypeSpecs
_LITERAL_ARGUMENTS: dict[str, set[int]] = {
    "fixed_length_list_of": {1},
    "element_of": {0},
}


class _TypeExpressionBuilder:
    """Walks a parsed expression and builds the TypeSpec tree."""

    def build(self, node: ast.expr) -> Any:
        if isinstance(node, ast.Name):
            if node.id in _COMBINATORS or node.id in _ALIASES:
                raise TypeExpressionError(f"Combinator {node.id!r} must be called with arguments")
            return node.id
        if isinstance(node, ast.Constant) and isinstance(node.value, str):
            return node.value
        if isinstance(node, ast.Call):
            return self._build_call(node)
        raise TypeExpressionError(f"Unsupported construct in type expression: {ast.unparse(node)!r}")

    def _build_call(self, node: ast.Call) -> Combinator:
        if not isinstance(node.func, ast.Name):
            raise TypeExpressionError(f"Forbidden call target: {ast.unparse(node.func)!r}")
        name = _ALIASES.get(node.func.id, node.func.id)
        if name not in _COMBINATORS:
            raise TypeExpressionError(f"Unknown combinator {node.func.id!r}. Known: {', '.join(sorted(_COMBINATORS))}")
        if node.keywords:
            raise TypeExpressionError(f"{name}() does not accept keyword arguments")

        literal_positions = _LITERAL_ARGUMENTS.get(name, set())
        args = [
            self._literal(arg) if position in literal_positions else self.build(arg)
            for position, arg in enumerate(node.args)
        ]
        return _COMBINATORS[name](args)

    def _literal(self, node: ast.expr) -> Any:
        try:
            return ast.literal_eval(node)
        except ValueError as e:
            raise TypeExpressionError(f"Expected a literal value, got {ast.unparse(node)!r}") from e


def parse_type_expression(expression: str) -> Any:
    """Parse a type expression into a TypeSpec (tag string or Combinator).

    Raises:
        TypeExpressionError: If the expression is not valid syntax or uses
            anything outside the grammar. Combinator argument errors
            (e.g. a negative length) surface as InvalidConfigurationError.
    """
    try:
        tree = ast.parse(expression.strip(), mode="eval")
    except SyntaxError as e:
        raise TypeExpressionError(f"Invalid type expression {expression!r}: {e.msg}") from e
    return _TypeExpressionBuilder().build(tree.body)

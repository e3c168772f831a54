# src/proptrial/engine/evaluator.py
"""Outcome evaluation: property return values -> Outcome.

This is the only place raw property results are interpreted. Everything
downstream works on the Outcome variant.

Single property:
    True  -> PASS
    False -> FAIL (no explanation)
    str   -> FAIL, the string is the explanation
    SKIP  -> SKIP
    other -> PropertyContractError

Equality of two functions (both always run on the same arguments):
    SKIP from either      -> SKIP
    str from either       -> FAIL with that explanation (first function wins)
    equality(a, b) true   -> PASS
    otherwise             -> FAIL with both outputs
"""

from __future__ import annotations

import copy
import operator
from collections.abc import Callable
from typing import Any

from proptrial.contracts.errors import PropertyContractError
from proptrial.contracts.generators import SKIP
from proptrial.contracts.results import Outcome
from proptrial.core.logging import get_logger

logger = get_logger(__name__)

Equality = Callable[[Any, Any], Any]


def snapshot_arguments(arguments: tuple[Any, ...]) -> tuple[Any, ...]:
    """Deep copy of an argument tuple, or the tuple itself if it cannot be copied.

    Generators may produce values that refuse deepcopy, such as locks or
    open files. Those are still valid arguments; they are shared rather than
    copied, so a property that mutates them can change what a later reader
    sees.
    """
    try:
        return copy.deepcopy(arguments)
    except (TypeError, copy.Error) as e:
        logger.debug("snapshot_not_copied", error=str(e))
        return arguments


def interpret_result(result: Any) -> Outcome:
    """Classify a single property's return value.

    Raises:
        PropertyContractError: If result is not True, False, a str or SKIP.
    """
    if result is SKIP:
        return Outcome.skipped()
    if result is True:
        return Outcome.passed()
    if result is False:
        return Outcome.failed(output=False)
    if isinstance(result, str):
        return Outcome.failed(explanation=result, output=result)
    raise PropertyContractError(
        f"Property must return True, False, a message string or SKIP; got {type(result).__name__}: {result!r}"
    )


class OutcomeEvaluator:
    """Runs properties on an argument tuple and classifies the result."""

    def __init__(self, equality: Equality = operator.eq) -> None:
        self._equality = equality

    def evaluate(self, prop: Callable[..., Any], arguments: tuple[Any, ...]) -> Outcome:
        return interpret_result(prop(*arguments))

    def evaluate_pair(
        self,
        first: Callable[..., Any],
        second: Callable[..., Any],
        arguments: tuple[Any, ...],
    ) -> Outcome:
        """Run both functions and compare.

        The first function receives a snapshot of the arguments so that
        mutating them cannot influence what the second function sees (when
        the arguments can be copied, see snapshot_arguments).
        """
        first_result = first(*snapshot_arguments(arguments))
        second_result = second(*arguments)

        if first_result is SKIP or second_result is SKIP:
            return Outcome.skipped()
        if isinstance(first_result, str):
            return Outcome.failed(explanation=first_result, output=first_result)
        if isinstance(second_result, str):
            return Outcome.failed(explanation=second_result, output=second_result)
        if self._equality(first_result, second_result):
            return Outcome.passed()
        return Outcome.failed(outputs=(first_result, second_result))

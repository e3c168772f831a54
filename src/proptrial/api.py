# src/proptrial/api.py
"""Module-level entry points backed by a process-wide default Engine.

    import proptrial

    proptrial.check(["int", "int"], lambda a, b: a * b == b * a)   # True
    proptrial.last_failure()                                       # raises NoFailureRecordedError

The default engine (and so its registry and last-failure record) is shared
by everything in the process. Code that needs isolation, such as tests or
concurrent runs, should create its own Engine instead.
"""

from __future__ import annotations

import operator
from collections.abc import Callable, Sequence
from typing import Any

from proptrial.contracts.generators import Generator
from proptrial.contracts.results import FailureRecord, RunResult
from proptrial.engine.evaluator import Equality
from proptrial.engine.runner import Engine

__all__ = [
    "Engine",
    "check",
    "check_equal",
    "default_engine",
    "last_failure",
    "register_generator",
    "run_check",
    "run_check_equal",
]

# Module-level singleton for the default engine
_default_engine: Engine | None = None


def default_engine() -> Engine:
    """Get the process-wide Engine (created with built-in generators on first use)."""
    global _default_engine

    if _default_engine is None:
        _default_engine = Engine()
    return _default_engine


def check(specs: Sequence[Any], prop: Callable[..., Any], **options: Any) -> bool:
    """Check a property on the default engine. See Engine.check."""
    return default_engine().check(specs, prop, **options)


def check_equal(
    specs: Sequence[Any],
    first: Callable[..., Any],
    second: Callable[..., Any],
    *,
    equality: Equality = operator.eq,
    **options: Any,
) -> bool:
    """Check two functions agree on the default engine. See Engine.check_equal."""
    return default_engine().check_equal(specs, first, second, equality=equality, **options)


def run_check(specs: Sequence[Any], prop: Callable[..., Any], **overrides: Any) -> RunResult:
    return default_engine().run_check(specs, prop, **overrides)


def run_check_equal(
    specs: Sequence[Any],
    first: Callable[..., Any],
    second: Callable[..., Any],
    *,
    equality: Equality = operator.eq,
    **overrides: Any,
) -> RunResult:
    return default_engine().run_check_equal(specs, first, second, equality=equality, **overrides)


def last_failure() -> FailureRecord:
    """Most recent failure on the default engine.

    Raises:
        NoFailureRecordedError: If no run on the default engine has failed.
    """
    return default_engine().last_failure()


def register_generator(tag: str, generator: Generator) -> None:
    """Register (or replace) a generator on the default engine's registry."""
    default_engine().register_generator(tag, generator)

# tests/conftest.py
"""Shared test fixtures and helpers.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/

Engine fixtures:
- engine: isolated Engine with built-in generators, reports captured in report_stream
- bare_engine: isolated Engine with an empty registry
- fresh_default_engine: resets the process-wide default engine around a test
"""

import io
import os
from collections.abc import Iterator

import pytest
from hypothesis import Phase, Verbosity, settings

from proptrial import api
from proptrial.core.registry import GeneratorRegistry
from proptrial.engine.runner import Engine

settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Disable deadline for CI (timing varies)
)

settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


@pytest.fixture
def report_stream() -> io.StringIO:
    """Buffer that receives failure reports from the engine fixture."""
    return io.StringIO()


@pytest.fixture
def engine(report_stream: io.StringIO) -> Engine:
    """Isolated engine with the built-in generator catalogue."""
    return Engine(stream=report_stream)


@pytest.fixture
def bare_engine(report_stream: io.StringIO) -> Engine:
    """Isolated engine with nothing registered."""
    return Engine(registry=GeneratorRegistry(), stream=report_stream)


@pytest.fixture
def fresh_default_engine() -> Iterator[None]:
    """Reset the process-wide default engine before and after the test."""
    api._default_engine = None
    yield
    api._default_engine = None

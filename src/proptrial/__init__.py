"""
proptrial: Randomized property checking with reproducible trial runs.

Generates argument tuples of growing size, runs a property (or a pair of
functions that must agree) over them, and reports the first failing input.
"""

__version__ = "0.3.0"

from proptrial.api import (
    Engine,
    check,
    check_equal,
    default_engine,
    last_failure,
    register_generator,
    run_check,
    run_check_equal,
)
from proptrial.contracts import (
    SKIP,
    FailureRecord,
    InvalidConfigurationError,
    NoFailureRecordedError,
    Outcome,
    PropertyContractError,
    PropertyFailedError,
    ProptrialError,
    RunResult,
    RunStatus,
    TooManySkipsError,
    UnknownTypeError,
)
from proptrial.core.config import CheckSettings
from proptrial.core.random_source import RandomSource
from proptrial.generators import (
    ElementOf,
    FixedLengthListOf,
    ListOf,
    OneOf,
    PairOf,
    SetOf,
    TupleOf,
)

__all__ = [
    "SKIP",
    "CheckSettings",
    "ElementOf",
    "Engine",
    "FailureRecord",
    "FixedLengthListOf",
    "InvalidConfigurationError",
    "ListOf",
    "NoFailureRecordedError",
    "OneOf",
    "Outcome",
    "PairOf",
    "PropertyContractError",
    "PropertyFailedError",
    "ProptrialError",
    "RandomSource",
    "RunResult",
    "RunStatus",
    "SetOf",
    "TooManySkipsError",
    "TupleOf",
    "UnknownTypeError",
    "__version__",
    "check",
    "check_equal",
    "default_engine",
    "last_failure",
    "register_generator",
    "run_check",
    "run_check_equal",
]

"""Shared types for proptrial.

Everything that crosses a subsystem boundary lives here: enums, the
exception taxonomy, the generator calling convention and result types.
"""

from proptrial.contracts.enums import CheckMode, OutcomeKind, RunStatus, SizeCurve
from proptrial.contracts.errors import (
    InvalidConfigurationError,
    NoFailureRecordedError,
    PropertyContractError,
    PropertyFailedError,
    ProptrialError,
    TooManySkipsError,
    UnknownTypeError,
)
from proptrial.contracts.generators import SKIP, Generator, SkipSignal, is_skip
from proptrial.contracts.results import FailureRecord, Outcome, RunResult

__all__ = [
    "SKIP",
    "CheckMode",
    "FailureRecord",
    "Generator",
    "InvalidConfigurationError",
    "NoFailureRecordedError",
    "Outcome",
    "OutcomeKind",
    "PropertyContractError",
    "PropertyFailedError",
    "ProptrialError",
    "RunResult",
    "RunStatus",
    "SizeCurve",
    "SkipSignal",
    "TooManySkipsError",
    "UnknownTypeError",
    "is_skip",
]

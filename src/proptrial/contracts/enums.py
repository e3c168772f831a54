"""Status codes and modes used across subsystem boundaries."""

from enum import StrEnum


class RunStatus(StrEnum):
    """Final status of a check run.

    Exactly one of these is produced per run. TOO_MANY_SKIPS is a distinct
    outcome and must never be reported as PASSED.
    """

    PASSED = "passed"
    FAILED = "failed"
    TOO_MANY_SKIPS = "too_many_skips"


class OutcomeKind(StrEnum):
    """What a single trial produced."""

    PASS = "pass"
    FAIL = "fail"
    SKIP = "skip"


class CheckMode(StrEnum):
    """Which entry point drove the run.

    Values:
        SINGLE: One property returning True/False/str/SKIP
        EQUAL: Two functions whose outputs must agree
    """

    SINGLE = "single"
    EQUAL = "equal"


class SizeCurve(StrEnum):
    """Shape of the size ramp across trial indices.

    Values:
        LINEAR: size grows proportionally with the trial index
        QUADRATIC: many small sizes early, steep growth near the end
        CONSTANT: every trial uses max_size
    """

    LINEAR = "linear"
    QUADRATIC = "quadratic"
    CONSTANT = "constant"

"""Exception taxonomy for proptrial.

Configuration and registry errors are raised eagerly, before the first
trial. Run-level outcomes (failure, too many skips) are only raised by the
boolean entry points, and only where documented.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from proptrial.contracts.results import FailureRecord, RunResult


class ProptrialError(Exception):
    """Base class for every error raised by proptrial."""


class UnknownTypeError(ProptrialError, LookupError):
    """Raised when a type tag has no registered generator."""

    def __init__(self, tag: str, known: list[str] | None = None) -> None:
        self.tag = tag
        self.known = sorted(known) if known is not None else []
        message = f"No generator registered for type tag {tag!r}"
        if self.known:
            message += f". Registered tags: {', '.join(self.known)}"
        super().__init__(message)


class InvalidConfigurationError(ProptrialError, ValueError):
    """Raised for bad settings, malformed TypeSpecs or invalid combinator arguments."""


class PropertyContractError(ProptrialError, TypeError):
    """Raised when a property returns something other than True, False, str or SKIP."""


class TooManySkipsError(ProptrialError):
    """Raised by check()/check_equal() when a run gave up on skipped trials.

    This is NOT a property failure. The run could not find enough valid
    inputs, so nothing can be said about the property either way.

    Attributes:
        result: The RunResult with status TOO_MANY_SKIPS
    """

    def __init__(self, result: RunResult) -> None:
        self.result = result
        super().__init__(
            f"Gave up after {result.skips} skipped trials with only "
            f"{result.trials_run} of {result.max_trials} trials completed (seed={result.seed})"
        )


class PropertyFailedError(ProptrialError, AssertionError):
    """Raised on a failing trial when the caller passes raise_on_failure=True.

    Subclasses AssertionError so pytest renders it as a test failure.

    Attributes:
        record: The FailureRecord captured for the failing trial
    """

    def __init__(self, record: FailureRecord) -> None:
        self.record = record
        super().__init__(record.describe())


class NoFailureRecordedError(ProptrialError, LookupError):
    """Raised when last_failure() is queried before any run has failed."""

    def __init__(self) -> None:
        super().__init__("No failing trial has been recorded")

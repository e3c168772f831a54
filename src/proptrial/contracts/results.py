"""Trial outcomes, failure records and run results.

These types answer: "What did a trial or a run produce?"

- Outcome is the tagged variant for one trial (PASS / FAIL / SKIP). The
  evaluator builds it from whatever the property returned; nothing past the
  evaluator looks at raw property return values.
- FailureRecord freezes the first failing trial of a run.
- RunResult is the structured result behind the boolean API.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from proptrial.contracts.enums import CheckMode, OutcomeKind, RunStatus


@dataclass(frozen=True, slots=True)
class Outcome:
    """Result of evaluating the property on one argument tuple.

    Use the factory methods to create instances.

    Fields:
        kind: PASS, FAIL or SKIP
        explanation: Message returned by the property (FAIL only, optional)
        output: Raw failing return value in single mode (False or the message)
        outputs: Both results in equality mode when they diverged
    """

    kind: OutcomeKind
    explanation: str | None = None
    output: Any = None
    outputs: tuple[Any, Any] | None = None

    @classmethod
    def passed(cls) -> Outcome:
        return cls(kind=OutcomeKind.PASS)

    @classmethod
    def skipped(cls) -> Outcome:
        return cls(kind=OutcomeKind.SKIP)

    @classmethod
    def failed(
        cls,
        *,
        explanation: str | None = None,
        output: Any = None,
        outputs: tuple[Any, Any] | None = None,
    ) -> Outcome:
        return cls(kind=OutcomeKind.FAIL, explanation=explanation, output=output, outputs=outputs)

    @property
    def is_pass(self) -> bool:
        return self.kind == OutcomeKind.PASS

    @property
    def is_fail(self) -> bool:
        return self.kind == OutcomeKind.FAIL

    @property
    def is_skip(self) -> bool:
        return self.kind == OutcomeKind.SKIP


@dataclass(frozen=True)
class FailureRecord:
    """Frozen state of the first failing trial in a run.

    Arguments are snapshotted before the property runs, so a property that
    mutates its inputs does not alter the record. Values that cannot be deep
    copied are recorded by reference.

    Fields:
        mode: SINGLE (check) or EQUAL (check_equal)
        trial: 1-based index of the failing trial
        max_trials: The run's trial cap
        size: Size bound the arguments were drawn with
        seed: Seed of the run's RandomSource (replays the whole run)
        arguments: The failing argument tuple
        functions: The function(s) under test
        explanation: Message returned by a property, if any
        output: Single-mode failing return value
        outputs: Equality-mode divergent results (first, second)
    """

    mode: CheckMode
    trial: int
    max_trials: int
    size: int
    seed: int
    arguments: tuple[Any, ...]
    functions: tuple[Callable[..., Any], ...]
    explanation: str | None = None
    output: Any = None
    outputs: tuple[Any, Any] | None = None

    def describe(self) -> str:
        """Render the human-readable failure report."""
        lines = [f"Test {self.trial} of {self.max_trials} failed:"]
        lines.append(f"  Input: {_format_arguments(self.arguments)}")
        if self.outputs is not None:
            lines.append(f"  Output 1: {self.outputs[0]!r}")
            lines.append(f"  Output 2: {self.outputs[1]!r}")
        elif self.explanation is not None:
            lines.append(f"  Message: {self.explanation}")
        else:
            lines.append(f"  Output: {self.output!r}")
        lines.append(f"  Size: {self.size}, seed: {self.seed}")
        return "\n".join(lines)


def _format_arguments(arguments: tuple[Any, ...]) -> str:
    return "[ " + ", ".join(repr(a) for a in arguments) + " ]"


@dataclass(frozen=True)
class RunResult:
    """Structured result of one check run.

    Invariant: status == FAILED if and only if failure is not None.
    """

    status: RunStatus
    mode: CheckMode
    trials_run: int
    skips: int
    max_trials: int
    seed: int
    failure: FailureRecord | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.status == RunStatus.FAILED and self.failure is None:
            raise ValueError("FAILED RunResult requires a FailureRecord")
        if self.status != RunStatus.FAILED and self.failure is not None:
            raise ValueError(f"{self.status} RunResult must not carry a FailureRecord")

    @property
    def passed(self) -> bool:
        return self.status == RunStatus.PASSED

    def to_dict(self) -> dict[str, Any]:
        """JSON-safe summary (failing values rendered with repr)."""
        summary: dict[str, Any] = {
            "status": self.status.value,
            "mode": self.mode.value,
            "trials_run": self.trials_run,
            "skips": self.skips,
            "max_trials": self.max_trials,
            "seed": self.seed,
            "failure": None,
        }
        if self.failure is not None:
            summary["failure"] = {
                "trial": self.failure.trial,
                "size": self.failure.size,
                "arguments": [repr(a) for a in self.failure.arguments],
                "explanation": self.failure.explanation,
                "output": None if self.failure.outputs is not None else repr(self.failure.output),
                "outputs": None if self.failure.outputs is None else [repr(o) for o in self.failure.outputs],
            }
        return summary

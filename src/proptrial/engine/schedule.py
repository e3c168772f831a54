# src/proptrial/engine/schedule.py
"""Size schedule: which size bound each trial index is drawn with.

Sizes are computed with integer arithmetic from the 1-based trial index, so
the ramp is exactly reproducible and monotonically non-decreasing:

    LINEAR     size(k) = max_size * k // max_trials
    QUADRATIC  size(k) = max_size * k^2 // max_trials^2
    CONSTANT   size(k) = max_size

Both ramps start near 0 and end at exactly max_size on the last trial.
QUADRATIC spends more of the run on small inputs, which are cheap to run and
produce small counterexamples.
"""

from __future__ import annotations

from collections.abc import Iterator

from proptrial.contracts.enums import SizeCurve


class SizeSchedule:
    """Maps trial indices 1..max_trials to size bounds in [0, max_size].

    Example:
        schedule = SizeSchedule(max_trials=500, max_size=100)
        schedule.size_for(1)    # 0
        schedule.size_for(250)  # 50
        schedule.size_for(500)  # 100
    """

    def __init__(self, max_trials: int, max_size: int, curve: SizeCurve = SizeCurve.LINEAR) -> None:
        if max_trials < 1:
            raise ValueError(f"max_trials must be >= 1, got {max_trials}")
        if max_size < 0:
            raise ValueError(f"max_size must be >= 0, got {max_size}")
        self._max_trials = max_trials
        self._max_size = max_size
        self._curve = SizeCurve(curve)

    @property
    def max_trials(self) -> int:
        return self._max_trials

    @property
    def max_size(self) -> int:
        return self._max_size

    def size_for(self, trial: int) -> int:
        """Size bound for a 1-based trial index.

        Raises:
            ValueError: If trial is outside 1..max_trials.
        """
        if not 1 <= trial <= self._max_trials:
            raise ValueError(f"trial must be in 1..{self._max_trials}, got {trial}")
        match self._curve:
            case SizeCurve.LINEAR:
                return self._max_size * trial // self._max_trials
            case SizeCurve.QUADRATIC:
                return self._max_size * trial * trial // (self._max_trials * self._max_trials)
            case SizeCurve.CONSTANT:
                return self._max_size

    def __iter__(self) -> Iterator[tuple[int, int]]:
        """Yield (trial, size) pairs for every trial in order."""
        for trial in range(1, self._max_trials + 1):
            yield trial, self.size_for(trial)

# src/proptrial/engine/skip_policy.py
"""Skip accounting for a single run.

A trial is skipped when any generator or the property itself returns SKIP.
Skipped trials are redrawn at the same trial index, so they do not count
towards the trial cap. The policy bounds how many skips a run may
absorb before it gives up with TOO_MANY_SKIPS.
"""

from __future__ import annotations

from dataclasses import dataclass

from proptrial.core.config import CheckSettings


@dataclass
class SkipPolicy:
    """Per-run skip counter with a total budget.

    The run is aborted once skips exceed max_skips. max_skips=0 means the
    first skip aborts the run.
    """

    max_skips: int
    skips: int = 0

    def __post_init__(self) -> None:
        if self.max_skips < 0:
            raise ValueError(f"max_skips must be >= 0, got {self.max_skips}")

    @classmethod
    def from_settings(cls, settings: CheckSettings) -> SkipPolicy:
        return cls(max_skips=settings.max_skips)

    def record_skip(self) -> None:
        self.skips += 1

    @property
    def exhausted(self) -> bool:
        """True once the skip budget has been exceeded."""
        return self.skips > self.max_skips

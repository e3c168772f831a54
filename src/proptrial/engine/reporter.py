# src/proptrial/engine/reporter.py
"""Failure reporting and the last-failure record.

The reporter owns the FailureRecord state of an Engine: each recorded
failure replaces the previous one, and querying before anything was recorded
is an error rather than a default value.
"""

from __future__ import annotations

import sys
from typing import TextIO

from proptrial.contracts.errors import NoFailureRecordedError
from proptrial.contracts.results import FailureRecord
from proptrial.core.logging import get_logger

logger = get_logger(__name__)


class FailureReporter:
    """Stores the most recent FailureRecord and prints failure reports.

    Args:
        stream: Where reports are printed. None means sys.stdout, looked up
            at print time so output capture (pytest capsys) works.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._last: FailureRecord | None = None

    def record(self, failure: FailureRecord, *, emit: bool = True) -> None:
        """Store failure as the latest record and optionally print its report."""
        self._last = failure
        logger.info(
            "property_failed",
            mode=failure.mode.value,
            trial=failure.trial,
            max_trials=failure.max_trials,
            size=failure.size,
            seed=failure.seed,
        )
        if emit:
            stream = self._stream if self._stream is not None else sys.stdout
            print(failure.describe(), file=stream)

    def last_failure(self) -> FailureRecord:
        """Return the most recent FailureRecord.

        Raises:
            NoFailureRecordedError: If no failure has been recorded.
        """
        if self._last is None:
            raise NoFailureRecordedError()
        return self._last

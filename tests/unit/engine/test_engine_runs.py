# tests/unit/engine/test_engine_runs.py
"""Tests for Engine check runs: outcomes, reproducibility, skips and failures."""

from __future__ import annotations

import io
import threading
from fractions import Fraction
from typing import Any

import pytest

from proptrial.contracts import (
    SKIP,
    CheckMode,
    InvalidConfigurationError,
    NoFailureRecordedError,
    PropertyContractError,
    PropertyFailedError,
    RunStatus,
    TooManySkipsError,
    UnknownTypeError,
)
from proptrial.core.config import CheckSettings
from proptrial.core.random_source import RandomSource
from proptrial.engine.runner import Engine
from proptrial.generators.combinators import FixedLengthListOf, ListOf, PairOf
from proptrial.generators.permutation import Permutation


def _commutes(a: Any, b: Any) -> bool:
    return bool(a * b == b * a)


class TestScenarios:
    """End-to-end behaviour of the two entry points."""

    def test_integer_multiplication_commutes(self, engine: Engine, report_stream: io.StringIO) -> None:
        assert engine.check(["int", "int"], _commutes) is True
        assert report_stream.getvalue() == ""

    def test_permutations_do_not_commute(self, engine: Engine, report_stream: io.StringIO) -> None:
        assert engine.check(["perm", "perm"], _commutes, seed=1) is False

        record = engine.last_failure()
        a, b = record.arguments
        assert isinstance(a, Permutation)
        assert isinstance(b, Permutation)
        assert a * b != b * a
        assert 1 <= record.trial <= 500
        assert report_stream.getvalue().startswith(f"Test {record.trial} of 500 failed:")

    def test_division_round_trip_skips_zero_divisor(self, engine: Engine) -> None:
        result = engine.run_check_equal(
            ["int", "int"],
            lambda a, b: SKIP if b == 0 else b * Fraction(a, b),
            lambda a, b: a,
        )
        assert result.status == RunStatus.PASSED
        assert result.skips > 0

    def test_check_equal_is_reflexive(self, engine: Engine) -> None:
        def f(xs: list[int], n: int) -> list[int]:
            return sorted(xs)[:n]

        assert engine.check_equal([ListOf("int"), "nat"], f, f, max_trials=100) is True

    def test_check_equal_reports_divergent_outputs(self, engine: Engine, report_stream: io.StringIO) -> None:
        assert engine.check_equal(["pos_int"], lambda n: n, lambda n: n + 1, seed=3) is False
        record = engine.last_failure()
        assert record.mode == CheckMode.EQUAL
        assert record.trial == 1
        assert record.outputs == (record.arguments[0], record.arguments[0] + 1)
        assert "Output 1:" in report_stream.getvalue()
        assert "Output 2:" in report_stream.getvalue()

    def test_explanation_string_is_failure(self, engine: Engine, report_stream: io.StringIO) -> None:
        assert engine.check(["nat"], lambda n: True if n < 3 else f"{n} too big", seed=5) is False
        record = engine.last_failure()
        assert record.explanation == f"{record.arguments[0]} too big"
        assert f"Message: {record.explanation}" in report_stream.getvalue()


class TestRunMechanics:
    def test_stops_at_first_failure(self, engine: Engine) -> None:
        calls: list[int] = []

        def prop(n: int) -> bool:
            calls.append(n)
            return len(calls) < 7

        result = engine.run_check(["int"], prop, seed=0)
        assert result.status == RunStatus.FAILED
        assert result.trials_run == 7
        assert len(calls) == 7
        assert engine.last_failure().trial == 7

    def test_trial_index_is_one_based(self, engine: Engine) -> None:
        engine.check(["int"], lambda n: False, seed=0)
        assert engine.last_failure().trial == 1

    def test_all_trials_run_on_success(self, engine: Engine) -> None:
        calls = []
        result = engine.run_check(["int"], lambda n: calls.append(n) is None, max_trials=37, seed=2)
        assert result.passed
        assert result.trials_run == 37
        assert len(calls) == 37

    def test_sizes_grow_to_max_size(self, engine: Engine) -> None:
        sizes: list[int] = []

        def record_size(source: RandomSource, size: int) -> int:
            sizes.append(size)
            return size

        engine.check([record_size], lambda s: True, max_trials=50, max_size=20, seed=1)
        assert sizes == sorted(sizes)
        assert sizes[0] == 0
        assert sizes[-1] == 20

    def test_same_seed_same_arguments(self, engine: Engine) -> None:
        def run() -> list[Any]:
            seen: list[Any] = []
            engine.check(["int", ListOf("perm")], lambda a, b: seen.append((a, b)) is None, max_trials=60, seed=42)
            return seen

        assert run() == run()

    def test_seed_recorded_when_not_given(self, engine: Engine) -> None:
        first: list[int] = []
        result = engine.run_check(["int"], lambda n: first.append(n) is None, max_trials=25)
        replay: list[int] = []
        engine.check(["int"], lambda n: replay.append(n) is None, max_trials=25, seed=result.seed)
        assert isinstance(result.seed, int)
        assert replay == first

    def test_no_arguments(self, engine: Engine) -> None:
        assert engine.check([], lambda: True, max_trials=3) is True


class TestSkips:
    def test_always_skip_gives_up(self, engine: Engine) -> None:
        with pytest.raises(TooManySkipsError) as exc_info:
            engine.check(["int"], lambda n: SKIP, max_trials=50)
        result = exc_info.value.result
        assert result.status == RunStatus.TOO_MANY_SKIPS
        assert result.skips == 501
        assert result.trials_run == 0

    def test_run_check_reports_too_many_skips_without_raising(self, engine: Engine) -> None:
        result = engine.run_check(["int"], lambda n: SKIP, max_trials=10, max_skip_ratio=0)
        assert result.status == RunStatus.TOO_MANY_SKIPS
        assert not result.passed
        assert result.skips == 1

    def test_generator_skip_skips_whole_trial(self, engine: Engine) -> None:
        calls: list[tuple[int, int]] = []

        def sometimes(source: RandomSource, size: int) -> Any:
            return SKIP if source.next_bool() else 1

        result = engine.run_check(
            ["int", PairOf(sometimes)],
            lambda a, pair: calls.append((a, len(pair))) is None,
            max_trials=40,
            seed=8,
        )
        assert result.passed
        assert result.skips > 0
        assert len(calls) == 40

    def test_skips_do_not_count_as_trials(self, engine: Engine) -> None:
        result = engine.run_check(["int"], lambda n: SKIP if n % 2 else True, max_trials=30, seed=4)
        assert result.passed
        assert result.trials_run == 30

    def test_skip_retries_escape_degenerate_size(self, engine: Engine) -> None:
        """At size 0 every int is 0; retries must move past it."""
        assert engine.check(["int"], lambda n: SKIP if n == 0 else True, max_trials=20, seed=6) is True

    def test_too_many_skips_does_not_record_failure(self, engine: Engine) -> None:
        engine.run_check(["int"], lambda n: SKIP, max_trials=5)
        with pytest.raises(NoFailureRecordedError):
            engine.last_failure()


class TestFailureRecord:
    def test_no_failure_before_any_run(self, engine: Engine) -> None:
        with pytest.raises(NoFailureRecordedError):
            engine.last_failure()

    def test_passing_run_keeps_previous_failure(self, engine: Engine) -> None:
        engine.check(["int"], lambda n: False, seed=1)
        first = engine.last_failure()
        engine.check(["int"], lambda n: True, max_trials=5)
        assert engine.last_failure() is first

    def test_next_failure_overwrites(self, engine: Engine) -> None:
        engine.check(["int"], lambda n: False, seed=1)
        engine.check(["bool"], lambda b: "second", seed=1)
        assert engine.last_failure().explanation == "second"

    def test_functions_recorded(self, engine: Engine) -> None:
        def first(n: int) -> int:
            return n

        def second(n: int) -> int:
            return n + 1

        engine.check_equal(["int"], first, second, seed=1)
        assert engine.last_failure().functions == (first, second)

    def test_arguments_frozen_before_property_runs(self, engine: Engine) -> None:
        def mutate(xs: list[int]) -> bool:
            xs.append(1000)
            return False

        engine.check([FixedLengthListOf("int", 2)], mutate, seed=1)
        (frozen,) = engine.last_failure().arguments
        assert len(frozen) == 2
        assert 1000 not in frozen

    def test_report_disabled(self, engine: Engine, report_stream: io.StringIO) -> None:
        engine.check(["int"], lambda n: False, seed=1, report=False)
        assert report_stream.getvalue() == ""
        assert engine.last_failure().trial == 1

    def test_raise_on_failure(self, engine: Engine) -> None:
        with pytest.raises(PropertyFailedError) as exc_info:
            engine.check(["int"], lambda n: False, seed=1, raise_on_failure=True)
        assert exc_info.value.record is engine.last_failure()


class TestUncopyableArguments:
    """Values that refuse deepcopy are still valid arguments."""

    def test_check_passes_with_lock_arguments(self, engine: Engine) -> None:
        assert engine.check([lambda source, size: threading.Lock()], lambda lock: True, max_trials=3, seed=1) is True

    def test_failure_records_uncopyable_argument_by_reference(self, engine: Engine) -> None:
        drawn: list[Any] = []

        def locks(source: RandomSource, size: int) -> Any:
            lock = threading.Lock()
            drawn.append(lock)
            return lock

        engine.check([locks], lambda lock: False, seed=1)
        assert engine.last_failure().arguments[0] is drawn[0]

    def test_check_equal_with_lock_arguments(self, engine: Engine) -> None:
        def is_lock_free(lock: Any) -> bool:
            return not lock.locked()

        assert engine.check_equal([lambda source, size: threading.Lock()], is_lock_free, is_lock_free, max_trials=5) is True


class TestLibraryOutput:
    def test_runs_write_no_log_lines(self, engine: Engine, capsys: pytest.CaptureFixture[str]) -> None:
        """Without configure_logging, runs print nothing besides failure reports."""
        engine.check(["int"], lambda n: True, max_trials=5, seed=1)
        engine.run_check(["int"], lambda n: SKIP, max_trials=5, seed=1)
        engine.check(["int"], lambda n: False, seed=1)

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""


class TestErrors:
    def test_unknown_tag_detected_before_trials(self, engine: Engine) -> None:
        calls: list[Any] = []
        with pytest.raises(UnknownTypeError):
            engine.check(["int", ListOf("matrix")], lambda a, b: calls.append(a) is None)
        assert calls == []

    @pytest.mark.parametrize("max_trials", [0, -5])
    def test_non_positive_trial_cap(self, engine: Engine, max_trials: int) -> None:
        with pytest.raises(InvalidConfigurationError):
            engine.check(["int"], lambda n: True, max_trials=max_trials)

    def test_bare_tag_instead_of_list(self, engine: Engine) -> None:
        with pytest.raises(InvalidConfigurationError):
            engine.check("int", lambda n: True)  # type: ignore[arg-type]

    def test_property_contract_violation(self, engine: Engine) -> None:
        with pytest.raises(PropertyContractError):
            engine.check(["int"], lambda n: None)

    def test_property_exception_propagates_with_note(self, engine: Engine) -> None:
        def explode(n: int) -> bool:
            raise ZeroDivisionError("boom")

        with pytest.raises(ZeroDivisionError, match="boom") as exc_info:
            engine.check(["int"], explode, seed=12)
        notes = getattr(exc_info.value, "__notes__", [])
        assert any("test 1 of 500" in note and "seed=12" in note for note in notes)


class TestEngineIsolation:
    def test_registries_are_independent(self) -> None:
        first = Engine(stream=io.StringIO())
        second = Engine(stream=io.StringIO())
        first.register_generator("answer", lambda source, size: 42)
        assert "answer" in first.registry
        assert "answer" not in second.registry

    def test_failure_records_are_independent(self) -> None:
        first = Engine(stream=io.StringIO())
        second = Engine(stream=io.StringIO())
        first.check(["int"], lambda n: False, seed=1)
        with pytest.raises(NoFailureRecordedError):
            second.last_failure()

    def test_engine_settings_are_defaults(self) -> None:
        engine = Engine(CheckSettings(max_trials=12, seed=3), stream=io.StringIO())
        result = engine.run_check(["int"], lambda n: True)
        assert result.max_trials == 12
        assert result.seed == 3

    def test_bare_engine_has_no_builtins(self, bare_engine: Engine) -> None:
        with pytest.raises(UnknownTypeError):
            bare_engine.check(["int"], lambda n: True)

    def test_explicit_registry_used_as_is(self) -> None:
        from proptrial.core.registry import GeneratorRegistry

        registry = GeneratorRegistry()
        engine = Engine(registry=registry, load_builtins=True, stream=io.StringIO())
        assert engine.registry is registry
        assert len(registry) == 0


class TestSample:
    def test_sample_is_reproducible(self, engine: Engine) -> None:
        assert engine.sample(PairOf("perm"), size=5, count=4, seed=9) == engine.sample(PairOf("perm"), size=5, count=4, seed=9)

    def test_sample_count_and_size(self, engine: Engine) -> None:
        values = engine.sample("nat", size=3, count=25, seed=1)
        assert len(values) == 25
        assert all(0 <= v <= 3 for v in values)

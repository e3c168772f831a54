# src/proptrial/engine/runner.py
"""Engine: owns a registry and the last failure, and runs checks.

A run proceeds strictly sequentially:

1. Settings are merged with per-call overrides and validated.
2. Every TypeSpec is compiled against the registry (unknown tags fail here,
   before any trial).
3. For each trial index k = 1..N the SizeSchedule gives a size; one value
   per TypeSpec is drawn, in declared order, from the run's single
   RandomSource.
4. A SKIP from any draw or from the property redraws the trial at the same
   index. Each consecutive redraw grows the size by one (capped at
   max_size), so a trial stuck on a degenerate small size, such as every
   integer being 0 at size 0, can move on. The SkipPolicy aborts the run
   once its budget is spent.
5. The first FAIL is recorded by the FailureReporter and ends the run.

Because all draws come from one seeded source in a fixed order, a run is
fully determined by (seed, TypeSpecs, property, settings).
"""

from __future__ import annotations

import operator
import threading
from collections.abc import Callable, Sequence
from typing import Any, TextIO

from proptrial.contracts.enums import CheckMode, RunStatus
from proptrial.contracts.errors import PropertyFailedError, TooManySkipsError
from proptrial.contracts.generators import SKIP, Generator
from proptrial.contracts.results import FailureRecord, Outcome, RunResult
from proptrial.core.config import CheckSettings
from proptrial.core.logging import get_logger
from proptrial.core.random_source import RandomSource
from proptrial.core.registry import GeneratorRegistry
from proptrial.engine.evaluator import Equality, OutcomeEvaluator, snapshot_arguments
from proptrial.engine.reporter import FailureReporter
from proptrial.engine.schedule import SizeSchedule
from proptrial.engine.skip_policy import SkipPolicy
from proptrial.generators.builtin import BuiltinGenerators
from proptrial.generators.typespec import compile_spec, compile_specs

logger = get_logger(__name__)


def _draw_arguments(generators: list[Generator], source: RandomSource, size: int) -> tuple[Any, ...] | None:
    """Draw one value per generator, or None if any draw is SKIP."""
    values = []
    for generator in generators:
        value = generator(source, size)
        if value is SKIP:
            return None
        values.append(value)
    return tuple(values)


class Engine:
    """Property checking engine.

    Each Engine has its own generator registry and its own last-failure
    record, so independent engines never see each other's state. Runs on one
    engine are serialized by a re-entrant lock.

    Example:
        engine = Engine()
        engine.check(["int", "int"], lambda a, b: a * b == b * a)   # True
        engine.check(["perm", "perm"], lambda a, b: a * b == b * a)  # False
        engine.last_failure().arguments                              # (p, q)
    """

    def __init__(
        self,
        settings: CheckSettings | None = None,
        *,
        registry: GeneratorRegistry | None = None,
        stream: TextIO | None = None,
        load_builtins: bool = True,
    ) -> None:
        """Initialize the engine.

        Args:
            settings: Default settings for every run (per-call overrides merge on top).
            registry: Registry to use as is. When None, a new registry is
                created and, if load_builtins is set, filled with the built-in catalogue.
            stream: Where failure reports are printed (default: sys.stdout).
            load_builtins: Register the built-in generators on a new registry.
        """
        self._settings = settings if settings is not None else CheckSettings()
        if registry is None:
            registry = GeneratorRegistry()
            if load_builtins:
                registry.register_plugin(BuiltinGenerators())
        self._registry = registry
        self._reporter = FailureReporter(stream)
        self._lock = threading.RLock()

    @property
    def settings(self) -> CheckSettings:
        return self._settings

    @property
    def registry(self) -> GeneratorRegistry:
        return self._registry

    def register_generator(self, tag: str, generator: Generator) -> None:
        """Bind tag to generator on this engine's registry (last write wins)."""
        with self._lock:
            self._registry.register(tag, generator)

    def register_plugin(self, plugin: Any) -> list[str]:
        """Register a pluggy generator plugin; returns the tags it contributed."""
        with self._lock:
            return self._registry.register_plugin(plugin)

    def compile(self, spec: Any) -> Generator:
        """Compile a single TypeSpec against this engine's registry."""
        return compile_spec(spec, self._registry)

    def sample(self, spec: Any, *, size: int = 10, count: int = 10, seed: int | None = None) -> list[Any]:
        """Draw example values from a TypeSpec at a fixed size.

        SKIP results are kept in the returned list so callers can see how
        often a generator gives up.
        """
        generator = self.compile(spec)
        source = RandomSource(seed) if seed is not None else RandomSource.from_entropy()
        return [generator(source, size) for _ in range(count)]

    # ------------------------------------------------------------------
    # Runs
    # ------------------------------------------------------------------

    def run_check(self, specs: Sequence[Any], prop: Callable[..., Any], **overrides: Any) -> RunResult:
        """Run a single-property check and return the structured result.

        Never raises for run outcomes; configuration and registry errors
        still raise before the first trial.
        """
        evaluator = OutcomeEvaluator()
        return self._run(
            CheckMode.SINGLE,
            specs,
            (prop,),
            lambda arguments: evaluator.evaluate(prop, arguments),
            overrides,
        )

    def run_check_equal(
        self,
        specs: Sequence[Any],
        first: Callable[..., Any],
        second: Callable[..., Any],
        *,
        equality: Equality = operator.eq,
        **overrides: Any,
    ) -> RunResult:
        """Run an equality check of two functions and return the structured result."""
        evaluator = OutcomeEvaluator(equality)
        return self._run(
            CheckMode.EQUAL,
            specs,
            (first, second),
            lambda arguments: evaluator.evaluate_pair(first, second, arguments),
            overrides,
        )

    def check(
        self,
        specs: Sequence[Any],
        prop: Callable[..., Any],
        *,
        raise_on_failure: bool = False,
        **overrides: Any,
    ) -> bool:
        """Check that prop holds for generated arguments.

        Returns:
            True if every trial passed, False on the first failing trial.

        Raises:
            TooManySkipsError: If the run gave up on skipped trials.
            PropertyFailedError: On failure, only when raise_on_failure is set.
        """
        return self._conclude(self.run_check(specs, prop, **overrides), raise_on_failure)

    def check_equal(
        self,
        specs: Sequence[Any],
        first: Callable[..., Any],
        second: Callable[..., Any],
        *,
        equality: Equality = operator.eq,
        raise_on_failure: bool = False,
        **overrides: Any,
    ) -> bool:
        """Check that first and second agree on generated arguments.

        Returns:
            True if every trial agreed, False on the first disagreement.

        Raises:
            TooManySkipsError: If the run gave up on skipped trials.
            PropertyFailedError: On failure, only when raise_on_failure is set.
        """
        result = self.run_check_equal(specs, first, second, equality=equality, **overrides)
        return self._conclude(result, raise_on_failure)

    def last_failure(self) -> FailureRecord:
        """Most recent FailureRecord recorded by this engine.

        Raises:
            NoFailureRecordedError: If no run on this engine has failed.
        """
        return self._reporter.last_failure()

    @staticmethod
    def _conclude(result: RunResult, raise_on_failure: bool) -> bool:
        if result.status == RunStatus.TOO_MANY_SKIPS:
            raise TooManySkipsError(result)
        if result.failure is not None and raise_on_failure:
            raise PropertyFailedError(result.failure)
        return result.passed

    def _run(
        self,
        mode: CheckMode,
        specs: Sequence[Any],
        functions: tuple[Callable[..., Any], ...],
        evaluate: Callable[[tuple[Any, ...]], Outcome],
        overrides: dict[str, Any],
    ) -> RunResult:
        with self._lock:
            settings = self._settings.with_overrides(**overrides)
            generators = compile_specs(specs, self._registry)

            source = RandomSource(settings.seed) if settings.seed is not None else RandomSource.from_entropy()
            schedule = SizeSchedule(settings.max_trials, settings.max_size, settings.size_curve)
            skips = SkipPolicy.from_settings(settings)

            log = logger.bind(mode=mode.value, seed=source.seed, max_trials=settings.max_trials)
            log.info("run_started", arguments=len(generators), max_size=settings.max_size)

            for trial, scheduled_size in schedule:
                retries = 0
                while True:
                    size = min(settings.max_size, scheduled_size + retries)
                    arguments = _draw_arguments(generators, source, size)
                    if arguments is None:
                        outcome = Outcome.skipped()
                    else:
                        snapshot = snapshot_arguments(arguments)
                        try:
                            outcome = evaluate(arguments)
                        except Exception as e:
                            e.add_note(
                                f"proptrial: raised in test {trial} of {settings.max_trials} "
                                f"(size={size}, seed={source.seed}) with input {snapshot!r}"
                            )
                            raise

                    if not outcome.is_skip:
                        break

                    skips.record_skip()
                    retries += 1
                    log.debug("trial_skipped", trial=trial, size=size, skips=skips.skips)
                    if skips.exhausted:
                        log.warning("run_aborted_too_many_skips", trial=trial, skips=skips.skips)
                        return RunResult(
                            status=RunStatus.TOO_MANY_SKIPS,
                            mode=mode,
                            trials_run=trial - 1,
                            skips=skips.skips,
                            max_trials=settings.max_trials,
                            seed=source.seed,
                        )

                if outcome.is_fail:
                    failure = FailureRecord(
                        mode=mode,
                        trial=trial,
                        max_trials=settings.max_trials,
                        size=size,
                        seed=source.seed,
                        arguments=snapshot,
                        functions=functions,
                        explanation=outcome.explanation,
                        output=outcome.output,
                        outputs=outcome.outputs,
                    )
                    self._reporter.record(failure, emit=settings.report)
                    return RunResult(
                        status=RunStatus.FAILED,
                        mode=mode,
                        trials_run=trial,
                        skips=skips.skips,
                        max_trials=settings.max_trials,
                        seed=source.seed,
                        failure=failure,
                    )

            log.info("run_passed", skips=skips.skips)
            return RunResult(
                status=RunStatus.PASSED,
                mode=mode,
                trials_run=settings.max_trials,
                skips=skips.skips,
                max_trials=settings.max_trials,
                seed=source.seed,
            )

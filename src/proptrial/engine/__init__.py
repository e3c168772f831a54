"""Trial engine: size schedule, skip policy, evaluation, reporting and runs."""

from proptrial.engine.evaluator import OutcomeEvaluator, interpret_result
from proptrial.engine.reporter import FailureReporter
from proptrial.engine.runner import Engine
from proptrial.engine.schedule import SizeSchedule
from proptrial.engine.skip_policy import SkipPolicy

__all__ = [
    "Engine",
    "FailureReporter",
    "OutcomeEvaluator",
    "SizeSchedule",
    "SkipPolicy",
    "interpret_result",
]

# src/proptrial/cli.py
"""proptrial Command Line Interface.

Usage:
    # Check a property from an importable module
    proptrial check mypkg.props:commutes -t int -t int

    # Check two implementations agree
    proptrial check-equal mypkg.fast:sort mypkg.slow:sort -t "list_of(int)"

    # Replay a run and emit a JSON summary
    proptrial check mypkg.props:commutes -t perm -t perm --seed 1234 --format json

    # Inspect generators
    proptrial generators
    proptrial sample "pair_of(perm)" --size 5 --count 3

Exit codes: 0 passed, 1 property failed, 2 usage or configuration error,
3 gave up after too many skipped trials.
"""

from __future__ import annotations

import importlib
import json
from pathlib import Path
from typing import Annotated, Any, Literal

import typer
import yaml
from pydantic import ValidationError

from proptrial import __version__
from proptrial.contracts.enums import RunStatus, SizeCurve
from proptrial.contracts.errors import ProptrialError
from proptrial.contracts.results import RunResult
from proptrial.core.config import CheckSettings, load_config
from proptrial.core.logging import LogLevel, configure_logging
from proptrial.engine.runner import Engine
from proptrial.generators.expression import parse_type_expression

EXIT_PASSED = 0
EXIT_FAILED = 1
EXIT_USAGE = 2
EXIT_TOO_MANY_SKIPS = 3

_EXIT_CODES = {
    RunStatus.PASSED: EXIT_PASSED,
    RunStatus.FAILED: EXIT_FAILED,
    RunStatus.TOO_MANY_SKIPS: EXIT_TOO_MANY_SKIPS,
}

app = typer.Typer(
    name="proptrial",
    help="proptrial: Randomized property checking with reproducible trial runs.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"proptrial version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-V", callback=version_callback, is_eager=True, help="Show version and exit."),
    ] = None,
    log_level: Annotated[
        LogLevel,
        typer.Option("--log-level", case_sensitive=False, help="Log level for stderr output."),
    ] = LogLevel.WARNING,
    json_logs: Annotated[
        bool,
        typer.Option("--json-logs", help="Emit logs as JSON lines on stderr."),
    ] = False,
) -> None:
    """proptrial: Randomized property checking with reproducible trial runs."""
    configure_logging(json_output=json_logs, level=log_level)


def _fail_usage(message: str) -> typer.Exit:
    typer.secho(f"Error: {message}", fg=typer.colors.RED, err=True)
    return typer.Exit(EXIT_USAGE)


def _load_target(target: str) -> Any:
    """Import "package.module:attribute.path" and return the attribute."""
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise _fail_usage(f"Target must look like 'module:function', got {target!r}")
    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise _fail_usage(f"Cannot import module {module_name!r}: {e}") from None
    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError:
            raise _fail_usage(f"{module_name!r} has no attribute {attr_path!r}") from None
    if not callable(obj):
        raise _fail_usage(f"{target!r} is not callable")
    return obj


def _parse_types(types: list[str] | None) -> list[Any]:
    try:
        return [parse_type_expression(t) for t in types or []]
    except ProptrialError as e:
        raise _fail_usage(str(e)) from None


def _build_settings(config_file: Path | None, overrides: dict[str, Any]) -> CheckSettings:
    try:
        return load_config(config_file=config_file, overrides=overrides)
    except yaml.YAMLError as e:
        raise _fail_usage(f"YAML syntax error in {config_file}: {e}") from None
    except ValidationError as e:
        typer.echo("Configuration errors:", err=True)
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            typer.echo(f"  - {loc}: {error['msg']}", err=True)
        raise typer.Exit(EXIT_USAGE) from None
    except (FileNotFoundError, ValueError) as e:
        raise _fail_usage(str(e)) from None


def _build_engine(settings: CheckSettings, load_plugins: bool) -> Engine:
    engine = Engine(settings)
    if load_plugins:
        engine.registry.load_entrypoint_plugins()
    return engine


def _finish(result: RunResult, output_format: str) -> None:
    if output_format == "json":
        typer.echo(json.dumps(result.to_dict(), indent=2))
    elif result.status == RunStatus.PASSED:
        typer.secho(f"OK: passed {result.trials_run} tests (seed={result.seed})", fg=typer.colors.GREEN)
    elif result.status == RunStatus.TOO_MANY_SKIPS:
        typer.secho(
            f"Gave up: {result.skips} skipped trials after {result.trials_run} of "
            f"{result.max_trials} tests (seed={result.seed})",
            fg=typer.colors.YELLOW,
            err=True,
        )
    raise typer.Exit(_EXIT_CODES[result.status])


# Shared option declarations
TypesOption = Annotated[
    list[str] | None,
    typer.Option("--type", "-t", help="Type expression for the next argument (repeat per argument)."),
]
TrialsOption = Annotated[int | None, typer.Option("--trials", "-n", help="Number of trials (default 500).", min=1)]
SeedOption = Annotated[int | None, typer.Option("--seed", "-s", help="Seed to replay a run.")]
MaxSizeOption = Annotated[int | None, typer.Option("--max-size", help="Largest size bound.", min=0)]
CurveOption = Annotated[SizeCurve | None, typer.Option("--size-curve", help="Size ramp across trials.")]
SkipRatioOption = Annotated[
    float | None,
    typer.Option("--max-skip-ratio", help="Give up once skips exceed this multiple of the trial count.", min=0.0),
]
ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="YAML settings file.", exists=True, dir_okay=False, resolve_path=True),
]
FormatOption = Annotated[
    Literal["console", "json"],
    typer.Option("--format", "-f", help="Output format: 'console' or 'json'."),
]
PluginsOption = Annotated[
    bool,
    typer.Option("--plugins/--no-plugins", help="Load generator plugins from the 'proptrial' entry point group."),
]


@app.command()
def check(
    target: Annotated[str, typer.Argument(help="Property to check, as module:function.")],
    types: TypesOption = None,
    trials: TrialsOption = None,
    seed: SeedOption = None,
    max_size: MaxSizeOption = None,
    size_curve: CurveOption = None,
    max_skip_ratio: SkipRatioOption = None,
    config_file: ConfigOption = None,
    output_format: FormatOption = "console",
    load_plugins: PluginsOption = True,
) -> None:
    """Check that a property holds for generated arguments."""
    prop = _load_target(target)
    specs = _parse_types(types)
    settings = _build_settings(
        config_file,
        {
            "max_trials": trials,
            "seed": seed,
            "max_size": max_size,
            "size_curve": size_curve,
            "max_skip_ratio": max_skip_ratio,
            "report": output_format == "console",
        },
    )
    engine = _build_engine(settings, load_plugins)
    try:
        result = engine.run_check(specs, prop)
    except ProptrialError as e:
        raise _fail_usage(str(e)) from None
    _finish(result, output_format)


@app.command("check-equal")
def check_equal(
    first: Annotated[str, typer.Argument(help="First function, as module:function.")],
    second: Annotated[str, typer.Argument(help="Second function, as module:function.")],
    types: TypesOption = None,
    trials: TrialsOption = None,
    seed: SeedOption = None,
    max_size: MaxSizeOption = None,
    size_curve: CurveOption = None,
    max_skip_ratio: SkipRatioOption = None,
    config_file: ConfigOption = None,
    output_format: FormatOption = "console",
    load_plugins: PluginsOption = True,
) -> None:
    """Check that two functions return equal results for generated arguments."""
    first_fn = _load_target(first)
    second_fn = _load_target(second)
    specs = _parse_types(types)
    settings = _build_settings(
        config_file,
        {
            "max_trials": trials,
            "seed": seed,
            "max_size": max_size,
            "size_curve": size_curve,
            "max_skip_ratio": max_skip_ratio,
            "report": output_format == "console",
        },
    )
    engine = _build_engine(settings, load_plugins)
    try:
        result = engine.run_check_equal(specs, first_fn, second_fn)
    except ProptrialError as e:
        raise _fail_usage(str(e)) from None
    _finish(result, output_format)


@app.command()
def generators(
    load_plugins: PluginsOption = True,
) -> None:
    """List registered generator type tags."""
    engine = _build_engine(CheckSettings(), load_plugins)
    for tag in engine.registry.tags():
        typer.echo(tag)


@app.command()
def sample(
    type_expression: Annotated[str, typer.Argument(help="Type expression to draw from.")],
    size: Annotated[int, typer.Option("--size", help="Size bound for every draw.", min=0)] = 10,
    count: Annotated[int, typer.Option("--count", "-k", help="Number of values to draw.", min=1)] = 10,
    seed: SeedOption = None,
    load_plugins: PluginsOption = True,
) -> None:
    """Print example values drawn from a type expression."""
    spec = _parse_types([type_expression])[0]
    engine = _build_engine(CheckSettings(), load_plugins)
    try:
        values = engine.sample(spec, size=size, count=count, seed=seed)
    except ProptrialError as e:
        raise _fail_usage(str(e)) from None
    for value in values:
        typer.echo(repr(value))


if __name__ == "__main__":
    app()

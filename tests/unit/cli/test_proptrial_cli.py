# tests/unit/cli/test_proptrial_cli.py
"""Tests for the proptrial command line interface."""

from __future__ import annotations

import json
import logging
import textwrap
from collections.abc import Iterator
from pathlib import Path

import pytest
from typer.testing import CliRunner

from proptrial.cli import EXIT_FAILED, EXIT_PASSED, EXIT_TOO_MANY_SKIPS, EXIT_USAGE, app

runner = CliRunner()

PROPERTIES = textwrap.dedent(
    """
    from fractions import Fraction

    from proptrial import SKIP


    def commutes(a, b):
        return a * b == b * a


    def never_holds(n):
        return "never holds"


    def always_skips(n):
        return SKIP


    def divide_then_multiply(a, b):
        return SKIP if b == 0 else b * Fraction(a, b)


    def identity(a, b):
        return a


    def returns_none(n):
        return None


    NOT_CALLABLE = 3
    """
)


@pytest.fixture(autouse=True)
def restore_root_logging() -> Iterator[None]:
    """The CLI callback reconfigures the root logger onto the runner's stderr."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture
def props_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    """Importable module holding sample properties; returns its name."""
    (tmp_path / "cli_sample_props.py").write_text(PROPERTIES)
    monkeypatch.syspath_prepend(str(tmp_path))
    return "cli_sample_props"


class TestCLIBasics:
    def test_version_flag(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "proptrial version" in result.output

    def test_unknown_log_level_is_usage_error(self) -> None:
        result = runner.invoke(app, ["--log-level", "bogus", "generators", "--no-plugins"])
        assert result.exit_code == EXIT_USAGE

    def test_log_level_case_insensitive(self, props_module: str) -> None:
        result = runner.invoke(
            app,
            ["--log-level", "info", "check", f"{props_module}:commutes", "-t", "int", "-t", "int", "-n", "3"],
        )
        assert result.exit_code == EXIT_PASSED
        assert "run_started" in result.output
        assert "run_passed" in result.output

    def test_help_lists_commands(self) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("check", "check-equal", "generators", "sample"):
            assert command in result.output


class TestCheckCommand:
    def test_passing_property(self, props_module: str) -> None:
        result = runner.invoke(app, ["check", f"{props_module}:commutes", "-t", "int", "-t", "int", "--seed", "3"])
        assert result.exit_code == EXIT_PASSED
        assert "OK: passed 500 tests (seed=3)" in result.output

    def test_failing_property_prints_report(self, props_module: str) -> None:
        result = runner.invoke(app, ["check", f"{props_module}:commutes", "-t", "perm", "-t", "perm", "--seed", "1"])
        assert result.exit_code == EXIT_FAILED
        assert "of 500 failed:" in result.output
        assert "seed: 1" in result.output

    def test_explanation_in_report(self, props_module: str) -> None:
        result = runner.invoke(app, ["check", f"{props_module}:never_holds", "-t", "nat"])
        assert result.exit_code == EXIT_FAILED
        assert "Message: never holds" in result.output

    def test_too_many_skips(self, props_module: str) -> None:
        result = runner.invoke(app, ["check", f"{props_module}:always_skips", "-t", "int", "-n", "5"])
        assert result.exit_code == EXIT_TOO_MANY_SKIPS
        assert "Gave up" in result.output

    def test_trials_option(self, props_module: str) -> None:
        result = runner.invoke(app, ["check", f"{props_module}:commutes", "-t", "int", "-t", "int", "-n", "17"])
        assert result.exit_code == EXIT_PASSED
        assert "passed 17 tests" in result.output

    def test_json_output(self, props_module: str) -> None:
        result = runner.invoke(
            app,
            ["check", f"{props_module}:never_holds", "-t", "nat", "--seed", "9", "--format", "json"],
        )
        assert result.exit_code == EXIT_FAILED
        summary = json.loads(result.stdout)
        assert summary["status"] == "failed"
        assert summary["seed"] == 9
        assert summary["failure"]["trial"] == 1
        assert summary["failure"]["explanation"] == "never holds"

    def test_config_file(self, props_module: str, tmp_path: Path) -> None:
        config = tmp_path / "proptrial.yaml"
        config.write_text("max_trials: 12\nseed: 4\n")
        result = runner.invoke(app, ["check", f"{props_module}:commutes", "-t", "int", "-t", "int", "-c", str(config)])
        assert result.exit_code == EXIT_PASSED
        assert "passed 12 tests (seed=4)" in result.output

    def test_cli_flag_beats_config_file(self, props_module: str, tmp_path: Path) -> None:
        config = tmp_path / "proptrial.yaml"
        config.write_text("max_trials: 12\n")
        result = runner.invoke(
            app,
            ["check", f"{props_module}:commutes", "-t", "int", "-t", "int", "-c", str(config), "-n", "8"],
        )
        assert result.exit_code == EXIT_PASSED
        assert "passed 8 tests" in result.output


class TestCheckEqualCommand:
    def test_division_round_trip(self, props_module: str) -> None:
        result = runner.invoke(
            app,
            [
                "check-equal",
                f"{props_module}:divide_then_multiply",
                f"{props_module}:identity",
                "-t",
                "int",
                "-t",
                "int",
            ],
        )
        assert result.exit_code == EXIT_PASSED

    def test_divergent_functions(self) -> None:
        result = runner.invoke(app, ["check-equal", "builtins:abs", "operator:neg", "-t", "pos_int"])
        assert result.exit_code == EXIT_FAILED
        assert "Output 1:" in result.output
        assert "Output 2:" in result.output


class TestUsageErrors:
    @pytest.mark.parametrize(
        "target",
        ["no_colon", "cli_missing_module_xyz:prop", "operator:no_such_function"],
    )
    def test_bad_target(self, target: str) -> None:
        result = runner.invoke(app, ["check", target, "-t", "int"])
        assert result.exit_code == EXIT_USAGE

    def test_non_callable_target(self, props_module: str) -> None:
        result = runner.invoke(app, ["check", f"{props_module}:NOT_CALLABLE", "-t", "int"])
        assert result.exit_code == EXIT_USAGE
        assert "not callable" in result.output

    def test_unknown_tag(self, props_module: str) -> None:
        result = runner.invoke(app, ["check", f"{props_module}:never_holds", "-t", "matrix"])
        assert result.exit_code == EXIT_USAGE
        assert "matrix" in result.output

    def test_malformed_type_expression(self, props_module: str) -> None:
        result = runner.invoke(app, ["check", f"{props_module}:never_holds", "-t", "list_of("])
        assert result.exit_code == EXIT_USAGE

    def test_property_contract_violation(self, props_module: str) -> None:
        result = runner.invoke(app, ["check", f"{props_module}:returns_none", "-t", "int"])
        assert result.exit_code == EXIT_USAGE

    def test_invalid_config_value(self, props_module: str, tmp_path: Path) -> None:
        config = tmp_path / "bad.yaml"
        config.write_text("max_trials: 0\n")
        result = runner.invoke(app, ["check", f"{props_module}:commutes", "-t", "int", "-t", "int", "-c", str(config)])
        assert result.exit_code == EXIT_USAGE
        assert "max_trials" in result.output

    def test_config_not_a_mapping(self, props_module: str, tmp_path: Path) -> None:
        config = tmp_path / "list.yaml"
        config.write_text("- 1\n- 2\n")
        result = runner.invoke(app, ["check", f"{props_module}:commutes", "-t", "int", "-t", "int", "-c", str(config)])
        assert result.exit_code == EXIT_USAGE


class TestInspectionCommands:
    def test_generators_lists_builtins(self) -> None:
        result = runner.invoke(app, ["generators", "--no-plugins"])
        assert result.exit_code == 0
        tags = result.stdout.split()
        assert tags == sorted(tags)
        assert {"int", "nat", "pos_int", "bool", "perm"} <= set(tags)

    def test_sample(self) -> None:
        result = runner.invoke(app, ["sample", "nat", "--size", "3", "--count", "6", "--seed", "1", "--no-plugins"])
        assert result.exit_code == 0
        values = [int(line) for line in result.stdout.splitlines()]
        assert len(values) == 6
        assert all(0 <= v <= 3 for v in values)

    def test_sample_is_reproducible(self) -> None:
        args = ["sample", "pair_of(perm)", "--size", "4", "--count", "3", "--seed", "5", "--no-plugins"]
        assert runner.invoke(app, args).stdout == runner.invoke(app, args).stdout

    def test_sample_unknown_tag(self) -> None:
        result = runner.invoke(app, ["sample", "matrix", "--no-plugins"])
        assert result.exit_code == EXIT_USAGE

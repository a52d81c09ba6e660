import importlib

from typer.testing import CliRunner

from typealgebra.cli.scenarios import Scenario, build_scenarios, sample_types
from typealgebra.config.settings import AlgebraSettings
from typealgebra.core.errors import NormalizationDiverged
from typealgebra.core.types import Constructor

cli_app_module = importlib.import_module("typealgebra.cli.app")


def test_reference_scenarios_hold() -> None:
    scenarios = build_scenarios()
    assert len(scenarios) == 10
    assert [s.label for s in scenarios if not s.passed] == []


def test_reference_scenarios_hold_one_hop() -> None:
    assert all(s.passed for s in build_scenarios(AlgebraSettings(transitive_subtyping=False)))


def test_demo_command_succeeds() -> None:
    runner = CliRunner()
    result = runner.invoke(cli_app_module.app, ["demo"])
    assert result.exit_code == 0
    assert "FAIL" not in result.output


def test_demo_command_one_hop() -> None:
    runner = CliRunner()
    result = runner.invoke(cli_app_module.app, ["demo", "--one-hop"])
    assert result.exit_code == 0


def test_demo_command_reports_mismatch(monkeypatch) -> None:
    wrong = Scenario("T", Constructor("T"), Constructor("TT"))
    monkeypatch.setattr(cli_app_module, "build_scenarios", lambda _settings: [wrong])
    runner = CliRunner()
    result = runner.invoke(cli_app_module.app, ["demo"])
    assert result.exit_code == 1


def test_demo_command_reports_algebra_errors(monkeypatch) -> None:
    def _diverging(_settings):
        raise NormalizationDiverged(Constructor("T"), 1)

    monkeypatch.setattr(cli_app_module, "build_scenarios", _diverging)
    runner = CliRunner()
    result = runner.invoke(cli_app_module.app, ["demo"])
    assert result.exit_code == 1


def test_relate_command_prints_relation() -> None:
    runner = CliRunner()
    result = runner.invoke(cli_app_module.app, ["relate", "List<TT>", "MutableList<TT>"])
    assert result.exit_code == 0
    assert "List<TT> is supertype to MutableList<TT>" in result.output


def test_relate_command_nullable() -> None:
    runner = CliRunner()
    result = runner.invoke(cli_app_module.app, ["relate", "T", "T?"])
    assert result.exit_code == 0
    assert "T is subtype to T?" in result.output


def test_relate_command_rejects_unknown_type() -> None:
    runner = CliRunner()
    result = runner.invoke(cli_app_module.app, ["relate", "List<TT>", "Map<TT>"])
    assert result.exit_code != 0


def test_samples_command_lists_relate_arguments() -> None:
    _, named = sample_types()
    runner = CliRunner()
    result = runner.invoke(cli_app_module.app, ["samples"])
    assert result.exit_code == 0
    assert "List<out TT>" in result.output
    assert "MutableList<TT>" in named

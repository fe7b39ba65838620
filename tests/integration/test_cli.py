"""Integration tests for the cabinet-engine CLI.

These tests verify the commands work end-to-end against catalog fixtures,
including:
- validate exit codes for valid, warning and failing catalogs
- derive, price and optimize output formats
- evaluate with a cabinet context and explicit variables
"""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from cabinet_engine.cli.main import app

CATALOGS_PATH = Path(__file__).parent.parent / "fixtures" / "catalogs"
VALID_CATALOG = str(CATALOGS_PATH / "valid_catalog.json")


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI runner for testing."""
    return CliRunner()


class TestValidateCommand:
    """Tests for the validate command."""

    def test_valid_catalog(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["validate", VALID_CATALOG])
        assert result.exit_code == 0
        assert "Validation passed. Catalog is valid." in result.output

    def test_warnings(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["validate", str(CATALOGS_PATH / "with_warnings.json")])
        assert result.exit_code == 2
        assert "Warnings:" in result.output
        assert "Validation passed with 2 warning(s)" in result.output

    def test_formula_errors(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["validate", str(CATALOGS_PATH / "invalid_formula.json")])
        assert result.exit_code == 1
        assert "Errors:" in result.output
        assert "models[0].parts[0].width_formula" in result.output

    def test_reference_errors(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["validate", str(CATALOGS_PATH / "bad_references.json")])
        assert result.exit_code == 1
        assert "unknown model 'base-900'" in result.output

    def test_invalid_json(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["validate", str(CATALOGS_PATH / "invalid_json.json")])
        assert result.exit_code == 1
        assert "Invalid JSON syntax" in result.output
        assert "Validation failed" in result.output

    def test_file_not_found(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["validate", str(CATALOGS_PATH / "nonexistent.json")])
        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_json_output(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app, ["validate", str(CATALOGS_PATH / "with_warnings.json"), "--format", "json"]
        )
        assert result.exit_code == 2
        data = json.loads(result.stdout)
        assert data["exit_code"] == 2
        assert data["errors"] == []
        assert len(data["warnings"]) == 2


class TestDeriveCommand:
    """Tests for the derive command."""

    def test_table(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app, ["derive", VALID_CATALOG, "--model", "base-600", "--panel", "oak-18"]
        )
        assert result.exit_code == 0
        assert "Base 600 (600 x 720 x 560)" in result.output
        assert "PART LIST" in result.output
        assert "Side Panel 1" in result.output

    def test_template_model(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["derive", VALID_CATALOG, "--model", "Wall 500"])
        assert result.exit_code == 0
        assert "Template: wall" in result.output
        assert "Left Door" in result.output

    def test_json(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app,
            [
                "derive", VALID_CATALOG, "-m", "base-600",
                "--panel", "oak-18", "--doors", "1", "--format", "json",
            ],
        )
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        names = [part["name"] for part in data["parts"]]
        assert "Door 1" in names
        assert "Door 2" not in names

    def test_unknown_model(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["derive", VALID_CATALOG, "--model", "corner-900"])
        assert result.exit_code == 1
        assert "Cabinet model not found: corner-900" in result.output

    def test_out_of_range(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app, ["derive", VALID_CATALOG, "--model", "base-600", "--width", "1300"]
        )
        assert result.exit_code == 1
        assert "Width must be between 300mm and 1200mm" in result.output

    def test_unresolved_catalog(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app, ["derive", str(CATALOGS_PATH / "bad_references.json"), "--model", "base-600"]
        )
        assert result.exit_code == 1
        assert "unknown part type 'Plinth'" in result.output

    def test_unknown_format(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app, ["derive", VALID_CATALOG, "--model", "base-600", "--format", "xml"]
        )
        assert result.exit_code == 1
        assert "Unknown format" in result.output


class TestPriceCommand:
    """Tests for the price command."""

    def test_table(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["price", VALID_CATALOG, "--project", "Kitchen"])
        assert result.exit_code == 0
        assert "PROJECT: Kitchen" in result.output
        assert "Base 600 #1" in result.output
        assert "Over sink" in result.output
        assert "TOTAL" in result.output

    def test_json(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app, ["price", VALID_CATALOG, "--project", "Kitchen", "--format", "json"]
        )
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["project"] == "Kitchen"
        assert [item["quantity"] for item in data["items"]] == [2, 1]
        assert data["total_cost"] == pytest.approx(
            sum(item["total_cost"] for item in data["items"]), abs=0.001
        )

    def test_unknown_project(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["price", VALID_CATALOG, "--project", "Bathroom"])
        assert result.exit_code == 1
        assert "Project not found: Bathroom" in result.output


class TestOptimizeCommand:
    """Tests for the optimize command."""

    def test_summary(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["optimize", VALID_CATALOG, "--project", "Kitchen"])
        assert result.exit_code == 0
        assert "Strategy:    single_row" in result.output
        assert "Oak Veneer 18mm" in result.output

    def test_shelf_strategy(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app, ["optimize", VALID_CATALOG, "-p", "Kitchen", "--strategy", "shelf"]
        )
        assert result.exit_code == 0
        assert "Strategy:    shelf" in result.output

    def test_ascii(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app, ["optimize", VALID_CATALOG, "-p", "Kitchen", "--format", "ascii"]
        )
        assert result.exit_code == 0
        assert "SUMMARY:" in result.output

    def test_svg(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app, ["optimize", VALID_CATALOG, "-p", "Kitchen", "--format", "svg"]
        )
        assert result.exit_code == 0
        assert "<svg" in result.output

    def test_json(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app, ["optimize", VALID_CATALOG, "-p", "Kitchen", "--format", "json"]
        )
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["materials_count"] == 1
        assert list(data["optimization"]) == ["oak-18"]

    def test_dxf_requires_output(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app, ["optimize", VALID_CATALOG, "-p", "Kitchen", "--format", "dxf"]
        )
        assert result.exit_code == 1
        assert "--output is required for dxf format" in result.output

    def test_dxf_file(self, runner: CliRunner, tmp_path: Path) -> None:
        output = tmp_path / "kitchen.dxf"
        result = runner.invoke(
            app,
            ["optimize", VALID_CATALOG, "-p", "Kitchen", "--format", "dxf", "-o", str(output)],
        )
        assert result.exit_code == 0
        assert output.exists()
        assert f"Wrote {output}" in result.output

    def test_unknown_strategy(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app, ["optimize", VALID_CATALOG, "-p", "Kitchen", "--strategy", "guillotine"]
        )
        assert result.exit_code == 1
        assert "guillotine" in result.output


class TestEvaluateCommand:
    """Tests for the evaluate command."""

    def test_cabinet_context(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app, ["evaluate", "cabinet_width - 2 * panel_thickness", "--width", "600"]
        )
        assert result.exit_code == 0
        assert result.stdout.strip() == "564"

    def test_variables(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["evaluate", "a * b", "--var", "a=3", "--var", "b=4.5"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "13.5"

    def test_failure(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["evaluate", "1 / 0"])
        assert result.exit_code == 1
        assert "division by zero" in result.output

    def test_invalid_variable(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["evaluate", "a", "--var", "a"])
        assert result.exit_code == 1
        assert "Invalid --var 'a'" in result.output

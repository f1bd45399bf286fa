# Copyright (c) Syntropy Systems
"""Tests for trialboard CLI commands."""

import json
import os
from pathlib import Path

from typer.testing import CliRunner

from trialboard.cli.main import app

from conftest import EXPERIMENT, _original_cwd

runner = CliRunner()


class TestInitCommand:
    """Tests for trialboard init command."""

    def test_init_creates_directory(self, tmp_path: Path) -> None:
        """Test that init creates .trialboard directory."""
        os.chdir(tmp_path)
        try:
            result = runner.invoke(app, ["init"])
        finally:
            os.chdir(_original_cwd)

        assert result.exit_code == 0
        assert (tmp_path / ".trialboard" / "config.yaml").exists()
        assert (tmp_path / ".trialboard" / "experiments").is_dir()

    def test_init_already_initialized(self, project: Path) -> None:
        """Test init when already initialized."""
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 0
        assert "Already initialized" in result.stdout


class TestExperimentsCommand:
    """Tests for trialboard experiments and show."""

    def test_experiments_lists_store(self, project: Path) -> None:
        """Test listing experiments from the configured store."""
        result = runner.invoke(app, ["experiments"])

        assert result.exit_code == 0
        assert EXPERIMENT in result.stdout
        assert "minimize" in result.stdout

    def test_experiments_empty(self, tmp_path: Path) -> None:
        """Test an empty store."""
        empty = tmp_path / "empty"
        empty.mkdir()

        result = runner.invoke(app, ["experiments", "--data-dir", str(empty)])

        assert result.exit_code == 0
        assert "No experiments found" in result.stdout

    def test_missing_store(self, tmp_path: Path) -> None:
        """Test that a missing store exits with an error."""
        result = runner.invoke(app, ["experiments", "--data-dir", str(tmp_path / "nope")])

        assert result.exit_code == 1
        assert "Experiment store not found" in result.stdout

    def test_show(self, store: Path) -> None:
        """Test showing an experiment."""
        result = runner.invoke(app, ["show", EXPERIMENT, "--data-dir", str(store)])

        assert result.exit_code == 0
        assert "batch_size" in result.stdout
        assert "accuracy" in result.stdout

    def test_show_unknown(self, store: Path) -> None:
        """Test showing an unknown experiment."""
        result = runner.invoke(app, ["show", "nope", "--data-dir", str(store)])

        assert result.exit_code == 1
        assert "experiment not found" in result.stdout


class TestMatrixCommand:
    """Tests for trialboard matrix."""

    def test_csv(self, store: Path) -> None:
        """Test CSV output of the trial matrix."""
        result = runner.invoke(
            app,
            ["matrix", EXPERIMENT, "--format", "csv", "--data-dir", str(store)],
        )

        assert result.exit_code == 0
        assert result.stdout.splitlines() == [
            "trialName,Status,loss,accuracy,lr,batch_size",
            "trial-a,Succeeded,0.3,0.7,0.01,32",
            "trial-b,Running,,,0.1,64",
            "trial-c,Failed,,,0.001,",
        ]

    def test_json(self, store: Path) -> None:
        """Test JSON output of the trial matrix."""
        result = runner.invoke(
            app,
            ["matrix", EXPERIMENT, "-f", "json", "--data-dir", str(store)],
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["header"][:2] == ["trialName", "Status"]
        assert len(data["rows"]) == 3

    def test_table(self, project: Path) -> None:
        """Test the default table output."""
        result = runner.invoke(app, ["matrix", EXPERIMENT])

        assert result.exit_code == 0
        assert "trial-a" in result.stdout
        assert "Succeeded" in result.stdout

    def test_output_file(self, store: Path, tmp_path: Path) -> None:
        """Test writing the matrix to a file."""
        output = tmp_path / "trials.csv"
        result = runner.invoke(
            app,
            ["matrix", EXPERIMENT, "-o", str(output), "--data-dir", str(store)],
        )

        assert result.exit_code == 0
        assert output.read_text().startswith("trialName,Status,loss")

    def test_unknown_format(self, store: Path) -> None:
        """Test that an unknown format is rejected."""
        result = runner.invoke(
            app,
            ["matrix", EXPERIMENT, "-f", "xml", "--data-dir", str(store)],
        )

        assert result.exit_code == 1
        assert "Unknown format" in result.stdout

    def test_unknown_experiment(self, store: Path) -> None:
        """Test that an unknown experiment exits with an error."""
        result = runner.invoke(app, ["matrix", "nope", "--data-dir", str(store)])

        assert result.exit_code == 1
        assert "Error" in result.stdout


class TestSeriesCommand:
    """Tests for trialboard series."""

    def test_csv(self, store: Path) -> None:
        """Test CSV output of a trial's series."""
        result = runner.invoke(
            app,
            ["series", EXPERIMENT, "trial-a", "-f", "csv", "--data-dir", str(store)],
        )

        assert result.exit_code == 0
        assert result.stdout.splitlines() == [
            "metricName,time,value",
            "loss,2021-01-01T00:00:00,0.3",
            "accuracy,2021-01-01T00:00:00,0.7",
            "loss,2021-01-01T00:00:01,0.4",
            "accuracy,2021-01-01T00:00:01,0.9",
        ]

    def test_table_reports_skipped(self, store: Path) -> None:
        """Test that skipped observations are reported in table mode."""
        log_path = store / EXPERIMENT / "trials" / "trial-a" / "observations.jsonl"
        with log_path.open("a") as f:
            _ = f.write('{"metricName": "loss", "timeStamp": "later", "value": "0"}\n')

        result = runner.invoke(
            app,
            ["series", EXPERIMENT, "trial-a", "-f", "table", "--data-dir", str(store)],
        )

        assert result.exit_code == 0
        assert "Skipped 1 observation" in result.stdout

    def test_unknown_trial(self, store: Path) -> None:
        """Test that an unknown trial exits with an error."""
        result = runner.invoke(
            app,
            ["series", EXPERIMENT, "nope", "--data-dir", str(store)],
        )

        assert result.exit_code == 1
        assert "trial not found" in result.stdout

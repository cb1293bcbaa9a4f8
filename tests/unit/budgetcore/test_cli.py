"""Tests for the budgetcore command-line interface."""

import json

import pytest
import yaml
from click.testing import CliRunner

from budgetcore.cli import main


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def params_file(tmp_path, params_yaml):
    path = tmp_path / "params.yaml"
    path.write_text(params_yaml)
    return path


@pytest.fixture
def invalid_params_file(tmp_path, invalid_params_yaml):
    path = tmp_path / "invalid.yaml"
    path.write_text(invalid_params_yaml)
    return path


class TestDefaults:
    def test_prints_default_params(self, runner):
        result = runner.invoke(main, ["defaults"])
        assert result.exit_code == 0, result.output
        assert result.output == "epoch_blocks: 1\nbudgets: []\n"


class TestValidate:
    def test_valid_file(self, runner, params_file):
        result = runner.invoke(main, ["validate", str(params_file)])
        assert result.exit_code == 0, result.output
        assert "OK: epoch_blocks=1 budgets=2" in result.output

    def test_invalid_total_rate(self, runner, invalid_params_file):
        result = runner.invoke(main, ["validate", str(invalid_params_file)])
        assert result.exit_code == 1
        assert "invalid total rate of the budgets with the same source address" in result.output

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(main, ["validate", str(tmp_path / "nope.yaml")])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_malformed_file(self, runner, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("epoch_blocks: lots\n")
        result = runner.invoke(main, ["validate", str(path)])
        assert result.exit_code == 1
        assert "not a valid params file" in result.output

    def test_default_path_from_config(self, runner, params_file, monkeypatch):
        monkeypatch.setenv("BUDGETCORE_PARAMS_FILE", str(params_file))
        result = runner.invoke(main, ["validate"])
        assert result.exit_code == 0, result.output
        assert "OK" in result.output


class TestCollectible:
    def test_text_output(self, runner, params_file):
        result = runner.invoke(
            main, ["collectible", str(params_file), "--at", "2021-08-19T00:00:00Z"]
        )
        assert result.exit_code == 0, result.output
        lines = result.output.strip().splitlines()
        assert [line.split("\t")[0] for line in lines] == ["test4", "test5"]

    def test_end_exclusive_json(self, runner, params_file):
        result = runner.invoke(
            main,
            ["collectible", str(params_file), "--at", "2021-08-20T00:00:00Z", "-o", "json"],
        )
        assert result.exit_code == 0, result.output
        rows = json.loads(result.output)
        assert [row["name"] for row in rows] == ["test5"]
        assert rows[0]["rate"] == "0.1"

    def test_yaml_output(self, runner, params_file):
        result = runner.invoke(
            main,
            ["collectible", str(params_file), "--at", "2021-08-18T00:00:00Z", "-o", "yaml"],
        )
        assert result.exit_code == 0, result.output
        rows = yaml.safe_load(result.output)
        assert [row["name"] for row in rows] == ["test4"]

    def test_nothing_collectible(self, runner, params_file):
        result = runner.invoke(
            main, ["collectible", str(params_file), "--at", "2030-01-01T00:00:00Z"]
        )
        assert result.exit_code == 0, result.output
        assert "No collectible budgets" in result.output

    def test_bad_timestamp(self, runner, params_file):
        result = runner.invoke(main, ["collectible", str(params_file), "--at", "tomorrow"])
        assert result.exit_code == 2


class TestCheckEpoch:
    def test_zero_accepted(self, runner):
        result = runner.invoke(main, ["check-epoch", "0"])
        assert result.exit_code == 0, result.output
        assert "OK: epoch_blocks=0" in result.output

    def test_out_of_range(self, runner):
        result = runner.invoke(main, ["check-epoch", "10000000000000000"])
        assert result.exit_code == 1
        assert "invalid parameter type: int" in result.output

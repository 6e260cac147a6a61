"""Tests for the graph command."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from adrscope.cli import cli


@pytest.mark.usefixtures("_isolated_project")
class TestGraphCommand:
    def test_stdout_is_raw_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["graph"])
        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert len(payload["links"]) == 3
        assert "WARNING: dangling reference C -> Z" in result.stderr
        assert "NOTE: one-way relationship C -> B" in result.stderr

    def test_dot(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["graph", "--format", "dot"])
        assert result.stdout.startswith("digraph adrs {")

    def test_symmetric(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["graph", "--symmetric"])
        assert len(json.loads(result.stdout)["links"]) == 4

    def test_output_file(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["graph", "-f", "dot", "-o", "out/adrs.dot"])
        assert result.exit_code == 0, result.output
        assert (tmp_path / "out" / "adrs.dot").read_text(encoding="utf-8").startswith("digraph")
        assert "dangling references: 1" in result.stdout
        assert "one-way relationships: 1" in result.stdout

    def test_json_mode_wraps_result(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "graph"])
        payload = json.loads(result.stdout)
        assert payload["op"] == "graph"
        assert payload["data"]["dangling"][0]["target"] == "Z"

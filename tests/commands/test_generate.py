"""Tests for the generate command."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from adrscope.cli import cli


@pytest.mark.usefixtures("_isolated_project")
class TestGenerateCommand:
    def test_default_output(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["generate"])
        assert result.exit_code == 0, result.output
        assert (tmp_path / "adrs.html").is_file()
        assert "records: 3" in result.stdout
        assert "WARNING: Unknown status 'weird-value'" in result.stderr

    def test_options(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(
            cli,
            ["generate", "-o", "site/index.html", "--title", "Team ADRs", "--theme", "DARK"],
        )
        assert result.exit_code == 0, result.output
        html = (tmp_path / "site" / "index.html").read_text(encoding="utf-8")
        assert "<title>Team ADRs</title>" in html
        assert 'data-theme="dark"' in html

    def test_json_output(self, cli_runner: CliRunner) -> None:
        import json

        result = cli_runner.invoke(cli, ["--json", "generate"])
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["op"] == "generate"
        assert payload["data"]["record_count"] == 3
        assert payload["warnings"]
        assert result.stderr == ""

    def test_missing_input_exits_1(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["generate", "-i", "nowhere"])
        assert result.exit_code == 1
        assert "Input directory not found" in result.stderr
        assert result.stdout == ""

    def test_invalid_theme(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["generate", "--theme", "neon"])
        assert result.exit_code == 2

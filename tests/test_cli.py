"""Tests for the root CLI group and global flags."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from adrscope import __version__
from adrscope.cli import cli


class TestRootGroup:
    def test_version(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert f"adrscope, version {__version__}" in result.output

    def test_no_command_prints_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, [])
        assert result.exit_code == 0
        assert "Usage" in result.output

    def test_unknown_command(self, cli_runner: CliRunner) -> None:
        assert cli_runner.invoke(cli, ["publish"]).exit_code == 2


@pytest.mark.usefixtures("_isolated_project")
class TestGlobalFlags:
    def test_verbose_includes_telemetry(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-v", "stats"])
        assert result.exit_code == 0, result.output
        assert "StatsService.stats" in result.stdout
        assert "parse" in result.stdout

    def test_json_verbose_meta(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "-v", "validate"])
        payload = json.loads(result.stdout)
        assert payload["meta"]["telemetry"]["name"] == "ValidateService.validate"

    def test_config_flag(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        config = tmp_path / "ci.toml"
        config.write_text('[stats]\nformat = "markdown"\n')
        result = cli_runner.invoke(cli, ["--config", str(config), "stats"])
        assert result.exit_code == 0, result.output
        assert result.stdout.startswith("# ADR Statistics")

    def test_invalid_config(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "adrscope.toml").write_text("[stats\n")
        result = cli_runner.invoke(cli, ["stats"])
        assert result.exit_code == 1
        assert "Invalid TOML" in result.output


class TestWorkflow:
    def test_generate_validate_wiki(
        self,
        cli_runner: CliRunner,
        tmp_path: Path,
        docs_dir: Path,
        write_adr,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """A fresh project: validate, fix a record, then publish both outputs."""
        monkeypatch.chdir(tmp_path)
        write_adr(docs_dir, "D.md", "---\nstatus: proposed\n---\n")
        assert cli_runner.invoke(cli, ["validate"]).exit_code == 1

        write_adr(docs_dir, "D.md", "---\ntitle: Fixed\nstatus: proposed\n---\n")
        assert cli_runner.invoke(cli, ["validate"]).exit_code == 0

        assert cli_runner.invoke(cli, ["generate", "-o", "public/adrs.html"]).exit_code == 0
        assert cli_runner.invoke(cli, ["wiki", "--pages-url", "../public/adrs.html"]).exit_code == 0

        index = (tmp_path / "wiki" / "ADR-Index.md").read_text(encoding="utf-8")
        assert "| D | [Fixed](D.md) | `proposed` |" in index
        assert (tmp_path / "public" / "adrs.html").stat().st_size > 0

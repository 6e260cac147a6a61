"""Tests for --help and --examples on every command."""

import pytest
from click.testing import CliRunner

from adrscope.cli import cli

COMMANDS = ["generate", "wiki", "validate", "stats", "query", "graph"]


class TestHelp:
    def test_root_help_lists_commands(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for name in COMMANDS:
            assert name in result.output

    @pytest.mark.parametrize("name", COMMANDS)
    def test_command_help(self, cli_runner: CliRunner, name: str) -> None:
        result = cli_runner.invoke(cli, [name, "--help"])
        assert result.exit_code == 0
        assert "--input" in result.output

    @pytest.mark.parametrize("name", COMMANDS)
    def test_command_examples(self, cli_runner: CliRunner, name: str) -> None:
        result = cli_runner.invoke(cli, [name, "--examples"])
        assert result.exit_code == 0
        assert "Examples for" in result.output
        assert f"adrscope {name}" in result.output

    def test_root_examples(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--examples"])
        assert result.exit_code == 0
        assert "adrscope validate --strict" in result.output

#!/usr/bin/env python3
"""
Integration tests for CLI Main Entry Point

Tests end-to-end CLI command execution with real command invocation.
"""

import json

import pytest
from click.testing import CliRunner

from cent.cli.main import main


@pytest.mark.integration
class TestCLIMainIntegration:
    """Test main CLI entry point with real command execution."""

    def setup_method(self):
        """Set up test environment."""
        self.runner = CliRunner()

    def test_help_command_lists_all_subcommands(self):
        result = self.runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "Exact Money Arithmetic" in result.output
        for command in ["parse", "allocate", "distribute", "convert", "round", "version", "config"]:
            assert command in result.output

    def test_version_command_shows_version_info(self):
        result = self.runner.invoke(main, ["version"])

        assert result.exit_code == 0
        assert "cent v0.1.0" in result.output
        assert "Author:" in result.output

    def test_config_command_shows_configuration(self):
        result = self.runner.invoke(main, ["config"])

        assert result.exit_code == 0
        assert "Current Configuration:" in result.output
        assert "Environment: test" in result.output
        assert "Default Rounding Mode:" in result.output
        assert "Log Level:" in result.output

    def test_verbose_flag_shows_environment(self):
        result = self.runner.invoke(main, ["--verbose", "--config-env", "test", "config"])

        assert result.exit_code == 0
        assert result.output.startswith("Environment: test")

    def test_invalid_command_shows_error(self):
        result = self.runner.invoke(main, ["invalid-command"])

        assert result.exit_code != 0
        assert "No such command" in result.output


@pytest.mark.integration
class TestParseCommand:
    """Test the parse command."""

    def setup_method(self):
        self.runner = CliRunner()

    def test_parse_symbol_amount(self):
        result = self.runner.invoke(main, ["parse", "$1,234.56"])

        assert result.exit_code == 0
        assert "Currency: USD (US Dollar)" in result.output
        assert "Amount: 1234.56" in result.output
        assert "Scale: 2" in result.output

    def test_parse_sub_unit_verbose(self):
        result = self.runner.invoke(main, ["-v", "parse", "1000 sat"])

        assert result.exit_code == 0
        assert "Amount: 0.00001000" in result.output
        assert "Has sub-units:" in result.output

    def test_parse_json(self):
        result = self.runner.invoke(main, ["parse", "EUR 1.234,56", "--json"])

        assert result.exit_code == 0
        assert json.loads(result.output) == {"currency": "EUR", "amount": "1234.56"}

    def test_parse_error_exits_with_message(self):
        result = self.runner.invoke(main, ["parse", "invalid"])

        assert result.exit_code == 1
        assert "ParseError" in result.output


@pytest.mark.integration
class TestSplitCommands:
    """Test allocate and distribute."""

    def setup_method(self):
        self.runner = CliRunner()

    def test_allocate_preserves_total(self):
        result = self.runner.invoke(main, ["allocate", "$100", "1", "1", "1"])

        assert result.exit_code == 0
        assert result.output.splitlines() == ["1: 33.34 USD", "2: 33.33 USD", "3: 33.33 USD"]

    def test_allocate_weighted(self):
        result = self.runner.invoke(main, ["allocate", "$100", "1", "2", "1"])

        assert result.exit_code == 0
        assert result.output.splitlines() == ["1: 25.00 USD", "2: 50.00 USD", "3: 25.00 USD"]

    def test_allocate_separate_change(self):
        result = self.runner.invoke(main, ["allocate", "$100.00015", "1", "1", "1", "--separate-change"])

        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "1: 33.34 USD",
            "2: 33.33 USD",
            "3: 33.33 USD",
            "Change: 0.00015 USD",
        ]

    def test_allocate_zero_ratios_rejected(self):
        result = self.runner.invoke(main, ["allocate", "$100", "0", "0"])

        assert result.exit_code == 1
        assert "all zero ratios" in result.output

    def test_distribute(self):
        result = self.runner.invoke(main, ["distribute", "$10", "3"])

        assert result.exit_code == 0
        assert result.output.splitlines() == ["1: 3.34 USD", "2: 3.33 USD", "3: 3.33 USD"]


@pytest.mark.integration
class TestConvertAndRoundCommands:
    """Test convert and round."""

    def setup_method(self):
        self.runner = CliRunner()

    def test_convert(self):
        result = self.runner.invoke(main, ["convert", "$100", "--rate", "USD EUR 0.92"])

        assert result.exit_code == 0
        assert result.output.strip() == "92.00 EUR"

    def test_convert_reverse_with_decimals(self):
        result = self.runner.invoke(main, ["-v", "convert", "€1", "--rate", "USD EUR 3", "--decimals", "4"])

        assert result.exit_code == 0
        assert "0.3333 USD" in result.output
        assert "Exact: 1/3 USD" in result.output

    def test_convert_rounding_mode(self):
        result = self.runner.invoke(
            main, ["convert", "€2", "--rate", "USD EUR 3", "--rounding", "ceil"]
        )

        assert result.exit_code == 0
        assert result.output.strip() == "0.67 USD"

    def test_convert_malformed_rate(self):
        result = self.runner.invoke(main, ["convert", "$100", "--rate", "USD EUR"])

        assert result.exit_code == 2
        assert "BASE QUOTE RATE" in result.output

    def test_convert_currency_mismatch(self):
        result = self.runner.invoke(main, ["convert", "£10", "--rate", "USD EUR 0.92"])

        assert result.exit_code == 1
        assert "CurrencyMismatchError" in result.output

    @pytest.mark.parametrize(
        "args,expected",
        [
            (["$1.005"], "1.01 USD"),
            (["$1.005", "--rounding", "HALF_EVEN"], "1.00 USD"),
            (["$1.25", "--decimals", "1", "--rounding", "half_even"], "1.2 USD"),
            (["$-1.005", "--rounding", "FLOOR"], "-1.01 USD"),
            (["$5"], "5.00 USD"),
        ],
        ids=["default_half_expand", "half_even", "decimals", "floor_negative", "already_rounded"],
    )
    def test_round(self, args, expected):
        result = self.runner.invoke(main, ["round", *args])

        assert result.exit_code == 0
        assert result.output.strip() == expected

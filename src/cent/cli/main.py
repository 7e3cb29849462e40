#!/usr/bin/env python3
"""
Main CLI Entry Point for cent

Command-line access to parsing, allocation, conversion and rounding of
money amounts.
"""

import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager

import click

from ..core.config import get_config, reload_config
from ..core.errors import CentError
from ..core.json_utils import format_json
from ..core.rounding import RoundingMode
from ..money.money import Money
from ..money.prices import ExchangeRate

ROUNDING_CHOICES = [mode.name for mode in RoundingMode]


@contextmanager
def _cent_errors() -> Iterator[None]:
    """Report kernel errors as click errors (exit code 1, message on stderr)."""
    try:
        yield
    except CentError as e:
        raise click.ClickException(e.to_detailed_string()) from e


def _rounding(name: str | None) -> RoundingMode | None:
    return RoundingMode.from_name(name) if name else None


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    cent - Exact Money Arithmetic

    Parse, split and convert money amounts without losing a fraction of a cent.
    """
    ctx.ensure_object(dict)

    if config_env:
        os.environ["CENT_ENV"] = config_env

    if debug:
        os.environ["LOG_LEVEL"] = "DEBUG"
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("cent").setLevel(logging.DEBUG)

    with _cent_errors():
        ctx.obj["config"] = reload_config() if (config_env or debug) else get_config()
    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug

    if verbose:
        click.echo(f"Environment: {ctx.obj['config'].environment.value}")

    if debug:
        click.echo("Debug logging enabled")


@main.command()
@click.argument("text")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.pass_context
def parse(ctx: click.Context, text: str, as_json: bool) -> None:
    """Parse a money string such as "$1,234.56", "EUR 1.234,56" or "1000 sat"."""
    with _cent_errors():
        money = Money.parse(text)

    if as_json:
        click.echo(format_json(money.to_json(compact=True)))
        return

    click.echo(f"Currency: {money.currency.code} ({money.currency.name})")
    click.echo(f"Amount: {money.to_decimal_string()}")
    click.echo(f"Scale: {money.balance.scale}")
    if ctx.obj["verbose"]:
        click.echo(f"Has sub-units: {money.has_sub_units()}")


@main.command()
@click.argument("amount")
@click.argument("ratios", nargs=-1, required=True, type=int)
@click.option(
    "--separate-change",
    is_flag=True,
    help="Split only whole minor units; report sub-unit change separately",
)
def allocate(amount: str, ratios: tuple[int, ...], separate_change: bool) -> None:
    """Split AMOUNT proportionally to RATIOS, preserving the total."""
    with _cent_errors():
        shares = Money.parse(amount).allocate(list(ratios), distribute_fractional_units=not separate_change)
    _echo_shares(shares, len(ratios))


@main.command()
@click.argument("amount")
@click.argument("parts", type=int)
@click.option(
    "--separate-change",
    is_flag=True,
    help="Split only whole minor units; report sub-unit change separately",
)
def distribute(amount: str, parts: int, separate_change: bool) -> None:
    """Split AMOUNT into PARTS near-equal shares."""
    with _cent_errors():
        shares = Money.parse(amount).distribute(parts, distribute_fractional_units=not separate_change)
    _echo_shares(shares, parts)


def _echo_shares(shares: list[Money], count: int) -> None:
    for index, share in enumerate(shares[:count], start=1):
        click.echo(f"{index}: {share}")
    if len(shares) > count:
        click.echo(f"Change: {shares[-1]}")


@main.command()
@click.argument("amount")
@click.option("--rate", "rate_text", required=True, help='Exchange rate as "BASE QUOTE RATE", e.g. "USD EUR 0.92"')
@click.option("--decimals", type=int, default=None, help="Decimal places (default: target currency's)")
@click.option(
    "--rounding",
    type=click.Choice(ROUNDING_CHOICES, case_sensitive=False),
    default="HALF_EXPAND",
    show_default=True,
    help="Rounding mode for the displayed result",
)
@click.pass_context
def convert(ctx: click.Context, amount: str, rate_text: str, decimals: int | None, rounding: str) -> None:
    """Convert AMOUNT using an exchange rate."""
    parts = rate_text.split()
    if len(parts) != 3:
        raise click.BadParameter('expected "BASE QUOTE RATE"', param_hint="--rate")

    with _cent_errors():
        rate = ExchangeRate.from_strings(*parts)
        converted = Money.parse(amount).convert(rate)
        places = converted.currency.decimals if decimals is None else decimals
        rounded = converted.round_to(places, _rounding(rounding))

    click.echo(str(rounded))
    if ctx.obj["verbose"]:
        click.echo(f"Exact: {converted.amount} {converted.currency.code}")


@main.command(name="round")
@click.argument("amount")
@click.option("--decimals", type=int, default=None, help="Decimal places (default: currency's)")
@click.option(
    "--rounding",
    type=click.Choice(ROUNDING_CHOICES, case_sensitive=False),
    default="HALF_EXPAND",
    show_default=True,
    help="Rounding mode",
)
def round_command(amount: str, decimals: int | None, rounding: str) -> None:
    """Round AMOUNT to the currency's (or the given) number of decimals."""
    with _cent_errors():
        money = Money.parse(amount)
        places = money.currency.decimals if decimals is None else decimals
        click.echo(str(money.round_to(places, _rounding(rounding))))


@main.command()
@click.pass_context
def version(ctx: click.Context) -> None:
    """Show version information."""
    from cent import __author__, __version__

    click.echo(f"cent v{__version__}")
    click.echo(f"Author: {__author__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration."""
    config_obj = ctx.obj["config"]
    settings = config_obj.to_dict()

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {settings['environment']}")
    click.echo(f"  Number Input Mode: {settings['number_input_mode']}")
    click.echo(f"  Precision Warning Threshold: {settings['precision_warning_threshold']}")
    click.echo(f"  Default Rounding Mode: {settings['default_rounding_mode']}")
    click.echo(f"  Default Currency: {settings['default_currency']}")
    click.echo(f"  Strict Precision: {settings['strict_precision']}")
    click.echo(f"  Debug Mode: {settings['debug']}")
    click.echo(f"  Log Level: {settings['log_level']}")


if __name__ == "__main__":
    main()

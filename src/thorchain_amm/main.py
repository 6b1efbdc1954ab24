"""CLI entrypoint for thorchain-amm."""

from __future__ import annotations

import asyncio
import json
import logging
import os
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Annotated

import typer

from .domain import Asset, CryptoAmount
from .logger import setup_logging
from .pipeline import QuoteError, QuoteRequest, build_quote
from .processors import UnsupportedChain, calc_network_fee
from .report import format_quote_table, quote_as_dict
from .settings import CONFIG_ENV_VAR, AmmSettings
from .state import AppState

app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    add_help_option=True,
    pretty_exceptions_enable=True,
    pretty_exceptions_short=True,
    pretty_exceptions_show_locals=False,
    rich_markup_mode="rich",
    help="Constant-product swap quotes and outbound fees for THORChain pools.",
)


def _build_logger() -> logging.Logger:
    """Build a logger instance."""
    return logging.getLogger("thorchain_amm")


def _parse_asset(value: str, param_hint: str) -> Asset:
    try:
        return Asset.from_string(value)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint=param_hint) from e


def _parse_decimal(value: str, param_hint: str) -> Decimal:
    try:
        parsed = Decimal(value)
    except InvalidOperation as e:
        raise typer.BadParameter(f"Not a number: {value}", param_hint=param_hint) from e
    if not parsed.is_finite() or parsed < 0:
        raise typer.BadParameter(
            f"Must be a non-negative number, got {value}", param_hint=param_hint
        )
    return parsed


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to a TOML config file (can include [thorchain_amm] table).",
        ),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            help="Override logging verbosity (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL).",
        ),
    ] = None,
    show_config: Annotated[
        bool,
        typer.Option(
            "--show-config",
            help="Print effective config and exit.",
        ),
    ] = False,
):
    """Load configuration, set up logging and dispatch to a subcommand."""
    if config_path:
        os.environ[CONFIG_ENV_VAR] = str(config_path)

    init_kwargs: dict[str, str] = {}
    if log_level is not None:
        init_kwargs["log_level"] = log_level.upper()

    settings = AmmSettings(**init_kwargs)

    setup_logging(settings.log_level)
    state = AppState(settings=settings, logger=_build_logger())

    if show_config:
        typer.echo(json.dumps(settings.as_dict(), indent=2))
        raise typer.Exit(code=0)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)

    ctx.obj = state


@app.command()
def quote(
    ctx: typer.Context,
    from_asset: Annotated[str, typer.Argument(help="Asset to sell, e.g. BTC.BTC")],
    to_asset: Annotated[str, typer.Argument(help="Asset to buy, e.g. ETH.ETH")],
    amount: Annotated[
        str, typer.Argument(help="Amount to sell in asset units, e.g. 0.5")
    ],
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the quote as JSON instead of a table."),
    ] = False,
):
    """Quote a single or double swap against the configured pools."""
    state: AppState = ctx.obj
    source = _parse_asset(from_asset, "FROM_ASSET")
    target = _parse_asset(to_asset, "TO_ASSET")
    input_amount = CryptoAmount.from_asset_amount(
        _parse_decimal(amount, "AMOUNT"), source
    )

    request = QuoteRequest(from_asset=source, to_asset=target, amount=input_amount)
    try:
        result = asyncio.run(build_quote(state, request))
    except QuoteError as e:
        state.logger.error("Could not quote %s -> %s: %s", source, target, e)
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(quote_as_dict(result), indent=2))
    else:
        format_quote_table(result)


@app.command("network-fee")
def network_fee(
    ctx: typer.Context,
    asset: Annotated[str, typer.Argument(help="Asset being sent out, e.g. BTC.BTC")],
    gas_rate: Annotated[
        str | None,
        typer.Option(
            "--gas-rate",
            help="Current gas rate for the chain; falls back to the configured gas_rates.",
        ),
    ] = None,
):
    """Print the outbound network fee for an asset."""
    state: AppState = ctx.obj
    parsed = _parse_asset(asset, "ASSET")

    if gas_rate is not None:
        rate = _parse_decimal(gas_rate, "--gas-rate")
    else:
        configured = state.settings.gas_rate_for(parsed.chain)
        if configured is None:
            raise typer.BadParameter(
                f"No gas rate configured for {parsed.chain.value}",
                param_hint=["--gas-rate", "THORCHAIN_AMM_GAS_RATES"],
            )
        rate = configured

    try:
        fee = calc_network_fee(parsed, rate)
    except UnsupportedChain as e:
        state.logger.error("%s", e)
        raise typer.Exit(code=1)

    typer.echo(f"{fee.format()} ({int(fee.base_amount)} base units)")


def run() -> None:
    """Entrypoint used by the console script."""
    app()


if __name__ == "__main__":
    run()

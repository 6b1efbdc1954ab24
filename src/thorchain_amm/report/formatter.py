"""Rich console formatter for swap quotes."""

from __future__ import annotations

from decimal import ROUND_DOWN, Decimal
from typing import Any

from rich.columns import Columns
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table

from ..pipeline.quote import SwapQuote

SLIP_PLACES = Decimal("0.0001")


def format_slip(slip: Decimal) -> str:
    """Slip fraction as a percentage with four decimal places."""
    return f"{(slip * 100).quantize(SLIP_PLACES, rounding=ROUND_DOWN)}%"


def _format_base(amount: Decimal) -> str:
    """Format base units compactly with comma separators."""
    return f"{int(amount):,}"


def quote_as_dict(quote: SwapQuote) -> dict[str, Any]:
    """JSON-ready view of a quote; amounts are strings to keep full precision."""
    swap = quote.swap
    return {
        "from_asset": str(quote.request.from_asset),
        "to_asset": str(quote.request.to_asset),
        "input": {
            "asset": str(quote.request.amount.asset),
            "base_amount": str(int(quote.request.amount.base_amount)),
        },
        "output": {
            "asset": str(swap.output.asset),
            "base_amount": str(int(swap.output.base_amount)),
            "decimals": swap.output.decimals,
        },
        "swap_fee": {
            "asset": str(swap.swap_fee.asset),
            "base_amount": str(int(swap.swap_fee.base_amount)),
            "decimals": swap.swap_fee.decimals,
        },
        "slip": str(swap.slip),
        "hops": quote.hops,
        "pools": [
            {
                "asset": str(pool.asset),
                "asset_balance": str(pool.asset_balance),
                "rune_balance": str(pool.rune_balance),
            }
            for pool in quote.pools
        ],
    }


def format_quote_table(quote: SwapQuote, console: Console | None = None) -> None:
    """Print a two-column quote dashboard to stdout.

    Args:
        quote: The swap quote to render
        console: Console to print to; a fresh stdout console by default
    """
    console = console or Console()
    swap = quote.swap

    summary_table = Table(show_header=False, box=None, padding=(0, 1))
    summary_table.add_column("Key", style="dim")
    summary_table.add_column("Value", style="green")
    summary_table.add_row("Input", quote.request.amount.format())
    summary_table.add_row("Output", swap.output.format())
    summary_table.add_row("Swap Fee", swap.swap_fee.format())
    summary_table.add_row("Slip", format_slip(swap.slip))
    summary_table.add_row("Hops", str(quote.hops))

    summary_panel = Panel(summary_table, title="[bold]Quote[/]", border_style="green")

    route_table = Table(show_header=False, box=None, padding=(0, 1))
    route_table.add_column("Key", style="dim")
    route_table.add_column("Value", style="cyan")
    route_table.add_row("From", str(quote.request.from_asset))
    route_table.add_row("To", str(quote.request.to_asset))
    route_table.add_row("Via RUNE", "yes" if quote.hops == 2 else "no")

    route_panel = Panel(route_table, title="[bold]Route[/]", border_style="blue")

    top_row = Columns([summary_panel, route_panel], equal=True, expand=True)

    pool_table = Table(title=None, expand=True, show_lines=False)
    pool_table.add_column("Pool", style="cyan", no_wrap=True)
    pool_table.add_column("Asset Depth", justify="right")
    pool_table.add_column("RUNE Depth", justify="right")
    pool_table.add_column("RUNE per Asset", justify="right", style="yellow")
    for pool in quote.pools:
        pool_table.add_row(
            str(pool.asset),
            _format_base(pool.asset_balance),
            _format_base(pool.rune_balance),
            f"{pool.asset_to_rune_ratio:.8f}",
        )

    pool_panel = Panel(pool_table, title="[bold]Pools[/]", border_style="yellow")

    console.print(Group(top_row, pool_panel))

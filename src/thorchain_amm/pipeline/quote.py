"""Swap quoting against configured pool snapshots."""

from __future__ import annotations

from dataclasses import dataclass

from ..adapters.price_oracles import BasePriceOracle, PoolPriceOracle
from ..domain import Asset, CryptoAmount, LiquidityPool, SwapOutput, is_rune
from ..processors import get_double_swap, get_single_swap
from ..state import AppState


class QuoteError(Exception):
    """Raised when a swap cannot be routed through the configured pools."""

    def __init__(self, message: str):
        super().__init__(message)


@dataclass(frozen=True)
class QuoteRequest:
    from_asset: Asset
    to_asset: Asset
    amount: CryptoAmount


@dataclass(frozen=True)
class SwapQuote:
    """Result of quoting a request, along with the pools it was routed through."""

    request: QuoteRequest
    swap: SwapOutput
    pools: tuple[LiquidityPool, ...]

    @property
    def hops(self) -> int:
        return len(self.pools)


def _require_pool(state: AppState, asset: Asset) -> LiquidityPool:
    pool = state.settings.pool_for(asset)
    if pool is None:
        raise QuoteError(f"No pool configured for {asset.to_native()}")
    return pool


async def build_quote(
    state: AppState,
    request: QuoteRequest,
    price_oracle: BasePriceOracle | None = None,
) -> SwapQuote:
    """Quote ``request`` as a single swap when RUNE is on one side, else a double swap.

    Args:
        state: Application state holding the configured pools
        request: What to swap and how much
        price_oracle: Oracle used to express double-swap fees in RUNE.
            Defaults to a ``PoolPriceOracle`` over the configured pools.

    Raises:
        QuoteError: If the assets are identical or a required pool is missing
    """
    log = state.logger
    from_asset, to_asset = request.from_asset, request.to_asset

    if from_asset == to_asset:
        raise QuoteError(f"Cannot swap {from_asset} into itself")
    if request.amount.asset != from_asset:
        raise QuoteError(
            f"Amount is denominated in {request.amount.asset}, expected {from_asset}"
        )

    if is_rune(from_asset):
        pool = _require_pool(state, to_asset)
        log.debug("Quoting RUNE -> %s through pool %s", to_asset, pool.asset)
        swap = get_single_swap(request.amount, pool, to_rune=False)
        return SwapQuote(request=request, swap=swap, pools=(pool,))

    if is_rune(to_asset):
        pool = _require_pool(state, from_asset)
        log.debug("Quoting %s -> RUNE through pool %s", from_asset, pool.asset)
        swap = get_single_swap(request.amount, pool, to_rune=True)
        return SwapQuote(request=request, swap=swap, pools=(pool,))

    pool1 = _require_pool(state, from_asset)
    pool2 = _require_pool(state, to_asset)
    if price_oracle is None:
        price_oracle = PoolPriceOracle(state.settings.liquidity_pools())
    log.debug(
        "Quoting %s -> RUNE -> %s through pools %s, %s (oracle: %s)",
        from_asset,
        to_asset,
        pool1.asset,
        pool2.asset,
        price_oracle.oracle_name,
    )
    swap = await get_double_swap(request.amount, pool1, pool2, price_oracle)
    return SwapQuote(request=request, swap=swap, pools=(pool1, pool2))

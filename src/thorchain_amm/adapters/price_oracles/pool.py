from __future__ import annotations

from decimal import Decimal, localcontext
from typing import Iterable

from ...constants import SWAP_CONTEXT, THORCHAIN_DECIMALS
from ...domain import Asset, CryptoAmount, LiquidityPool, is_rune
from ...logger import get_logger
from .base import BasePriceOracle

logger = get_logger(__name__)


class PoolPriceOracle(BasePriceOracle):
    """Oracle pricing assets at the spot ratio of supplied pool snapshots.

    Conversions ignore slippage. Non-RUNE pairs are priced through RUNE,
    and a synth is priced from the pool of the layer-1 asset it represents.
    """

    def __init__(
        self,
        pools: Iterable[LiquidityPool],
        target_decimals: int = THORCHAIN_DECIMALS,
    ):
        self._pools: dict[Asset, LiquidityPool] = {
            pool.asset.to_native(): pool for pool in pools
        }
        self.target_decimals = target_decimals

    @property
    def oracle_name(self) -> str:
        return "pool"

    @property
    def pools(self) -> dict[Asset, LiquidityPool]:
        return dict(self._pools)

    def _pool_for(self, asset: Asset) -> LiquidityPool:
        pool = self._pools.get(asset.to_native())
        if pool is None:
            raise ValueError(f"No pool available to price {asset}")
        return pool

    def exchange_rate(self, from_asset: Asset, to_asset: Asset) -> Decimal:
        """Units of ``to_asset`` one unit of ``from_asset`` is worth."""
        if from_asset.to_native() == to_asset.to_native():
            return Decimal(1)
        with localcontext(SWAP_CONTEXT):
            if is_rune(from_asset):
                return self._pool_for(to_asset).rune_to_asset_ratio
            if is_rune(to_asset):
                return self._pool_for(from_asset).asset_to_rune_ratio
            rune_per_from = self._pool_for(from_asset).asset_to_rune_ratio
            to_per_rune = self._pool_for(to_asset).rune_to_asset_ratio
            return rune_per_from * to_per_rune

    async def convert(self, amount: CryptoAmount, target_asset: Asset) -> CryptoAmount:
        """Convert ``amount`` into ``target_asset`` at pool spot prices.

        Raises:
            ValueError: If a pool needed for the conversion is missing
        """
        if amount.asset == target_asset:
            return amount

        rate = self.exchange_rate(amount.asset, target_asset)
        with localcontext(SWAP_CONTEXT):
            converted = CryptoAmount.from_asset_amount(
                amount.asset_amount * rate, target_asset, self.target_decimals
            )
        logger.debug(
            "Converted %s to %s at rate %s", amount, converted, rate
        )
        return converted

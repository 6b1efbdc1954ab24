from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, localcontext

from ..constants import SWAP_CONTEXT
from .chain import Asset


@dataclass(frozen=True)
class LiquidityPool:
    """Read-only snapshot of a RUNE/asset pool.

    Both balances are in base units at THORChain's 8-decimal precision.
    Callers build a fresh snapshot per calculation.
    """

    asset: Asset
    asset_balance: Decimal
    rune_balance: Decimal

    @classmethod
    def from_balances(
        cls, asset: Asset, asset_balance: Decimal | int | str, rune_balance: Decimal | int | str
    ) -> LiquidityPool:
        return cls(asset, Decimal(asset_balance), Decimal(rune_balance))

    @property
    def rune_to_asset_ratio(self) -> Decimal:
        """Units of asset one unit of RUNE is worth at the pool price."""
        with localcontext(SWAP_CONTEXT):
            return self.asset_balance / self.rune_balance

    @property
    def asset_to_rune_ratio(self) -> Decimal:
        """Units of RUNE one unit of asset is worth at the pool price."""
        with localcontext(SWAP_CONTEXT):
            return self.rune_balance / self.asset_balance
